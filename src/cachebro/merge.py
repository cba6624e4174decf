#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Add the cachebro registration to a host's MCP config without touching anything else.

- Hosts whose config directory is missing are skipped (not installed).
- Malformed files are treated as empty documents.
- An existing cachebro entry is never overwritten, even if it differs.
- Writes are atomic: temp file next to the real file, then os.replace.
  Symlinked configs are written through to their target and keep their mode.
"""
import json
import logging
import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict

from cachebro import SERVER_NAME
from cachebro.targets import ConfigTarget

logger = logging.getLogger(__name__)

CONFIGURED = "configured"
ALREADY_CONFIGURED = "already-configured"
SKIPPED = "skipped"


def _is_mapping(x: Any) -> bool:
    return isinstance(x, Mapping)


def _save_text_atomic(path: Path, text: str) -> None:
    real = path.resolve()
    with tempfile.NamedTemporaryFile("w", delete=False, dir=str(real.parent), encoding="utf-8") as tf:
        tmp_name = tf.name
        try:
            tf.write(text)
        except BaseException:
            tf.close()
            os.unlink(tmp_name)
            raise
    try:
        if real.exists():
            shutil.copymode(real, tmp_name)
        os.replace(tmp_name, real)
    except BaseException:
        os.unlink(tmp_name)
        raise


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as exc:
        logger.debug("ignoring malformed JSON in %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("ignoring non-object JSON document in %s", path)
        return {}
    return data


def dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def _is_set(value: Any) -> bool:
    # null, false, 0 and "" count as missing; any object or array counts as set
    return isinstance(value, (dict, list)) or bool(value)


def _has_registration(doc: Mapping, key: str) -> bool:
    servers = doc.get(key)
    return _is_mapping(servers) and _is_set(servers.get(SERVER_NAME))


def merge_registration(target: ConfigTarget) -> str:
    """Register cachebro with one host; returns configured, already-configured or skipped."""
    if not target.config_dir.is_dir():
        return SKIPPED
    obj = _load_json(target.path)
    key = target.registration_key
    if _has_registration(obj, key):
        return ALREADY_CONFIGURED
    if not _is_mapping(obj.get(key)):
        obj[key] = {}
    obj[key][SERVER_NAME] = target.entry
    _save_text_atomic(target.path, dump_json(obj))
    return CONFIGURED
