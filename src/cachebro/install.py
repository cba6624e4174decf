# -*- coding: utf-8 -*-
"""`cachebro init`: register the server with every detected host."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from cachebro import SERVER_NAME
from cachebro.merge import ALREADY_CONFIGURED, CONFIGURED, dump_json, merge_registration
from cachebro.targets import DEFAULT_ENTRY, ConfigTarget


@dataclass
class InstallResult:
    configured_count: int = 0
    results: List[Tuple[str, str, Path]] = field(default_factory=list)


def manual_snippet() -> str:
    return dump_json({"mcpServers": {SERVER_NAME: DEFAULT_ENTRY}}).rstrip("\n")


def install_all(targets: Iterable[ConfigTarget]) -> InstallResult:
    result = InstallResult()
    for t in targets:
        status = merge_registration(t)
        result.results.append((t.name, status, t.path))
        if status == CONFIGURED:
            print(f"  {t.name}: configured ({t.path})")
        elif status == ALREADY_CONFIGURED:
            print(f"  {t.name}: already configured")
        else:
            continue
        result.configured_count += 1

    if result.configured_count == 0:
        print("No supported tools detected. You can manually add cachebro to your MCP config:")
        print(manual_snippet())
    else:
        print("\nDone! Restart your editor to pick up cachebro.")
    return result
