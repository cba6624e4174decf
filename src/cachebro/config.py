# -*- coding: utf-8 -*-
"""
Process settings, resolved once at startup.

Environment:
  CACHEBRO_DIR      cache directory (default: .cachebro, relative to cwd)
  XDG_CONFIG_HOME   base for XDG-style host configs (default: ~/.config)
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_CACHE_DIR = ".cachebro"
DB_FILENAME = "cache.db"


@dataclass(frozen=True)
class Settings:
    home: Path
    xdg_config_home: Path
    cache_dir: Path

    @property
    def db_path(self) -> Path:
        return self.cache_dir / DB_FILENAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        home = Path.home()
        # empty XDG_CONFIG_HOME counts as unset
        xdg = env.get("XDG_CONFIG_HOME") or str(home / ".config")
        cache_dir = Path(env.get("CACHEBRO_DIR", DEFAULT_CACHE_DIR)).resolve()
        return cls(home=home, xdg_config_home=Path(xdg), cache_dir=cache_dir)
