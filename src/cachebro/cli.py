#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
cachebro command line
Usage:
  cachebro [serve]
  cachebro status
  cachebro init
  cachebro help

Only the first argument is read; anything after it is ignored.
"""
import logging
import os
import sys
from typing import Callable, Dict, List, Optional

from cachebro.config import Settings
from cachebro.install import install_all
from cachebro.server import start_mcp_server
from cachebro.status import report_status
from cachebro.targets import build_targets

USAGE = """cachebro - Agent file cache with diff tracking

Usage:
  cachebro init      Auto-configure cachebro for your editor
  cachebro serve     Start the MCP server (default)
  cachebro status    Show cache statistics
  cachebro help      Show this help message

Environment:
  CACHEBRO_DIR       Cache directory (default: .cachebro)
  XDG_CONFIG_HOME    Base directory for XDG-style editor configs (default: ~/.config)"""


def cmd_serve(settings: Settings) -> int:
    start_mcp_server(settings)
    return 0


def cmd_status(settings: Settings) -> int:
    return report_status(settings)


def cmd_init(settings: Settings) -> int:
    install_all(build_targets(settings))
    return 0


def cmd_help(settings: Settings) -> int:
    print(USAGE)
    return 0


COMMANDS: Dict[str, Callable[[Settings], int]] = {
    "serve": cmd_serve,
    "status": cmd_status,
    "init": cmd_init,
    "help": cmd_help,
    "--help": cmd_help,
    "-h": cmd_help,
}


def _configure_logging() -> None:
    # stdout belongs to the MCP stdio transport
    level = logging.DEBUG if os.environ.get("CACHEBRO_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    command = (argv[0] if argv else "") or "serve"
    func = COMMANDS.get(command)
    if func is None:
        print(f"Unknown command: {command}. Run 'cachebro help' for usage.", file=sys.stderr)
        return 1
    _configure_logging()
    return func(Settings.from_env())


if __name__ == "__main__":
    sys.exit(main())
