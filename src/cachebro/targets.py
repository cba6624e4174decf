# -*- coding: utf-8 -*-
"""Known host applications and where their MCP server registries live."""
import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple

from cachebro import SERVER_NAME
from cachebro.config import Settings

DEFAULT_ENTRY = {
    "command": "npx",
    "args": [SERVER_NAME, "serve"],
}

OPENCODE_ENTRY = {
    "type": "local",
    "command": ["npx", SERVER_NAME, "serve"],
}


@dataclass(frozen=True)
class ConfigTarget:
    name: str
    path: Path
    registration_key: str
    entry: Any

    @property
    def config_dir(self) -> Path:
        return self.path.parent


def build_targets(settings: Settings) -> Tuple[ConfigTarget, ...]:
    home = settings.home
    return (
        ConfigTarget(
            name="Claude Code",
            path=home / ".claude.json",
            registration_key="mcpServers",
            entry=copy.deepcopy(DEFAULT_ENTRY),
        ),
        ConfigTarget(
            name="Cursor",
            path=home / ".cursor" / "mcp.json",
            registration_key="mcpServers",
            entry=copy.deepcopy(DEFAULT_ENTRY),
        ),
        ConfigTarget(
            name="Windsurf",
            path=home / ".codeium" / "windsurf" / "mcp_config.json",
            registration_key="mcpServers",
            entry=copy.deepcopy(DEFAULT_ENTRY),
        ),
        ConfigTarget(
            name="OpenCode",
            path=settings.xdg_config_home / "opencode" / "opencode.json",
            registration_key="mcp",
            entry=copy.deepcopy(OPENCODE_ENTRY),
        ),
    )
