# -*- coding: utf-8 -*-
"""MCP server exposing cached file reads over stdio."""
import logging
import uuid
from typing import Optional

from mcp.server.fastmcp import FastMCP

from cachebro import SERVER_NAME
from cachebro.cache import Cache, create_cache
from cachebro.config import Settings

logger = logging.getLogger(__name__)


def build_server(cache: Cache) -> FastMCP:
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool()
    def read_file(path: str) -> str:
        """Read a file. Re-reads of an unchanged file return a short marker instead of the content."""
        result = cache.read_file(path)
        if result.unchanged:
            return f"[cachebro] {result.path} is unchanged since your last read in this session."
        return result.content

    @mcp.tool()
    def cache_status() -> str:
        """Show how many files are tracked and the estimated tokens saved so far."""
        stats = cache.get_stats()
        return f"Files tracked: {stats.files_tracked}\nTokens saved (total): ~{stats.tokens_saved:,}"

    return mcp


def start_mcp_server(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    cache = create_cache(settings.db_path, session_id=f"serve-{uuid.uuid4().hex}")
    cache.init()
    logger.debug("serving %s with cache %s", SERVER_NAME, settings.db_path)
    try:
        build_server(cache).run()
    finally:
        cache.close()
