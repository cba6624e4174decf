# -*- coding: utf-8 -*-
"""`cachebro status`: print cache statistics without touching the cache."""
from typing import Callable

from cachebro.cache import Cache, create_cache
from cachebro.config import Settings

# reserved for CLI introspection, never used by a serving process
STATUS_SESSION_ID = "cli-status"

NO_DATABASE_MESSAGE = "No cachebro database found. Run 'cachebro serve' to start caching."


def report_status(settings: Settings, cache_factory: Callable[..., Cache] = create_cache) -> int:
    db_path = settings.db_path
    if not db_path.exists():
        print(NO_DATABASE_MESSAGE)
        return 0

    cache = cache_factory(db_path, session_id=STATUS_SESSION_ID, readonly=True)
    try:
        cache.init()
        stats = cache.get_stats()
        print(f"Files tracked: {stats.files_tracked}")
        print(f"Tokens saved (total): ~{stats.tokens_saved:,}")
    finally:
        cache.close()
    return 0
