import sqlite3
from types import SimpleNamespace

import pytest

from cachebro.cache import CacheStats, create_cache
from cachebro.status import NO_DATABASE_MESSAGE, STATUS_SESSION_ID, report_status


class FakeCache:
    def __init__(self, stats):
        self.stats = stats
        self.calls = []

    def init(self):
        self.calls.append("init")

    def get_stats(self):
        self.calls.append("get_stats")
        return self.stats

    def close(self):
        self.calls.append("close")


def test_status_without_database(cb_env, capsys):
    def factory(*args, **kwargs):
        raise AssertionError("cache must not be opened")

    assert report_status(cb_env.settings, cache_factory=factory) == 0

    out = capsys.readouterr()
    assert out.out == NO_DATABASE_MESSAGE + "\n"
    assert out.err == ""
    assert not cb_env.cache_dir.exists()


def test_status_prints_stats_from_readonly_handle(cb_env, capsys):
    cb_env.cache_dir.mkdir()
    cb_env.settings.db_path.write_bytes(b"")
    fake = FakeCache(CacheStats(files_tracked=42, tokens_saved=1234567))
    opened = SimpleNamespace(args=None, kwargs=None)

    def factory(*args, **kwargs):
        opened.args, opened.kwargs = args, kwargs
        return fake

    assert report_status(cb_env.settings, cache_factory=factory) == 0

    assert opened.args == (cb_env.settings.db_path,)
    assert opened.kwargs == {"session_id": STATUS_SESSION_ID, "readonly": True}
    assert fake.calls == ["init", "get_stats", "close"]
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Files tracked: 42", "Tokens saved (total): ~1,234,567"]


def test_status_closes_cache_on_error(cb_env):
    cb_env.cache_dir.mkdir()
    cb_env.settings.db_path.write_bytes(b"")

    class Broken(FakeCache):
        def get_stats(self):
            raise RuntimeError("corrupt")

    broken = Broken(None)
    try:
        report_status(cb_env.settings, cache_factory=lambda *a, **kw: broken)
    except RuntimeError:
        pass
    else:
        raise AssertionError("cache errors must propagate")
    assert broken.calls[-1] == "close"


def test_status_reads_real_database(cb_env, tmp_path, capsys):
    src = tmp_path / "notes.txt"
    src.write_text("x" * 400)
    cache = create_cache(cb_env.settings.db_path, session_id="serve-test")
    cache.init()
    cache.read_file(src)
    cache.read_file(src)
    cache.close()

    report_status(cb_env.settings)

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Files tracked: 1", "Tokens saved (total): ~100"]


def test_status_closes_cache_when_open_fails(cb_env):
    cb_env.cache_dir.mkdir()
    cb_env.settings.db_path.write_bytes(b"")

    class Locked(FakeCache):
        def init(self):
            self.calls.append("init")
            raise sqlite3.OperationalError("database is locked")

    locked = Locked(None)
    with pytest.raises(sqlite3.OperationalError):
        report_status(cb_env.settings, cache_factory=lambda *a, **kw: locked)
    assert locked.calls == ["init", "close"]
