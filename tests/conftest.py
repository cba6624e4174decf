from types import SimpleNamespace

import pytest

from cachebro.config import Settings
from cachebro.targets import build_targets


@pytest.fixture()
def cb_env(tmp_path, monkeypatch):
    """Provide a temporary HOME, XDG config and cache dir for cachebro."""
    home = tmp_path / "home"
    home.mkdir()
    cache_dir = tmp_path / "cache"

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CACHEBRO_DIR", str(cache_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("CACHEBRO_DEBUG", raising=False)

    settings = Settings.from_env()
    targets = {t.name: t for t in build_targets(settings)}

    def install_host(name):
        """Create the config directory of a host so it counts as installed."""
        t = targets[name]
        t.config_dir.mkdir(parents=True, exist_ok=True)
        return t

    return SimpleNamespace(
        home=home,
        cache_dir=cache_dir,
        settings=settings,
        targets=targets,
        install_host=install_host,
    )
