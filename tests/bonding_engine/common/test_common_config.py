import importlib

from bonding_engine.common import config


def test_defaults(monkeypatch):
    for name in ("BONDING_ENGINE_LOG_LEVEL", "BONDING_ENGINE_API_HOST", "BONDING_ENGINE_API_PORT", "BONDING_ENGINE_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("dotenv.load_dotenv", lambda *args, **kwargs: False)
    reloaded = importlib.reload(config)
    assert reloaded.LOG_LEVEL == "INFO"
    assert reloaded.API_HOST == "127.0.0.1"
    assert reloaded.API_PORT == 5000
    assert reloaded.DEBUG is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("BONDING_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("BONDING_ENGINE_API_PORT", "8080")
    monkeypatch.setenv("BONDING_ENGINE_DEBUG", "yes")
    reloaded = importlib.reload(config)
    assert reloaded.LOG_LEVEL == "DEBUG"
    assert reloaded.API_PORT == 8080
    assert reloaded.DEBUG is True
