from palabra.config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, get_config


def test_named_configs():
    assert get_config('development') is DevelopmentConfig
    assert get_config('production') is ProductionConfig
    assert get_config('testing') is TestingConfig
    assert ProductionConfig.DEBUG is False


def test_app_env_selects_config(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    assert get_config() is ProductionConfig


def test_unknown_or_missing_app_env_falls_back_to_base(monkeypatch):
    monkeypatch.delenv('APP_ENV', raising=False)
    assert get_config() is Config
    assert get_config('staging') is Config
