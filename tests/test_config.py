"""Tests for configuration class selection via APP_ENV."""
import importlib
import pytest


def load_config(monkeypatch, env):
    for key, value in env.items():
        if value is None:
            monkeypatch.delenv(key, raising=False)
        else:
            monkeypatch.setenv(key, value)
    # Class attributes are read from the environment at import time
    import app.config as config
    return importlib.reload(config)


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    import app.config as config
    importlib.reload(config)


def test_testing_config_uses_memory_db(monkeypatch):
    config = load_config(monkeypatch, {'APP_ENV': 'testing', 'TEST_DATABASE_URL': None})
    cls = config.get_config_class()
    assert cls is config.TestingConfig
    assert cls.TESTING is True
    assert cls.RATELIMIT_ENABLED is False
    assert cls.SQLALCHEMY_DATABASE_URI == 'sqlite:///:memory:'


def test_development_defaults(monkeypatch):
    config = load_config(monkeypatch, {
        'APP_ENV': 'development',
        'DATABASE_URL': None,
    })
    cls = config.get_config_class()
    assert cls is config.DevelopmentConfig
    assert cls.DEBUG is True
    assert cls.SQLALCHEMY_DATABASE_URI == 'sqlite:///bookstore.db'


def test_unknown_env_falls_back_to_development(monkeypatch):
    config = load_config(monkeypatch, {'APP_ENV': 'staging'})
    assert config.get_config_class() is config.DevelopmentConfig


def test_production_requires_secrets(monkeypatch):
    config = load_config(monkeypatch, {
        'APP_ENV': 'production',
        'SECRET_KEY': None,
        'DATABASE_URL': 'postgresql://db/bookstore',
        'JWT_SECRET': None,
    })
    with pytest.raises(RuntimeError) as exc:
        config.get_config_class()
    assert 'SECRET_KEY' in str(exc.value)
    assert 'JWT_SECRET' in str(exc.value)
    assert 'DATABASE_URL' not in str(exc.value)


def test_production_config_selected_when_complete(monkeypatch):
    config = load_config(monkeypatch, {
        'APP_ENV': 'production',
        'SECRET_KEY': 's3cret',
        'DATABASE_URL': 'postgresql://db/bookstore',
        'JWT_SECRET': 'jwt-s3cret',
    })
    cls = config.get_config_class()
    assert cls is config.ProductionConfig
    assert cls.SQLALCHEMY_DATABASE_URI == 'postgresql://db/bookstore'
    assert cls.DEBUG is False


def test_limits_are_configurable(monkeypatch):
    config = load_config(monkeypatch, {
        'APP_ENV': 'testing',
        'LOGIN_LIMIT_PER_IP': '3 per minute',
        'ORDER_LIMIT_PER_IP': '5 per hour',
    })
    assert config.BaseConfig.LOGIN_LIMIT_PER_IP == '3 per minute'
    assert config.BaseConfig.ORDER_LIMIT_PER_IP == '5 per hour'
