"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() and base_url() read the environment.

2. Configuration loading behavior
   - Ensures load_config() picks the backend and its parameters.
   - Ensures unknown backends and malformed Redis settings raise BadConfigurationError.
   - Ensures the redis backend requires REDIS_HOST.

3. Backend construction
   - Ensures build_backends() creates both slots for each backend.
   - Ensures build_store() wires the store slot into a ShortLinkStore.

4. Application entry point
   - Ensures initialize_app() attaches the diagnostic log sink to the log slot.
   - Ensures store activity lands in the log slot, apart from the link data.
"""

import json
import logging
from unittest.mock import patch

import pytest

from shortlinks.constants import Backend, Slot
from shortlinks.dao import InMemoryBackend, FileBackend, ShortLinkStore
from shortlinks.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from shortlinks.utils import config
from shortlinks.utils.logging import KeyValueLogHandler


# -------------------------------
# Fixtures
# -------------------------------


ENV_VARS = [
    'APP_ENV',
    'APP_NAME',
    'SHORTLINKS_BASE_URL',
    'SHORTLINKS_BACKEND',
    'SHORTLINKS_DATA_DIR',
    'REDIS_HOST',
    'REDIS_PORT',
    'REDIS_DB',
    'REDIS_USERNAME',
    'REDIS_PASSWORD',
    'LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Start every test from an environment without application variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def redis_env(monkeypatch):
    monkeypatch.setenv('SHORTLINKS_BACKEND', 'redis')
    monkeypatch.setenv('REDIS_HOST', 'redis.test')
    monkeypatch.setenv('REDIS_PORT', '6380')
    monkeypatch.setenv('REDIS_DB', '2')


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_defaults():
    assert config.app_env() == 'local'
    assert config.app_name() is None
    assert config.app_prefix() is None
    assert config.base_url() == 'http://localhost:3000'


def test_environment_values(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'DEV')
    monkeypatch.setenv('APP_NAME', 'shortlinks')
    monkeypatch.setenv('SHORTLINKS_BASE_URL', 'https://sho.rt')

    assert config.app_env() == 'dev'
    assert config.app_name() == 'shortlinks'
    assert config.app_prefix() == 'shortlinks:dev'
    assert config.base_url() == 'https://sho.rt'


# -------------------------------
# 2. Configuration loading behavior
# -------------------------------


def test_load_config_defaults_to_file_backend():
    loaded = config.load_config()
    assert loaded == {
        'backend': Backend.FILE,
        'base_url': 'http://localhost:3000',
        'prefix': None,
        'data_dir': '~/.shortlinks',
    }


def test_load_config_file_backend_with_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv('SHORTLINKS_BACKEND', 'FILE')
    monkeypatch.setenv('SHORTLINKS_DATA_DIR', str(tmp_path))

    loaded = config.load_config()

    assert loaded['backend'] == Backend.FILE
    assert loaded['data_dir'] == str(tmp_path)


def test_load_config_memory_backend(monkeypatch):
    monkeypatch.setenv('SHORTLINKS_BACKEND', 'memory')
    loaded = config.load_config()
    assert loaded['backend'] == Backend.MEMORY
    assert 'data_dir' not in loaded
    assert 'redis' not in loaded


def test_load_config_redis_backend(redis_env, monkeypatch):
    monkeypatch.setenv('REDIS_PASSWORD', 'secret')

    loaded = config.load_config()

    assert loaded['backend'] == Backend.REDIS
    assert loaded['redis'] == {
        'host': 'redis.test',
        'port': 6380,
        'db': 2,
        'username': None,
        'password': 'secret',
    }


def test_load_config_unknown_backend(monkeypatch):
    monkeypatch.setenv('SHORTLINKS_BACKEND', 'dynamodb')
    with pytest.raises(BadConfigurationError, match="Unknown storage backend 'dynamodb'"):
        config.load_config()


def test_load_config_redis_without_host(monkeypatch):
    monkeypatch.setenv('SHORTLINKS_BACKEND', 'redis')
    with pytest.raises(MissingEnvironmentVariableError, match="'REDIS_HOST'"):
        config.load_config()


@pytest.mark.parametrize('variable, value', [('REDIS_PORT', 'http'), ('REDIS_DB', 'zero')])
def test_load_config_redis_bad_values(redis_env, monkeypatch, variable, value):
    monkeypatch.setenv(variable, value)
    with pytest.raises(BadConfigurationError):
        config.load_config()


# -------------------------------
# 3. Backend construction
# -------------------------------


def test_build_memory_backends():
    store_backend, log_backend = config.build_backends({'backend': 'memory'})
    assert isinstance(store_backend, InMemoryBackend)
    assert isinstance(log_backend, InMemoryBackend)
    assert store_backend is not log_backend


def test_build_file_backends(tmp_path):
    store_backend, log_backend = config.build_backends({'backend': 'file', 'data_dir': str(tmp_path)})
    assert isinstance(store_backend, FileBackend)
    assert store_backend.path == tmp_path / 'links.json'
    assert log_backend.path == tmp_path / 'logs.json'


def test_build_redis_backends(redis_env, monkeypatch):
    monkeypatch.setenv('APP_NAME', 'shortlinks')

    with patch('shortlinks.dao.RedisBackend') as backend_cls:
        store_backend, log_backend = config.build_backends()

    first, second = backend_cls.call_args_list
    assert first.kwargs == {
        'slot': Slot.STORE,
        'prefix': 'shortlinks:local',
        'redis_host': 'redis.test',
        'redis_port': 6380,
        'redis_db': 2,
        'redis_username': None,
        'redis_password': None,
    }
    assert second.kwargs['slot'] == Slot.LOGS
    assert second.kwargs['redis_client'] is store_backend.redis


def test_build_store_from_environment(monkeypatch, tmp_path, short_link):
    monkeypatch.setenv('SHORTLINKS_DATA_DIR', str(tmp_path))

    store = config.build_store()
    store.create(short_link)

    assert isinstance(store, ShortLinkStore)
    assert (tmp_path / 'links.json').exists()
    assert config.build_store().lookup('abcd') == short_link


# -------------------------------
# 4. Application entry point
# -------------------------------


@pytest.fixture
def restore_root_logger():
    """Undo dictConfig changes made to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_initialize_app_attaches_log_sink(restore_root_logger):
    store = config.initialize_app({'backend': 'memory'})

    assert isinstance(store, ShortLinkStore)
    sinks = [h for h in restore_root_logger.handlers if isinstance(h, KeyValueLogHandler)]
    assert len(sinks) == 1
    assert sinks[0].backend is not store.backend


def test_initialize_app_routes_store_logs_to_log_slot(monkeypatch, tmp_path, restore_root_logger, short_link):
    monkeypatch.setenv('SHORTLINKS_DATA_DIR', str(tmp_path))

    store = config.initialize_app()
    store.create(short_link)

    entries = json.loads((tmp_path / 'logs.json').read_text(encoding='utf-8'))
    messages = [entry['message'] for entry in entries]
    assert 'Short link added.' in messages
    assert 'links' in json.loads((tmp_path / 'links.json').read_text(encoding='utf-8'))
