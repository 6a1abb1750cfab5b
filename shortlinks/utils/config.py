"""Utility functions for application configuration management.

Configuration comes from environment variables only:

    APP_ENV               application environment (default: 'local')
    APP_NAME              application name, used to namespace Redis keys
    LOG_LEVEL             root log level (default: 'INFO')
    SHORTLINKS_BASE_URL   public base URL of short links (default: 'http://localhost:3000')
    SHORTLINKS_BACKEND    'memory' | 'file' | 'redis' (default: 'file')
    SHORTLINKS_DATA_DIR   directory of the file backend (default: '~/.shortlinks')
    REDIS_HOST            Redis host (required by the redis backend)
    REDIS_PORT            Redis port (default: 6379)
    REDIS_DB              Redis database index (default: 0)
    REDIS_USERNAME        Redis username (optional)
    REDIS_PASSWORD        Redis password (optional)

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    base_url() -> str
    load_config() -> dict
    build_backends(config: dict | None = None) -> tuple[KeyValueBaseBackend, KeyValueBaseBackend]
    build_store(config: dict | None = None) -> ShortLinkStore
    initialize_app(config: dict | None = None) -> ShortLinkStore
        Process entry point: store plus logging with the diagnostic log sink

Example:
    >>> os.environ['SHORTLINKS_BACKEND'] = 'memory'
    >>> store = build_store()
    >>> store.list_all()
    []
"""

import os
import logging
from pathlib import Path

from shortlinks.constants import ENV, Backend, Defaults, Slot
from shortlinks.exceptions import BadConfigurationError
from shortlinks.types import AppConfiguration
from shortlinks.utils.helpers import require_environment


logger = logging.getLogger(__name__)

STORE_FILE_NAME = 'links.json'
LOGS_FILE_NAME = 'logs.json'


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for Redis keys

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def base_url() -> str:
    return os.environ.get(ENV.App.BASE_URL, Defaults.BASE_URL)


@require_environment(ENV.Redis.HOST)
def _redis_config() -> dict:
    try:
        port = int(os.environ.get(ENV.Redis.PORT, 6379))
        db = int(os.environ.get(ENV.Redis.DB, 0))
    except ValueError as e:
        raise BadConfigurationError(
            f'Invalid Redis port/db values: port={os.environ.get(ENV.Redis.PORT)!r} db={os.environ.get(ENV.Redis.DB)!r}'
        ) from e

    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': port,
        'db': db,
        'username': os.environ.get(ENV.Redis.USERNAME),
        'password': os.environ.get(ENV.Redis.PASSWORD),
    }


def load_config() -> AppConfiguration:
    """Load application configuration from the environment

    Returns:
        dict: e.g.
            {
                "backend": "redis",
                "base_url": "http://localhost:3000",
                "prefix": "shortlinks:local",
                "redis": {"host": "localhost", "port": 6379, "db": 0, ...}
            }

    Raises:
        BadConfigurationError:
            If SHORTLINKS_BACKEND names an unknown backend, or Redis port/db
            are not integers.
        MissingEnvironmentVariableError:
            If the redis backend is selected without REDIS_HOST.
    """
    backend_name = os.environ.get(ENV.Storage.BACKEND, Backend.FILE).lower()
    try:
        backend = Backend(backend_name)
    except ValueError as e:
        supported = ', '.join(b.value for b in Backend)
        raise BadConfigurationError(f'Unknown storage backend {backend_name!r} (supported: {supported}).') from e

    config = {
        'backend': backend,
        'base_url': base_url(),
        'prefix': app_prefix(),
    }
    match backend:
        case Backend.FILE:
            config['data_dir'] = os.environ.get(ENV.Storage.DATA_DIR, '~/.shortlinks')
        case Backend.REDIS:
            config['redis'] = _redis_config()

    logger.debug('Loaded configuration.', extra={'backend': str(backend), 'appEnv': app_env()})
    return config


def build_backends(config: AppConfiguration | None = None) -> tuple:
    """Create the link store slot and the diagnostic log slot

    Returns:
        tuple[KeyValueBaseBackend, KeyValueBaseBackend]: (store backend, log backend)
    """
    from shortlinks.dao import InMemoryBackend, FileBackend, RedisBackend

    config = load_config() if config is None else config

    match Backend(config['backend']):
        case Backend.MEMORY:
            return InMemoryBackend(), InMemoryBackend()
        case Backend.FILE:
            data_dir = Path(config['data_dir']).expanduser()
            return FileBackend(data_dir / STORE_FILE_NAME), FileBackend(data_dir / LOGS_FILE_NAME)
        case Backend.REDIS:
            redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
            store_backend = RedisBackend(slot=Slot.STORE, prefix=config.get('prefix'), **redis_config)
            # Share one connection pool between both slots
            log_backend = RedisBackend(slot=Slot.LOGS, prefix=config.get('prefix'), redis_client=store_backend.redis)
            return store_backend, log_backend


def build_store(config: AppConfiguration | None = None):
    """Create a ShortLinkStore on the configured store backend."""
    from shortlinks.dao import ShortLinkStore

    store_backend, _ = build_backends(config)
    return ShortLinkStore(store_backend)


def initialize_app(config: AppConfiguration | None = None):
    """Wire the application once at process start

    Builds both slots from the configuration, routes logging to stdout and to
    the diagnostic log sink on the log slot, and returns the link store. Pass
    the returned store to the handlers.

    Returns:
        ShortLinkStore: Store on the configured store backend.

    Example:
        >>> os.environ['SHORTLINKS_BACKEND'] = 'memory'
        >>> store = initialize_app()
        >>> logging.getLogger('shortlinks').info('Ready.')
        >>> store.list_all()
        []
    """
    from shortlinks.dao import ShortLinkStore
    from shortlinks.utils.logging import initialize_logging

    store_backend, log_backend = build_backends(config)
    initialize_logging(log_backend=log_backend)
    logger.info('Application initialized.', extra={'store': repr(store_backend), 'logs': repr(log_backend)})
    return ShortLinkStore(store_backend)
