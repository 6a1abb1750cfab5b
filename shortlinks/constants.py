from enum import StrEnum


class Shortcode:
    """Shortcode shape and generation limits."""

    LENGTH = 8  # Length of generated shortcodes
    MIN_LENGTH = 4  # Custom shortcode lower bound (inclusive)
    MAX_LENGTH = 12  # Custom shortcode upper bound (inclusive)
    MAX_GENERATION_ATTEMPTS = 100  # Retries before giving up on a free generated shortcode


class Defaults:
    """Default values applied by callers of the store."""

    VALIDITY_MINUTES = 30  # Applied when the validity field is blank
    MAX_VALIDITY_MINUTES = 1_000_000_000  # About 1900 years, keeps expiry within the datetime range
    REFERRER = 'direct'  # Referrer recorded when none is available
    MAX_URLS_PER_REQUEST = 5  # Rows accepted by one shorten request
    BASE_URL = 'http://localhost:3000'
    GEO_TIMEOUT_SECONDS = 5.0  # Upper bound for a coarse location lookup
    MAX_LOG_ENTRIES = 1000  # Diagnostic log sink keeps only the most recent entries
    LOG_STACK = 'backend'


class Backend(StrEnum):
    """Supported persistence backends for the key-value slots."""

    MEMORY = 'memory'
    FILE = 'file'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'SHORTLINKS_BASE_URL'

    class Storage(StrEnum):
        BACKEND = 'SHORTLINKS_BACKEND'
        DATA_DIR = 'SHORTLINKS_DATA_DIR'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'


class Slot(StrEnum):
    """Named key-value slots. Each slot holds one independent document."""

    STORE = 'store'  # {"links": {<shortcode>: ShortLink}}
    LOGS = 'logs'  # Diagnostic log buffer
