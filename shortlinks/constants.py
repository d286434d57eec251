import string
from enum import StrEnum


class Policy:
    """Default short code policy values."""

    CODE_LENGTH = 6  # Length of generated shortcodes
    ALIAS_MIN_LENGTH = 4  # Shortest accepted custom alias / shortcode
    ALIAS_MAX_LENGTH = 10  # Longest accepted custom alias / shortcode
    MAX_ATTEMPTS = 10  # Generation attempts before giving up


# URL-safe shortcode alphabet: 26 lowercase + 26 uppercase + 10 digits + '-' + '_'
ALPHABET = string.ascii_letters + string.digits + '-_'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
VALIDATION_FAILED = 'VALIDATION_FAILED'
