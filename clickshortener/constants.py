from enum import StrEnum
import string


class ShortCode:
    """Short code shape."""

    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    LENGTH = 6  # Length of freshly minted codes
    MAX_LENGTH = 10  # Upper bound for widened codes
    WIDEN_AFTER = 32  # Consecutive collisions tolerated before widening the code length


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


class Backend(StrEnum):
    """Record store backends selectable via AppConfig's `active_backend`."""

    REDIS = 'redis'
    FILE = 'file'
    MEMORY = 'memory'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
