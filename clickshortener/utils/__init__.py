from clickshortener.utils.config import app_env, app_name, app_prefix, load_config
from clickshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response, guarantee_503_response
from clickshortener.utils.urls import normalize_url, is_valid_url, clean_target_url
from clickshortener.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'guarantee_503_response',
    'normalize_url',
    'is_valid_url',
    'clean_target_url',
    'initialize_logging',
]
