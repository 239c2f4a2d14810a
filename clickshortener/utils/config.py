"""Per-Lambda record store configuration from AWS AppConfig

One AppConfig application (`APP_NAME`) holds an environment per `APP_ENV`.
Its `backend-config` profile is a single JSON document which selects the
record store for every Lambda at once and carries each Lambda's settings
for every backend:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "file": {"path": "/mnt/efs/records.json"}
            },
            "redirect_url": { ... },
            "url_stats": { ... },
            "list_urls": { ... },
            "delete_url": { ... },
            "health_check": { ... }
        }
    }

A handler only ever sees its own slice for the active backend, e.g.
`{"redis": {...}}`, which `dao.factory.url_record_dao` turns into a store.

Example:
    >>> from clickshortener.utils.config import load_config
    >>> load_config('redirect_url')
    {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0}}
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from collections.abc import Callable

import boto3

from clickshortener.types import AppConfig, AppConfigDataClient, LambdaConfiguration
from clickshortener.constants import ENV
from clickshortener.exceptions import BadConfigurationError
from clickshortener.utils.helpers import require_environment, running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def lambda_section(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    """Reduce a full AppConfig document to one lambda's active backend config

    Raises:
        BadConfigurationError:
            If the document lacks `active_backend` or the lambda's section for it.
    """
    try:
        backend = document['active_backend']
        return {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no active backend config for '{lambda_name}'.") from e


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: read the document from the local AppConfig agent under `sam local`

    Only applies when running locally with APPCONFIG_AGENT_URL pointing at a
    loopback or docker-internal host on port 2772. APPCONFIG_PROFILE_NAME
    picks the profile (default 'backend-config'). Otherwise boto3 is used.
    """

    # ruff: noqa: E701
    def __validate_appconfig_url(url: str) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    # ruff: enable

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The lambda's config section for the active backend.

    Raises:
        MissingEnvironmentVariableError:
            If any of the required environment variables is missing.
        BadConfigurationError:
            If the document lacks the lambda's active backend section.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
