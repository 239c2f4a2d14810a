"""Helper utilities for AWS lambda functions.

Functions:
    running_locally() -> bool
        True when running under local SAM
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unhandled handler exceptions into a 500 response
    guarantee_503_response(handler: Callable) -> Callable
        Decorator: Turn data store outages into a 503 response

Example:
    Typical usage inside a Lambda handler:

        >>> from clickshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
from typing import Any
from collections.abc import Callable

from clickshortener.constants import ENV, DATA_STORE_UNAVAILABLE, UNKNOWN_INTERNAL_SERVER_ERROR
from clickshortener.dao.exceptions import DataStoreError
from clickshortener.exceptions import MissingEnvironmentVariableError
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils.responses import response_500, response_503


logger = logging.getLogger(__name__)


def running_locally() -> bool:
    """True under `sam local invoke` or when APP_ENV is 'local'"""
    return os.getenv(ENV.App.APP_ENV, '').lower() == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 500 when a Lambda handler raises

    When running locally (SAM), the exception is re-raised instead so the
    developer sees the traceback.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in Lambda handler. Responding with 500.')
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper


def guarantee_503_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 503 when the record store is unavailable

    DataStoreError is never retried here; clients may retry the request.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except DataStoreError as e:
            logger.error('Record store unavailable. Responding with 503.', extra={'reason': str(e), 'event': DATA_STORE_UNAVAILABLE})
            return response_503(error_code=DATA_STORE_UNAVAILABLE)

    return wrapper
