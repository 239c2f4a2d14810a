import json
import logging

from clickshortener.core import CodeAllocator
from clickshortener.dao.factory import url_record_dao
from clickshortener.exceptions import InvalidURLError
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, app_prefix, clean_target_url, get_short_url
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_200, response_400
from clickshortener.lambdas.common import record_body
from clickshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Normalize and validate the URL
    - Step 3: Allocate a shortcode (reusing the existing one for known URLs)
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target_url: normalized original url
            short_url: short url for the target
            shortcode: allocated shortcode
            click_count: clicks recorded so far (0 for new links)
            created_at: ISO-8601 creation time
        400: Bad client request
            message: invalid JSON body, missing or invalid target_url
        500: Internal server error
        503: Record store unavailable

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"target_url": "example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['target_url']
        'https://example.com'
    """
    # 0- Get application's config
    app_config = load_config('shorten_url')

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    raw_url = request_body.get('target_url') if isinstance(request_body, dict) else None
    if not raw_url:
        logger.info("Missing 'target_url' in body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 2- Normalize and validate the URL
    try:
        target_url = clean_target_url(raw_url)
    except InvalidURLError as e:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL, 'reason': str(e)})
        return response_400(message='invalid URL format', error_code=INVALID_TARGET_URL)

    # 3- Allocate a shortcode
    dao = url_record_dao(app_config, prefix=app_prefix())
    record = CodeAllocator(dao).allocate_record(target_url)
    shortcode = record.code
    short_url = get_short_url(shortcode, event)

    # 4- Return successful response to user
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    body = record_body(record, event)
    body.pop('last_accessed_at')
    return response_200({'message': f'Successfully shortened {target_url} to {short_url}', **body})
