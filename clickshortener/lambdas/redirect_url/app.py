import logging

from clickshortener.core import RedirectResolver
from clickshortener.dao.factory import url_record_dao
from clickshortener.dao.exceptions import UrlRecordNotFoundError
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, get_short_url, app_prefix
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_302, response_400, response_404
from clickshortener.lambdas.common import path_shortcode
from clickshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode, counting the click
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: unknown or malformed shortcode
        500: Internal server error
        503: Record store unavailable

    Example:
        >>> event = {'pathParameters': {'shortcode': 'aB3xY9'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    app_config = load_config('redirect_url')

    # 1- Extract shortcode from request's path
    shortcode = path_shortcode(event)
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode, counting the click
    resolver = RedirectResolver(url_record_dao(app_config, prefix=app_prefix()))
    try:
        target_url = resolver.resolve(shortcode)
    except UrlRecordNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
