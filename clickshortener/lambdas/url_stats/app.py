import logging

from clickshortener.core import RedirectResolver
from clickshortener.dao.factory import url_record_dao
from clickshortener.dao.exceptions import UrlRecordNotFoundError
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, get_short_url, app_prefix
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_200, response_400, response_404
from clickshortener.lambdas.common import path_shortcode, record_body
from clickshortener.lambdas.url_stats.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    STATS_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for short URL statistics

    Reading statistics never counts as a click.

    HTTP responses:
        200: Statistics found
            shortcode, short_url, target_url, click_count, created_at, last_accessed_at
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: unknown or malformed shortcode
        500: Internal server error
        503: Record store unavailable
    """
    app_config = load_config('url_stats')

    shortcode = path_shortcode(event)
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    resolver = RedirectResolver(url_record_dao(app_config, prefix=app_prefix()))
    try:
        record = resolver.stats(shortcode)
    except UrlRecordNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    logger.debug('Serving short URL statistics.', extra={'shortcode': shortcode, 'event': STATS_SUCCESS})
    return response_200(record_body(record, event))
