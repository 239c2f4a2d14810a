import logging

from clickshortener.core import LinkCatalog
from clickshortener.dao.factory import url_record_dao
from clickshortener.dao.exceptions import UrlRecordNotFoundError
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, get_short_url, app_prefix
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_200, response_400, response_404
from clickshortener.lambdas.common import path_shortcode
from clickshortener.lambdas.delete_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DELETE_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete short URLs

    HTTP responses:
        200: Short URL deleted
            message: success message
            shortcode: deleted shortcode
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: unknown or malformed shortcode
        500: Internal server error
        503: Record store unavailable
    """
    app_config = load_config('delete_url')

    shortcode = path_shortcode(event)
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    short_url = get_short_url(shortcode, event)
    catalog = LinkCatalog(url_record_dao(app_config, prefix=app_prefix()))
    try:
        catalog.remove(shortcode)
    except UrlRecordNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {short_url} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    logger.info('Deleted short URL. Responding with 200.', extra={'shortcode': shortcode, 'event': DELETE_SUCCESS})
    return response_200({'message': f'Successfully deleted {short_url}', 'shortcode': shortcode})
