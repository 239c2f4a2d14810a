import logging

from clickshortener.core import LinkCatalog
from clickshortener.dao.factory import url_record_dao
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, app_prefix
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_200
from clickshortener.lambdas.common import record_body
from clickshortener.lambdas.list_urls.constants import LIST_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for the short URL history

    HTTP responses:
        200: Every short URL, newest first
            urls: list of {shortcode, short_url, target_url, click_count, created_at, last_accessed_at}
            total: number of short URLs
        500: Internal server error
        503: Record store unavailable
    """
    app_config = load_config('list_urls')

    records = LinkCatalog(url_record_dao(app_config, prefix=app_prefix())).history()
    urls = [record_body(record, event) for record in records]

    logger.debug('Serving short URL history.', extra={'total': len(urls), 'event': LIST_SUCCESS})
    return response_200({'urls': urls, 'total': len(urls)})
