import time
import logging
from datetime import datetime, UTC

from clickshortener.constants import DATA_STORE_UNAVAILABLE
from clickshortener.dao.factory import url_record_dao
from clickshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from clickshortener.utils import load_config, app_prefix
from clickshortener.utils.helpers import guarantee_500_response, guarantee_503_response
from clickshortener.utils.responses import response_200, response_503
from clickshortener.lambdas.health_check.constants import SERVICE_HEALTHY, DATA_STORE_UNREACHABLE


logger = logging.getLogger(__name__)

# Import time of this module, i.e. the cold start of the execution environment
_STARTED_AT = time.monotonic()


@guarantee_500_response
@guarantee_503_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway health checks

    Builds the configured record store and asks it whether it can serve
    requests. Nothing is read from or written to the records.

    HTTP responses:
        200: Service healthy
            status: 'OK'
            backend: active record store backend
            timestamp: ISO-8601 time of the check
            uptime: seconds since the execution environment started
        500: Internal server error (e.g. bad configuration)
        503: Record store unreachable
    """
    app_config = load_config('health_check')
    dao = url_record_dao(app_config, prefix=app_prefix())
    [backend] = app_config

    if not dao.healthcheck():
        logger.warning('Record store unreachable. Responding with 503.', extra={'backend': backend, 'event': DATA_STORE_UNREACHABLE})
        return response_503(message='record store unreachable', error_code=DATA_STORE_UNAVAILABLE)

    logger.debug('Service healthy.', extra={'backend': backend, 'event': SERVICE_HEALTHY})
    return response_200({
        'status': 'OK',
        'backend': backend,
        'timestamp': datetime.now(UTC).isoformat(),
        'uptime': round(time.monotonic() - _STARTED_AT, 3),
    })
