"""API Gateway (Lambda proxy) response builders shared by all handlers

Every JSON response carries permissive CORS headers so the browser frontend
can call the API from another origin.
"""

import json
from typing import Any

from clickshortener.types import LambdaResponse


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return json_response(200, body)


def response_302(*, location: str) -> LambdaResponse:
    return json_response(302, {}, headers={'Location': location})


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(404, _error_body('Not Found', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(500, _error_body('Internal Server Error', message, error_code))


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return json_response(503, _error_body('Service Unavailable', message, error_code))
