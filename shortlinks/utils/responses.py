"""API Gateway (Lambda proxy) response builders.

Every error body carries `error` (short title), `message` (human readable)
and `errorCode` (machine readable). Success bodies carry `success: true`.

Example:
    >>> response_404(message='The requested short URL does not exist', error_code='SHORT_LINK_NOT_FOUND')
    {'statusCode': 404, 'headers': {...}, 'body': '{"error": "Short URL not found", ...}'}
"""

import json
from datetime import datetime, UTC
from typing import Any

from shortlinks.types import HttpHeaders, LambdaResponse, ResponseBody
from shortlinks.constants import VALIDATION_FAILED
from shortlinks.exceptions import ValidationError


# Needed by the browser frontend, which is served from another origin
CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def iso_timestamp(value: datetime | None) -> str | None:
    """Render a datetime as an ISO 8601 UTC string ('...Z'), or None."""
    if value is None:
        return None
    return value.astimezone(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def json_response(status_code: int, body: ResponseBody, headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(status_code: int, *, error: str, message: str, error_code: str, **extra: Any) -> LambdaResponse:
    return json_response(status_code, {'error': error, 'message': message, 'errorCode': error_code, **extra})


def response_200(*, data: ResponseBody, message: str | None = None) -> LambdaResponse:
    body: ResponseBody = {'success': True}
    if message:
        body['message'] = message
    body['data'] = data
    return json_response(200, body)


def response_201(*, data: ResponseBody) -> LambdaResponse:
    return json_response(201, {'success': True, 'data': data})


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': '',  # no body needed for redirects
    }


def response_400(*, message: str, error_code: str, error: str = 'Bad Request', **extra: Any) -> LambdaResponse:
    return error_response(400, error=error, message=message, error_code=error_code, **extra)


def response_404(*, message: str, error_code: str, error: str = 'Short URL not found') -> LambdaResponse:
    return error_response(404, error=error, message=message, error_code=error_code)


def response_409(*, message: str, error_code: str, error: str = 'Conflict') -> LambdaResponse:
    return error_response(409, error=error, message=message, error_code=error_code)


def response_410(*, message: str, error_code: str, error: str = 'Short URL expired') -> LambdaResponse:
    return error_response(410, error=error, message=message, error_code=error_code)


def response_500(*, error_code: str, message: str | None = None) -> LambdaResponse:
    return error_response(
        500,
        error='Internal Server Error',
        message=message or 'The server encountered an internal error',
        error_code=error_code,
    )


def response_validation_failed(error: ValidationError) -> LambdaResponse:
    return response_400(
        error='Validation failed',
        message=error.message,
        error_code=VALIDATION_FAILED,
        details=[{'field': error.field, 'message': error.message}],
    )
