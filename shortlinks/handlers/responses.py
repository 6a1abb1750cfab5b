"""Response builders shared by the handlers

Responses follow the API Gateway proxy format:
{'statusCode': <int>, 'headers': {...}, 'body': '<JSON string>'}
"""

import json
from typing import Any


JSON_HEADERS = {'Content-Type': 'application/json'}


def json_response(status_code: int, body: dict[str, Any]) -> dict:
    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def error_response(status_code: int, base: str, message: str | None = None, error_code: str | None = None, **fields: Any) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    body.update(fields)
    return json_response(status_code, body)


def response_400(message: str | None = None, error_code: str | None = None, **fields: Any) -> dict:
    return error_response(400, 'Bad Request', message, error_code, **fields)


def response_404(message: str | None = None, error_code: str | None = None, **fields: Any) -> dict:
    return error_response(404, 'Not Found', message, error_code, **fields)


def response_410(message: str | None = None, error_code: str | None = None, **fields: Any) -> dict:
    return error_response(410, 'Gone', message, error_code, **fields)


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def get_header(event: dict, name: str) -> str | None:
    """Case-insensitive header lookup."""
    headers = event.get('headers') or {}
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
