"""
API Gateway request and response helpers.
"""
import json
from typing import Any, Dict, Optional

class BadRequestError(Exception):
    """Raised when a request body or query string cannot be used."""
    pass

def build_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Build an API Gateway Lambda proxy response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
        "isBase64Encoded": False
    }

def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse the JSON body of a proxy event.

    Raises:
        BadRequestError: If the body is missing, not JSON or not an object
    """
    body = event.get("body")
    if body is None:
        return {}
    if isinstance(body, dict):
        return body
    try:
        parsed = json.loads(body)
    except (TypeError, json.JSONDecodeError):
        raise BadRequestError("Request body must be valid JSON")
    if not isinstance(parsed, dict):
        raise BadRequestError("Request body must be a JSON object")
    return parsed

def get_query_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """Get a query string parameter, None when absent."""
    params = event.get("queryStringParameters") or {}
    return params.get(name)
