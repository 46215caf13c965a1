"""
Lambda handler for adding and removing calendar events.
"""
from typing import Any, Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.exceptions import CycleValidationError
from src.services.session import CycleSession
from src.services.storage import CycleStorage
from src.utils.responses import BadRequestError, build_response, get_query_param, parse_json_body
from src.utils.logging import logger, log_exception

tracer = Tracer(service="nua_calendar")

def add_event(user_id: str, body: Dict[str, Any]) -> Dict:
    """Create an event from the event form."""
    session = CycleSession.load(CycleStorage(user_id))
    try:
        event_id = session.add_event(body)
        logger.info("Event created", extra={"user_id": user_id, "event_id": event_id})
        return build_response(201, {"id": event_id, **session.snapshot()})
    finally:
        session.close()

def remove_event(user_id: str, event_id: str) -> Dict:
    """Delete an event. Unknown ids succeed without changes."""
    session = CycleSession.load(CycleStorage(user_id))
    try:
        removed = session.remove_event(event_id)
        logger.info("Event removal processed", extra={
            "user_id": user_id,
            "event_id": event_id,
            "removed": removed
        })
        return build_response(200, {"id": event_id, "removed": removed, **session.snapshot()})
    finally:
        session.close()

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle event creation (POST) and deletion (DELETE).

    The user id is read from the JSON body or the user_id query parameter;
    DELETE takes the event id from the {id} path parameter or the body.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        body = parse_json_body(event)
        user_id = body.get("user_id") or get_query_param(event, "user_id")
        if not user_id:
            raise BadRequestError("Missing user_id")
        method = (event.get("httpMethod") or "POST").upper()

        if method == "POST":
            return add_event(str(user_id), body)

        if method == "DELETE":
            event_id = (event.get("pathParameters") or {}).get("id") or body.get("id")
            if not event_id:
                raise BadRequestError("Missing event id")
            return remove_event(str(user_id), str(event_id))

        return build_response(405, {"error": f"Method {method} not allowed"})

    except BadRequestError as e:
        logger.warning("Invalid event request", extra={"error": str(e)})
        return build_response(400, {"error": str(e)})

    except CycleValidationError as e:
        logger.info("Event rejected", extra={"error": str(e)})
        return build_response(400, {"error": str(e)})

    except Exception as e:
        log_exception(logger, "Error processing event request", extra={
            "error_type": type(e).__name__,
            "error_details": str(e)
        })
        return build_response(500, {"error": str(e)})
