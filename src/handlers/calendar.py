"""
Lambda handler for the calendar page data.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.session import CycleSession
from src.services.storage import CycleStorage
from src.utils.responses import BadRequestError, build_response, get_query_param
from src.utils.logging import logger, log_exception

tracer = Tracer(service="nua_calendar")

def _parse_month(event: Dict, session: CycleSession) -> None:
    year = get_query_param(event, "year")
    month = get_query_param(event, "month")
    if year is None and month is None:
        return
    try:
        session.show_month(int(year or session.year), int(month or session.month))
    except ValueError:
        raise BadRequestError(f"Invalid year/month: {year}/{month}")

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Return phase, next period, calendar grid and upcoming events.

    Query parameters:
        user_id: Owner of the calendar (required)
        year, month: Month to display, defaults to the current month

    Returns:
        API Gateway Lambda proxy response
    """
    user_id = get_query_param(event, "user_id")
    if not user_id:
        return build_response(400, {"error": "Missing user_id"})

    session = None
    try:
        session = CycleSession.load(CycleStorage(user_id))
        _parse_month(event, session)
        return build_response(200, session.snapshot())

    except BadRequestError as e:
        logger.warning("Invalid calendar request", extra={"user_id": user_id, "error": str(e)})
        return build_response(400, {"error": str(e)})

    except Exception as e:
        log_exception(logger, "Error building calendar", extra={
            "user_id": user_id,
            "error_type": type(e).__name__,
            "error_details": str(e)
        })
        return build_response(500, {"error": str(e)})

    finally:
        if session is not None:
            session.close()
