"""
Lambda handler for cycle configuration.
"""
from typing import Any, Dict, Optional

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.services.exceptions import CycleValidationError
from src.services.session import CycleSession
from src.services.storage import CycleStorage
from src.utils.responses import BadRequestError, build_response, parse_json_body
from src.utils.logging import logger, log_exception

tracer = Tracer(service="nua_calendar")

class CycleConfigurationRequest(BaseModel):
    """Cycle configuration form submission."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., min_length=1)
    last_period_date: Optional[str] = Field(None, alias="lastPeriodDate")
    cycle_length: Optional[Any] = Field(None, alias="cycleLength")

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle cycle configuration.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response with the updated calendar data
    """
    try:
        request = CycleConfigurationRequest(**parse_json_body(event))
    except (BadRequestError, ValidationError) as e:
        logger.warning("Invalid cycle configuration request", extra={"error": str(e)})
        return build_response(400, {"error": "Missing user_id or invalid body"})

    session = None
    try:
        session = CycleSession.load(CycleStorage(request.user_id))
        session.configure(request.last_period_date, request.cycle_length)
        return build_response(200, session.snapshot())

    except CycleValidationError as e:
        logger.info("Cycle configuration rejected", extra={
            "user_id": request.user_id,
            "error": str(e)
        })
        return build_response(400, {"error": str(e)})

    except Exception as e:
        log_exception(logger, "Error configuring cycle", extra={
            "user_id": request.user_id,
            "error_type": type(e).__name__,
            "error_details": str(e)
        })
        return build_response(500, {"error": str(e)})

    finally:
        if session is not None:
            session.close()
