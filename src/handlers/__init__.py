"""
Lambda handlers package for AWS Lambda functions.
"""
from .calendar import handler as calendar_handler
from .cycle import handler as cycle_handler
from .events import handler as events_handler

__all__ = ["calendar_handler", "cycle_handler", "events_handler"]
