"""
Data models for the MoveNow application.

This module contains Pydantic models for validating the invocation
configuration and the Fitbit step data handled during an hourly check.

Classes:
    MoveNowConfig: Validated configuration for one invocation
    StepSample: One intraday step-count sample
    IntradaySteps: Ordered step samples for the queried hour
    HourWindow: The user's local date and hour
    StepCheckResult: Outcome of an hourly step check
"""

from .config import MoveNowConfig
from .steps import HourWindow, IntradaySteps, StepCheckResult, StepSample

__all__ = [
    "MoveNowConfig",
    "StepSample",
    "IntradaySteps",
    "HourWindow",
    "StepCheckResult",
]
