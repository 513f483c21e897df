"""
MoveNow: Hourly Fitbit step check with AWS SNS notifications.

This package provides a serverless function that is invoked hourly, reads
the user's Fitbit step count for the current local hour and publishes an
SNS notification telling the user to get moving when the hourly step goal
has not been met.

Modules:
    lambdas: AWS Lambda function handler for the scheduled check
    services: Business logic, Fitbit and SNS integrations
    models: Configuration and step data models using Pydantic
    utils: Structured logging helpers
"""

__version__ = "0.1.0"

from .exceptions import MoveNowError, UpstreamCallError
from .models import HourWindow, IntradaySteps, MoveNowConfig, StepCheckResult, StepSample
from .services import FitbitService, SNSService, StepMonitorService

__all__ = [
    "MoveNowError",
    "UpstreamCallError",
    "MoveNowConfig",
    "StepSample",
    "IntradaySteps",
    "HourWindow",
    "StepCheckResult",
    "StepMonitorService",
    "FitbitService",
    "SNSService",
]
