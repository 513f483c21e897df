"""
Service layer for the MoveNow application.

This module contains the business logic and the integrations with the
Fitbit Web API and AWS SNS used by the hourly step check.

Classes:
    StepMonitorService: Core business logic for the hourly step check
    FitbitService: Fitbit profile and intraday steps client
    SNSService: AWS SNS notification publisher
"""

from .fitbit_service import FitbitService
from .sns_service import SNSService
from .step_monitor_service import StepMonitorService

__all__ = ["StepMonitorService", "FitbitService", "SNSService"]
