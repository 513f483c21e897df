"""
MoveNow Lambda function.

This Lambda function is invoked hourly by a scheduled rule. It retrieves the
Fitbit intraday step count of the user for the current local hour and
publishes a notification to an SNS topic when the hourly step goal has not
been met. SNS then delivers the message (for example as an SMS) to the user.

Functions:
    lambda_handler: Main entry point for the Lambda function
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..exceptions import UpstreamCallError
from ..models.config import MoveNowConfig
from ..services.step_monitor_service import StepMonitorService
from ..utils.structured_log import log_event, mask_token

COMPLETED_MESSAGE = "MoveNow Lambda function completed."


def lambda_handler(
    event: Optional[Dict[str, Any]], context: Any  # noqa: ARG001
) -> Dict[str, Any]:
    """
    Main Lambda handler for the hourly step check.

    Args:
        event: Scheduled rule input carrying the invocation configuration
        context: AWS Lambda runtime context (unused but required)

    Returns:
        Dictionary containing the check results

    Raises:
        ValueError: If the configuration is missing or invalid
        UpstreamCallError: If a Fitbit or SNS call fails

    Event Structure:
        {
            "accessToken": "fitbit-oauth-token",
            "minHourlySteps": 250,
            "snsTopicArn": "arn:aws:sns:us-east-1:123456789012:move-now",
            "snsTopicRegion": "us-east-1"
        }

        Keys missing from the event are read from the FITBIT_ACCESS_TOKEN,
        MIN_HOURLY_STEPS, SNS_TOPIC_ARN and SNS_TOPIC_REGION environment
        variables.

    Returns:
        {
            "statusCode": 200,
            "success": true,
            "message": "MoveNow Lambda function completed.",
            "stepCount": 40,
            "minHourlySteps": 250,
            "goalMet": false,
            "notified": true,
            "messageId": "sns-message-id",
            "date": "2024-01-15",
            "hour": 14,
            "sampleCount": 4,
            "processingTime": 123.45
        }
    """
    start_time = datetime.now(timezone.utc)

    try:
        _log_event_received(event)

        config = MoveNowConfig.from_event(event)
        result = StepMonitorService(config).check_hourly_steps()

        response = {
            "statusCode": 200,
            "success": True,
            "message": COMPLETED_MESSAGE,
            **result.to_summary(),
            "processingTime": _elapsed_millis(start_time),
        }

        log_event(
            "MOVE_NOW_COMPLETED",
            notified=result.notified,
            processingTimeMs=response["processingTime"],
        )
        return response

    except UpstreamCallError as e:
        _log_processing_error("UPSTREAM_CALL_FAILED", e, start_time, service=e.service)
        raise

    except ValueError as e:
        _log_processing_error("CONFIGURATION_ERROR", e, start_time)
        raise

    except Exception as e:
        _log_processing_error("UNEXPECTED_ERROR", e, start_time)
        raise


def _elapsed_millis(start_time: datetime) -> float:
    elapsed = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
    return round(elapsed, 2)


def _log_event_received(event: Optional[Dict[str, Any]]) -> None:
    """
    Log the receipt of a scheduled invocation.

    The access token is masked; only the presence of the other keys is
    recorded.

    Args:
        event: Lambda event to log
    """
    event = event or {}
    log_event(
        "MOVE_NOW_INVOKED",
        environment=ENVIRONMENT,
        accessToken=mask_token(str(event.get("accessToken") or "")),
        minHourlySteps=event.get("minHourlySteps"),
        snsTopicArn=event.get("snsTopicArn"),
        snsTopicRegion=event.get("snsTopicRegion"),
    )


def _log_processing_error(
    error_type: str, error: Exception, start_time: datetime, **fields: Any
) -> None:
    """
    Log an error that is about to be raised to the Lambda runtime.

    Args:
        error_type: Type/category of the error
        error: The exception being raised
        start_time: Processing start time for duration calculation
        **fields: Additional context fields
    """
    log_event(
        "MOVE_NOW_ERROR",
        errorType=error_type,
        errorClass=type(error).__name__,
        errorMessage=str(error),
        processingTimeMs=_elapsed_millis(start_time),
        **fields,
    )


# Environment variable configurations
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")

log_event("MOVE_NOW_COLD_START", environment=ENVIRONMENT)
