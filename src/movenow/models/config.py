"""
Invocation configuration model for the MoveNow application.

The scheduled rule passes the configuration as the Lambda event. Any value
missing from the event is read from the environment instead.

Classes:
    MoveNowConfig: Validated configuration for one invocation
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, validator

DEFAULT_REGION = "us-east-1"


class MoveNowConfig(BaseModel):
    """
    Pydantic model holding the configuration of one invocation.

    Attributes:
        access_token: Fitbit OAuth 2.0 bearer token
        min_hourly_steps: Steps required within the hour to avoid a
            notification
        sns_topic_arn: ARN of the SNS topic that receives notifications
        sns_topic_region: AWS region in which the SNS topic resides

    Example:
        >>> config = MoveNowConfig.from_event({
        ...     "accessToken": "eyJhbGciOi...",
        ...     "minHourlySteps": 250,
        ...     "snsTopicArn": "arn:aws:sns:us-east-1:123456789012:move-now",
        ...     "snsTopicRegion": "us-east-1"
        ... })
        >>> config.min_hourly_steps
        250
    """

    access_token: str = Field(..., min_length=1, description="Fitbit access token")
    min_hourly_steps: int = Field(..., ge=0, description="Hourly step threshold")
    sns_topic_arn: str = Field(..., description="SNS topic ARN")
    sns_topic_region: str = Field(DEFAULT_REGION, description="SNS topic region")

    @validator("access_token")
    def validate_access_token(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank tokens."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Access token cannot be blank")
        return cleaned

    @validator("sns_topic_arn")
    def validate_sns_topic_arn(cls, v: str) -> str:
        """
        Validate the SNS topic ARN format.

        Args:
            v: Topic ARN string

        Returns:
            Validated topic ARN

        Raises:
            ValueError: If the ARN is not an SNS ARN
        """
        cleaned = v.strip()
        parts = cleaned.split(":")
        if len(parts) != 6 or parts[0] != "arn" or parts[2] != "sns":
            raise ValueError(f"Invalid SNS topic ARN: {v}")
        return cleaned

    @classmethod
    def from_event(cls, event: Optional[Dict[str, Any]]) -> "MoveNowConfig":
        """
        Build the configuration from a Lambda event.

        Event keys take precedence over environment variables:

        - accessToken / FITBIT_ACCESS_TOKEN
        - minHourlySteps / MIN_HOURLY_STEPS
        - snsTopicArn / SNS_TOPIC_ARN
        - snsTopicRegion / SNS_TOPIC_REGION, then AWS_REGION

        Args:
            event: Lambda event dictionary (may be None or empty)

        Returns:
            MoveNowConfig instance

        Raises:
            ValueError: If a required value is missing or invalid
        """
        event = event or {}

        values = {
            "access_token": _first_set(
                event.get("accessToken"), os.getenv("FITBIT_ACCESS_TOKEN")
            ),
            "min_hourly_steps": _first_set(
                event.get("minHourlySteps"), os.getenv("MIN_HOURLY_STEPS")
            ),
            "sns_topic_arn": _first_set(
                event.get("snsTopicArn"), os.getenv("SNS_TOPIC_ARN")
            ),
            "sns_topic_region": _first_set(
                event.get("snsTopicRegion"),
                os.getenv("SNS_TOPIC_REGION"),
                os.getenv("AWS_REGION"),
                DEFAULT_REGION,
            ),
        }

        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid MoveNow configuration: {e}") from e


def _first_set(*candidates: Any) -> Any:
    """Return the first candidate that is neither None nor an empty string."""
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None
