"""
Step data models for the MoveNow application.

This module defines the models used to represent the Fitbit intraday step
series for one hour, the local hour window being queried and the outcome
of an hourly step check.

Classes:
    StepSample: One intraday step-count sample
    IntradaySteps: Ordered step samples returned by Fitbit
    HourWindow: The user's local date and hour to query
    StepCheckResult: Outcome of an hourly step check
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator


class StepSample(BaseModel):
    """
    A single intraday step-count sample.

    Attributes:
        time: Sample label as reported by Fitbit, e.g. "14:15:00"
        value: Number of steps recorded in the sample interval
    """

    time: str = Field(..., min_length=1, description="Sample time label")
    value: int = Field(..., ge=0, description="Steps in the interval")


class IntradaySteps(BaseModel):
    """
    Pydantic model for the intraday step series of one hour.

    Holds the samples in the order Fitbit returned them, together with the
    interval metadata of the dataset.

    Attributes:
        dataset: Ordered step samples
        dataset_interval: Sample interval length reported by Fitbit
        dataset_type: Unit of the interval (usually "minute")

    Example:
        >>> steps = IntradaySteps(dataset=[
        ...     StepSample(time="14:00:00", value=12),
        ...     StepSample(time="14:15:00", value=30),
        ... ])
        >>> steps.total_steps
        42
    """

    dataset: List[StepSample] = Field(
        default_factory=list, description="Ordered step samples"
    )
    dataset_interval: Optional[int] = Field(
        None, ge=1, description="Sample interval length"
    )
    dataset_type: Optional[str] = Field(None, description="Sample interval unit")

    @property
    def total_steps(self) -> int:
        """Sum of the step values of all samples."""
        return sum(sample.value for sample in self.dataset)

    @property
    def sample_count(self) -> int:
        return len(self.dataset)

    @classmethod
    def from_fitbit_response(cls, payload: Dict[str, Any]) -> "IntradaySteps":
        """
        Create an IntradaySteps instance from a Fitbit intraday response.

        Args:
            payload: Decoded JSON body of the intraday steps endpoint

        Returns:
            IntradaySteps instance

        Raises:
            ValueError: If the payload format is invalid or required fields
                are missing

        Example:
            >>> payload = {
            ...     "activities-steps-intraday": {
            ...         "dataset": [{"time": "14:00:00", "value": 12}],
            ...         "datasetInterval": 15,
            ...         "datasetType": "minute"
            ...     }
            ... }
            >>> IntradaySteps.from_fitbit_response(payload).total_steps
            12
        """
        try:
            intraday = payload["activities-steps-intraday"]
            dataset = intraday["dataset"]

            if not isinstance(dataset, list):
                raise ValueError("dataset must be a list")

            return cls(
                dataset=[
                    StepSample(time=item["time"], value=item["value"])
                    for item in dataset
                ],
                dataset_interval=intraday.get("datasetInterval"),
                dataset_type=intraday.get("datasetType"),
            )

        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid Fitbit intraday payload: {e}") from e


class HourWindow(BaseModel):
    """
    The user's local date and hour for which steps are queried.

    Fitbit stores intraday data in the user's local time, so the window is
    derived from the current UTC time shifted by the profile's UTC offset.

    Attributes:
        local_date: Calendar date in the user's time zone
        hour: Hour of the day in the user's time zone (0-23)
    """

    local_date: date = Field(..., description="Local calendar date")
    hour: int = Field(..., ge=0, le=23, description="Local hour of day")

    @classmethod
    def from_offset(
        cls, offset_millis: int, now: Optional[datetime] = None
    ) -> "HourWindow":
        """
        Compute the local hour window from a UTC offset.

        Args:
            offset_millis: User's offset from UTC in milliseconds
            now: Current time, defaults to the current UTC time. Naive
                datetimes are taken as UTC.

        Returns:
            HourWindow for the user's current local hour
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is not None:
            now = now.astimezone(timezone.utc)

        local_now = now + timedelta(milliseconds=offset_millis)
        return cls(local_date=local_now.date(), hour=local_now.hour)

    @property
    def date_string(self) -> str:
        return self.local_date.strftime("%Y-%m-%d")

    @property
    def start_time(self) -> str:
        return f"{self.hour:02d}:00"

    @property
    def end_time(self) -> str:
        return f"{self.hour:02d}:59"


class StepCheckResult(BaseModel):
    """
    Outcome of one hourly step check.

    Attributes:
        total_steps: Sum of all samples in the window
        threshold: Configured minimum hourly steps
        window: Local hour window that was queried
        sample_count: Number of samples Fitbit returned
        notified: Whether a notification was published
        message: Notification text, set only when notified
        message_id: SNS message ID, set only when notified
    """

    total_steps: int = Field(..., ge=0)
    threshold: int = Field(..., ge=0)
    window: HourWindow
    sample_count: int = Field(0, ge=0)
    notified: bool = False
    message: Optional[str] = None
    message_id: Optional[str] = None

    @validator("message_id")
    def validate_message_id(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank SNS message IDs."""
        if v is not None and not v.strip():
            raise ValueError("SNS message ID cannot be blank")
        return v

    @property
    def goal_met(self) -> bool:
        return self.total_steps >= self.threshold

    def to_summary(self) -> Dict[str, Any]:
        """
        Convert the result to the camelCase fields returned by the handler.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "stepCount": self.total_steps,
            "minHourlySteps": self.threshold,
            "goalMet": self.goal_met,
            "notified": self.notified,
            "messageId": self.message_id,
            "date": self.window.date_string,
            "hour": self.window.hour,
            "sampleCount": self.sample_count,
        }
