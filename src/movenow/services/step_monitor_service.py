"""
Step monitor service for the MoveNow application.

This service contains the business logic of the hourly check. It fetches
the user's step count for the current local hour, compares it with the
configured threshold and publishes a notification when the user has been
sedentary.

Classes:
    StepMonitorService: Core business logic for the hourly step check
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.config import MoveNowConfig
from ..models.steps import HourWindow, IntradaySteps, StepCheckResult
from ..utils.structured_log import log_event
from .fitbit_service import FitbitService
from .sns_service import SNSService


class StepMonitorService:
    """
    Core business logic service for the hourly step check.

    The check runs in a single linear flow: determine the UTC offset,
    fetch the intraday steps, sum them, compare with the threshold and
    notify if the threshold was not met. Errors from either collaborator
    propagate to the caller.

    Attributes:
        config: Invocation configuration
        fitbit_service: Fitbit API client
        sns_service: SNS publisher, created on first notification

    Example:
        >>> config = MoveNowConfig.from_event(event)
        >>> result = StepMonitorService(config).check_hourly_steps()
        >>> if result.notified:
        ...     print(f"Notification sent: {result.message_id}")
    """

    def __init__(
        self,
        config: MoveNowConfig,
        fitbit_service: Optional[FitbitService] = None,
        sns_service: Optional[SNSService] = None,
    ):
        """
        Initialize the step monitor service.

        Args:
            config: Invocation configuration
            fitbit_service: Optional Fitbit service instance
            sns_service: Optional SNS service instance
        """
        self.config = config
        self.fitbit_service = fitbit_service or FitbitService(config.access_token)
        self._sns_service = sns_service

    @property
    def sns_service(self) -> SNSService:
        # Created on the first notification only
        if self._sns_service is None:
            self._sns_service = SNSService(
                self.config.sns_topic_arn, self.config.sns_topic_region
            )
        return self._sns_service

    @staticmethod
    def compute_total_steps(intraday: IntradaySteps) -> int:
        """Sum the step values of all samples."""
        return intraday.total_steps

    @staticmethod
    def should_notify(total_steps: int, threshold: int) -> bool:
        """A notification is due when the total is strictly below the threshold."""
        return total_steps < threshold

    @staticmethod
    def build_notification_message(total_steps: int) -> str:
        return f"You've only moved {total_steps} steps this hour. Get movin'!"

    def check_hourly_steps(self, now: Optional[datetime] = None) -> StepCheckResult:
        """
        Run the hourly step check.

        Args:
            now: Optional current time override, defaults to UTC now

        Returns:
            StepCheckResult describing the check and any notification

        Raises:
            UpstreamCallError: If a Fitbit or SNS call fails
        """
        if now is None:
            now = datetime.now(timezone.utc)

        offset_millis = self.fitbit_service.get_utc_offset_millis()
        window = HourWindow.from_offset(offset_millis, now)
        intraday = self.fitbit_service.get_intraday_steps(offset_millis, now)

        total_steps = self.compute_total_steps(intraday)
        threshold = self.config.min_hourly_steps

        result = StepCheckResult(
            total_steps=total_steps,
            threshold=threshold,
            window=window,
            sample_count=intraday.sample_count,
        )

        if self.should_notify(total_steps, threshold):
            message = self.build_notification_message(total_steps)
            log_event("STEP_GOAL_MISSED", stepCount=total_steps, minHourlySteps=threshold)

            result.message = message
            result.message_id = self.sns_service.publish_message(message)
            result.notified = True

        log_event(
            "STEP_CHECK_METRICS",
            stepCount=total_steps,
            minHourlySteps=threshold,
            goalMet=result.goal_met,
            notified=result.notified,
            date=window.date_string,
            hour=window.hour,
            datasetLength=intraday.sample_count,
        )

        return result
