"""
AWS SNS service for the MoveNow application.

This service publishes the "get moving" notification to an SNS topic.
Delivery to the user (SMS, email) is handled by the topic's subscriptions.

Classes:
    SNSService: Service for publishing notifications to an SNS topic
"""

import os
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import UpstreamCallError
from ..utils.structured_log import log_event

# SNS rejects messages larger than 256 KB
MAX_MESSAGE_BYTES = 262144


class SNSService:
    """
    Service for publishing notifications to an AWS SNS topic.

    Attributes:
        topic_arn: ARN of the destination topic
        region: AWS region in which the topic resides
        sns_client: Boto3 SNS client

    Example:
        >>> sns_service = SNSService(
        ...     "arn:aws:sns:us-east-1:123456789012:move-now", "us-east-1"
        ... )
        >>> message_id = sns_service.publish_message("Get movin'!")
    """

    def __init__(
        self,
        topic_arn: str,
        region: Optional[str] = None,
        sns_client: Optional[Any] = None,
    ):
        """
        Initialize the SNS service.

        Args:
            topic_arn: ARN of the destination topic
            region: AWS region of the topic, defaults to the AWS_REGION
                environment variable or us-east-1
            sns_client: Optional preconfigured boto3 SNS client

        Raises:
            ValueError: If the topic ARN is not provided
        """
        if not topic_arn:
            raise ValueError("SNS topic ARN must be provided")

        self.topic_arn = topic_arn
        self.region = region or os.getenv("AWS_REGION", "us-east-1")
        self.sns_client = sns_client or boto3.client("sns", region_name=self.region)

    def publish_message(self, message: str, subject: Optional[str] = None) -> str:
        """
        Publish a message to the configured topic.

        Args:
            message: Notification text
            subject: Optional subject line used by email subscriptions

        Returns:
            The SNS message ID

        Raises:
            ValueError: If the message is empty or too large
            UpstreamCallError: If SNS rejects the request or cannot be reached
        """
        if not message or not message.strip():
            raise ValueError("Message content cannot be empty")

        if len(message.encode("utf-8")) > MAX_MESSAGE_BYTES:
            raise ValueError("Message content exceeds the SNS size limit (256 KB)")

        publish_params: Dict[str, Any] = {
            "TopicArn": self.topic_arn,
            "Message": message,
        }
        if subject:
            publish_params["Subject"] = subject

        try:
            response = self.sns_client.publish(**publish_params)

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            error_message = e.response["Error"]["Message"]
            raise UpstreamCallError(
                "sns", f"SNS error ({error_code}): {error_message}"
            ) from e

        except BotoCoreError as e:
            raise UpstreamCallError("sns", f"SNS request failed: {e}") from e

        message_id = response["MessageId"]
        log_event("SNS_MESSAGE_PUBLISHED", messageId=message_id, topicArn=self.topic_arn)
        return message_id
