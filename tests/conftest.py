"""
Pytest configuration and shared fixtures for MoveNow tests.

This module contains pytest configuration, shared fixtures, and test utilities
that are used across multiple test modules. It sets up mock AWS services,
Fitbit payloads and a stand-in HTTP session.

Fixtures:
    aws_credentials: Fake AWS credentials for moto
    mock_sns_topic: Mocked SNS topic ARN
    move_now_config: Sample invocation configuration
    scheduled_event: Sample scheduled rule event
    fitbit_session: Mock requests session serving Fitbit payloads
    fitbit_service: FitbitService wired to the mock session
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import boto3
import pytest
import requests
from moto import mock_aws

from src.movenow.models.config import MoveNowConfig
from src.movenow.services.fitbit_service import FitbitService


# Test configuration constants
TEST_ACCESS_TOKEN = "test-fitbit-access-token"
TEST_REGION = "us-east-1"
TEST_TOPIC_NAME = "move-now-test"
TEST_TOPIC_ARN = f"arn:aws:sns:{TEST_REGION}:123456789012:{TEST_TOPIC_NAME}"
TEST_BASE_URL = "https://api.fitbit.com/1/user/-/"

# 2024-01-15 14:30 UTC; with a -5h offset the local hour is 09
TEST_NOW = datetime(2024, 1, 15, 14, 30, 0, tzinfo=timezone.utc)
TEST_OFFSET_MILLIS = -18000000


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    Sets environment variables for AWS credentials that are used by moto
    for mocking AWS services. These are fake credentials for testing only.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = TEST_REGION


@pytest.fixture
def mock_sns_topic(aws_credentials):
    """
    Fixture that creates a mocked SNS topic for testing.

    Returns:
        str: ARN of the mocked topic
    """
    with mock_aws():
        sns = boto3.client("sns", region_name=TEST_REGION)
        response = sns.create_topic(Name=TEST_TOPIC_NAME)
        yield response["TopicArn"]


@pytest.fixture
def move_now_config() -> MoveNowConfig:
    """
    Fixture that provides a sample invocation configuration.

    Returns:
        MoveNowConfig: Configuration with a threshold of 100 steps
    """
    return MoveNowConfig(
        access_token=TEST_ACCESS_TOKEN,
        min_hourly_steps=100,
        sns_topic_arn=TEST_TOPIC_ARN,
        sns_topic_region=TEST_REGION,
    )


@pytest.fixture
def scheduled_event() -> Dict[str, Any]:
    """
    Fixture that provides the input of the hourly scheduled rule.

    Returns:
        Dict[str, Any]: Scheduled rule event
    """
    return {
        "accessToken": TEST_ACCESS_TOKEN,
        "minHourlySteps": 100,
        "snsTopicArn": TEST_TOPIC_ARN,
        "snsTopicRegion": TEST_REGION,
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MoveNow environment variables for the duration of a test."""
    for name in (
        "FITBIT_ACCESS_TOKEN",
        "MIN_HOURLY_STEPS",
        "SNS_TOPIC_ARN",
        "SNS_TOPIC_REGION",
        "AWS_REGION",
        "FITBIT_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fitbit_session() -> Mock:
    """
    Fixture that provides a mock requests session serving Fitbit payloads.

    The profile endpoint returns TEST_OFFSET_MILLIS and the intraday
    endpoint returns four samples summing to 40 steps. Tests can replace
    the payloads through ``session.payloads``.

    Returns:
        Mock: Stand-in for requests.Session
    """
    session = Mock(spec=requests.Session)
    session.payloads = {
        "profile": profile_payload(TEST_OFFSET_MILLIS),
        "intraday": intraday_payload([10, 5, 20, 5]),
    }

    def get(url, **kwargs):
        key = "profile" if url.endswith("profile.json") else "intraday"
        return make_response(session.payloads[key])

    session.get.side_effect = get
    return session


@pytest.fixture
def fitbit_service(fitbit_session) -> FitbitService:
    """
    Fixture that provides a FitbitService backed by the mock session.

    Returns:
        FitbitService: Service instance for testing
    """
    return FitbitService(
        TEST_ACCESS_TOKEN, base_url=TEST_BASE_URL, session=fitbit_session
    )


# Pytest configuration
def pytest_configure(config):
    """
    Pytest configuration function.

    Sets up custom markers for organizing test execution.
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "aws: mark test as requiring AWS services")


# Test utilities
def profile_payload(offset_millis: int) -> Dict[str, Any]:
    """Build a Fitbit profile payload with the given UTC offset."""
    return {
        "user": {
            "displayName": "Test User",
            "timezone": "America/New_York",
            "offsetFromUTCMillis": offset_millis,
        }
    }


def intraday_payload(
    values: List[int], hour: int = 9, date_string: str = "2024-01-15"
) -> Dict[str, Any]:
    """
    Build a Fitbit intraday steps payload with 15 minute samples.

    Args:
        values: Step values, one per 15 minute slot
        hour: Local hour the samples belong to
        date_string: Local date of the samples

    Returns:
        Dict[str, Any]: Intraday steps payload
    """
    dataset = [
        {"time": f"{hour:02d}:{15 * index:02d}:00", "value": value}
        for index, value in enumerate(values)
    ]
    return {
        "activities-steps": [{"dateTime": date_string, "value": str(sum(values))}],
        "activities-steps-intraday": {
            "dataset": dataset,
            "datasetInterval": 15,
            "datasetType": "minute",
        },
    }


def make_response(
    payload: Optional[Dict[str, Any]], status_code: int = 200
) -> Mock:
    """
    Build a mock requests response.

    Args:
        payload: JSON body returned by ``response.json()``
        status_code: HTTP status code; values >= 400 make
            ``raise_for_status`` raise requests.HTTPError

    Returns:
        Mock: Stand-in for requests.Response
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload

    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error", response=response
        )
    else:
        response.raise_for_status.return_value = None

    return response
