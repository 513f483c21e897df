"""
Fitbit Web API service for the MoveNow application.

This service reads the two pieces of Fitbit data an hourly check needs: the
user's offset from UTC (from the profile) and the intraday step series for
the user's current local hour.

Classes:
    FitbitService: Client for the Fitbit profile and intraday steps endpoints
"""

import os
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from ..exceptions import UpstreamCallError
from ..models.steps import HourWindow, IntradaySteps
from ..utils.structured_log import log_event

DEFAULT_BASE_URL = "https://api.fitbit.com/1/user/-/"
INTRADAY_DETAIL_LEVEL = "15min"


class FitbitService:
    """
    Client for the Fitbit Web API endpoints used by the step check.

    Requests are made on behalf of the user owning the access token
    (the ``-`` user ID in the base URL). Every failure is raised as an
    UpstreamCallError; there is no retry.

    Attributes:
        access_token: OAuth 2.0 bearer token
        base_url: Fitbit user API base URL, always ending with "/"
        session: requests session used for all calls
        timeout: Optional request timeout in seconds

    Example:
        >>> fitbit = FitbitService("eyJhbGciOi...")
        >>> offset = fitbit.get_utc_offset_millis()
        >>> steps = fitbit.get_intraday_steps(offset)
        >>> print(steps.total_steps)
    """

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the Fitbit service.

        Args:
            access_token: OAuth 2.0 bearer token for the user
            base_url: Optional base URL override, defaults to the
                FITBIT_BASE_URL environment variable or the public API
            session: Optional requests session (useful for testing)
            timeout: Optional request timeout in seconds

        Raises:
            ValueError: If the access token is empty
        """
        if not access_token:
            raise ValueError("Fitbit access token must be provided")

        self.access_token = access_token
        base_url = base_url or os.getenv("FITBIT_BASE_URL", DEFAULT_BASE_URL)
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_utc_offset_millis(self) -> int:
        """
        Determine the user's offset from UTC in milliseconds.

        The offset reflects the time zone last recorded for the user's
        device and is used to align the query window with the user's
        local hour.

        Returns:
            Signed UTC offset in milliseconds

        Raises:
            UpstreamCallError: If the request fails or the profile payload
                does not contain the offset
        """
        payload = self._get_json(f"{self.base_url}profile.json")

        try:
            offset_millis = int(payload["user"]["offsetFromUTCMillis"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamCallError(
                "fitbit", f"profile payload missing offsetFromUTCMillis: {e}"
            ) from e

        log_event("UTC_OFFSET_RESOLVED", offsetFromUTCMillis=offset_millis)
        return offset_millis

    def build_intraday_steps_url(self, window: HourWindow) -> str:
        """
        Build the intraday steps URL for a local hour window.

        Args:
            window: Local hour window to query

        Returns:
            Fully qualified URL, e.g.
            ``.../activities/steps/date/2024-01-15/1d/15min/time/14:00/14:59.json``
        """
        return (
            f"{self.base_url}activities/steps/date/{window.date_string}/1d/"
            f"{INTRADAY_DETAIL_LEVEL}/time/{window.start_time}/{window.end_time}.json"
        )

    def get_intraday_steps(
        self, offset_millis: int, now: Optional[datetime] = None
    ) -> IntradaySteps:
        """
        Get the intraday step samples for the user's current local hour.

        Args:
            offset_millis: User's UTC offset in milliseconds
            now: Optional current time override, defaults to UTC now

        Returns:
            IntradaySteps for the current local hour

        Raises:
            UpstreamCallError: If the request fails or the payload cannot
                be parsed
        """
        window = HourWindow.from_offset(offset_millis, now)
        url = self.build_intraday_steps_url(window)

        log_event("FITBIT_INTRADAY_REQUEST", url=url)
        payload = self._get_json(url)

        try:
            steps = IntradaySteps.from_fitbit_response(payload)
        except ValueError as e:
            raise UpstreamCallError("fitbit", str(e)) from e

        log_event(
            "FITBIT_INTRADAY_RESPONSE",
            datasetLength=steps.sample_count,
            dataset=[sample.value for sample in steps.dataset],
        )
        return steps

    def _get_json(self, url: str) -> Dict[str, Any]:
        """
        Perform an authorized GET request and decode the JSON body.

        Args:
            url: URL to fetch

        Returns:
            Decoded JSON object

        Raises:
            UpstreamCallError: On transport errors, non-2xx responses or
                invalid JSON
        """
        try:
            response = self.session.get(
                url, headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()

        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise UpstreamCallError(
                "fitbit", f"GET {url} returned {status_code}", status_code
            ) from e

        except requests.RequestException as e:
            raise UpstreamCallError("fitbit", f"GET {url} failed: {e}") from e

        except ValueError as e:
            raise UpstreamCallError(
                "fitbit", f"GET {url} returned invalid JSON: {e}"
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamCallError("fitbit", f"GET {url} returned a non-object body")

        return payload

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}
