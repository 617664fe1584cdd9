"""HTTP client for the platform's Runtime API.

Wraps the three calls of the invocation protocol:

- ``GET  {base}/next``                  long-poll for the next event
- ``POST {base}/{request_id}/response`` report a handler result
- ``POST {base}/{request_id}/error``    report a failed invocation

where ``{base}`` is ``http://{host:port}/2018-06-01/runtime/invocation``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import requests

from lambda_runtime.exceptions.invocation_errors import (
    InvalidEventError,
    MissingRequestIdError,
    RuntimeApiError,
)
from lambda_runtime.runtime_api.models import NextInvocation

if TYPE_CHECKING:
    from lambda_runtime.runtime_api.models import ErrorEnvelope
    from lambda_runtime.types import JSONValue

logger = logging.getLogger(__name__)

API_VERSION = "2018-06-01"
REQUEST_ID_HEADER = "Lambda-Runtime-Aws-Request-Id"
DEADLINE_HEADER = "Lambda-Runtime-Deadline-Ms"
FUNCTION_ARN_HEADER = "Lambda-Runtime-Invoked-Function-Arn"
JSON_HEADERS: dict[str, str] = {"content-type": "application/json"}


def build_base_url(runtime_api: str) -> str:
    """Build the invocation base URL from the platform's host:port pair.

    Args:
        runtime_api: Value of AWS_LAMBDA_RUNTIME_API, e.g. ``127.0.0.1:9001``.

    Returns:
        Base URL without a trailing slash.
    """
    return f"http://{runtime_api}/{API_VERSION}/runtime/invocation"


def parse_deadline(raw_value: str | None) -> int:
    """Parse the deadline header, defaulting to 0 when missing or malformed."""
    if not raw_value:
        return 0
    try:
        return int(raw_value.strip())
    except ValueError:
        logger.warning("Malformed deadline header: %r", raw_value)
        return 0


class RuntimeApiClient:
    """Runtime API client bound to one platform endpoint.

    Keeps a single ``requests.Session`` so the loopback connection is reused
    across invocations.
    """

    def __init__(
        self,
        runtime_api: str,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            runtime_api: host:port pair of the Runtime API.
            session: Optional pre-built session, mainly for tests.
        """
        self._base_url = build_base_url(runtime_api)
        self._next_url = f"{self._base_url}/next"
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Base URL of the invocation endpoints."""
        return self._base_url

    def fetch_next(self) -> NextInvocation:
        """Block until the platform delivers the next event.

        Returns:
            The next invocation with request id, deadline and decoded event.

        Raises:
            RuntimeApiError: If the request fails or returns a non-2xx status.
            MissingRequestIdError: If the request id header is absent.
            InvalidEventError: If the body is not valid JSON.
        """
        try:
            # No read timeout: this is where the process idles between events
            response = self._session.get(self._next_url, timeout=None)
        except requests.RequestException as error:
            raise RuntimeApiError(f"Failed to fetch next invocation: {error}") from error

        if not response.ok:
            message = f"Next invocation request failed: HTTP {response.status_code}"
            raise RuntimeApiError(message, status_code=response.status_code)

        request_id = response.headers.get(REQUEST_ID_HEADER)
        if not request_id:
            message = f"Next invocation response is missing the {REQUEST_ID_HEADER} header"
            raise MissingRequestIdError(message, status_code=response.status_code)

        deadline_ms = parse_deadline(response.headers.get(DEADLINE_HEADER))

        try:
            event = response.json()
        except ValueError as error:
            message = f"Event body for request {request_id} is not valid JSON"
            raise InvalidEventError(message, request_id=request_id) from error

        logger.debug("Received invocation %s (deadline_ms=%d)", request_id, deadline_ms)

        return NextInvocation(
            request_id=request_id,
            deadline_ms=deadline_ms,
            invoked_function_arn=response.headers.get(FUNCTION_ARN_HEADER, ""),
            event=event,
        )

    def post_response(self, request_id: str, result: JSONValue) -> None:
        """Report a successful invocation.

        The result is encoded before any network call, so encoding errors
        propagate to the caller and can be reported as invocation errors.

        Args:
            request_id: Request id of the invocation.
            result: Handler return value.

        Raises:
            TypeError: If the result is not JSON-serializable.
            ValueError: If the result holds NaN or an infinity, or a circular
                reference.
        """
        body = json.dumps(result, allow_nan=False)
        self._post(f"{self._base_url}/{request_id}/response", body, request_id)

    def post_error(self, request_id: str, envelope: ErrorEnvelope) -> None:
        """Report a failed invocation.

        Args:
            request_id: Request id of the invocation.
            envelope: Error envelope describing the failure.
        """
        body = json.dumps(envelope.to_payload(), allow_nan=False)
        self._post(f"{self._base_url}/{request_id}/error", body, request_id)

    def _post(self, url: str, body: str, request_id: str) -> None:
        """POST a JSON body; failures are logged and never raised."""
        try:
            response = self._session.post(url, data=body, headers=JSON_HEADERS)
        except requests.RequestException:
            logger.warning("Failed to post to %s for request %s", url, request_id, exc_info=True)
            return

        if not response.ok:
            logger.warning(
                "Runtime API rejected post for request %s (url=%s, status=%d)",
                request_id,
                url,
                response.status_code,
            )
