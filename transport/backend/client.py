"""
Resume Backend Client

Submits job descriptions to the resume backend.
No retries. A failed submission raises BackendClientError.
"""

import logging
from typing import Any, Optional

import httpx

from config import Config

from .schemas import JobSubmission

logger = logging.getLogger(__name__)


class BackendClientError(Exception):
    """Job submission to the backend failed."""
    pass


class BackendClient:
    """
    Thin async client for the backend job-acceptance endpoint.

    Holds one long-lived httpx.AsyncClient shared by all submissions.
    """

    def __init__(
        self,
        base_url: str,
        secret: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not base_url:
            raise ValueError("BACKEND_URL not set")

        self.base_url = base_url.rstrip("/")
        self.secret = secret
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def submit_job(self, submission: JobSubmission) -> Any:
        """
        POST the submission to {backend}/apply.

        Returns:
            Parsed JSON response body ({} when the body is not JSON)

        Raises:
            BackendClientError: network error, timeout or non-2xx response
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/apply",
                json=submission.to_wire(),
                headers={"x-api-key": self.secret},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise BackendClientError(f"backend timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise BackendClientError(f"backend request failed: {e.__class__.__name__}: {e}") from e

        if not response.is_success:
            raise BackendClientError(
                f"backend returned {response.status_code}: {response.text[:200]}"
            )

        logger.debug(f"Backend accepted submission for user {submission.user_id} ({response.status_code})")
        try:
            return response.json()
        except ValueError:
            return {}

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def create_backend_client() -> BackendClient:
    """Factory function to create the backend client."""
    return BackendClient(
        Config.BACKEND_URL,
        Config.BACKEND_SECRET,
        timeout=Config.BACKEND_TIMEOUT_SECONDS,
    )
