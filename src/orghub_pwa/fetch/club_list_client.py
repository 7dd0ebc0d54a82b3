from typing import Any, List, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class SourceError(Exception):
    """Custom exception for failures fetching the club list."""

    pass


class SourceValidationError(SourceError):
    """Exception raised when the club list response has the wrong shape."""

    pass


class _RetryableStatus(SourceError):
    """Internal marker for responses worth another attempt."""

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(f"HTTP {response.status_code} from club list source")


def validate_club_list(payload: Any) -> List[Any]:
    """Checks the `{success: true, clubs: [...]}` envelope and returns the clubs.

    Only the envelope is checked here; individual records are untrusted and
    get projected (or dropped) by the normalizer.
    """
    if not isinstance(payload, dict):
        raise SourceValidationError(
            f"Bad response: expected a JSON object, got {type(payload).__name__}"
        )
    if payload.get("success") is not True:
        raise SourceValidationError(
            f"Bad response: success flag is {payload.get('success')!r}"
        )
    clubs = payload.get("clubs")
    if not isinstance(clubs, list):
        raise SourceValidationError(
            f"Bad response: 'clubs' is {type(clubs).__name__}, expected a list"
        )
    return clubs


class ClubListClient:
    """Fetches the public club list from the core service."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        max_attempts: int = 4,
        wait: Optional[wait_base] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.max_attempts = max_attempts
        # Exponential backoff (1s, 2s, 4s... capped)
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"Cache-Control": "no-store", "Accept": "application/json"},
        )

    async def __aenter__(self) -> "ClubListClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_once(self) -> httpx.Response:
        logger.debug(f"Requesting club list from {self.url}")
        response = await self.client.get(self.url)
        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(
                f"Club list source answered {response.status_code}, retrying if attempts remain."
            )
            raise _RetryableStatus(response)
        return response

    async def _request(self) -> httpx.Response:
        """GETs the source URL, retrying network errors and retryable statuses."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_exception_type((httpx.RequestError, _RetryableStatus)),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._get_once()
        except _RetryableStatus as e:
            logger.error(
                f"Club list source still failing after {self.max_attempts} attempt(s): {e}"
            )
            raise SourceError(str(e)) from e
        except httpx.RequestError as e:
            # Network errors, timeouts etc.
            logger.error(f"Network error fetching club list: {e!r}")
            raise SourceError(f"Network error fetching club list: {e!r}") from e
        raise SourceError("Club list request made no attempts")

    async def fetch_payload(self) -> Any:
        """Returns the decoded JSON body of a successful response."""
        response = await self._request()
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching club list: {response.status_code}")
            raise SourceError(f"HTTP error: {response.status_code}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.debug(f"Raw club list response content: {response.text[:500]}")
            raise SourceValidationError(f"Bad response: body is not JSON ({e})") from e
        return payload

    async def fetch_clubs(self) -> List[Any]:
        """Fetches and validates the raw club records."""
        payload = await self.fetch_payload()
        clubs = validate_club_list(payload)
        logger.info(f"Fetched {len(clubs)} raw club record(s) from source.")
        return clubs

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug("Closed HTTP client for club list source")
