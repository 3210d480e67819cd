"""Outbound HTTP retrieval with bounded retry.

Pure transport: callers get the body of a 2xx response or one of the
``FetchError`` subclasses below. What the body means is up to them.
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from pantryscan.config import (
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BASE_DELAY_SECONDS,
    RETRY_MAX_ATTEMPTS,
    RETRY_STATUS_CODES,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base class for retrieval failures."""


class NetworkError(FetchError):
    """No usable response: connection failure, timeout, redirect loop or bad encoding."""


class HttpError(FetchError):
    """Non-2xx response."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class RateLimited(HttpError):
    """HTTP 429."""


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = RETRY_MAX_ATTEMPTS
    base_delay: float = RETRY_BASE_DELAY_SECONDS
    retryable_status_codes: frozenset[int] = RETRY_STATUS_CODES

    def delay_for(self, attempt: int) -> float:
        """Delay before retrying after the given (1-based) failed attempt."""
        return self.base_delay * (2 ** (attempt - 1))


@dataclass
class RawResponse:
    url: str
    status_code: int
    text: str


def _error_for(status_code: int, url: str) -> HttpError:
    if status_code == 429:
        return RateLimited(status_code, url)
    return HttpError(status_code, url)


class HttpFetcher:
    """GET requests with a fixed browser user agent and retry policy."""

    def __init__(
        self,
        retry: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.retry = retry or RetryConfig()
        self._transport = transport
        self._timeout = timeout

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if extra:
            headers.update(extra)
        return headers

    async def _get_once(self, url: str, headers: dict[str, str]) -> RawResponse:
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
                follow_redirects=True,
            ) as client:
                resp = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise NetworkError(f"{type(e).__name__} for {url}: {e}") from e

        if not resp.is_success:
            raise _error_for(resp.status_code, url)
        return RawResponse(url=str(resp.url), status_code=resp.status_code, text=resp.text)

    def _is_retryable(self, error: FetchError) -> bool:
        if isinstance(error, NetworkError):
            return True
        return (
            isinstance(error, HttpError)
            and error.status_code in self.retry.retryable_status_codes
        )

    async def fetch(
        self, url: str, headers: dict[str, str] | None = None
    ) -> RawResponse:
        """Fetch *url*, retrying transient failures.

        Raises the last ``FetchError`` once attempts are exhausted, or the
        first non-retryable one immediately.
        """
        hdrs = self._headers(headers)
        attempt = 1
        while True:
            try:
                return await self._get_once(url, hdrs)
            except FetchError as e:
                if not self._is_retryable(e) or attempt >= self.retry.max_attempts:
                    raise
                delay = self.retry.delay_for(attempt)
                logger.warning(
                    "%s, retrying in %.2fs (attempt %d/%d)",
                    e, delay, attempt, self.retry.max_attempts,
                )
                await asyncio.sleep(delay)
                attempt += 1
