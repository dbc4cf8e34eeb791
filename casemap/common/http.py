"""HTTP client with retries and timeouts."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from casemap.common.constants import USER_AGENT
from casemap.common.errors import LoadError

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 120.0


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 5
    multiplier: float = 1.0
    max_wait: float = 30.0


class HttpRequestError(LoadError):
    error_code = "HTTP_ERROR"


class RetryableHttpError(HttpRequestError):
    pass


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.session = requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "HttpClient":
        return cls(
            timeout=TimeoutConfig(connect=settings.connect_timeout, read=settings.read_timeout),
            retry=RetryConfig(max_attempts=settings.max_attempts, max_wait=settings.max_wait),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, accept: str) -> dict[str, str]:
        return {"User-Agent": USER_AGENT, "Accept": accept}

    def _raise_for_status_or_retry(self, response: requests.Response) -> None:
        status = response.status_code
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableHttpError(f"Retryable HTTP status: {status}")
        if status >= 400:
            raise HttpRequestError(f"HTTP status: {status}")

    def _get(self, url: str, *, accept: str, params: dict[str, Any] | None) -> requests.Response:
        try:
            response = self.session.request(
                method="GET",
                url=url,
                params=params,
                headers=self._headers(accept),
                timeout=(self.timeout.connect, self.timeout.read),
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise RetryableHttpError(f"Connection failed for {url}") from exc
        except requests.RequestException as exc:
            raise HttpRequestError(f"Request failed for {url}: {exc}") from exc
        self._raise_for_status_or_retry(response)
        return response

    def _with_retry(self, func):
        wrapped = retry(
            stop=stop_after_attempt(self.retry.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=1.0,
            ),
            retry=retry_if_exception_type(RetryableHttpError),
            reraise=True,
        )(func)
        return wrapped()

    def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        def _fetch() -> Any:
            response = self._get(url, accept="application/json", params=params)
            try:
                return response.json()
            except ValueError as exc:
                raise HttpRequestError(f"Invalid JSON payload from {url}") from exc

        return self._with_retry(_fetch)

    def get_text(self, url: str, *, params: dict[str, Any] | None = None) -> str:
        def _fetch() -> str:
            response = self._get(url, accept="text/csv, text/plain, */*", params=params)
            response.encoding = "utf-8"
            return response.text

        return self._with_retry(_fetch)
