from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass
class RequestResult:
    url: str
    status_code: Optional[int]
    body: Any
    latency_ms: float
    error: Optional[str] = None


# The network capability a loader depends on: one GET per call, never raising
# for HTTP failures (those come back as a non-2xx status_code).
PerformRequest = Callable[[str], Awaitable[RequestResult]]


class RequestEngine:
    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.headers = {"Accept": "application/json"}
        if headers:
            self.headers.update(headers)

    def get(self, url: str) -> RequestResult:
        started = time.perf_counter()

        try:
            response = requests.request(
                method="GET",
                url=url,
                headers=self.headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            latency_ms = (time.perf_counter() - started) * 1000
            logger.debug("GET %s failed after %.1fms: %s", url, latency_ms, exc)
            return RequestResult(
                url=url,
                status_code=None,
                body=None,
                latency_ms=latency_ms,
                error=str(exc),
            )

        latency_ms = (time.perf_counter() - started) * 1000
        logger.debug("GET %s -> %s in %.1fms", url, response.status_code, latency_ms)
        return RequestResult(
            url=url,
            status_code=response.status_code,
            body=_decode_response_body(response),
            latency_ms=latency_ms,
        )

    async def fetch(self, url: str) -> RequestResult:
        return await asyncio.to_thread(self.get, url)


def _decode_response_body(response: requests.Response) -> Any:
    content_type = response.headers.get("Content-Type", "")
    if "application/json" in content_type.lower():
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text
