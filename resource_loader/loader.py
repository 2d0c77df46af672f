"""Asynchronous load lifecycle for one remote collection.

A loader moves ``IDLE -> LOADING -> SUCCESS | ERROR``. Loaders created with
``auto_start=True`` enter ``LOADING`` inside the constructor and expose no
trigger; the others wait for :meth:`ResourceLoader.trigger`, which may be
called again once a load has resolved.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Callable, List, Optional, Tuple

from resource_loader.request_engine import PerformRequest, RequestResult

logger = logging.getLogger(__name__)


class LoaderStatus(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class TriggerNotSupportedError(RuntimeError):
    pass


Listener = Callable[["ResourceLoader"], None]


class ResourceLoader:
    def __init__(
        self,
        name: str,
        url: str,
        perform_request: PerformRequest,
        *,
        result_cap: int,
        auto_start: bool = False,
    ) -> None:
        if result_cap < 1:
            raise ValueError("result_cap must be at least 1")

        self.name = name
        self._url = url
        self._perform_request = perform_request
        self._result_cap = result_cap
        self._auto_start = auto_start

        self.status = LoaderStatus.IDLE
        self.records: Tuple[Any, ...] = ()
        self.error_message: Optional[str] = None

        self._task: Optional[asyncio.Task] = None
        self._listeners: List[Listener] = []

        if auto_start:
            # Raises RuntimeError when no loop is running.
            asyncio.get_running_loop()
            self._begin_load()

    @property
    def url(self) -> str:
        return self._url

    @property
    def result_cap(self) -> int:
        return self._result_cap

    @property
    def auto_start(self) -> bool:
        return self._auto_start

    @property
    def has_trigger(self) -> bool:
        return not self._auto_start

    @property
    def is_loading(self) -> bool:
        return self.status is LoaderStatus.LOADING

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def trigger(self) -> Optional[asyncio.Task]:
        """Start a load, or do nothing if one is already in flight.

        Returns the task driving the new load, or ``None`` when the trigger
        was ignored.
        """
        if self._auto_start:
            raise TriggerNotSupportedError(f"{self.name} loads automatically and has no trigger")
        if self.is_loading:
            logger.debug("Ignoring %s trigger while a load is in flight", self.name)
            return None
        return self._begin_load()

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.shield(self._task)

    def _begin_load(self) -> asyncio.Task:
        self.records = ()
        self.error_message = None
        # The request is scheduled before anyone hears about LOADING.
        self._task = asyncio.get_running_loop().create_task(self._load())
        self._set_status(LoaderStatus.LOADING)
        return self._task

    async def _load(self) -> None:
        try:
            result = await self._perform_request(self._url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Request for %s raised: %s", self.name, exc)
            self._fail(self._network_error_message())
            return

        self._resolve(result)

    def _resolve(self, result: RequestResult) -> None:
        if result.error is not None or result.status_code is None:
            logger.warning("Could not reach %s at %s: %s", self.name, self._url, result.error)
            self._fail(self._network_error_message())
            return

        if not 200 <= result.status_code < 300:
            logger.warning("Loading %s returned HTTP %s", self.name, result.status_code)
            self._fail(f"Failed to load {self.name}: HTTP error! Status: {result.status_code}")
            return

        if not isinstance(result.body, list):
            logger.warning(
                "Loading %s returned a %s body instead of a list",
                self.name,
                type(result.body).__name__,
            )
            self._fail(f"Failed to load {self.name}: Malformed response body.")
            return

        self.records = tuple(result.body[: self._result_cap])
        self._set_status(LoaderStatus.SUCCESS)

    def _fail(self, message: str) -> None:
        self.records = ()
        self.error_message = message
        self._set_status(LoaderStatus.ERROR)

    def _network_error_message(self) -> str:
        return f"Failed to load {self.name}: Network error! Could not reach the server."

    def _set_status(self, status: LoaderStatus) -> None:
        logger.debug("%s: %s -> %s", self.name, self.status.value, status.value)
        self.status = status
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:  # noqa: BLE001
                logger.exception("Status listener for %s failed on %s", self.name, status.value)
