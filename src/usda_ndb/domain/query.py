"""Query options and per-call cancellation for NDB requests."""

import asyncio
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class QueryOptions:
    """Pagination and sort options sent as URL query parameters.

    A field left as ``None`` is omitted from the query string.
    """

    max: int | None = None
    offset: int | None = None
    sort: str | None = None

    def as_params(self) -> dict[str, object]:
        """Return the provided options keyed by their query parameter names."""
        params: dict[str, object] = {}
        if self.max is not None:
            params["max"] = self.max
        if self.offset is not None:
            params["offset"] = self.offset
        if self.sort is not None:
            params["sort"] = self.sort
        return params


class CallContext:
    """Cooperative cancellation token for a single API call.

    The context fires when ``cancel()`` is called or when its deadline passes.
    """

    def __init__(self, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._event = asyncio.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CallContext":
        """Create a context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """Whether the context was cancelled or its deadline has passed."""
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def cancel(self) -> None:
        self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    async def wait(self) -> None:
        """Block until the context is cancelled or the deadline passes."""
        try:
            async with asyncio.timeout(self.remaining()):
                await self._event.wait()
        except TimeoutError:
            return
