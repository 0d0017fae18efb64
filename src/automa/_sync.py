"""Run the async client from synchronous code.

Every ``run_sync()`` call is handed to one long-lived event loop on a
daemon thread.  The client's pooled ``httpx.AsyncClient`` keeps
connections bound to the loop that opened them, so successive sync calls
must share a loop; a fresh ``asyncio.run()`` per call would leave the
pool pointing at a closed one.  The same loop serves callers that already
run inside an event loop (Jupyter, a sync callback in an async app),
since their loop cannot be re-entered.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


class _BackgroundLoop:
    """Lazily started event loop living on a daemon thread."""

    def __init__(self) -> None:
        self._loop: asyncio.AbstractEventLoop | None = None
        self._lock = threading.Lock()

    def get(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None or self._loop.is_closed():
                self._loop = asyncio.new_event_loop()
                threading.Thread(
                    target=self._loop.run_forever,
                    name="automa-sync",
                    daemon=True,
                ).start()
            return self._loop


_background = _BackgroundLoop()


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Block until *coro* finishes on the background loop and return its result."""
    return asyncio.run_coroutine_threadsafe(coro, _background.get()).result()
