"""Confine accessibility provider calls to the thread that owns the provider."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional

from ...exceptions import ProviderAffinityError


class ProviderAffinity:
    """
    Records which thread (and optionally which event loop) owns the provider.

    Calls made on the owner thread run inline. Calls from any other thread are
    marshalled onto the owner's event loop and the caller blocks until they
    finish; without a running owner loop such calls are refused.
    """

    def __init__(
        self,
        owner_thread_id: Optional[int] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._owner_thread_id = (
            owner_thread_id if owner_thread_id is not None else threading.get_ident()
        )
        self._loop = loop

    @classmethod
    def for_current_thread(cls) -> "ProviderAffinity":
        """Bind to the calling thread and its running loop, if any."""
        try:
            loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        return cls(threading.get_ident(), loop)

    @property
    def owner_thread_id(self) -> int:
        return self._owner_thread_id

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    def set_event_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Register the owner loop; the calling thread becomes the owner."""
        self._loop = loop
        self._owner_thread_id = threading.get_ident()

    def is_owner_thread(self) -> bool:
        return threading.get_ident() == self._owner_thread_id

    def run(
        self, func: Callable[..., Any], *args: Any, timeout: Optional[float] = None, **kwargs: Any
    ) -> Any:
        """
        Run a callable in the owner context.

        Raises:
            ProviderAffinityError: called off the owner thread with no usable loop
        """
        if self.is_owner_thread():
            return func(*args, **kwargs)

        loop = self._loop
        if loop is None or loop.is_closed() or not loop.is_running():
            raise ProviderAffinityError(
                f"Accessibility provider is owned by thread {self._owner_thread_id}; "
                f"called from thread {threading.get_ident()} with no owner event loop running"
            )

        future: Future = Future()

        def _call() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        try:
            loop.call_soon_threadsafe(_call)
        except RuntimeError as e:
            raise ProviderAffinityError(f"Owner event loop rejected the call: {e}") from e

        return future.result(timeout=timeout)
