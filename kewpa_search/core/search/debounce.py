import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledCall(ABC):
    @abstractmethod
    def cancel(self) -> None:
        pass


class BaseScheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """
        Runs callback once after `delay` seconds unless the returned handle is
        cancelled first.
        """
        pass


class _TimerCall(ScheduledCall):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler(BaseScheduler):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


class Debouncer:
    """
    Keeps at most one pending call. submit() replaces whatever is pending, so
    only the last submitted callback ever runs.
    """

    def __init__(self, delay: float, scheduler: Optional[BaseScheduler] = None):
        self.delay = delay
        self.scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.RLock()
        self._handle: Optional[ScheduledCall] = None
        self._callback: Optional[Callable[[], None]] = None
        self._token = 0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def submit(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._cancel_locked()
            self._token += 1
            token = self._token
            self._callback = callback
            self._handle = self.scheduler.call_later(self.delay, lambda: self._fire(token))

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def flush(self) -> bool:
        """
        Runs the pending callback now. Returns False if nothing was pending.
        """
        with self._lock:
            callback = self._callback
            self._cancel_locked()
        if callback is None:
            return False
        callback()
        return True

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def _fire(self, token: int) -> None:
        with self._lock:
            if token != self._token or self._callback is None:
                # superseded or cancelled after the timer already fired
                logger.debug(f"Dropping superseded debounced call (token={token})")
                return
            callback = self._callback
            self._handle = None
            self._callback = None
        callback()
