import threading
from collections.abc import Callable
from types import TracebackType

from mathdigitizer.logging.logger import Log
from mathdigitizer.session.credentials import BaseCredentialProvider


class KeyStatusMonitor:
    """Poll loop: check -> wait interval -> check, until stopped.

    Owned by a session; start() on open, stop() on teardown. The wait is an
    Event, so stop() interrupts it immediately.
    """

    def __init__(
        self,
        credentials: BaseCredentialProvider,
        interval_seconds: float = 2.0,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._credentials = credentials
        self._interval_seconds = interval_seconds
        self._on_change = on_change
        self._ready = False
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self.refresh()
        self._thread = threading.Thread(
            target=self._run, name="key-status-monitor", daemon=True
        )
        self._thread.start()
        Log.debug(f"Key status monitor started, polling every {self._interval_seconds}s")

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
            Log.debug("Key status monitor stopped")

    def refresh(self) -> bool:
        """Check the credential now. A failing check keeps the last known state."""
        try:
            ready = self._credentials.has_selected_api_key()
        except Exception as exc:
            Log.warning(f"API key status check failed: {exc}")
            return self._ready
        with self._lock:
            if ready != self._ready:
                self._ready = ready
                Log.info("API key ready" if ready else "API key not configured")
                if self._on_change is not None:
                    self._on_change(ready)
            return self._ready

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            self.refresh()

    def __enter__(self) -> "KeyStatusMonitor":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
