"""Terminal spinner shown while a font is being fetched and installed."""

import sys
import threading

PRINT_MUTEX = threading.Lock()


class Spinner:
    """
    A minimal CLI spinner context manager.

    The animation runs in a daemon thread that only shares a stop event with
    the caller; ``stop()`` joins it and clears the line, so anything printed
    after the ``with`` block never interleaves with a frame.
    """

    FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

    def __init__(
        self,
        text: str = "Working...",
        *,
        stream=None,
        interval: float = 0.1,
        enabled: bool = True,
        force: bool = False,
    ) -> None:
        self.text = text
        self.stream = stream if stream is not None else sys.stderr
        self.interval = interval
        self.frames_drawn = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        is_tty = getattr(self.stream, "isatty", lambda: False)()
        self.enabled = enabled and (force or is_tty)

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if not self.enabled or self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the spinner and clear the line."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        with PRINT_MUTEX:
            self.stream.write("\r" + " " * (len(self.text) + 4) + "\r")
            self.stream.flush()

    def _run(self) -> None:
        frame_index = 0
        while not self._stop_event.is_set():
            frame = self.FRAMES[frame_index % len(self.FRAMES)]
            with PRINT_MUTEX:
                self.stream.write(f"\r  {frame} {self.text}")
                self.stream.flush()
            self.frames_drawn += 1
            frame_index += 1
            self._stop_event.wait(self.interval)
