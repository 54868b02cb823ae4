"""Tests for the terminal spinner."""

import io
import time

from src.dotfonts.ui.spinner import Spinner


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


def wait_for_frame(spinner, timeout=2.0):
    deadline = time.monotonic() + timeout
    while spinner.frames_drawn == 0 and time.monotonic() < deadline:
        time.sleep(0.005)


class TestSpinner:
    """Test Spinner lifecycle."""

    def test_disabled_when_stream_is_not_a_tty(self):
        stream = io.StringIO()

        with Spinner("Installing Iosevka", stream=stream) as spinner:
            assert spinner.enabled is False
            assert spinner.running is False

        assert stream.getvalue() == ""

    def test_disabled_explicitly(self):
        stream = FakeTTY()

        with Spinner("Installing Iosevka", stream=stream, enabled=False) as spinner:
            assert spinner.running is False

        assert stream.getvalue() == ""

    def test_draws_frames_and_clears_line(self):
        stream = FakeTTY()
        spinner = Spinner("Installing Iosevka", stream=stream, interval=0.01)

        spinner.start()
        assert spinner.running is True
        wait_for_frame(spinner)
        spinner.stop()

        assert spinner.running is False
        assert spinner.frames_drawn >= 1
        output = stream.getvalue()
        assert "Installing Iosevka" in output
        assert output.endswith("\r")

    def test_force_enables_non_tty_stream(self):
        stream = io.StringIO()

        with Spinner("Working", stream=stream, interval=0.01, force=True) as spinner:
            assert spinner.enabled is True
            wait_for_frame(spinner)

        assert spinner.frames_drawn >= 1
        assert not spinner.running

    def test_stop_is_idempotent(self):
        spinner = Spinner("Working", stream=FakeTTY(), interval=0.01)
        spinner.start()

        spinner.stop()
        spinner.stop()

        assert spinner.running is False

    def test_stopped_on_exception(self):
        spinner = Spinner("Working", stream=FakeTTY(), interval=0.01)

        try:
            with spinner:
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert spinner.running is False
