"""Terminal control for the interactive loop.

Provides a ``Terminal`` protocol and ``ProcessTerminal``, a context manager
that owns the controlling terminal while the application runs: raw mode,
the alternate screen, mouse capture, a hidden cursor and SIGWINCH-driven
resize notification.  Everything it changes is put back on exit, whether
the body returned normally or raised.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import signal
import sys
import termios
import tty
from collections import deque
from typing import IO, Optional, Protocol

from tabview.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_MOUSE_DISABLE = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_RESET_ATTRIBUTES = "\x1b[0m"

# How long a lone ESC waits for the rest of a sequence, in seconds
_ESC_TIMEOUT = 0.01


class TerminalError(RuntimeError):
    """The terminal could not be put into, or taken out of, application mode."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """What the application loop needs from a terminal."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def write(self, data: str) -> None: ...

    def read_key(self) -> Optional[str]:
        """Block until the next input sequence arrives.

        Returns ``None`` when the wait was ended by a resize instead.
        """
        ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's stdin/stdout.

    Use it as a context manager::

        with ProcessTerminal() as terminal:
            run_app(terminal, state)
    """

    def __init__(self, stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: object = None
        self._sigwinch_installed = False
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._stdin_buffer = StdinBuffer()
        self._pending: deque[str] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._active = False
        self._write_log_path: str = os.environ.get("TABVIEW_WRITE_LOG", "")

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.stop()
            return False
        try:
            self.stop()
        except TerminalError as err:
            # Never hide the exception that is already propagating
            logger.error("terminal restore failed during error exit: %s", err)
        return False

    # -- properties ---------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter raw mode and the alternate screen.

        Raises :class:`TerminalError` if stdin is not a terminal or the
        terminal refuses the change; anything already changed is undone
        first.
        """
        if self._active:
            return
        try:
            fd = self._stdin.fileno()
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as err:
            self._original_termios = None
            raise TerminalError(f"cannot enable raw mode: {err}") from err

        self._active = True
        try:
            self._raw_write(_ALT_SCREEN_ENABLE + _MOUSE_ENABLE + _HIDE_CURSOR + _CLEAR_SCREEN)
            self._install_resize_handler()
        except (OSError, ValueError) as err:
            try:
                self.stop()
            except TerminalError as restore_err:
                logger.error("terminal restore failed after setup error: %s", restore_err)
            raise TerminalError(f"cannot enter alternate screen: {err}") from err

        logger.debug("terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Undo everything :meth:`start` did, in reverse order.

        Every step is attempted even if an earlier one fails; the first
        failure is raised afterwards as :class:`TerminalError`.
        """
        if not self._active:
            return
        self._active = False
        errors: list[Exception] = []

        try:
            self._raw_write(_RESET_ATTRIBUTES + _SHOW_CURSOR + _MOUSE_DISABLE + _ALT_SCREEN_DISABLE)
        except (OSError, ValueError) as err:
            errors.append(err)

        try:
            self._remove_resize_handler()
        except (OSError, ValueError) as err:
            errors.append(err)

        if self._original_termios is not None:
            try:
                termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            except (termios.error, OSError, ValueError) as err:
                errors.append(err)
            self._original_termios = None

        self._stdin_buffer.clear()
        self._pending.clear()
        logger.debug("terminal stopped")

        if errors:
            raise TerminalError(f"cannot restore terminal: {errors[0]}") from errors[0]

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                pass

    def _raw_write(self, data: str) -> None:
        self._stdout.write(data)
        self._stdout.flush()

    # -- input --------------------------------------------------------------

    def read_key(self) -> Optional[str]:
        fd = self._stdin.fileno()
        while not self._pending:
            watched = [fd] if self._wake_r is None else [fd, self._wake_r]
            timeout = _ESC_TIMEOUT if self._stdin_buffer.pending else None
            readable, _, _ = select.select(watched, [], [], timeout)

            if not readable:
                # Nothing followed the ESC: it was the escape key itself
                self._pending.extend(self._stdin_buffer.flush())
                continue

            if self._wake_r is not None and self._wake_r in readable:
                self._drain_wakeup()
                return None

            raw = os.read(fd, 4096)
            if not raw:
                raise TerminalError("input stream closed")
            self._pending.extend(self._stdin_buffer.feed(self._decoder.decode(raw)))

        return self._pending.popleft()

    # -- private: SIGWINCH --------------------------------------------------

    def _install_resize_handler(self) -> None:
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_r, False)
        os.set_blocking(self._wake_w, False)
        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)
        self._sigwinch_installed = True

    def _remove_resize_handler(self) -> None:
        if self._sigwinch_installed:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler or signal.SIG_DFL)
            self._sigwinch_installed = False
            self._prev_sigwinch_handler = None
        for pipe_fd in (self._wake_r, self._wake_w):
            if pipe_fd is not None:
                os.close(pipe_fd)
        self._wake_r = self._wake_w = None

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        if self._wake_w is None:
            return
        try:
            os.write(self._wake_w, b"\0")
        except BlockingIOError:
            # A wakeup is already queued
            pass

    def _drain_wakeup(self) -> None:
        assert self._wake_r is not None
        try:
            while os.read(self._wake_r, 1024):
                pass
        except BlockingIOError:
            pass
