"""The interactive loop: render, wait for a key, apply it, repeat."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Optional

from tabview.composer import LayoutComposer
from tabview.keys import Key, KeyId, is_key_release, parse_key
from tabview.navigation import NavigationState
from tabview.surface import Canvas
from tabview.terminal import Terminal

logger = logging.getLogger(__name__)


class Command(Enum):
    MOVE_RIGHT = "move_right"
    MOVE_LEFT = "move_left"
    QUIT = "quit"
    OTHER = "other"


# Raw mode turns off SIGINT, so ctrl+c has to be bound explicitly.
KEY_BINDINGS: dict[KeyId, Command] = {
    Key.right: Command.MOVE_RIGHT,
    Key.left: Command.MOVE_LEFT,
    "q": Command.QUIT,
    Key.ctrl("c"): Command.QUIT,
}


def command_for_key(key_id: Optional[KeyId]) -> Command:
    if key_id is None:
        return Command.OTHER
    return KEY_BINDINGS.get(key_id, Command.OTHER)


def commands(terminal: Terminal) -> Iterator[Command]:
    """Yield one command per input event, forever.

    Resizes and unrecognized input come through as ``Command.OTHER`` so the
    caller still gets a chance to redraw.
    """
    while True:
        data = terminal.read_key()
        if data is not None and is_key_release(data):
            continue
        key_id = parse_key(data) if data is not None else None
        command = command_for_key(key_id)
        logger.debug("input %r -> %s -> %s", data, key_id, command.name)
        yield command


def apply_command(state: NavigationState, command: Command) -> bool:
    """Apply *command* to *state*.  Returns ``False`` when the loop should end."""
    if command is Command.QUIT:
        return False
    if command is Command.MOVE_RIGHT:
        state.advance()
    elif command is Command.MOVE_LEFT:
        state.retreat()
    return True


def draw(
    terminal: Terminal,
    canvas: Canvas,
    composer: LayoutComposer,
    state: NavigationState,
) -> None:
    """Run one render pass at the terminal's current size and flush it."""
    columns, rows = terminal.columns, terminal.rows
    if (columns, rows) != (canvas.width, canvas.height):
        canvas.resize(columns, rows)
    else:
        canvas.clear()
    composer.render(canvas.area, state, canvas)
    canvas.flush(terminal)


def run_app(
    terminal: Terminal,
    state: NavigationState,
    composer: LayoutComposer | None = None,
) -> None:
    """Alternate between rendering and handling one input event until quit."""
    if composer is None:
        composer = LayoutComposer()
    canvas = Canvas(terminal.columns, terminal.rows)
    events = commands(terminal)

    while True:
        draw(terminal, canvas, composer, state)
        command = next(events)
        if not apply_command(state, command):
            logger.info("quit requested on view %d", state.selected)
            return
