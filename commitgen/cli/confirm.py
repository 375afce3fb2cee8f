"""Interactive Confirmation - single-key accept / edit / reject prompt."""

import contextlib
import os
import sys
import termios
import tty
from enum import Enum
from typing import IO, Iterator, Optional

from commitgen.lang import Language, message as msg
from commitgen.output import bold, display_message, info, success, warning

ENTER = '\r'
ESCAPE = '\x1b'
INTERRUPT = '\x03'


class State(Enum):
    AWAITING_INPUT = "awaiting-input"
    ACCEPTED = "accepted"
    EDIT_REQUESTED = "edit-requested"
    REJECTED = "rejected"


# Keys and short words of both languages, matched lowercased
TRANSITIONS = {
    '\r': State.ACCEPTED,
    '\n': State.ACCEPTED,
    'y': State.ACCEPTED,
    'yes': State.ACCEPTED,
    'т': State.ACCEPTED,
    'так': State.ACCEPTED,
    'e': State.EDIT_REQUESTED,
    'edit': State.EDIT_REQUESTED,
    'е': State.EDIT_REQUESTED,
    'редагувати': State.EDIT_REQUESTED,
    'n': State.REJECTED,
    'no': State.REJECTED,
    'н': State.REJECTED,
    'ні': State.REJECTED,
    ESCAPE: State.REJECTED,
}


def next_state(key: str) -> State:
    """Transition out of AWAITING_INPUT; unknown keys keep waiting."""
    return TRANSITIONS.get(key.lower(), State.AWAITING_INPUT)


@contextlib.contextmanager
def raw_mode(stream: IO) -> Iterator[bool]:
    """Switch a terminal stream to raw mode for the block, then restore it.

    Yields False without touching anything when the stream is not a tty.
    """
    if not stream.isatty():
        yield False
        return

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class Confirmer:
    """Shows a draft message and waits for the user's decision."""

    def __init__(self, lang: Language, stdin: Optional[IO] = None):
        self.lang = lang
        self.stdin = stdin if stdin is not None else sys.stdin

    def confirm(self, message: str) -> State:
        self.render(message)
        return self.ask()

    def render(self, message: str) -> None:
        print(f"\n{bold(success(msg(self.lang, 'generated')))}")
        display_message(message)
        print(f"\n{msg(self.lang, 'confirm')}")
        print(f"  {success('Enter/y')} - {msg(self.lang, 'key_yes')}")
        print(f"  {info('e')} - {msg(self.lang, 'key_edit')}")
        print(f"  {warning('n/Esc')} - {msg(self.lang, 'key_no')}\n", flush=True)

    def ask(self) -> State:
        """Read keys until one of them decides. Ctrl+C exits the process with 0."""
        state = State.AWAITING_INPUT
        interrupted = False
        with raw_mode(self.stdin) as raw:
            while state is State.AWAITING_INPUT:
                key = self._read_raw_key() if raw else self._read_line_key()
                if key is None:
                    state = State.REJECTED
                elif key == INTERRUPT:
                    interrupted = True
                    break
                else:
                    state = next_state(key)

        if interrupted:
            print(f"\n{warning(msg(self.lang, 'interrupted'))}")
            sys.exit(0)
        return state

    def _read_raw_key(self) -> Optional[str]:
        try:
            data = os.read(self.stdin.fileno(), 32)
        except KeyboardInterrupt:
            return INTERRUPT
        if not data:
            return None
        return data.decode('utf-8', errors='ignore')

    def _read_line_key(self) -> Optional[str]:
        """Line-buffered fallback for non-tty input; a blank line is Enter."""
        try:
            line = self.stdin.readline()
        except KeyboardInterrupt:
            return INTERRUPT
        if not line:
            return None
        key = line.strip(' \t\r\n')
        return key or ENTER
