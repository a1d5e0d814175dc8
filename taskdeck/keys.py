"""Key events, raw terminal decoding, and the single modal-aware router."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

NAMED_KEYS = {
    "tab",
    "return",
    "escape",
    "backspace",
    "space",
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "insert",
    "delete",
    "pageup",
    "pagedown",
}

# Final byte of a CSI/SS3 sequence -> key name.
CSI_KEYS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Leading parameter of a `CSI <n> ~` sequence -> key name.
TILDE_KEYS = {
    "1": "home",
    "2": "insert",
    "3": "delete",
    "4": "end",
    "5": "pageup",
    "6": "pagedown",
    "7": "home",
    "8": "end",
}

CONTROL_CHARS = {
    "\t": "tab",
    "\r": "return",
    "\n": "return",
    "\x7f": "backspace",
    "\x08": "backspace",
    " ": "space",
}


@dataclass(frozen=True)
class KeyEvent:
    name: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False

    @property
    def text(self) -> str | None:
        """Printable text this key inserts, or None for control keys."""
        if self.ctrl or self.meta:
            return None
        if self.name == "space":
            return " "
        if len(self.name) == 1 and self.name.isprintable():
            return self.name.upper() if self.shift else self.name
        return None

    def is_char(self, char: str) -> bool:
        return not (self.ctrl or self.meta) and self.name == char

    @property
    def is_known(self) -> bool:
        return self.name in NAMED_KEYS or self.text is not None


def _modifiers(params: str) -> dict[str, bool]:
    """xterm modifier parameter (`1;<m>`): m - 1 is a shift/alt/ctrl bitmask."""
    fields = params.split(";")
    try:
        code = int(fields[1]) - 1 if len(fields) > 1 else 0
    except ValueError:
        code = 0
    return {"shift": bool(code & 1), "meta": bool(code & 2), "ctrl": bool(code & 4)}


def _sequence_event(raw: str, params: str, final: str) -> KeyEvent:
    if final == "Z":
        return KeyEvent("tab", shift=True)
    if final == "~":
        name = TILDE_KEYS.get(params.split(";")[0])
    else:
        name = CSI_KEYS.get(final)
    if name is None:
        # F-keys and anything else we do not bind; the router drops these.
        return KeyEvent(raw)
    return KeyEvent(name, **_modifiers(params))


def _char_event(char: str, meta: bool = False) -> KeyEvent:
    if char.isalpha() and char.isupper():
        return KeyEvent(char.lower(), shift=True, meta=meta)
    return KeyEvent(char, meta=meta)


def decode_keys(data: str) -> list[KeyEvent]:
    """Split a chunk read from a raw terminal into key events.

    CSI (``ESC [``) and SS3 (``ESC O``) sequences are consumed whole, up to
    their final byte, so an unbound key never leaks a stray ``escape``.
    ``ESC`` followed by a printable character is that character with meta.
    A sequence cut off at the end of the chunk is discarded.
    """
    events: list[KeyEvent] = []
    i = 0
    size = len(data)
    while i < size:
        char = data[i]
        if char != "\x1b":
            i += 1
            if char in CONTROL_CHARS:
                events.append(KeyEvent(CONTROL_CHARS[char]))
            elif ord(char) < 32:
                events.append(KeyEvent(chr(ord(char) + 96), ctrl=True))
            else:
                events.append(_char_event(char))
            continue

        following = data[i + 1] if i + 1 < size else ""
        if following == "[":
            j = i + 2
            while j < size and "\x20" <= data[j] <= "\x3f":
                j += 1
            if j >= size:
                logger.debug("dropping truncated sequence %r", data[i:])
                break
            if "\x40" <= data[j] <= "\x7e":
                events.append(_sequence_event(data[i : j + 1], data[i + 2 : j], data[j]))
                i = j + 1
            else:
                events.append(KeyEvent(data[i:j]))
                i = j
            continue
        if following == "O" and i + 2 < size:
            events.append(_sequence_event(data[i : i + 3], "", data[i + 2]))
            i += 3
            continue
        if following and following != " " and following.isprintable():
            events.append(_char_event(following, meta=True))
            i += 2
            continue
        events.append(KeyEvent("escape"))
        i += 1
    return events


Handler = Callable[[KeyEvent], bool]


class KeyRouter:
    """Delivers every key event to exactly one consumer.

    ``precedence`` is an ordered table of ``(consumer, is_active)`` pairs; the
    first active consumer receives the event and no other consumer sees it.
    """

    def __init__(self, precedence: list[tuple[str, Callable[[], bool]]], handlers: dict[str, Handler]):
        missing = [name for name, _ in precedence if name not in handlers]
        if missing:
            raise ValueError(f"no handler for consumers: {', '.join(missing)}")
        self.precedence = precedence
        self.handlers = handlers

    def resolve(self) -> str | None:
        for name, is_active in self.precedence:
            if is_active():
                return name
        return None

    def dispatch(self, event: KeyEvent) -> bool:
        if not event.is_known:
            logger.debug("dropping unrecognized key %r", event.name)
            return False
        consumer = self.resolve()
        if consumer is None:
            return False
        handled = self.handlers[consumer](event)
        logger.debug("key %r -> %s (%s)", event.name, consumer, "handled" if handled else "ignored")
        return handled
