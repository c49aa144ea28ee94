"""Shell-like splitting of the free-form ``args`` input.

The scanner is an explicit three-state machine rather than a regular
expression so that backslash escapes are honoured *only* inside quotes
and an unterminated quote degrades gracefully instead of failing.

Rules
-----
* A space outside quotes separates arguments; no empty arguments.
  Tabs and newlines stay inside the argument and are only trimmed
  from its ends.
* ``'...'`` and ``"..."`` group text; the quote characters are dropped.
* The other quote character is literal inside a quoted run.
* Inside quotes, ``\\x`` emits ``x`` verbatim.  Outside quotes a
  backslash is an ordinary character.
* No variable expansion, globbing, or command substitution.
"""

from __future__ import annotations

import enum

from apm_action.core.models import ArgumentVector

_QUOTE_CHARS: frozenset[str] = frozenset({'"', "'"})
_ESCAPE_CHAR: str = "\\"
_SEPARATOR: str = " "


class ScanState(enum.Enum):
    """Position of the scanner relative to quoted runs."""

    UNQUOTED = "unquoted"
    IN_SINGLE_QUOTE = "single"
    IN_DOUBLE_QUOTE = "double"


_OPENING: dict[str, ScanState] = {
    "'": ScanState.IN_SINGLE_QUOTE,
    '"': ScanState.IN_DOUBLE_QUOTE,
}
_CLOSING: dict[ScanState, str] = {state: char for char, state in _OPENING.items()}


def split_arguments(text: str | None) -> ArgumentVector:
    """Split *text* into an argument vector using shell-like quoting.

    An unterminated quote is not an error: whatever was accumulated is
    emitted as the final argument.

    Examples
    --------
    >>> split_arguments('--msg "Hello world" --file \\'a/b\\'')
    ['--msg', 'Hello world', '--file', 'a/b']
    """
    if not text:
        return []

    args: ArgumentVector = []
    current: list[str] = []
    state = ScanState.UNQUOTED
    length = len(text)
    i = 0

    while i < length:
        char = text[i]

        if state is ScanState.UNQUOTED:
            if char in _QUOTE_CHARS:
                state = _OPENING[char]
            elif char == _SEPARATOR:
                _flush(current, args)
            else:
                current.append(char)
        elif char == _CLOSING[state]:
            state = ScanState.UNQUOTED
        elif char == _ESCAPE_CHAR and i + 1 < length:
            current.append(text[i + 1])
            i += 1
        else:
            current.append(char)

        i += 1

    _flush(current, args)
    return args


def _flush(current: list[str], args: ArgumentVector) -> None:
    """Move the accumulated characters into *args* if non-blank."""
    token = "".join(current).strip()
    if token:
        args.append(token)
    current.clear()
