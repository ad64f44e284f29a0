"""
Parser for `gf status` display output.

Each line is "<letter> <path>". A line starting with two spaces names the
source of the copy or rename on the line just before it:

    A new.txt
      old.txt
    M changed.txt

Parsing is best effort per line: a bad line is reported to a DiagnosticSink
and skipped, then parsing continues. The sink decides whether that is fatal.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from transitions import Machine

from gitfront.lib.errors import StatusParseError

logger = logging.getLogger(__name__)

STATES = ["idle", "expecting_source"]

# A source line may follow an entry, but only directly
TRANSITIONS = [
    {"trigger": "entry_added", "source": "*", "dest": "expecting_source"},
    {"trigger": "source_attached", "source": "expecting_source", "dest": "idle"},
    {"trigger": "line_rejected", "source": "*", "dest": "idle"},
]


@dataclass
class StatusLine:
    """One entry of display output."""
    code: str
    name: str
    from_name: str | None = None


@dataclass
class ParseResult:
    entries: list[StatusLine] = field(default_factory=list)
    error_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error_count == 0


class DiagnosticSink(Protocol):
    def error(self, err: StatusParseError) -> None:
        ...


class CollectingSink:
    """Keeps every error and lets parsing continue."""

    def __init__(self):
        self.errors: list[StatusParseError] = []

    def error(self, err: StatusParseError) -> None:
        logger.debug(f"status parse: {err}")
        self.errors.append(err)

    def __bool__(self) -> bool:
        return bool(self.errors)


class FailFastSink:
    """Raises the first error."""

    def error(self, err: StatusParseError) -> None:
        raise err


class StatusStreamParser:
    """Line-at-a-time parser. Feed lines, then read .result."""

    def __init__(self, sink: DiagnosticSink | None = None):
        self.sink = sink if sink is not None else CollectingSink()
        self.result = ParseResult()
        self._names: set[str] = set()
        self._lineno = 0
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="idle",
            auto_transitions=False,
        )

    def _reject(self, kind: str, message: str) -> None:
        self.line_rejected()
        self.result.error_count += 1
        self.sink.error(StatusParseError(self._lineno, kind, message))

    def feed(self, line: str) -> None:
        """Parse one line (a trailing newline is ignored)."""
        self._lineno += 1
        if line.endswith("\n"):
            line = line[:-1]

        if len(line) < 3:
            self._reject("format", f"got {line!r}; want >=3 characters for status, then space, then name")
            return
        if line[1] != " ":
            self._reject("format", f"got {line!r}; want second character to be a space")
            return
        name = line[2:]

        if line[0] == " ":
            if not self.is_expecting_source():
                self._reject("orphan_source", f"got {name!r} (a \"from\" line); not valid with previous line")
                return
            self.result.entries[-1].from_name = name
            self.source_attached()
            return

        if name in self._names:
            self._reject("duplicate", f"duplicate for {name}")
            return
        self._names.add(name)
        self.result.entries.append(StatusLine(code=line[0], name=name))
        self.entry_added()

    def parse(self, lines: Iterable[str]) -> ParseResult:
        for line in lines:
            self.feed(line)
        return self.result


def split_lines(text: str) -> list[str]:
    """Split on newlines. A final newline doesn't start another line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_status(text: str, sink: DiagnosticSink | None = None) -> ParseResult:
    """Parse a complete block of display output."""
    return StatusStreamParser(sink).parse(split_lines(text))
