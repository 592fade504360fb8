"""Valgrind-style memory trace decoding.

Each non-blank line looks like `[space]op address,size`, e.g.

    I 0400d7d4,8
     L 7ff0005c8,8
     M 0421c7f0,4

`address` is hexadecimal without a prefix and `size` is decimal. Only
L (load), S (store) and M (modify) touch the data cache; any other
operation letter is decoded as `Operation.OTHER` and ignored by the driver.
"""
import enum
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from cachesim.core.errors import TraceFormatError

_LINE_RE = re.compile(r"^\s*(?P<op>\S)\s+(?P<address>[0-9a-fA-F]+)\s*,\s*(?P<size>\d+)\s*$")


class Operation(enum.Enum):
    LOAD = "L"
    STORE = "S"
    MODIFY = "M"
    OTHER = "?"

    @classmethod
    def from_code(cls, code: str) -> "Operation":
        for op in (cls.LOAD, cls.STORE, cls.MODIFY):
            if op.value == code:
                return op
        return cls.OTHER

    @property
    def accesses(self) -> int:
        """Number of cache accesses the operation performs."""
        if self is Operation.MODIFY:
            return 2
        if self is Operation.OTHER:
            return 0
        return 1


@dataclass(frozen=True)
class TraceEvent:
    operation: Operation
    address: int
    size: int
    code: Optional[str] = None

    def format(self) -> str:
        code = self.code or self.operation.value
        return f"{code} {self.address:x}, {self.size}"


def parse_line(text: str, lineno: Optional[int] = None) -> Optional[TraceEvent]:
    """Decode one trace line. Returns None for blank lines."""
    if not text.strip():
        return None
    m = _LINE_RE.match(text)
    if m is None:
        raise TraceFormatError("malformed trace line", lineno, text)
    code = m.group("op")
    address = int(m.group("address"), 16)
    if address >> 64:
        raise TraceFormatError("address wider than 64 bits", lineno, text)
    return TraceEvent(Operation.from_code(code), address, int(m.group("size")), code)


def iter_events(lines: Iterable[str]) -> Iterator[TraceEvent]:
    for lineno, text in enumerate(lines, start=1):
        event = parse_line(text, lineno)
        if event is not None:
            yield event


def _decode_lines(raw_lines: Iterable[bytes]) -> Iterator[str]:
    # traces are plain ASCII; anything else is reported against its line
    for lineno, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise TraceFormatError("trace line is not ASCII text", lineno) from exc


def read_trace(path: str) -> Iterator[TraceEvent]:
    """Lazily yield the events of the trace file at `path`."""
    with open(path, "rb") as fh:
        yield from iter_events(_decode_lines(fh))
