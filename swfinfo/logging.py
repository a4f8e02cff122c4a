from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

DEFAULT_TRACE_LIMIT = 15


@dataclass
class TagTrace:
    """
    Collect human-readable tag lines during a scan. ``limit`` is shared by the
    root timeline and every sprite scanned under it; once it is used up the
    scanner keeps counting but nothing more is recorded.
    """

    limit: int = DEFAULT_TRACE_LIMIT
    destination: Path | None = None

    def __post_init__(self) -> None:
        self._lines: List[str] = []
        self.emitted = 0

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def exhausted(self) -> bool:
        return self.emitted >= self.limit

    def record(self, line: str, *, indent: int = 0) -> bool:
        if self.exhausted:
            return False
        self._lines.append(" " * indent + line)
        self.emitted += 1
        return True

    def note(self, line: str, *, indent: int = 0) -> None:
        # Detail lines ride along with the tag they describe; no budget charge.
        if self.exhausted:
            return
        self._lines.append(" " * indent + line)

    def flush(self) -> None:
        if self.destination is None or not self._lines:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self._lines) + "\n"
        self.destination.write_text(text, encoding="utf-8")
