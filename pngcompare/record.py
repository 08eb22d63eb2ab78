# pngcompare/record.py
"""
Comparison result and the info.txt record read by the aggregate tool.

The record is one line: two double quoted file names followed by the score,
e.g. ``"a_rgb.png" "b_rgb.png" 99.9873``. Quotes and backslashes inside a
name are backslash escaped.
"""

from dataclasses import dataclass
from typing import Tuple
import re

from pngcompare.config import NAME_SEPARATOR, SOURCE_SUFFIX

_QUOTED = r'"((?:[^"\\]|\\.)*)"'
_RECORD_RE = re.compile(rf"\s*{_QUOTED}\s+{_QUOTED}\s+(\S+)\s*")


@dataclass(frozen=True)
class ComparisonResult:
    name1: str
    name2: str
    score: float

    @property
    def dirname(self) -> str:
        # Pure function of the two stems; see DESIGN.md on collisions.
        return f"{self.name1}{NAME_SEPARATOR}{self.name2}"

    @property
    def file1(self) -> str:
        return self.name1 + SOURCE_SUFFIX

    @property
    def file2(self) -> str:
        return self.name2 + SOURCE_SUFFIX


def quote(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unquote(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text)


def format_info(file1: str, file2: str, score: float) -> str:
    return f"{quote(file1)} {quote(file2)} {score:g}\n"


def parse_info(text: str) -> Tuple[str, str, float]:
    """Parse an info.txt line into (file1, file2, score). Raises ValueError."""
    match = _RECORD_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"malformed result record: {text!r}")
    name1, name2, score = match.groups()
    return unquote(name1), unquote(name2), float(score)
