"""Byte-size and duration values in the cluster's unit-suffixed string format.

Responsibilities:
  - Parse strings like "50gb" / "7d" into exact integer quantities.
  - Render quantities back using the largest unit that represents them exactly.

Invariants:
  - Values are non-negative.
  - str(parse(x)) is accepted by parse() and yields an equal value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_NUMBER_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

_BYTE_UNITS: dict[str, int] = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
    "tb": 1024**4,
    "pb": 1024**5,
}
_BYTE_ALIASES = {"k": "kb", "m": "mb", "g": "gb", "t": "tb", "p": "pb"}

# Ordered largest first for rendering.
_TIME_UNITS: dict[str, int] = {
    "d": 86_400 * 10**9,
    "h": 3_600 * 10**9,
    "m": 60 * 10**9,
    "s": 10**9,
    "ms": 10**6,
    "micros": 10**3,
    "nanos": 1,
}


def _split(text: str, what: str) -> tuple[str, str]:
    match = _NUMBER_RE.match(text)
    if match is None:
        raise ValueError(f"failed to parse {what} [{text}]")
    return match.group(1), match.group(2).lower()


@dataclass(frozen=True, order=True)
class ByteSize:
    size_in_bytes: int

    def __post_init__(self) -> None:
        if self.size_in_bytes < 0:
            raise ValueError(f"byte size must be >= 0, got {self.size_in_bytes}")

    @classmethod
    def parse(cls, value: Union[str, int, "ByteSize"]) -> "ByteSize":
        if isinstance(value, ByteSize):
            return value
        if isinstance(value, bool):
            raise ValueError(f"failed to parse byte size [{value}]")
        if isinstance(value, int):
            return cls(value)
        number, unit = _split(value, "byte size")
        if unit == "" and float(number) == 0:
            return cls(0)
        unit = _BYTE_ALIASES.get(unit, unit)
        if unit not in _BYTE_UNITS:
            raise ValueError(f"failed to parse byte size [{value}]: unit is missing or unrecognized")
        if "." in number:
            if unit == "b":
                raise ValueError(f"failed to parse byte size [{value}]: fractional bytes are not supported")
            return cls(int(float(number) * _BYTE_UNITS[unit]))
        return cls(int(number) * _BYTE_UNITS[unit])

    def __str__(self) -> str:
        for unit in ("pb", "tb", "gb", "mb", "kb"):
            factor = _BYTE_UNITS[unit]
            if self.size_in_bytes and self.size_in_bytes % factor == 0:
                return f"{self.size_in_bytes // factor}{unit}"
        return f"{self.size_in_bytes}b"


@dataclass(frozen=True, order=True)
class TimeValue:
    nanos: int

    def __post_init__(self) -> None:
        if self.nanos < 0:
            raise ValueError(f"time value must be >= 0, got {self.nanos}")

    @classmethod
    def parse(cls, value: Union[str, "TimeValue"]) -> "TimeValue":
        if isinstance(value, TimeValue):
            return value
        if not isinstance(value, str):
            raise ValueError(f"failed to parse time value [{value}]: expected a string with a unit")
        number, unit = _split(value, "time value")
        if unit == "" and float(number) == 0:
            return cls(0)
        if unit not in _TIME_UNITS:
            raise ValueError(f"failed to parse time value [{value}]: unit is missing or unrecognized")
        if "." in number:
            raise ValueError(f"failed to parse time value [{value}]: fractional values are not supported")
        return cls(int(number) * _TIME_UNITS[unit])

    @classmethod
    def from_seconds(cls, seconds: int) -> "TimeValue":
        return cls(seconds * _TIME_UNITS["s"])

    @property
    def millis(self) -> int:
        return self.nanos // _TIME_UNITS["ms"]

    def total_seconds(self) -> float:
        return self.nanos / _TIME_UNITS["s"]

    def __str__(self) -> str:
        if self.nanos == 0:
            return "0s"
        for unit, factor in _TIME_UNITS.items():
            if self.nanos % factor == 0:
                return f"{self.nanos // factor}{unit}"
        return f"{self.nanos}nanos"
