"""Domain models for index snapshots, alias bindings, and rollover thresholds.

Responsibilities:
  - Define immutable carriers for the index snapshot read by the rollover step.
  - Define the derived AliasBinding and the configured RolloverThresholds.

Inputs/Outputs:
  - IndexSnapshot is produced by a snapshot provider (infra) and only read here.
  - RolloverThresholds is fixed at step construction and serialized into dry-run requests.

Invariants:
  - Models carry no cluster I/O.
  - Absent thresholds stay absent; they are never coerced to zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .enums import WriteBinding
from .units import ByteSize, TimeValue

LIFECYCLE_ROLLOVER_ALIAS = "index.lifecycle.rollover_alias"
LIFECYCLE_INDEXING_COMPLETE = "index.lifecycle.indexing_complete"

THRESHOLD_KEYS = ("max_size", "max_age", "max_docs")


@dataclass(frozen=True)
class AliasMetadata:
    name: str
    is_write_index: Optional[bool] = None


@dataclass(frozen=True)
class RolloverInfo:
    alias: str
    met_conditions: Mapping[str, Any] = field(default_factory=dict)
    time: int = 0


@dataclass(frozen=True)
class IndexSnapshot:
    name: str
    settings: Mapping[str, Any] = field(default_factory=dict)
    aliases: Mapping[str, AliasMetadata] = field(default_factory=dict)
    rollover_infos: Mapping[str, RolloverInfo] = field(default_factory=dict)

    def setting(self, key: str) -> Any:
        return self.settings.get(key)

    def rollover_alias(self) -> Optional[str]:
        value = self.settings.get(LIFECYCLE_ROLLOVER_ALIAS)
        if value is None:
            return None
        return str(value)


@dataclass(frozen=True)
class AliasBinding:
    points_to_this_index: bool
    write_binding: WriteBinding


@dataclass(frozen=True)
class RolloverThresholds:
    max_size: Optional[ByteSize] = None
    max_age: Optional[TimeValue] = None
    max_docs: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_docs is not None:
            if not isinstance(self.max_docs, int) or isinstance(self.max_docs, bool):
                raise ValueError("max_docs must be an integer")
            if self.max_docs < 1:
                raise ValueError("max_docs must be >= 1")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RolloverThresholds":
        unknown = sorted(set(payload) - set(THRESHOLD_KEYS))
        if unknown:
            raise ValueError(f"unknown rollover threshold(s): {', '.join(unknown)}")
        max_size = payload.get("max_size")
        max_age = payload.get("max_age")
        return cls(
            max_size=ByteSize.parse(max_size) if max_size is not None else None,
            max_age=TimeValue.parse(max_age) if max_age is not None else None,
            max_docs=payload.get("max_docs"),
        )

    def is_empty(self) -> bool:
        return self.max_size is None and self.max_age is None and self.max_docs is None

    def to_conditions(self) -> dict[str, Any]:
        conditions: dict[str, Any] = {}
        if self.max_age is not None:
            conditions["max_age"] = str(self.max_age)
        if self.max_size is not None:
            conditions["max_size"] = str(self.max_size)
        if self.max_docs is not None:
            conditions["max_docs"] = self.max_docs
        return conditions
