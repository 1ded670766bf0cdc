from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

from rolloverwait.core.domain.models import RolloverThresholds
from rolloverwait.core.domain.units import TimeValue


@dataclass(frozen=True)
class RolloverRequest:
    alias: str
    conditions: RolloverThresholds = field(default_factory=RolloverThresholds)
    dry_run: bool = False
    master_timeout: Optional[TimeValue] = None

    def body(self) -> dict[str, object]:
        return {"conditions": self.conditions.to_conditions()}


@dataclass(frozen=True)
class RolloverResponse:
    old_index: Optional[str]
    new_index: Optional[str]
    condition_status: Mapping[str, bool]
    dry_run: bool = False
    rolled_over: bool = False
    acknowledged: bool = False


class RolloverPort(Protocol):
    async def rollover(self, request: RolloverRequest) -> RolloverResponse:
        ...
