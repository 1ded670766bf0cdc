"""Shared step identity and the async wait-step contract.

Responsibilities:
  - Identify a step by (phase, action, name) and link it to its successor.
  - Define the contract a sequencer uses to drive any async wait step.
Must not:
  - Schedule retries or advance policy state; that belongs to the sequencer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from rolloverwait.core.domain.models import IndexSnapshot
from rolloverwait.core.domain.units import TimeValue
from rolloverwait.core.engine.listener import StepListener


@dataclass(frozen=True)
class StepKey:
    phase: str
    action: str
    name: str

    def __str__(self) -> str:
        return f"{self.phase}/{self.action}/{self.name}"


class AsyncWaitStep(Protocol):
    key: StepKey
    next_key: Optional[StepKey]

    def is_retryable(self) -> bool:
        ...

    async def evaluate_condition(
        self,
        snapshot: IndexSnapshot,
        listener: StepListener,
        master_timeout: Optional[TimeValue],
    ) -> None:
        ...
