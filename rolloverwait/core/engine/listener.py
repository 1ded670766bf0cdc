"""Single-fire completion contract between a lifecycle step and its sequencer.

Responsibilities:
  - Define the StepListener protocol (on_response / on_failure).
  - Provide a Future-backed listener whose single completion is enforced by asyncio.
  - Map terminal EvaluationOutcomes onto exactly one listener signal.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..domain.enums import READY_KINDS, OutcomeKind
from ..domain.errors import ListenerContractViolation, StepError
from .result import EvaluationOutcome


@dataclass(frozen=True)
class EmptyInfo:
    """No diagnostic detail is reported for this step yet."""

    def to_dict(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class StepResult:
    conditions_met: bool
    info: Any


class StepListener(Protocol):
    def on_response(self, conditions_met: bool, info: Any) -> None:
        ...

    def on_failure(self, error: StepError) -> None:
        ...


class FutureListener:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[StepResult] = loop.create_future()

    def on_response(self, conditions_met: bool, info: Any) -> None:
        try:
            self._future.set_result(StepResult(conditions_met=conditions_met, info=info))
        except asyncio.InvalidStateError as exc:
            raise ListenerContractViolation("step listener completed more than once") from exc

    def on_failure(self, error: StepError) -> None:
        try:
            self._future.set_exception(error)
        except asyncio.InvalidStateError as exc:
            raise ListenerContractViolation("step listener completed more than once") from exc

    def done(self) -> bool:
        return self._future.done()

    async def result(self) -> StepResult:
        return await self._future


def report_outcome(outcome: EvaluationOutcome, listener: StepListener) -> None:
    if outcome.kind in READY_KINDS:
        listener.on_response(True, EmptyInfo())
        return
    if outcome.kind is OutcomeKind.DRY_RUN_SATISFIED:
        listener.on_response(bool(outcome.conditions_met), EmptyInfo())
        return
    if outcome.is_failure:
        if outcome.error is None:
            raise ValueError(f"failure outcome {outcome.kind.value} carries no error")
        listener.on_failure(outcome.error)
        return
    raise ValueError(f"outcome {outcome.kind.value} is not terminal")
