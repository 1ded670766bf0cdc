"""Lifecycle step that waits until an index's rollover alias is ready to roll over.

Responsibilities:
  - Run the eligibility decision on a fresh snapshot.
  - Dispatch one dry-run rollover when the index is eligible.
  - Complete the listener exactly once with readiness or a failure.

Invariants:
  - Retryable regardless of failure kind; retry policy belongs to the sequencer.
  - Equality covers key, next_key and thresholds only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from rolloverwait.core.domain.enums import OutcomeKind
from rolloverwait.core.domain.models import IndexSnapshot, RolloverThresholds
from rolloverwait.core.domain.units import TimeValue
from rolloverwait.core.engine.conditions import evaluate_rollover_eligibility
from rolloverwait.core.engine.dry_run import DryRunRolloverRequester
from rolloverwait.core.engine.listener import FutureListener, StepListener, StepResult, report_outcome
from rolloverwait.core.engine.result import EvaluationOutcome
from rolloverwait.core.ports.rollover_port import RolloverPort
from .base import StepKey

NAME = "check-rollover-ready"


@dataclass(frozen=True)
class WaitForRolloverReadyStep:
    key: StepKey
    next_key: Optional[StepKey]
    client: RolloverPort = field(compare=False, repr=False)
    thresholds: RolloverThresholds = field(default_factory=RolloverThresholds)
    debug_fn: Optional[Callable[[str], None]] = field(default=None, compare=False, repr=False)

    NAME = NAME

    def is_retryable(self) -> bool:
        return True

    def _debug(self, msg: str) -> None:
        if self.debug_fn is None:
            return
        # Debug output must never keep the listener from completing.
        try:
            self.debug_fn(msg)
        except Exception:
            pass

    def _trace(self, outcome: EvaluationOutcome) -> None:
        if self.debug_fn is None:
            return
        if outcome.kind is OutcomeKind.PENDING_DRY_RUN:
            self._debug(
                f"ROLLOVER_DRY_RUN index={outcome.index} alias={outcome.alias} "
                f"conditions={self.thresholds.to_conditions()}"
            )
        elif outcome.kind is OutcomeKind.DRY_RUN_SATISFIED:
            self._debug(
                f"ROLLOVER_DRY_RUN_RESULT index={outcome.index} alias={outcome.alias} "
                f"conditions_met={outcome.conditions_met}"
            )
        elif outcome.is_failure:
            code = outcome.error.code.value if outcome.error is not None else None
            self._debug(
                f"ROLLOVER_FAILURE reason={outcome.kind.value} code={code} "
                f"index={outcome.index} alias={outcome.alias}"
            )
        else:
            self._debug(f"ROLLOVER_SKIP reason={outcome.kind.value} index={outcome.index} alias={outcome.alias}")

    async def evaluate_condition(
        self,
        snapshot: IndexSnapshot,
        listener: StepListener,
        master_timeout: Optional[TimeValue],
    ) -> None:
        outcome = evaluate_rollover_eligibility(snapshot)
        self._trace(outcome)
        if outcome.kind is OutcomeKind.PENDING_DRY_RUN:
            requester = DryRunRolloverRequester(self.client, self.thresholds)
            outcome = await requester.dispatch(outcome.index, outcome.alias, master_timeout)
            self._trace(outcome)
        report_outcome(outcome, listener)

    async def check(self, snapshot: IndexSnapshot, master_timeout: Optional[TimeValue]) -> StepResult:
        listener = FutureListener()
        await self.evaluate_condition(snapshot, listener, master_timeout)
        return await listener.result()
