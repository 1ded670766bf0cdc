"""Evaluation outcome for a single rollover readiness check.

Responsibilities:
  - Capture which branch of the readiness decision was taken and its payload.

Inputs/Outputs:
  - Inputs: produced by conditions.evaluate_rollover_eligibility and DryRunRolloverRequester.dispatch.
  - Outputs: immutable dataclass consumed by listener.report_outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.enums import FAILURE_KINDS, READY_KINDS, OutcomeKind
from ..domain.errors import StepError


@dataclass(frozen=True)
class EvaluationOutcome:
    kind: OutcomeKind
    index: str
    alias: Optional[str] = None
    error: Optional[StepError] = None
    conditions_met: Optional[bool] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.PENDING_DRY_RUN

    @property
    def is_ready(self) -> bool:
        if self.kind in READY_KINDS:
            return True
        return self.kind is OutcomeKind.DRY_RUN_SATISFIED and bool(self.conditions_met)

    @property
    def is_failure(self) -> bool:
        return self.kind in FAILURE_KINDS
