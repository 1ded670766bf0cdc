"""Dry-run rollover dispatch for an eligible index.

Responsibilities:
  - Build one dry-run rollover request carrying only the configured thresholds.
  - Reduce the per-condition answer to a single readiness flag (any condition met).

Inputs/Outputs:
  - Inputs: rollover alias, master timeout, RolloverThresholds fixed at construction.
  - Outputs: bool from request_dry_run, or a terminal EvaluationOutcome from dispatch.

Invariants:
  - Exactly one port call per invocation; no local retry.
  - Failures surface as OperationError with the original exception as cause.
"""

from __future__ import annotations

from typing import Mapping, Optional

from ..domain.enums import OutcomeKind
from ..domain.errors import OperationError
from ..domain.models import RolloverThresholds
from ..domain.units import TimeValue
from ..ports.rollover_port import RolloverPort, RolloverRequest
from .result import EvaluationOutcome


def any_condition_met(condition_status: Mapping[str, bool]) -> bool:
    return any(bool(met) for met in condition_status.values())


class DryRunRolloverRequester:
    def __init__(self, client: RolloverPort, thresholds: RolloverThresholds) -> None:
        self._client = client
        self._thresholds = thresholds

    def build_request(self, alias: str, master_timeout: Optional[TimeValue]) -> RolloverRequest:
        return RolloverRequest(
            alias=alias,
            conditions=self._thresholds,
            dry_run=True,
            master_timeout=master_timeout,
        )

    async def request_dry_run(self, alias: str, master_timeout: Optional[TimeValue]) -> bool:
        request = self.build_request(alias, master_timeout)
        try:
            response = await self._client.rollover(request)
        except Exception as exc:
            raise OperationError.wrap(exc)
        return any_condition_met(response.condition_status)

    async def dispatch(
        self, index: str, alias: str, master_timeout: Optional[TimeValue]
    ) -> EvaluationOutcome:
        try:
            met = await self.request_dry_run(alias, master_timeout)
        except OperationError as exc:
            return EvaluationOutcome(
                kind=OutcomeKind.OPERATION_ERROR,
                index=index,
                alias=alias,
                error=exc,
            )
        return EvaluationOutcome(
            kind=OutcomeKind.DRY_RUN_SATISFIED,
            index=index,
            alias=alias,
            conditions_met=met,
        )
