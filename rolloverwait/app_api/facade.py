from __future__ import annotations

from typing import Optional

from rolloverwait.core.domain.enums import FAILURE_METADATA
from rolloverwait.core.domain.errors import StepError
from rolloverwait.core.domain.units import TimeValue
from rolloverwait.core.engine.listener import FutureListener
from rolloverwait.core.ports.snapshot_port import IndexSnapshotProvider
from rolloverwait.core.steps.base import AsyncWaitStep
from .dto import ReadinessReport


class RolloverReadinessApplication:
    def __init__(
        self,
        snapshot_provider: IndexSnapshotProvider,
        step: AsyncWaitStep,
        master_timeout: Optional[TimeValue],
    ) -> None:
        self._snapshot_provider = snapshot_provider
        self._step = step
        self._master_timeout = master_timeout

    async def check(self, index: str) -> ReadinessReport:
        snapshot = await self._snapshot_provider.get_snapshot(index)
        listener = FutureListener()
        await self._step.evaluate_condition(snapshot, listener, self._master_timeout)
        try:
            result = await listener.result()
        except StepError as exc:
            return ReadinessReport(
                index=index,
                step=str(self._step.key),
                ready=False,
                conditions_met=None,
                retryable=self._step.is_retryable(),
                failure_code=exc.code.value,
                message=exc.message,
                operator_action=bool(FAILURE_METADATA[exc.code]["operator_action"]),
            )
        return ReadinessReport(
            index=index,
            step=str(self._step.key),
            ready=result.conditions_met,
            conditions_met=result.conditions_met,
            retryable=self._step.is_retryable(),
        )
