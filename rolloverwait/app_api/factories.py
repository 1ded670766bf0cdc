from __future__ import annotations

from typing import Callable, Optional

import httpx

from rolloverwait.app_api.facade import RolloverReadinessApplication
from rolloverwait.app_api.step_config import StepConfig
from rolloverwait.core.steps.base import AsyncWaitStep, StepKey
from rolloverwait.core.steps.wait_for_rollover_ready import NAME, WaitForRolloverReadyStep
from rolloverwait.infra.http.rollover_client import HttpRolloverClient
from rolloverwait.infra.http.snapshot_reader import HttpIndexSnapshotReader

ROLLOVER_ACTION = "rollover"
ROLLOVER_STEP_NAME = "attempt-rollover"


def build_rollover_ready_step(
    config: StepConfig,
    client: httpx.AsyncClient,
    debug_fn: Optional[Callable[[str], None]] = None,
) -> AsyncWaitStep:
    return WaitForRolloverReadyStep(
        key=StepKey(config.phase, ROLLOVER_ACTION, NAME),
        next_key=StepKey(config.phase, ROLLOVER_ACTION, ROLLOVER_STEP_NAME),
        client=HttpRolloverClient(client),
        thresholds=config.thresholds,
        debug_fn=debug_fn,
    )


def build_readiness_app(
    config: StepConfig,
    client: httpx.AsyncClient,
    debug_fn: Optional[Callable[[str], None]] = None,
) -> RolloverReadinessApplication:
    return RolloverReadinessApplication(
        snapshot_provider=HttpIndexSnapshotReader(client),
        step=build_rollover_ready_step(config, client, debug_fn=debug_fn),
        master_timeout=config.master_timeout,
    )


__all__ = ["build_readiness_app", "build_rollover_ready_step"]
