"""Tests for the check-rollover-ready step."""

from __future__ import annotations

import pytest

from rolloverwait.core.domain.errors import (
    ConfigurationError,
    IndexingCompleteConflict,
    OperationError,
    StepError,
    WriteBindingError,
)
from rolloverwait.core.domain.models import (
    LIFECYCLE_INDEXING_COMPLETE,
    LIFECYCLE_ROLLOVER_ALIAS,
    AliasMetadata,
    IndexSnapshot,
    RolloverInfo,
    RolloverThresholds,
)
from rolloverwait.core.domain.units import ByteSize, TimeValue
from rolloverwait.core.engine.listener import EmptyInfo, FutureListener
from rolloverwait.core.ports.rollover_port import RolloverRequest, RolloverResponse
from rolloverwait.core.steps.base import StepKey
from rolloverwait.core.steps.wait_for_rollover_ready import NAME, WaitForRolloverReadyStep

ALIAS = "logs-write"
KEY = StepKey("hot", "rollover", NAME)
NEXT_KEY = StepKey("hot", "rollover", "attempt-rollover")
MASTER_TIMEOUT = TimeValue.parse("30s")


class _FakeRolloverClient:
    def __init__(self, condition_status=None, error: Exception | None = None) -> None:
        self.condition_status = condition_status or {}
        self.error = error
        self.requests: list[RolloverRequest] = []

    async def rollover(self, request: RolloverRequest) -> RolloverResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return RolloverResponse(
            old_index="R1",
            new_index="R2",
            condition_status=self.condition_status,
            dry_run=request.dry_run,
        )


class _RecordingListener:
    def __init__(self) -> None:
        self.responses: list[tuple[bool, object]] = []
        self.failures: list[StepError] = []

    def on_response(self, conditions_met, info) -> None:
        self.responses.append((conditions_met, info))

    def on_failure(self, error) -> None:
        self.failures.append(error)

    @property
    def calls(self) -> int:
        return len(self.responses) + len(self.failures)


def make_step(client, thresholds: RolloverThresholds | None = None, debug_fn=None) -> WaitForRolloverReadyStep:
    return WaitForRolloverReadyStep(
        key=KEY,
        next_key=NEXT_KEY,
        client=client,
        thresholds=thresholds or RolloverThresholds(max_docs=1000),
        debug_fn=debug_fn,
    )


def make_snapshot(write_flag=None, bound=True, indexing_complete=False, rolled_over=False) -> IndexSnapshot:
    settings = {LIFECYCLE_ROLLOVER_ALIAS: ALIAS}
    if indexing_complete:
        settings[LIFECYCLE_INDEXING_COMPLETE] = "true"
    aliases = {ALIAS: AliasMetadata(ALIAS, write_flag)} if bound else {}
    infos = {ALIAS: RolloverInfo(alias=ALIAS)} if rolled_over else {}
    return IndexSnapshot(name="R1", settings=settings, aliases=aliases, rollover_infos=infos)


async def run_step(step, snapshot) -> _RecordingListener:
    listener = _RecordingListener()
    await step.evaluate_condition(snapshot, listener, MASTER_TIMEOUT)
    assert listener.calls == 1
    return listener


@pytest.mark.asyncio
async def test_r1_implicit_binding_condition_met_is_ready():
    client = _FakeRolloverClient({"[max_docs: 1000]": True})

    listener = await run_step(make_step(client), make_snapshot(write_flag=None))

    assert listener.responses == [(True, EmptyInfo())]
    assert len(client.requests) == 1
    request = client.requests[0]
    assert request.alias == ALIAS
    assert request.dry_run is True
    assert request.master_timeout == MASTER_TIMEOUT
    assert request.body() == {"conditions": {"max_docs": 1000}}


@pytest.mark.asyncio
async def test_r1_condition_not_met_is_not_ready():
    client = _FakeRolloverClient({"[max_docs: 1000]": False})

    listener = await run_step(make_step(client), make_snapshot(write_flag=None))

    assert listener.responses == [(False, EmptyInfo())]


@pytest.mark.asyncio
async def test_any_single_condition_met_is_ready():
    thresholds = RolloverThresholds(
        max_size=ByteSize.parse("50gb"), max_age=TimeValue.parse("7d"), max_docs=10
    )
    client = _FakeRolloverClient(
        {"[max_age: 7d]": False, "[max_size: 50gb]": True, "[max_docs: 10]": False}
    )

    listener = await run_step(make_step(client, thresholds), make_snapshot(write_flag=True))

    assert listener.responses[0][0] is True
    assert list(client.requests[0].body()["conditions"]) == ["max_age", "max_size", "max_docs"]


@pytest.mark.asyncio
async def test_absent_thresholds_are_omitted():
    client = _FakeRolloverClient({"[max_age: 1d]": False})
    thresholds = RolloverThresholds(max_age=TimeValue.parse("1d"))

    await run_step(make_step(client, thresholds), make_snapshot(write_flag=True))

    assert client.requests[0].body() == {"conditions": {"max_age": "1d"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("indexing_complete", [False, True])
async def test_already_rotated_is_ready_without_dispatch(indexing_complete):
    client = _FakeRolloverClient({"[max_docs: 1000]": False})
    snapshot = make_snapshot(write_flag=True, indexing_complete=indexing_complete, rolled_over=True)

    listener = await run_step(make_step(client), snapshot)

    assert listener.responses == [(True, EmptyInfo())]
    assert client.requests == []


@pytest.mark.asyncio
async def test_indexing_complete_conflict_fails():
    client = _FakeRolloverClient()

    listener = await run_step(make_step(client), make_snapshot(write_flag=True, indexing_complete=True))

    assert isinstance(listener.failures[0], IndexingCompleteConflict)
    assert client.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("write_flag,bound", [(False, True), (None, True), (None, False)])
async def test_indexing_complete_skips_dry_run(write_flag, bound):
    client = _FakeRolloverClient()

    listener = await run_step(
        make_step(client), make_snapshot(write_flag=write_flag, bound=bound, indexing_complete=True)
    )

    assert listener.responses == [(True, EmptyInfo())]
    assert client.requests == []


@pytest.mark.asyncio
async def test_unbound_alias_fails_with_configuration_error():
    client = _FakeRolloverClient()

    listener = await run_step(make_step(client), make_snapshot(bound=False))

    assert isinstance(listener.failures[0], ConfigurationError)
    assert client.requests == []


@pytest.mark.asyncio
async def test_non_write_target_fails_with_write_binding_error():
    client = _FakeRolloverClient()

    listener = await run_step(make_step(client), make_snapshot(write_flag=False))

    assert isinstance(listener.failures[0], WriteBindingError)
    assert client.requests == []


@pytest.mark.asyncio
async def test_transport_error_is_operation_error_and_retryable():
    cause = ConnectionError("connection refused")
    client = _FakeRolloverClient(error=cause)
    step = make_step(client)

    listener = await run_step(step, make_snapshot(write_flag=True))

    error = listener.failures[0]
    assert isinstance(error, OperationError)
    assert error.cause is cause
    assert step.is_retryable()
    assert len(client.requests) == 1


@pytest.mark.asyncio
async def test_operation_error_from_port_is_passed_through():
    original = OperationError("master not discovered")
    client = _FakeRolloverClient(error=original)

    listener = await run_step(make_step(client), make_snapshot(write_flag=True))

    assert listener.failures == [original]


@pytest.mark.asyncio
async def test_check_returns_result_or_raises_reported_error():
    step = make_step(_FakeRolloverClient({"[max_docs: 1000]": True}))
    result = await step.check(make_snapshot(write_flag=True), MASTER_TIMEOUT)
    assert result.conditions_met is True

    with pytest.raises(WriteBindingError):
        await step.check(make_snapshot(write_flag=False), MASTER_TIMEOUT)


@pytest.mark.asyncio
async def test_future_listener_receives_step_outcome():
    step = make_step(_FakeRolloverClient({"[max_docs: 1000]": False}))
    listener = FutureListener()

    await step.evaluate_condition(make_snapshot(write_flag=True), listener, None)

    assert listener.done()
    assert (await listener.result()).conditions_met is False


@pytest.mark.asyncio
async def test_debug_hook_receives_decision_lines():
    lines: list[str] = []
    step = make_step(_FakeRolloverClient({"[max_docs: 1000]": True}), debug_fn=lines.append)

    await run_step(step, make_snapshot(write_flag=True))
    await run_step(step, make_snapshot(write_flag=True, rolled_over=True))

    assert lines[0].startswith("ROLLOVER_DRY_RUN index=R1 alias=logs-write")
    assert lines[1] == "ROLLOVER_DRY_RUN_RESULT index=R1 alias=logs-write conditions_met=True"
    assert lines[2] == "ROLLOVER_SKIP reason=ALREADY_ROTATED index=R1 alias=logs-write"


def test_step_equality_ignores_client():
    thresholds = RolloverThresholds(max_size=ByteSize.parse("1gb"))
    a = WaitForRolloverReadyStep(KEY, NEXT_KEY, _FakeRolloverClient(), thresholds)
    b = WaitForRolloverReadyStep(KEY, NEXT_KEY, _FakeRolloverClient(), thresholds)
    c = WaitForRolloverReadyStep(KEY, NEXT_KEY, _FakeRolloverClient(), RolloverThresholds(max_docs=5))

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert WaitForRolloverReadyStep.NAME == "check-rollover-ready"


def _raising_hook(msg: str) -> None:
    raise RuntimeError("hook")


@pytest.mark.asyncio
async def test_raising_debug_hook_still_completes_listener_once():
    client = _FakeRolloverClient({"[max_docs: 1]": True})
    step = make_step(client, RolloverThresholds(max_docs=1), debug_fn=_raising_hook)

    listener = await run_step(step, make_snapshot(write_flag=None))

    assert listener.responses == [(True, EmptyInfo())]
    assert len(client.requests) == 1


@pytest.mark.asyncio
async def test_raising_debug_hook_still_reports_failure():
    step = make_step(_FakeRolloverClient(), debug_fn=_raising_hook)

    listener = await run_step(step, make_snapshot(write_flag=False))

    assert len(listener.failures) == 1
    assert isinstance(listener.failures[0], WriteBindingError)


@pytest.mark.asyncio
async def test_empty_thresholds_send_empty_conditions_and_keep_waiting():
    client = _FakeRolloverClient({})

    listener = await run_step(make_step(client, RolloverThresholds()), make_snapshot(write_flag=True))

    assert listener.responses == [(False, EmptyInfo())]
    assert len(client.requests) == 1
    assert client.requests[0].body() == {"conditions": {}}


@pytest.mark.asyncio
async def test_missing_alias_setting_fails_without_dispatch():
    client = _FakeRolloverClient({"[max_docs: 1000]": True})
    snapshot = IndexSnapshot(name="R1", aliases={ALIAS: AliasMetadata(ALIAS, True)})

    listener = await run_step(make_step(client), snapshot)

    assert isinstance(listener.failures[0], ConfigurationError)
    assert client.requests == []
