"""
Rollover API adapter.
Implements RolloverPort over POST /{alias}/_rollover.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

from rolloverwait.core.ports.rollover_port import RolloverRequest, RolloverResponse
from .client import ClusterClientError, send


def _rollover_path(request: RolloverRequest) -> str:
    return f"/{request.alias}/_rollover"


def _rollover_params(request: RolloverRequest) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if request.dry_run:
        params["dry_run"] = "true"
    if request.master_timeout is not None:
        params["master_timeout"] = str(request.master_timeout)
    return params


def parse_rollover_response(payload: Any) -> RolloverResponse:
    if not isinstance(payload, dict):
        raise ClusterClientError("rollover response must be a JSON object")
    conditions = payload.get("conditions") or {}
    if not isinstance(conditions, dict):
        raise ClusterClientError("rollover response field 'conditions' must be an object")
    return RolloverResponse(
        old_index=payload.get("old_index"),
        new_index=payload.get("new_index"),
        condition_status={str(k): bool(v) for k, v in conditions.items()},
        dry_run=bool(payload.get("dry_run", False)),
        rolled_over=bool(payload.get("rolled_over", False)),
        acknowledged=bool(payload.get("acknowledged", False)),
    )


class HttpRolloverClient:
    """RolloverPort backed by an httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def rollover(self, request: RolloverRequest) -> RolloverResponse:
        payload = await send(
            self._client,
            "POST",
            _rollover_path(request),
            params=_rollover_params(request),
            json=request.body(),
        )
        return parse_rollover_response(payload)
