"""
Index snapshot reader.
Implements IndexSnapshotProvider from the index API (settings, aliases) and the
cluster-state metadata API (rollover info).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

import httpx

from rolloverwait.core.domain.models import AliasMetadata, IndexSnapshot, RolloverInfo
from .client import ClusterClientError, send


def _optional_bool(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise ClusterClientError(f"unexpected is_write_index value [{value}]")


def parse_aliases(raw: Mapping[str, Any]) -> Dict[str, AliasMetadata]:
    aliases: Dict[str, AliasMetadata] = {}
    for name, body in raw.items():
        body = body or {}
        aliases[name] = AliasMetadata(name=name, is_write_index=_optional_bool(body.get("is_write_index")))
    return aliases


def parse_rollover_infos(raw: Mapping[str, Any]) -> Dict[str, RolloverInfo]:
    infos: Dict[str, RolloverInfo] = {}
    for alias, body in raw.items():
        body = body or {}
        infos[alias] = RolloverInfo(
            alias=alias,
            met_conditions=dict(body.get("met_conditions") or {}),
            time=int(body.get("time") or 0),
        )
    return infos


def build_snapshot(index: str, index_payload: Any, state_payload: Any) -> IndexSnapshot:
    if not isinstance(index_payload, dict) or index not in index_payload:
        raise ClusterClientError(f"index [{index}] missing from index API response")
    body = index_payload[index] or {}

    rollover_raw: Mapping[str, Any] = {}
    if isinstance(state_payload, dict):
        indices = (state_payload.get("metadata") or {}).get("indices") or {}
        rollover_raw = (indices.get(index) or {}).get("rollover_info") or {}

    return IndexSnapshot(
        name=index,
        settings=dict(body.get("settings") or {}),
        aliases=parse_aliases(body.get("aliases") or {}),
        rollover_infos=parse_rollover_infos(rollover_raw),
    )


class HttpIndexSnapshotReader:
    """IndexSnapshotProvider backed by an httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def get_snapshot(self, index: str) -> IndexSnapshot:
        index_payload = await send(
            self._client,
            "GET",
            f"/{index}",
            params={"flat_settings": "true"},
        )
        state_payload = await send(
            self._client,
            "GET",
            f"/_cluster/state/metadata/{index}",
            params={"filter_path": "metadata.indices.*.rollover_info"},
        )
        return build_snapshot(index, index_payload, state_payload)
