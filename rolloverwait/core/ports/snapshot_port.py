from __future__ import annotations

from typing import Protocol

from rolloverwait.core.domain.models import IndexSnapshot


class IndexSnapshotProvider(Protocol):
    async def get_snapshot(self, index: str) -> IndexSnapshot:
        ...
