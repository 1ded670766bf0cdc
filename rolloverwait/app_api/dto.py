"""DTO definitions for app-level data exchange.

Responsibilities:
  - Define stable, typed structures for app outputs.
Must not:
  - Implement business logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ReadinessReport:
    index: str
    step: str
    ready: bool
    conditions_met: Optional[bool]
    retryable: bool
    failure_code: Optional[str] = None
    message: Optional[str] = None
    operator_action: bool = False

    @property
    def failed(self) -> bool:
        return self.failure_code is not None
