from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from rolloverwait.core.domain.models import RolloverThresholds
from rolloverwait.core.domain.units import TimeValue

DEFAULT_CLUSTER_URL = "http://127.0.0.1:9200"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_MASTER_TIMEOUT = "30s"
DEFAULT_PHASE = "hot"


@dataclass(frozen=True)
class StepConfig:
    cluster_url: str = DEFAULT_CLUSTER_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    master_timeout: TimeValue = field(default_factory=lambda: TimeValue.parse(DEFAULT_MASTER_TIMEOUT))
    phase: str = DEFAULT_PHASE
    thresholds: RolloverThresholds = field(default_factory=RolloverThresholds)

    def validate(self) -> None:
        if not self.cluster_url.strip():
            raise ValueError("cluster_url must be non-empty")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        if not self.phase.strip():
            raise ValueError("phase must be non-empty")


def _require(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in payload:
        raise ValueError(f"Missing required field '{key}' in step config")
    value = payload[key]
    if expected_type is float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(f"Field '{key}' must be float")
        return float(value)
    if not isinstance(value, expected_type):
        raise ValueError(f"Field '{key}' must be {expected_type.__name__}")
    return value


def _optional(payload: dict[str, Any], key: str, expected_type: type, default: Any) -> Any:
    if key not in payload:
        return default
    return _require(payload, key, expected_type)


def parse_step_config(payload: Any) -> StepConfig:
    if not isinstance(payload, dict):
        raise ValueError("Step config must be a JSON object")

    thresholds = RolloverThresholds()
    rollover: Optional[dict[str, Any]] = _optional(payload, "rollover", dict, None)
    if rollover is not None:
        thresholds = RolloverThresholds.from_dict(rollover)

    config = StepConfig(
        cluster_url=_require(payload, "cluster_url", str),
        request_timeout_seconds=_optional(
            payload, "request_timeout_seconds", float, DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        master_timeout=TimeValue.parse(_optional(payload, "master_timeout", str, DEFAULT_MASTER_TIMEOUT)),
        phase=_optional(payload, "phase", str, DEFAULT_PHASE),
        thresholds=thresholds,
    )
    config.validate()
    return config


def load_step_config(path: str | Path) -> StepConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"Step config not found: {config_path}")
    return parse_step_config(json.loads(config_path.read_text(encoding="utf-8")))
