"""Rollover eligibility decision for a single index snapshot.

Responsibilities:
  - Resolve how the configured rollover alias binds to the index.
  - Classify the index as already rolled over, finished, misconfigured, or
    needing a dry-run threshold check.

Inputs/Outputs:
  - Inputs: an immutable IndexSnapshot.
  - Outputs: EvaluationOutcome; PENDING_DRY_RUN is the only non-terminal kind.

Invariants:
  - Pure and synchronous; never issues cluster requests.
  - Checks run in a fixed order. The rollover-info short-circuit precedes the
    indexing-complete check, and every error check precedes PENDING_DRY_RUN.
"""

from __future__ import annotations

from typing import Any, Optional

from ..domain.enums import OutcomeKind, WriteBinding
from ..domain.errors import (
    ConfigurationError,
    IndexingCompleteConflict,
    StepError,
    WriteBindingError,
)
from ..domain.models import (
    LIFECYCLE_INDEXING_COMPLETE,
    LIFECYCLE_ROLLOVER_ALIAS,
    AliasBinding,
    IndexSnapshot,
)
from .result import EvaluationOutcome


def resolve_alias_binding(snapshot: IndexSnapshot, alias: str) -> AliasBinding:
    metadata = snapshot.aliases.get(alias)
    if metadata is None:
        # The write flag is only meaningful when the alias is on this index.
        return AliasBinding(
            points_to_this_index=False,
            write_binding=WriteBinding.IMPLICIT_SINGLE_BINDING,
        )
    return AliasBinding(
        points_to_this_index=True,
        write_binding=WriteBinding.from_flag(metadata.is_write_index),
    )


def parse_indexing_complete(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in ("true", "false"):
        return value == "true"
    raise ValueError(
        f"failed to parse value [{value}] for setting [{LIFECYCLE_INDEXING_COMPLETE}], "
        "only [true] or [false] are allowed"
    )


def _failure(kind: OutcomeKind, snapshot: IndexSnapshot, alias: Optional[str], error: StepError) -> EvaluationOutcome:
    return EvaluationOutcome(kind=kind, index=snapshot.name, alias=alias, error=error)


def evaluate_rollover_eligibility(snapshot: IndexSnapshot) -> EvaluationOutcome:
    index = snapshot.name
    alias = snapshot.rollover_alias()

    if not alias:
        return _failure(
            OutcomeKind.CONFIGURATION_ERROR,
            snapshot,
            None,
            ConfigurationError(
                f"setting [{LIFECYCLE_ROLLOVER_ALIAS}] for index [{index}] is empty or not defined",
                {"index": index, "setting": LIFECYCLE_ROLLOVER_ALIAS},
            ),
        )

    if alias in snapshot.rollover_infos:
        return EvaluationOutcome(kind=OutcomeKind.ALREADY_ROTATED, index=index, alias=alias)

    binding = resolve_alias_binding(snapshot, alias)

    try:
        indexing_complete = parse_indexing_complete(snapshot.setting(LIFECYCLE_INDEXING_COMPLETE))
    except ValueError as exc:
        return _failure(
            OutcomeKind.CONFIGURATION_ERROR,
            snapshot,
            alias,
            ConfigurationError(str(exc), {"index": index, "setting": LIFECYCLE_INDEXING_COMPLETE}),
        )

    if indexing_complete:
        # A finished index that still takes writes means something upstream
        # still expects to write here; an index no longer on the alias is a
        # classic alias that already rolled over.
        if binding.points_to_this_index and binding.write_binding is WriteBinding.WRITE_TARGET:
            return _failure(
                OutcomeKind.INDEXING_COMPLETE_CONFLICT,
                snapshot,
                alias,
                IndexingCompleteConflict(
                    f"index [{index}] has [{LIFECYCLE_INDEXING_COMPLETE}] set to [true], "
                    f"but is still the write index for alias [{alias}]",
                    {"index": index, "alias": alias},
                ),
            )
        return EvaluationOutcome(kind=OutcomeKind.INDEXING_COMPLETE, index=index, alias=alias)

    if not binding.points_to_this_index:
        return _failure(
            OutcomeKind.CONFIGURATION_ERROR,
            snapshot,
            alias,
            ConfigurationError(
                f"{LIFECYCLE_ROLLOVER_ALIAS} [{alias}] does not point to index [{index}]",
                {"index": index, "alias": alias},
            ),
        )

    if binding.write_binding is WriteBinding.NOT_WRITE_TARGET:
        return _failure(
            OutcomeKind.WRITE_BINDING_ERROR,
            snapshot,
            alias,
            WriteBindingError(
                f"index [{index}] is not the write index for alias [{alias}]",
                {"index": index, "alias": alias},
            ),
        )

    return EvaluationOutcome(kind=OutcomeKind.PENDING_DRY_RUN, index=index, alias=alias)
