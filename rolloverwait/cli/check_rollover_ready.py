"""Check whether an index is ready to roll over.

Purpose:
  - Read the index snapshot from the cluster and run the check-rollover-ready step once.
Inputs:
  - CLI args for cluster URL, index, thresholds (flags or --config JSON), master timeout.
Outputs:
  - One READY / WAITING / FAILED line on stdout.
  - Exit code 0 when ready, 1 when waiting, 2 on failure.
Example:
  - python -m rolloverwait.cli.check_rollover_ready --index logs-000001 --max-docs 1000
Debug:
  - --debug prints one line per step decision.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace
from typing import Optional, Sequence

import httpx

from rolloverwait.app_api.dto import ReadinessReport
from rolloverwait.app_api.factories import build_readiness_app
from rolloverwait.app_api.step_config import (
    DEFAULT_CLUSTER_URL,
    DEFAULT_MASTER_TIMEOUT,
    DEFAULT_PHASE,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    StepConfig,
    load_step_config,
)
from rolloverwait.cli._debug_utils import _dbg, debug_hook
from rolloverwait.core.domain.errors import StepError
from rolloverwait.core.domain.models import RolloverThresholds
from rolloverwait.core.domain.units import ByteSize, TimeValue
from rolloverwait.infra.http.client import build_async_client

EXIT_READY = 0
EXIT_WAITING = 1
EXIT_FAILED = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check rollover readiness for an index")
    parser.add_argument("--index", required=True, help="Index name")
    parser.add_argument("--config", help="Step config JSON path (flags below override it)")
    parser.add_argument("--url", help=f"Cluster URL (default {DEFAULT_CLUSTER_URL})")
    parser.add_argument("--timeout", type=float, help=f"HTTP timeout seconds (default {DEFAULT_REQUEST_TIMEOUT_SECONDS})")
    parser.add_argument("--master-timeout", help=f"Master node timeout (default {DEFAULT_MASTER_TIMEOUT})")
    parser.add_argument("--phase", help=f"Lifecycle phase (default {DEFAULT_PHASE})")
    parser.add_argument("--max-size", help="Max primary size, e.g. 50gb")
    parser.add_argument("--max-age", help="Max index age, e.g. 7d")
    parser.add_argument("--max-docs", type=int, help="Max document count")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> StepConfig:
    config = load_step_config(args.config) if args.config else StepConfig()

    overrides: dict[str, object] = {}
    if args.url:
        overrides["cluster_url"] = args.url
    if args.timeout is not None:
        overrides["request_timeout_seconds"] = args.timeout
    if args.master_timeout:
        overrides["master_timeout"] = TimeValue.parse(args.master_timeout)
    if args.phase:
        overrides["phase"] = args.phase

    thresholds = config.thresholds
    if args.max_size or args.max_age or args.max_docs is not None:
        thresholds = RolloverThresholds(
            max_size=ByteSize.parse(args.max_size) if args.max_size else thresholds.max_size,
            max_age=TimeValue.parse(args.max_age) if args.max_age else thresholds.max_age,
            max_docs=args.max_docs if args.max_docs is not None else thresholds.max_docs,
        )
    overrides["thresholds"] = thresholds

    config = replace(config, **overrides)
    config.validate()
    return config


def format_report(report: ReadinessReport) -> str:
    if report.failed:
        return (
            f"FAILED index={report.index} step={report.step} code={report.failure_code} "
            f"retryable={str(report.retryable).lower()} "
            f"operator_action={str(report.operator_action).lower()} message={report.message}"
        )
    status = "READY" if report.ready else "WAITING"
    return f"{status} index={report.index} step={report.step} conditions_met={str(report.conditions_met).lower()}"


async def run_check(
    args: argparse.Namespace,
    config: StepConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    _dbg(args, f"cluster_url={config.cluster_url} conditions={config.thresholds.to_conditions()}")
    if config.thresholds.is_empty():
        _dbg(args, "no rollover thresholds configured; the dry run cannot report ready")

    async with build_async_client(
        config.cluster_url, timeout=config.request_timeout_seconds, transport=transport
    ) as client:
        app = build_readiness_app(config, client, debug_fn=debug_hook(args))
        try:
            report = await app.check(args.index)
        except StepError as exc:
            print(f"FAILED index={args.index} code={exc.code.value} message={exc.message}")
            return EXIT_FAILED

    print(format_report(report))
    if report.failed:
        return EXIT_FAILED
    return EXIT_READY if report.ready else EXIT_WAITING


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as exc:
        print(f"FAILED index={args.index} code=CONFIGURATION message={exc}")
        return EXIT_FAILED
    return asyncio.run(run_check(args, config))


if __name__ == "__main__":
    sys.exit(main())
