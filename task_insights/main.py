from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from task_insights.config import SETTINGS
from task_insights.infra.backup import SnapshotError, load_snapshot
from task_insights.infra.db import init_db
from task_insights.infra.logging import setup_logging
from task_insights.infra.storage import InMemoryKeyValueStore, SqlKeyValueStore
from task_insights.services.history_service import SearchHistoryStore
from task_insights.services.insights_service import InsightsService
from task_insights.services.workload import WorkloadAnalyzer

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-insights",
        description="Productivity report and search over a task manager backup.",
    )
    parser.add_argument("backup", type=Path, help="JSON backup with tasks, projects and labels")
    parser.add_argument("--query", help="search the snapshot and record the query in history")
    parser.add_argument(
        "--timeframe",
        type=int,
        default=SETTINGS.productivity_timeframe_days,
        help="productivity window in days",
    )
    parser.add_argument("--log-level", default=None)
    return parser


def _print_report(service: InsightsService, timeframe: int) -> None:
    print(f"Productivity score ({timeframe} days): {service.calculate_productivity_score(timeframe)}")

    patterns = service.identify_patterns()
    if patterns:
        print("\nPatterns:")
        for pattern in patterns:
            print(f"  - {pattern.title}: {pattern.description} ({pattern.confidence:.0f}%)")
            print(f"    {pattern.actionable}")

    analysis = service.analyze_workload_balance()
    metrics = analysis.metrics
    print("\nWorkload this week:")
    print(f"  tasks: {metrics.total_tasks}, balance: {metrics.balance}/100")
    if metrics.busiest_day:
        print(f"  busiest day: {metrics.busiest_day.date.isoformat()} ({metrics.busiest_day.workload:.0f} min)")
    for recommendation in analysis.recommendations:
        print(f"  ! {recommendation.message}. {recommendation.suggestion}")

    optimizations = service.suggest_optimizations()
    if optimizations:
        print("\nSuggestions:")
        for item in optimizations:
            print(f"  - [{item.impact} impact / {item.effort} effort] {item.title}: {item.action}")


def _print_search(service: InsightsService, query: str) -> None:
    results = service.search(query)
    service.add_search(query)
    print(f"\nSearch {query!r}: {results.total} results")
    for hit in results.hits():
        name = hit.item.title if hit.kind == "task" else hit.item.name
        print(f"  {hit.kind:<8} {hit.score:.2f}  {service.highlight(name, query)}")
    recent = [entry.query for entry in service.get_history()]
    if recent:
        print(f"Recent searches: {', '.join(recent)}")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        snapshot = load_snapshot(args.backup)
    except SnapshotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        init_db()
        storage = SqlKeyValueStore()
    except Exception as exc:  # noqa: BLE001
        logger.warning("History database unavailable, using memory only: %s", exc)
        storage = InMemoryKeyValueStore()

    history = SearchHistoryStore(
        storage,
        key=SETTINGS.search_history_key,
        limit=SETTINGS.search_history_limit,
    )
    service = InsightsService(
        snapshot,
        history,
        workload_analyzer=WorkloadAnalyzer(week_start=SETTINGS.week_start),
    )

    _print_report(service, args.timeframe)
    if args.query:
        _print_search(service, args.query)
    return 0


if __name__ == "__main__":
    sys.exit(main())
