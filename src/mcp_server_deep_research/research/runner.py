"""Runs one complete research job: recursive expansion followed by report synthesis."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..observability import get_current_entrypoint, get_current_run_id
from .evaluator import ResultEvaluator
from .extractor import LearningExtractor
from .generation import Generator
from .machine import ProgressCallback, ResearchMachine
from .planner import QueryPlanner
from .store import ResearchStore
from .synthesizer import ReportSynthesizer

if TYPE_CHECKING:
    from ..search import SearchProvider

logger = logging.getLogger(__name__)


@dataclass
class ResearchOutcome:
    """Everything a finished run produced."""

    store: ResearchStore
    report: str
    provider_calls: int
    report_path: Path | None = None


async def run_research(
    topic: str,
    depth: int,
    breadth: int,
    generator: Generator,
    search_provider: "SearchProvider",
    max_turns: int = 4,
    max_learnings: int | None = None,
    output_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
) -> ResearchOutcome:
    """Research ``topic`` and synthesize a report.

    Any generation failure propagates and nothing is written. The report file
    is only produced once the whole run, synthesis included, has succeeded.
    """
    store = ResearchStore(max_learnings=max_learnings)
    machine = ResearchMachine(
        planner=QueryPlanner(generator),
        evaluator=ResultEvaluator(generator, search_provider, max_turns=max_turns),
        extractor=LearningExtractor(generator),
        on_progress=on_progress,
    )

    await machine.deep_research(topic, depth, breadth, store)
    logger.info(f"Research completed (run {get_current_run_id() or '-'} via {get_current_entrypoint() or 'library'}): {store.summary()}")

    if on_progress:
        await on_progress("Synthesizing findings into report...")
    report = await ReportSynthesizer(generator).synthesize(store)

    report_path = None
    if output_path:
        report_path = save_report(report, output_path)

    return ResearchOutcome(store=store, report=report, provider_calls=generator.calls, report_path=report_path)


def save_report(report: str, output_path: str | Path) -> Path:
    """Write the report to ``output_path``, creating parent directories."""
    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report, encoding="utf-8")
    logger.info(f"Report saved to {path}")
    return path
