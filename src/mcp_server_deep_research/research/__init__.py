"""Recursive deep research: planning, search/evaluate dialogues, learnings and report synthesis."""

from .evaluator import ResultEvaluator
from .extractor import LearningExtractor
from .generation import Generator
from .machine import ResearchMachine, next_breadth
from .models import Learning, SearchResult
from .planner import QueryPlanner
from .runner import ResearchOutcome, run_research
from .store import ResearchStore
from .synthesizer import ReportSynthesizer

__all__ = [
    "Generator",
    "Learning",
    "LearningExtractor",
    "QueryPlanner",
    "ReportSynthesizer",
    "ResearchMachine",
    "ResearchOutcome",
    "ResearchStore",
    "ResultEvaluator",
    "SearchResult",
    "next_breadth",
    "run_research",
]
