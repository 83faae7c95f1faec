"""Data models for recursive research runs."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """A single piece of content returned by a search provider. Identity is the URL."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    content: str


class Learning(BaseModel):
    """A distilled insight from one result, with follow-up questions for the next level."""

    model_config = ConfigDict(frozen=True)

    learning: str = Field(description="A concise key learning from the search result.")
    follow_up_questions: list[str] = Field(
        default_factory=list,
        max_length=2,
        description="0 to 2 follow-up questions for deeper research.",
    )


# --- LLM output schemas ---


class QueryPlan(BaseModel):
    """Sub-queries planned for one research prompt."""

    queries: list[str] = Field(min_length=1, max_length=5, description="An array of search queries, between 1 and 5.")


class RelevanceVerdict(BaseModel):
    """Judgment on whether a candidate result helps answer the sub-query."""

    is_relevant: bool


class ToolCall(BaseModel):
    """The next tool the research assistant wants to invoke."""

    tool: Literal["search", "evaluate"] = Field(description="'search' to query the web, 'evaluate' to judge the most recent result.")
    query: str | None = Field(default=None, description="The specific query to search the web with (for 'search').")
    justification: str | None = Field(
        default=None,
        description="Brief justification for why the result is relevant or irrelevant (for 'evaluate').",
    )


class EvaluationState(str, Enum):
    """Stages of a search/evaluate dialogue for one sub-query."""

    AWAITING_SEARCH = "awaiting_search"
    AWAITING_EVALUATION = "awaiting_evaluation"
    DONE = "done"
