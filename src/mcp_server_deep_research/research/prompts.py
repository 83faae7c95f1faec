"""LLM prompts for recursive research."""

import json
from datetime import datetime


def get_planning_prompt(prompt: str, breadth: int) -> str:
    """Generate the planning prompt for sub-query generation."""
    return (
        f"Generate {breadth} distinct search queries for the following research topic: {prompt}. "
        "Ensure the queries are varied and explore different facets of the topic."
    )


EVALUATOR_SYSTEM_PROMPT = (
    'For each query, search the web using the "search" tool. '
    'Then, use the "evaluate" tool to determine if the found content is relevant '
    "and not a duplicate of previously found URLs. Your goal is to find useful, unique information.\n\n"
    "Respond with exactly one tool call per turn."
)


def get_evaluator_prompt(sub_query: str, transcript: list[str]) -> str:
    """Generate the dialogue prompt for the next search/evaluate turn."""
    prompt = (
        f'You are a research assistant. Your current task is to find relevant information for the query: "{sub_query}". '
        "Use the search tool, then evaluate."
    )
    if transcript:
        prompt += "\n\nTool calls so far:\n" + "\n".join(transcript)
    return prompt


def get_relevance_prompt(sub_query: str, title: str, url: str, content: str, processed_urls: list[str], justification: str) -> str:
    """Generate the relevance judgment prompt for one candidate result."""
    return f"""Evaluate whether the following search result is relevant and directly helps answer the research query: "{sub_query}".
Also consider if it's a duplicate of already processed URLs.
Previously processed URLs: {json.dumps(processed_urls)}
Current Result:
Title: {title}
URL: {url}
Content Snippet (first 500 chars): {content[:500]}

Justification provided by previous step: {justification}
Is this relevant and NOT a duplicate based on the URL? Provide a boolean response."""


def get_learning_prompt(topic: str | None, sub_query: str, title: str, url: str, content: str) -> str:
    """Generate the learning extraction prompt for one admitted result."""
    return f"""The user is researching the topic: "{topic}".
A sub-query was: "{sub_query}".
The following search result was deemed relevant for that sub-query:
Title: {title}
URL: {url}
Content: {content[:2000]}

Based on this information, provide:
1. A key learning or insight directly from this content relevant to the sub-query and overall research topic.
2. A set of 1-2 specific follow-up questions that arise from this learning and would help deepen the research on the OVERALL topic."""


def get_follow_up_prompt(topic: str | None, sub_query: str, learning: str, follow_up_questions: list[str]) -> str:
    """Build the research prompt for the next recursion level."""
    seed = "; ".join(follow_up_questions)
    return (
        f'Overall research goal: "{topic}".\n'
        f'Prior query: "{sub_query}".\n'
        f'Learning from prior query: "{learning}".\n'
        f'Investigate further based on follow-up questions: "{seed}"'
    )


def get_report_system_prompt(now: datetime | None = None) -> str:
    """System framing for the final report, stamped with the current date."""
    now = now or datetime.now()
    return f"""You are an expert researcher and analyst. Your task is to synthesize the provided research data into a coherent and insightful report.
Today is {now.isoformat()}.
Follow these instructions when responding:
- The user is a highly experienced analyst; provide detailed and nuanced insights.
- Structure the report logically: Introduction/Executive Summary, Key Findings (organized by themes or original sub-queries), Learnings, and Conclusion/Potential Next Steps.
- For each key finding or learning, briefly mention the source URL if it's particularly illustrative.
- Synthesize information; don't just list raw data.
- If there are follow-up questions generated during research, highlight some of the most pertinent ones as areas for future investigation.
- Be highly organized and use Markdown formatting for clarity (headings, lists, bolding)."""


def get_report_prompt(payload: dict) -> str:
    """Generate the user prompt carrying the serialized research data."""
    return (
        "Generate a comprehensive research report based on the following accumulated data. "
        "Focus on insights, key learnings, and unresolved follow-up questions:\n\n" + json.dumps(payload, indent=2)
    )


FALLBACK_REPORT = (
    "# Research Report\n\n"
    "No significant learnings or search results were found to generate a detailed report. "
    "The initial queries may not have yielded relevant information, or the research depth/breadth "
    "was too limited for this topic."
)
