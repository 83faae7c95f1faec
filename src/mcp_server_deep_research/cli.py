"""CLI interface for recursive deep research."""

import asyncio
import uuid

import typer

from .config import settings
from .exceptions import DeepResearchError
from .observability import bind_run_context, clear_run_context, get_run_logger, setup_structured_logging
from .providers import get_generator, get_search_provider
from .research.runner import ResearchOutcome, run_research

app = typer.Typer(help="Recursive deep research powered by LLM-planned web searches")


@app.command()
def research(
    topic: str = typer.Argument(..., help="Topic or question to research"),
    depth: int = typer.Option(None, "--depth", "-d", help="Levels of follow-up questions to explore"),
    breadth: int = typer.Option(None, "--breadth", "-b", help="Sub-queries planned at the top level"),
    output: str = typer.Option(None, "--output", "-o", help="File path to save the report"),
) -> None:
    """Research a topic recursively and write a markdown report."""
    setup_structured_logging(settings.server.logging_level, json_output=False)

    missing = settings.missing_credentials()
    if missing:
        print(f"ERROR: Missing {' or '.join(missing)}. Please ensure they are set in your environment.")
        raise typer.Exit(code=1)

    depth = depth if depth is not None else settings.research.depth
    breadth = breadth if breadth is not None else settings.research.breadth
    output_path = output or settings.research.output_path

    run_id = str(uuid.uuid4())
    bind_run_context(run_id, "cli")
    run_logger = get_run_logger()
    run_logger.info("research_started", topic=topic[:100], depth=depth, breadth=breadth)

    async def _research() -> ResearchOutcome:
        return await run_research(
            topic,
            depth,
            breadth,
            generator=get_generator(settings.llm),
            search_provider=get_search_provider(settings.search),
            max_turns=settings.research.max_turns,
            max_learnings=settings.research.max_learnings,
            output_path=output_path,
        )

    try:
        outcome = asyncio.run(_research())
    except DeepResearchError as e:
        run_logger.error("research_failed", error=str(e))
        print(f"ERROR: {e}")
        raise typer.Exit(code=1) from e
    except Exception as e:
        # Generation and schema failures end the run; nothing has been written
        run_logger.exception("research_failed", error=str(e))
        print(f"FATAL ERROR during deep research process: {e}")
        raise typer.Exit(code=1) from e
    finally:
        clear_run_context()

    summary = outcome.store.summary()
    print(f"Report saved to {outcome.report_path}")
    print("--- Research Summary ---")
    print(f"Initial Query: {summary['topic']}")
    print(f"Total Unique Queries Processed: {summary['completed_queries']}")
    print(f"Total Unique Search Results Stored: {summary['search_results']}")
    print(f"Total Learnings Generated: {summary['learnings']}")
    print(f"Provider Calls: {outcome.provider_calls}")


@app.command()
def config(
    save: bool = typer.Option(False, "--save", help="Write the current settings to the config file (API keys excluded)"),
) -> None:
    """Show current configuration."""
    print(f"Provider: {settings.llm.provider}")
    print(f"Model: {settings.llm.model_name}")
    print(f"Report Model: {settings.llm.report_model_name or settings.llm.model_name}")
    print(f"Base URL: {settings.llm.base_url or '(default)'}")
    print(f"Search Backend: {settings.search.backend}")
    print(f"Depth: {settings.research.depth}")
    print(f"Breadth: {settings.research.breadth}")
    print(f"Max Learnings: {settings.research.max_learnings or '(unbounded)'}")
    print(f"Output: {settings.research.output_path}")

    if save:
        print(f"Saved to: {settings.save()}")


@app.command()
def server() -> None:
    """Run the MCP server."""
    from .server import main

    main()


if __name__ == "__main__":
    app()
