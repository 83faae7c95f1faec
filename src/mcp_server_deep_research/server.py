"""MCP server exposing recursive deep research as a tool."""

import json
import logging
import re
import sys
import time
import uuid

from fastmcp import Context, FastMCP

from .config import settings
from .exceptions import DeepResearchError, ResearchFailedError
from .observability import bind_run_context, clear_run_context, get_run_logger, setup_structured_logging
from .providers import get_generator, get_search_provider
from .research.runner import run_research

logger = logging.getLogger("mcp_server_deep_research")
logger.setLevel(getattr(logging, settings.server.logging_level.upper()))

# run_id -> topic for runs currently in flight
_running_runs: dict[str, str] = {}
_server_start_time = time.time()


def serve() -> FastMCP:
    """Create and configure the MCP server."""
    setup_structured_logging(settings.server.logging_level)

    server = FastMCP("mcp_server_deep_research")

    @server.tool()
    async def run_deep_research(
        topic: str,
        ctx: Context,
        depth: int | None = None,
        breadth: int | None = None,
        save_to_file: str | None = None,
    ) -> str:
        """
        Research a topic recursively: plan sub-queries, search and filter results,
        distill learnings and follow-up questions, recurse, then synthesize a report.

        Args:
            topic: The research topic or question to investigate
            depth: Levels of follow-up questions to explore (default from settings)
            breadth: Sub-queries planned at the top level, 1-5 (default from settings)
            save_to_file: Optional file path to save the report

        Returns:
            The research report as markdown
        """
        run_id = str(uuid.uuid4())
        bind_run_context(run_id, "run_deep_research")
        run_logger = get_run_logger()

        missing = settings.missing_credentials()
        if missing:
            clear_run_context()
            return f"Error: Missing {' or '.join(missing)}"

        depth = depth if depth is not None else settings.research.depth
        breadth = breadth if breadth is not None else settings.research.breadth
        if save_to_file is None and settings.research.output_path:
            # Sanitize topic for safe filename next to the configured report path
            safe_topic = re.sub(r"[^\w\s-]", "", topic[:50]).strip().replace(" ", "_") or run_id[:8]
            save_to_file = str(settings.research.output_path).removesuffix(".md") + f"_{safe_topic}.md"

        logger.info(f"Starting deep research on: {topic}")
        run_logger.info("research_started", topic=topic[:100], depth=depth, breadth=breadth)
        steps = 0

        async def report_progress(message: str) -> None:
            nonlocal steps
            steps += 1
            await ctx.report_progress(progress=steps)
            await ctx.info(message)

        _running_runs[run_id] = topic
        try:
            outcome = await run_research(
                topic,
                depth,
                breadth,
                generator=get_generator(settings.llm),
                search_provider=get_search_provider(settings.search),
                max_turns=settings.research.max_turns,
                max_learnings=settings.research.max_learnings,
                output_path=save_to_file,
                on_progress=report_progress,
            )
        except DeepResearchError as e:
            run_logger.error("research_failed", error=str(e))
            return f"Error: {e}"
        except Exception as e:
            run_logger.error("research_failed", error=str(e))
            raise ResearchFailedError(f"Research failed: {e}") from e
        finally:
            _running_runs.pop(run_id, None)
            clear_run_context()

        if outcome.report_path:
            await ctx.info(f"Saved to: {outcome.report_path}")
        run_logger.info("research_completed", provider_calls=outcome.provider_calls, **outcome.store.summary())
        return outcome.report

    @server.tool()
    async def health_check() -> str:
        """
        Report server health, configuration and research runs in flight.

        Returns:
            JSON with status, uptime and running research topics
        """
        return json.dumps(
            {
                "status": "healthy",
                "uptime_seconds": round(time.time() - _server_start_time, 1),
                "provider": settings.llm.provider,
                "model": settings.llm.model_name,
                "search_backend": settings.search.backend,
                "missing_credentials": settings.missing_credentials(),
                "running_runs": [{"run_id": run_id[:8], "topic": topic[:100]} for run_id, topic in _running_runs.items()],
            },
            indent=2,
        )

    return server


def main() -> None:
    """Entry point for the MCP server."""
    transport = settings.server.transport
    server_instance = serve()

    if transport == "stdio":
        server_instance.run(transport="stdio")
    elif transport in ("streamable-http", "sse"):
        logger.info(f"Starting MCP deep research server (provider: {settings.llm.provider}, transport: {transport})")
        logger.info(f"HTTP server at http://{settings.server.host}:{settings.server.port}/mcp")
        server_instance.run(transport=transport, host=settings.server.host, port=settings.server.port)
    else:
        print(f"Unknown transport: {transport}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
