"""Thin wrapper over a LangChain chat model for schema-constrained and free-text calls."""

import logging
from typing import TYPE_CHECKING, TypeVar

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Generator:
    """Issues generation calls and counts them.

    Errors from the model or from schema validation are not caught here; they
    propagate to the caller and abort the current run.
    """

    def __init__(self, llm: "BaseChatModel", report_llm: "BaseChatModel | None" = None):
        self.llm = llm
        self.report_llm = report_llm or llm
        self.calls = 0

    @staticmethod
    def _messages(prompt: str, system: str | None) -> list[BaseMessage]:
        messages: list[BaseMessage] = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=prompt))
        return messages

    async def generate_object(self, prompt: str, schema: type[T], system: str | None = None) -> T:
        """Return a value conforming to ``schema``."""
        self.calls += 1
        structured = self.llm.with_structured_output(schema)
        result = await structured.ainvoke(self._messages(prompt, system))
        if isinstance(result, schema):
            return result
        # Some integrations hand back a plain dict
        return schema.model_validate(result)

    async def generate_text(self, prompt: str, system: str | None = None, report: bool = False) -> str:
        """Return free-form text. ``report`` routes the call to the report model."""
        self.calls += 1
        llm = self.report_llm if report else self.llm
        response = await llm.ainvoke(self._messages(prompt, system))
        content = response.content
        if isinstance(content, list):
            # Content blocks (e.g. Anthropic) -> join the text parts
            content = "".join(block.get("text", "") if isinstance(block, dict) else str(block) for block in content)
        return content
