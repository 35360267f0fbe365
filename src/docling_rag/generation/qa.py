"""Question answering: retrieve context, fill the template, ask the model."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from docling_rag.generation.prompts import build_rag_prompt

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from docling_rag.service import RagService

logger = logging.getLogger(__name__)


class Answer(BaseModel):
    """Model answer plus the context it was grounded on."""

    answer: str
    sources: int
    chunks: list[str] = Field(default_factory=list)
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))


def answer_question(
    service: RagService,
    llm: BaseChatModel,
    query: str,
    max_results: int = 5,
) -> Answer:
    """Answer *query* from the chunks stored in *service*."""
    chunks = service.retrieve(query, max_results)
    logger.info("Found %d relevant chunks for query", len(chunks))

    messages = build_rag_prompt(query, chunks)
    logger.info("Built RAG prompt with %d characters", len(messages[0].content))

    response = llm.invoke(messages)
    content = response.content if isinstance(response.content, str) else str(response.content)
    return Answer(answer=content, sources=len(chunks), chunks=chunks)
