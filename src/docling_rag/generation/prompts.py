"""The fixed RAG prompt template.

Retrieved chunks are numbered and inlined as context ahead of the user's
question.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

RAG_PROMPT_TEMPLATE = """\
You are a helpful AI assistant. Answer the user's question based on the provided context.

Context:
{context}

Question: {question}

Instructions:
- Provide a clear and concise answer based on the context
- If the context doesn't contain relevant information, say so
- Be specific and cite information from the context when possible

Answer:"""


def format_context(chunks: Sequence[str]) -> str:
    """Number the retrieved chunks as ``Context 1:``, ``Context 2:``, …"""
    return "".join(f"Context {i}:\n{chunk}\n\n" for i, chunk in enumerate(chunks, start=1))


def build_rag_prompt(query: str, chunks: Sequence[str]) -> list[BaseMessage]:
    """Build the single-message prompt sent to the chat model."""
    content = RAG_PROMPT_TEMPLATE.format(context=format_context(chunks), question=query)
    return [HumanMessage(content=content)]
