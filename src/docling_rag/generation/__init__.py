"""
Generation — the fixed RAG prompt template and the chat model behind it.

Public surface
--------------
- :func:`build_rag_prompt` / :func:`format_context` — prompt construction.
- :func:`get_llm` — chat model factory (OpenAI, compatible endpoint, or mock).
- :func:`answer_question` / :class:`Answer` — retrieve-then-generate.
"""

from docling_rag.generation.llm import get_llm
from docling_rag.generation.prompts import build_rag_prompt, format_context
from docling_rag.generation.qa import Answer, answer_question

__all__ = [
    "Answer",
    "answer_question",
    "build_rag_prompt",
    "format_context",
    "get_llm",
]
