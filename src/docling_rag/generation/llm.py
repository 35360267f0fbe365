"""LLM initialisation — single place to swap providers.

Supports three modes:

1. **OpenAI cloud** — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``LLM_BASE_URL`` (e.g. a local
   vLLM server). ``ChatOpenAI`` works unchanged against it.
3. **Mock** — neither is set. A canned-response model lets the rest of
   the pipeline run without credentials.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_core.language_models import FakeListChatModel

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from docling_rag.config import Settings

logger = logging.getLogger(__name__)

MOCK_RESPONSE = (
    "This is a mock response. The actual query was processed, but no OpenAI API key is configured. "
    "To get real AI responses, please set the OPENAI_API_KEY environment variable with your OpenAI API key. "
    "\n\nYour query and the retrieved context have been processed successfully by the RAG system."
)


def get_mock_llm() -> FakeListChatModel:
    """Return a chat model that always answers with :data:`MOCK_RESPONSE`."""
    return FakeListChatModel(responses=[MOCK_RESPONSE])


def get_llm(settings: Settings) -> BaseChatModel:
    """Return the configured chat model.

    When ``settings.llm_base_url`` is set the client is pointed at that
    endpoint instead of the OpenAI cloud API. A dummy API key
    (``"EMPTY"``) is used because such servers usually do not require
    authentication.
    """
    if not settings.openai_api_key and not settings.llm_base_url:
        logger.warning("OPENAI_API_KEY not found. Using mock chat model.")
        logger.warning("To use OpenAI, set the OPENAI_API_KEY environment variable.")
        return get_mock_llm()

    from langchain_openai import ChatOpenAI

    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }

    if settings.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        # LangChain requires a non-empty key even when the server ignores it.
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    else:
        logger.info("Configuring OpenAI chat model %s", settings.llm_model_name)
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)
