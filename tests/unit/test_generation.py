"""Unit tests for prompt construction, the chat model factory and QA."""

from __future__ import annotations

import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import HumanMessage

from docling_rag.config import Settings
from docling_rag.errors import InvalidInputError
from docling_rag.generation.llm import MOCK_RESPONSE, get_llm
from docling_rag.generation.prompts import build_rag_prompt, format_context
from docling_rag.generation.qa import Answer, answer_question
from docling_rag.ingestion.chunker import Chunker
from docling_rag.retrieval.memory_store import InMemoryVectorIndex
from docling_rag.service import RagService


@pytest.fixture()
def service(keyword_embedder) -> RagService:
    svc = RagService(InMemoryVectorIndex(), keyword_embedder, Chunker())
    svc.ingest("Cats purr when they are content.", "cats.md")
    svc.ingest("Dogs wag their tails.", "dogs.md")
    return svc


# ── Prompts ────────────────────────────────────────────────────────────


class TestPrompts:
    def test_format_context_numbers_chunks(self) -> None:
        assert format_context(["first", "second"]) == "Context 1:\nfirst\n\nContext 2:\nsecond\n\n"

    def test_format_context_empty(self) -> None:
        assert format_context([]) == ""

    def test_rag_prompt_contains_question_and_context(self) -> None:
        messages = build_rag_prompt("Why do cats purr?", ["Cats purr when content."])
        assert len(messages) == 1
        assert isinstance(messages[0], HumanMessage)
        content = messages[0].content
        assert "Question: Why do cats purr?" in content
        assert "Context 1:\nCats purr when content." in content
        assert content.startswith("You are a helpful AI assistant.")
        assert content.endswith("Answer:")


# ── LLM factory ────────────────────────────────────────────────────────


class TestGetLlm:
    def test_mock_model_without_credentials(self) -> None:
        llm = get_llm(Settings(openai_api_key="", llm_base_url=""))
        assert isinstance(llm, FakeListChatModel)
        assert llm.invoke("hello").content == MOCK_RESPONSE

    def test_openai_model_with_key(self) -> None:
        from langchain_openai import ChatOpenAI

        llm = get_llm(Settings(openai_api_key="sk-test", llm_base_url="", llm_model_name="gpt-4o-mini"))
        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == "gpt-4o-mini"

    def test_compatible_endpoint_without_key(self) -> None:
        from langchain_openai import ChatOpenAI

        llm = get_llm(Settings(openai_api_key="", llm_base_url="http://localhost:8000/v1"))
        assert isinstance(llm, ChatOpenAI)
        assert llm.openai_api_base == "http://localhost:8000/v1"


# ── Question answering ─────────────────────────────────────────────────


class TestAnswerQuestion:
    def test_answer_uses_model_output(self, service: RagService) -> None:
        llm = FakeListChatModel(responses=["Because they are content."])
        answer = answer_question(service, llm, "Why does a cat purr?", max_results=1)
        assert isinstance(answer, Answer)
        assert answer.answer == "Because they are content."
        assert answer.sources == 1
        assert answer.chunks == ["Cats purr when they are content."]
        assert answer.timestamp > 0

    def test_answer_with_empty_index(self, keyword_embedder) -> None:
        empty = RagService(InMemoryVectorIndex(), keyword_embedder)
        answer = answer_question(empty, FakeListChatModel(responses=["No idea."]), "cat?")
        assert answer.sources == 0
        assert answer.answer == "No idea."

    def test_empty_question_rejected(self, service: RagService) -> None:
        with pytest.raises(InvalidInputError):
            answer_question(service, FakeListChatModel(responses=["x"]), "")
