"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Chunking
    chunk_size: int = Field(default=500, gt=0, description="Maximum characters per chunk")
    chunk_overlap: int = Field(default=50, ge=0, description="Characters shared by consecutive chunks")

    # Embedding
    embedding_backend: Literal["huggingface", "fake"] = Field(
        default="huggingface",
        description=(
            "Which embedding capability to inject. 'fake' uses a deterministic "
            "hash-seeded vector generator and needs no model download."
        ),
    )
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = Field(default=384, gt=0, description="Vector size for the fake backend")
    embedding_batch_size: int = Field(default=64, gt=0)

    # Retrieval
    max_relevant_chunks: int = Field(default=5, gt=0)
    min_score: float = Field(default=0.0, ge=-1.0, le=1.0)

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key; empty selects the mock chat model")
    llm_model_name: str = Field(default="gpt-3.5-turbo", description="LLM model identifier")
    llm_base_url: str = Field(
        default="",
        description="Base URL of an OpenAI-compatible endpoint. Leave empty to use OpenAI cloud.",
    )
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Process configuration only; the vector index itself is built and injected
# by ``docling_rag.service.build_service``.
settings = Settings()
