"""FastAPI application exposing ingestion, search and RAG answers over HTTP."""

from __future__ import annotations

import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from langchain_core.language_models import BaseChatModel
from pydantic import BaseModel, Field

from docling_rag.config import settings
from docling_rag.errors import ConfigurationError, EmbeddingError, InvalidInputError
from docling_rag.generation.llm import get_llm
from docling_rag.generation.qa import answer_question
from docling_rag.service import RagService, build_service

logger = logging.getLogger(__name__)


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Parsed document text to index."""

    text: str | None = None
    document_name: str | None = None


class IngestResponse(BaseModel):
    status: str = "success"
    document_name: str
    chunks_stored: int
    embeddings: int


class SearchRequest(BaseModel):
    query: str
    max_results: int = Field(default=settings.max_relevant_chunks, gt=0)


class SearchResponse(BaseModel):
    chunks: list[str] = []


class QueryRequest(BaseModel):
    """Incoming question from the user."""

    query: str


class QueryResponse(BaseModel):
    """Answer returned by the chat model."""

    answer: str
    sources: int
    timestamp: int


# ── Dependencies ──────────────────────────────────────────────────────
def get_service(request: Request) -> RagService:
    return request.app.state.service


def get_chat_model(request: Request) -> BaseChatModel:
    return request.app.state.llm


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_app(service: RagService | None = None, llm: BaseChatModel | None = None) -> FastAPI:
    """Build the API around an injected service and chat model.

    Either argument may be omitted, in which case it is built from the
    process settings.
    """
    app = FastAPI(
        title="Docling RAG API",
        version="0.1.0",
        description="Document ingestion and retrieval-augmented question answering.",
    )
    app.state.service = service if service is not None else build_service(settings)
    app.state.llm = llm if llm is not None else get_llm(settings)

    # ── Error mapping ─────────────────────────────────────────────────
    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(EmbeddingError)
    async def _embedding_failed(request: Request, exc: EmbeddingError) -> JSONResponse:
        logger.error("Embedding backend failure: %s", exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def _misconfigured(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.critical("Configuration error: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    # ── Routes ────────────────────────────────────────────────────────
    @app.get("/api/health")
    def health(service: RagService = Depends(get_service)) -> dict[str, int | str]:
        """Liveness probe with the current record count."""
        return {
            "status": "UP" if service.index.health_check() else "DOWN",
            "embeddings_stored": service.stored_count(),
            "timestamp": _now_ms(),
        }

    @app.post("/api/ingest", response_model=IngestResponse)
    def ingest(request: IngestRequest, service: RagService = Depends(get_service)) -> IngestResponse:
        """Index already-parsed document text."""
        name = request.document_name or f"uploaded-doc-{_now_ms()}"
        if not request.text or not request.text.strip():
            raise InvalidInputError("Parsed document text is empty", field="text", details={"document_name": name})

        stored = service.ingest(request.text, name)
        return IngestResponse(document_name=name, chunks_stored=stored, embeddings=service.stored_count())

    @app.post("/api/search", response_model=SearchResponse)
    def search(request: SearchRequest, service: RagService = Depends(get_service)) -> SearchResponse:
        """Return the most relevant chunk texts without calling the chat model."""
        return SearchResponse(chunks=service.retrieve(request.query, request.max_results))

    @app.post("/api/query", response_model=QueryResponse)
    def query(
        request: QueryRequest,
        service: RagService = Depends(get_service),
        llm: BaseChatModel = Depends(get_chat_model),
    ) -> QueryResponse:
        """Run retrieval plus generation and return the answer."""
        result = answer_question(service, llm, request.query, settings.max_relevant_chunks)
        logger.info("RAG query completed successfully")
        return QueryResponse(answer=result.answer, sources=result.sources, timestamp=result.timestamp)

    return app


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
