"""In-memory implementation of the vector-index abstraction."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np

from docling_rag.errors import ConfigurationError
from docling_rag.retrieval.base import VectorStoreBase
from docling_rag.retrieval.models import Chunk, SearchHit, VectorRecord
from docling_rag.retrieval.similarity import cosine_scores

logger = logging.getLogger(__name__)


class _Snapshot(NamedTuple):
    records: tuple[VectorRecord, ...]
    matrix: np.ndarray  # one row per record, same order


def _as_vector(values: Sequence[float]) -> np.ndarray:
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Embedding is not numeric: {exc}") from exc
    if vector.ndim != 1 or vector.size == 0:
        raise ConfigurationError(
            "Embedding must be a non-empty one-dimensional vector",
            {"shape": vector.shape},
        )
    return vector


class InMemoryVectorIndex(VectorStoreBase):
    """Append-only, thread-safe vector index held in process memory.

    Writers are serialised by a lock and publish a new immutable snapshot
    (records plus a stacked numpy matrix) on every insert. Searches grab
    the current snapshot under the lock and score it without holding the
    lock, so they run concurrently with each other and never see a
    partially applied insert.

    Parameters
    ----------
    collection_name:
        Logical name of the index.
    dimension:
        Expected vector dimension. When *None* the first insertion fixes it.
    """

    def __init__(self, collection_name: str = "documents", *, dimension: int | None = None) -> None:
        super().__init__(collection_name)
        if dimension is not None and dimension <= 0:
            raise ConfigurationError("dimension must be positive", {"dimension": dimension})
        self._dimension = dimension
        self._lock = threading.Lock()
        self._snapshot = _Snapshot(records=(), matrix=np.empty((0, dimension or 0), dtype=np.float64))
        logger.info("Initialised in-memory vector index %r", collection_name)

    @property
    def dimension(self) -> int | None:
        return self._dimension

    # -- VectorStoreBase overrides --------------------------------------------

    def insert_many(self, records: Iterable[tuple[Sequence[float], Chunk]]) -> int:
        pending = [(_as_vector(vector), chunk) for vector, chunk in records]
        if not pending:
            return 0
        new_records = tuple(VectorRecord(vector=tuple(vector.tolist()), chunk=chunk) for vector, chunk in pending)

        with self._lock:
            dimension = self._dimension if self._dimension is not None else pending[0][0].size
            for i, (vector, _) in enumerate(pending):
                if vector.size != dimension:
                    raise ConfigurationError(
                        "Embedding dimension mismatch; was the embedder changed?",
                        {"expected": dimension, "received": vector.size, "batch_position": i},
                    )

            new_rows = np.vstack([vector for vector, _ in pending])
            current = self._snapshot
            matrix = new_rows if current.matrix.shape[0] == 0 else np.vstack([current.matrix, new_rows])

            self._dimension = dimension
            self._snapshot = _Snapshot(records=current.records + new_records, matrix=matrix)
            total = len(self._snapshot.records)

        logger.debug("Inserted %d records into %r (total=%d)", len(pending), self.collection_name, total)
        return len(pending)

    def similarity_search(
        self,
        query_vector: Sequence[float],
        *,
        k: int = 5,
        min_score: float = 0.0,
    ) -> list[SearchHit]:
        if k <= 0:
            return []

        with self._lock:
            snapshot = self._snapshot
        if not snapshot.records:
            return []

        query = _as_vector(query_vector)
        if query.size != snapshot.matrix.shape[1]:
            raise ConfigurationError(
                "Query embedding dimension does not match the index",
                {"expected": snapshot.matrix.shape[1], "received": query.size},
            )

        scores = cosine_scores(snapshot.matrix, query)
        candidates = [i for i in range(len(scores)) if scores[i] >= min_score]
        candidates.sort(key=lambda i: (-scores[i], i))

        return [
            SearchHit(chunk=snapshot.records[i].chunk, score=float(scores[i]), position=i)
            for i in candidates[:k]
        ]

    def count(self) -> int:
        with self._lock:
            return len(self._snapshot.records)

    def health_check(self) -> bool:
        return True
