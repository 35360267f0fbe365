"""Abstract base class for vector-index backends.

Adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the abstract methods. The rest of the retrieval stack is
backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from docling_rag.retrieval.models import Chunk, SearchHit


class VectorStoreBase(ABC):
    """Backend-agnostic vector-index interface.

    Parameters
    ----------
    collection_name:
        Logical name of the index, used in log messages.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def insert_many(self, records: Iterable[tuple[Sequence[float], Chunk]]) -> int:
        """Store a batch of ``(vector, chunk)`` pairs.

        Implementations must store either the whole batch or none of it,
        and return the number of records added.

        Raises
        ------
        ConfigurationError
            If any vector's dimension differs from the index's.
        """
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_vector: Sequence[float],
        *,
        k: int = 5,
        min_score: float = 0.0,
    ) -> list[SearchHit]:
        """Return up to *k* hits scoring at least *min_score*, best first.

        Ties are broken by insertion order so repeated searches return the
        same ordering.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is ready to serve queries."""
        ...

    # -- derived operations ---------------------------------------------------

    def insert(self, vector: Sequence[float], chunk: Chunk) -> None:
        """Store a single record."""
        self.insert_many([(vector, chunk)])

    def search(self, query_vector: Sequence[float], k: int, min_score: float = 0.0) -> list[Chunk]:
        """Like :meth:`similarity_search` but return only the chunks."""
        return [hit.chunk for hit in self.similarity_search(query_vector, k=k, min_score=min_score)]
