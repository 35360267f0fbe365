"""Cosine similarity over numpy vectors."""

from __future__ import annotations

import numpy as np


def cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
    """Compute cosine similarity between two vectors.

    Zero-magnitude vectors have no direction and score ``0.0``.
    """
    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)
    if norm1 == 0 or norm2 == 0:
        return 0.0
    score = float(np.dot(vec1, vec2) / (norm1 * norm2))
    return min(1.0, max(-1.0, score))


def cosine_scores(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Score *query* against every row of *matrix*.

    Returns a 1-D array with one score per row, clipped to ``[-1, 1]``.
    """
    if matrix.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    row_norms = np.linalg.norm(matrix, axis=1)
    query_norm = np.linalg.norm(query)
    denom = row_norms * query_norm
    dots = matrix @ query
    scores = np.divide(dots, denom, out=np.zeros_like(dots, dtype=np.float64), where=denom != 0)
    return np.clip(scores, -1.0, 1.0)
