"""Vector helpers."""
from __future__ import annotations

from typing import Sequence

import numpy as np


def cosine_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """Cosine of the angle between two vectors, in ``[-1, 1]``.

    A zero-length vector has no direction; the similarity is reported as 0.0.
    """

    first = np.asarray(vector1, dtype=float)
    second = np.asarray(vector2, dtype=float)
    if first.shape != second.shape:
        raise ValueError("Vectors must have the same length.")
    norm_product = float(np.linalg.norm(first) * np.linalg.norm(second))
    if norm_product == 0.0:
        return 0.0
    return float(np.dot(first, second) / norm_product)
