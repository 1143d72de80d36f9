"""
Symmetrization Step

Reorders the rows of a column-clustered matrix so that both axes
follow the clustering order.
"""

import numpy as np

from .affinity_matrix import AffinityMatrix


def symmetrize(clustered: AffinityMatrix) -> AffinityMatrix:
    """
    Put row `order[k]` at row k for every k, keeping the header.

    The input matrix is left untouched; callers replace their
    reference with the returned matrix.

    Args:
        clustered: Fully placed column-clustered matrix

    Returns:
        New matrix whose rows and columns both follow the header order
    """
    n = clustered.size
    order = clustered.order
    if sorted(order) != list(range(1, n + 1)):
        raise RuntimeError(f"Cannot symmetrize, header is not a permutation of 1..{n}: {order}")

    result = AffinityMatrix(n, dtype=clustered.dtype)
    header = np.zeros(n + 1, dtype=clustered.dtype)
    header[1:] = order
    for slot in range(n + 1):
        result.set(0, slot, header[slot])

    for k, row in enumerate(order, start=1):
        source = clustered.row_slice(row)
        for col in range(1, n + 1):
            result.set(k, col, source[col])

    return result
