"""
Bond Energy Measures

Bond between two attribute columns, the contribution of placing an
attribute between two neighbours, and the global affinity measure of
a whole ordering. All measures read the raw (unordered) affinity
matrix.
"""

from typing import Sequence

from .affinity_matrix import AffinityMatrix

# Attribute identity used for a missing left or right neighbour.
NO_NEIGHBOR = 0


def bond(col_a: int, col_b: int, affinity: AffinityMatrix):
    """
    Bond energy between two attributes.

    bond(Ax, Ay) = sum_i aff(Ai, Ax) * aff(Ai, Ay)

    Args:
        col_a: Identity of the first attribute (1..N)
        col_b: Identity of the second attribute (1..N)
        affinity: Raw attribute affinity matrix

    Returns:
        Bond energy (int for integer matrices, float for real ones)
    """
    left = affinity.extract_column(col_a)[1:]
    right = affinity.extract_column(col_b)[1:]
    return (left * right).sum().item()


def contribution(left: int, mid: int, right: int, affinity: AffinityMatrix):
    """
    Net bond energy gained by placing `mid` between `left` and `right`.

    cont(Ai, Ak, Aj) = 2 bond(Ai, Ak) + 2 bond(Ak, Aj) - 2 bond(Ai, Aj)

    A missing neighbour (NO_NEIGHBOR) contributes no bond and there is
    no left/right bond to break.

    Args:
        left: Identity of the left neighbour or NO_NEIGHBOR
        mid: Identity of the attribute being placed
        right: Identity of the right neighbour or NO_NEIGHBOR
        affinity: Raw attribute affinity matrix

    Returns:
        Contribution of the placement
    """
    if left == NO_NEIGHBOR and right == NO_NEIGHBOR:
        raise ValueError(f"Attribute {mid} has no neighbour to be placed against")

    # leftmost placement
    if left == NO_NEIGHBOR:
        return 2 * bond(mid, right, affinity)

    # rightmost placement
    if right == NO_NEIGHBOR:
        return 2 * bond(left, mid, affinity)

    return (
        2 * bond(left, mid, affinity)
        + 2 * bond(mid, right, affinity)
        - 2 * bond(left, right, affinity)
    )


def global_affinity_measure(order: Sequence[int], affinity: AffinityMatrix):
    """
    Global affinity measure (AM) of an attribute ordering.

    AM = sum over adjacent attributes of 2 * bond(left, right). Placing
    an attribute increases AM by exactly its contribution, which is
    what BEA greedily maximizes.

    Args:
        order: Attribute identities in column order; 0 entries (empty slots) are skipped
        affinity: Raw attribute affinity matrix

    Returns:
        Global affinity measure
    """
    placed = [identity for identity in order if identity != NO_NEIGHBOR]

    total = 0
    for left, right in zip(placed, placed[1:]):
        total += 2 * bond(left, right, affinity)
    return total
