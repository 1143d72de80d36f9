"""
BEA Placement Engine

Builds the column-clustered affinity matrix. The first two attribute
columns seed the ordering; every remaining attribute, in identity
order, is inserted at the position with the highest contribution.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from .affinity_matrix import AffinityMatrix
from .bond_energy import NO_NEIGHBOR, contribution


@dataclass(frozen=True)
class PlacementRecord:
    """Best insertion point of one round: `candidate` goes between `left` and `right`."""
    left: int
    candidate: int
    right: int
    contribution: Union[int, float]

    def to_dict(self) -> dict:
        return {
            'left': self.left,
            'candidate': self.candidate,
            'right': self.right,
            'contribution': self.contribution
        }


class PlacementEngine:
    """
    Column placement loop of the Bond Energy Algorithm.

    Owns the clustered matrix while it is being built. Rows of the
    clustered matrix stay in original attribute order until the
    symmetrization step.
    """

    def __init__(self, affinity: AffinityMatrix):
        """
        Args:
            affinity: Raw attribute affinity matrix (header 1..N), read only
        """
        if affinity.size < 2:
            raise ValueError(f"BEA needs at least 2 attributes, got {affinity.size}")

        self.affinity = affinity
        self.clustered = AffinityMatrix(affinity.size, dtype=affinity.dtype)
        self.rightmost = 0
        self.history: List[PlacementRecord] = []

    @property
    def size(self) -> int:
        return self.affinity.size

    def seed(self):
        """Copy attribute columns 1 and 2 verbatim into slots 1 and 2."""
        self.clustered.write_column(1, self.affinity.extract_column(1))
        self.clustered.write_column(2, self.affinity.extract_column(2))
        self.rightmost = 2

    def candidates(self) -> range:
        """Attributes still to place, in identity order."""
        return range(3, self.size + 1)

    def evaluate(self, candidate: int) -> PlacementRecord:
        """
        Find the best insertion point for `candidate`.

        Positions are scanned left to right: before the first placed
        attribute, between every adjacent pair, then after the last one.
        A later position wins ties.

        Args:
            candidate: Identity of the attribute to place

        Returns:
            PlacementRecord of the winning position
        """
        if self.rightmost < 2:
            raise RuntimeError("Placement engine must be seeded before evaluating candidates")

        order = self.clustered.order
        placed = [NO_NEIGHBOR] + order[:self.rightmost] + [NO_NEIGHBOR]

        best: Optional[PlacementRecord] = None
        for left, right in zip(placed, placed[1:]):
            score = contribution(left, candidate, right, self.affinity)
            if best is None or score >= best.contribution:
                best = PlacementRecord(left, candidate, right, score)

        return best

    def _slot_of(self, identity: int) -> int:
        order = self.clustered.order
        for slot in range(1, self.rightmost + 1):
            if order[slot - 1] == identity:
                return slot
        raise RuntimeError(f"Attribute {identity} is not placed in the clustered matrix")

    def place(self, record: PlacementRecord) -> int:
        """
        Insert the candidate column at the recorded position.

        Columns right of the insertion point move one slot to the right.

        Args:
            record: Winning placement of the current round

        Returns:
            Slot the candidate column was written to
        """
        if self.rightmost >= self.size:
            raise RuntimeError("Clustered matrix is already full")

        if record.left == NO_NEIGHBOR:
            slot = 1
        else:
            start = self._slot_of(record.left)
            slot = start + 1

        # Appending at rightmost + 1 needs no shift
        self.clustered.shift_columns_right(slot, self.rightmost)
        self.clustered.write_column(slot, self.affinity.extract_column(record.candidate))
        self.rightmost += 1
        return slot

    def step(self, candidate: int) -> PlacementRecord:
        """Evaluate and place one candidate."""
        record = self.evaluate(candidate)
        self.place(record)
        self.history.append(record)
        return record

    def check_permutation(self):
        """Raise RuntimeError unless the header is a permutation of 1..N."""
        order = self.clustered.order
        if sorted(order) != list(range(1, self.size + 1)):
            raise RuntimeError(f"Clustered order is not a permutation of 1..{self.size}: {order}")

    def run(self) -> AffinityMatrix:
        """
        Place every attribute.

        Returns:
            Column-clustered matrix (rows still in original order)
        """
        self.seed()
        for candidate in self.candidates():
            self.step(candidate)

        self.check_permutation()
        return self.clustered
