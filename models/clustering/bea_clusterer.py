"""
Bond Energy Clusterer for Attribute Affinity Matrices

Runs the Bond Energy Algorithm (placement + symmetrization) on an
attribute affinity matrix and manages the result: console summary,
JSON save/load and heatmap visualization.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from tqdm import tqdm

from .affinity_matrix import AffinityMatrix
from .bond_energy import global_affinity_measure
from .placement import PlacementEngine, PlacementRecord
from .symmetrize import symmetrize


@dataclass
class BEAResult:
    """Clustered affinity matrix together with the order that produced it."""
    order: List[int]
    clustered: np.ndarray
    original: np.ndarray
    attribute_names: List[str]
    placements: List[PlacementRecord] = field(default_factory=list)
    affinity_before: float = 0
    affinity_after: float = 0

    @property
    def n_attributes(self) -> int:
        return len(self.order)

    def ordered_names(self) -> List[str]:
        """Attribute names in clustering order."""
        return [self.attribute_names[identity - 1] for identity in self.order]

    def to_dataframe(self) -> pd.DataFrame:
        names = self.ordered_names()
        return pd.DataFrame(self.clustered, index=names, columns=names)

    def to_dict(self) -> Dict:
        return {
            'metadata': {
                'n_attributes': self.n_attributes,
                'dtype': str(self.clustered.dtype),
                'global_affinity_before': self.affinity_before,
                'global_affinity_after': self.affinity_after
            },
            'attribute_names': list(self.attribute_names),
            'order': list(self.order),
            'original_matrix': self.original.tolist(),
            'clustered_matrix': self.clustered.tolist(),
            'placements': [record.to_dict() for record in self.placements]
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "BEAResult":
        dtype = np.dtype(data['metadata'].get('dtype', 'int64'))
        return cls(
            order=[int(v) for v in data['order']],
            clustered=np.asarray(data['clustered_matrix'], dtype=dtype),
            original=np.asarray(data['original_matrix'], dtype=dtype),
            attribute_names=list(data['attribute_names']),
            placements=[PlacementRecord(**p) for p in data.get('placements', [])],
            affinity_before=data['metadata']['global_affinity_before'],
            affinity_after=data['metadata']['global_affinity_after']
        )


def cluster_affinity_matrix(values) -> Tuple[np.ndarray, List[int]]:
    """
    Cluster an attribute affinity matrix with BEA.

    Args:
        values: N x N array-like of non-negative affinities, N >= 2

    Returns:
        clustered, order: Clustered N x N matrix and the attribute
            permutation (1-based identities) of its rows and columns
    """
    affinity = AffinityMatrix.from_values(values)
    clustered = symmetrize(PlacementEngine(affinity).run())
    return clustered.values, clustered.order


class BondEnergyClusterer:
    """
    Clusters attributes of an affinity matrix with the Bond Energy Algorithm.

    Features:
    - Input validation before any placement work
    - Optional progress bar over placement rounds
    - Global affinity measure before/after clustering
    - Result saving/loading (JSON)
    - Heatmap of original vs clustered matrix
    """

    def __init__(self, verbose: bool = True, show_progress: bool = False):
        """
        Args:
            verbose: Print progress messages
            show_progress: Show a tqdm bar over placement rounds
        """
        self.verbose = verbose
        self.show_progress = show_progress

        self.result: Optional[BEAResult] = None

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def fit(self, values, attribute_names: Optional[Sequence[str]] = None) -> BEAResult:
        """
        Run BEA on an affinity matrix.

        Args:
            values: N x N array-like of non-negative affinities, N >= 2
            attribute_names: Names of attributes 1..N (defaults to A1..AN)

        Returns:
            BEAResult with the clustered matrix and attribute order
        """
        affinity = AffinityMatrix.from_values(values)
        n = affinity.size

        if attribute_names is None:
            attribute_names = [f"A{i}" for i in range(1, n + 1)]
        attribute_names = [str(name) for name in attribute_names]
        if len(attribute_names) != n:
            raise ValueError(f"Expected {n} attribute names, got {len(attribute_names)}")

        self._log(f"\nClustering {n} attributes with BEA...")

        engine = PlacementEngine(affinity)
        engine.seed()
        rounds = tqdm(
            engine.candidates(),
            desc="Placing",
            disable=not self.show_progress,
            leave=False
        )
        for candidate in rounds:
            engine.step(candidate)
        engine.check_permutation()

        clustered = symmetrize(engine.clustered)
        order = clustered.order

        affinity_before = global_affinity_measure(affinity.order, affinity)
        affinity_after = global_affinity_measure(order, affinity)

        self.result = BEAResult(
            order=order,
            clustered=clustered.values,
            original=affinity.values,
            attribute_names=attribute_names,
            placements=list(engine.history),
            affinity_before=affinity_before,
            affinity_after=affinity_after
        )

        self._log(f"✓ Clustering completed")
        self._log(f"  Order: {', '.join(self.result.ordered_names())}")
        self._log(f"  Global affinity measure: {affinity_before} → {affinity_after}")

        return self.result

    def _require_result(self) -> BEAResult:
        if self.result is None:
            raise ValueError("Must call fit() or load_result() first")
        return self.result

    def save_result(self, output_path: Path):
        """
        Save the clustering result to a JSON file.

        Args:
            output_path: Path to save JSON file
        """
        result = self._require_result()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)

        self._log(f"\n✓ Clustering result saved to {output_path}")

    def load_result(self, input_path: Path) -> BEAResult:
        """
        Load a clustering result from a JSON file.

        Args:
            input_path: Path to JSON file

        Returns:
            Loaded BEAResult (also stored on the instance)
        """
        with open(input_path, 'r') as f:
            data = json.load(f)

        self.result = BEAResult.from_dict(data)

        self._log(f"\n✓ Loaded clustering result from {input_path}")
        self._log(f"  Number of attributes: {self.result.n_attributes}")

        return self.result

    def print_summary(self):
        """Print the clustering order, placements and clustered matrix."""
        result = self._require_result()

        print("\n" + "="*80)
        print("BOND ENERGY CLUSTERING SUMMARY")
        print("="*80)

        print(f"\nAttributes: {result.n_attributes}")
        print(f"Order:      {' '.join(result.ordered_names())}")
        print(f"Global affinity measure: {result.affinity_before} (input order)"
              f" → {result.affinity_after} (clustered order)")

        if result.placements:
            names = result.attribute_names

            def label(identity: int) -> str:
                return names[identity - 1] if identity else "-"

            print(f"\n{'─'*80}")
            print("PLACEMENTS")
            print(f"{'─'*80}")
            for record in result.placements:
                print(f"  cont({label(record.left)}, {label(record.candidate)}, "
                      f"{label(record.right)}) = {record.contribution}")

        print(f"\n{'─'*80}")
        print("CLUSTERED AFFINITY MATRIX")
        print(f"{'─'*80}")
        print(result.to_dataframe().to_string())

        print("\n" + "="*80)

    def visualize(self, save_path: Optional[Path] = None):
        """
        Plot original and clustered matrices side by side.

        Args:
            save_path: Path to save figure
        """
        result = self._require_result()

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))
        annotate = result.n_attributes <= 20
        fmt = 'd' if np.issubdtype(result.clustered.dtype, np.integer) else '.2g'

        sns.heatmap(
            pd.DataFrame(result.original, index=result.attribute_names, columns=result.attribute_names),
            ax=ax1, cmap='Blues', square=True, annot=annotate, fmt=fmt,
            cbar_kws={'label': 'Affinity'}
        )
        ax1.set_title('Attribute Affinity Matrix', fontsize=14, fontweight='bold')

        sns.heatmap(
            result.to_dataframe(),
            ax=ax2, cmap='Blues', square=True, annot=annotate, fmt=fmt,
            cbar_kws={'label': 'Affinity'}
        )
        ax2.set_title('Clustered Affinity Matrix (BEA)', fontsize=14, fontweight='bold')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=300, bbox_inches='tight')
            self._log(f"✓ Heatmap saved to {save_path}")

        plt.close(fig)
