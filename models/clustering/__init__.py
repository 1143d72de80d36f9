"""
Bond Energy Algorithm for clustering attribute affinity matrices.
"""

from .affinity_matrix import AffinityMatrix, validate_affinity_values
from .bond_energy import NO_NEIGHBOR, bond, contribution, global_affinity_measure
from .placement import PlacementEngine, PlacementRecord
from .symmetrize import symmetrize
from .bea_clusterer import BEAResult, BondEnergyClusterer, cluster_affinity_matrix

__all__ = [
    'AffinityMatrix',
    'validate_affinity_values',
    'NO_NEIGHBOR',
    'bond',
    'contribution',
    'global_affinity_measure',
    'PlacementEngine',
    'PlacementRecord',
    'symmetrize',
    'BEAResult',
    'BondEnergyClusterer',
    'cluster_affinity_matrix',
]
