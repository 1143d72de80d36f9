"""
Validate a Saved Bond Energy Clustering Result

Re-checks a bea_result.json produced by training/cluster_attributes.py:
- order is a permutation of the attribute identities
- clustered matrix is the input matrix permuted on both axes
- stored global affinity measures match a recomputation

Usage:
    python evaluation/validate_clustering.py \
        --result clustering_results/bea_result.json \
        --input_path bea.txt
"""

import sys
import argparse
from pathlib import Path
import json
import numpy as np
from typing import Dict, List, Optional

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from models.clustering import AffinityMatrix, global_affinity_measure
from utils.matrix_io import load_affinity_matrix


def check_permutation(order: List[int], n: int) -> bool:
    """Order must contain every identity 1..n exactly once."""
    return sorted(order) == list(range(1, n + 1))


def check_consistency(original: np.ndarray, clustered: np.ndarray, order: List[int]) -> bool:
    """Clustered matrix must equal the original with rows and columns reordered."""
    index = np.asarray(order) - 1
    return np.array_equal(original[np.ix_(index, index)], clustered)


def validate_result(data: Dict, original: Optional[np.ndarray] = None) -> Dict[str, bool]:
    """
    Run every check on a loaded result dictionary.

    Args:
        data: Parsed bea_result.json
        original: Input matrix to compare against (defaults to the stored copy)

    Returns:
        Dictionary of check name -> passed
    """
    order = [int(v) for v in data['order']]
    n = data['metadata']['n_attributes']
    clustered = np.asarray(data['clustered_matrix'])
    if original is None:
        original = np.asarray(data['original_matrix'])

    checks = {
        'permutation': check_permutation(order, n),
        'shape': clustered.shape == (n, n) and original.shape == (n, n),
    }

    if not (checks['permutation'] and checks['shape']):
        checks['consistency'] = False
        checks['global_affinity'] = False
        return checks

    checks['consistency'] = check_consistency(original, clustered, order)

    affinity = AffinityMatrix.from_values(original)
    before = global_affinity_measure(affinity.order, affinity)
    after = global_affinity_measure(order, affinity)
    checks['global_affinity'] = bool(
        np.isclose(before, data['metadata']['global_affinity_before'])
        and np.isclose(after, data['metadata']['global_affinity_after'])
    )

    return checks


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Validate a saved BEA clustering result')
    parser.add_argument('--result', type=str, default='clustering_results/bea_result.json')
    parser.add_argument('--input_path', type=str, default=None,
                        help='Original affinity matrix to compare against')
    parser.add_argument('--format', type=str, default='auto', choices=['auto', 'txt', 'csv'])
    args = parser.parse_args(argv)

    with open(args.result, 'r') as f:
        data = json.load(f)

    original = None
    if args.input_path is not None:
        original, _ = load_affinity_matrix(args.input_path, fmt=args.format)

    print("="*80)
    print("CLUSTERING RESULT VALIDATION")
    print("="*80)

    checks = validate_result(data, original)
    for name, passed in checks.items():
        status = "[OK]" if passed else "[FAIL]"
        print(f"  {status} {name}")

    if all(checks.values()):
        print("\n✅ All checks passed")
        return 0

    print("\nWARNING: Validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
