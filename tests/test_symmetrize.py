# tests/test_symmetrize.py
"""Row reordering after placement."""

import numpy as np
import pytest

from models.clustering import AffinityMatrix, PlacementEngine, symmetrize


def test_rows_follow_column_order(textbook_matrix):
    affinity = AffinityMatrix.from_values(textbook_matrix)
    clustered = PlacementEngine(affinity).run()

    result = symmetrize(clustered)

    assert result.order == [1, 3, 2, 4]
    np.testing.assert_array_equal(result.values, [
        [45, 45, 0, 0],
        [45, 53, 5, 3],
        [0, 5, 80, 75],
        [0, 3, 75, 78],
    ])
    np.testing.assert_array_equal(result.values, result.values.T)


def test_input_matrix_is_not_modified(textbook_matrix):
    clustered = PlacementEngine(AffinityMatrix.from_values(textbook_matrix)).run()
    snapshot = clustered.values
    header = clustered.order

    symmetrize(clustered)

    np.testing.assert_array_equal(clustered.values, snapshot)
    assert clustered.order == header


def test_identity_order_is_a_no_op(random_symmetric):
    matrix = AffinityMatrix.from_values(random_symmetric(6, seed=5))
    assert symmetrize(matrix) == matrix


def test_incomplete_header_is_rejected():
    with pytest.raises(RuntimeError):
        symmetrize(AffinityMatrix(3))
