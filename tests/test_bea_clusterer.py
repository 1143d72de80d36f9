# tests/test_bea_clusterer.py
"""End-to-end clustering, result persistence and reporting."""

import json

import numpy as np
import pytest

from models.clustering import BEAResult, BondEnergyClusterer, cluster_affinity_matrix


def test_cluster_affinity_matrix_paired_example(paired_matrix):
    clustered, order = cluster_affinity_matrix(paired_matrix)

    assert order == [1, 3, 2]
    np.testing.assert_array_equal(clustered, [
        [45, 45, 0],
        [45, 45, 0],
        [0, 0, 80],
    ])


def test_two_attributes_come_back_unchanged():
    values = np.array([[5, 2], [2, 9]])
    clustered, order = cluster_affinity_matrix(values)

    assert order == [1, 2]
    np.testing.assert_array_equal(clustered, values)


def test_leftmost_example(leftmost_matrix):
    clustered, order = cluster_affinity_matrix(leftmost_matrix)

    assert order == [3, 1, 2]
    np.testing.assert_array_equal(clustered, [
        [10, 8, 0],
        [8, 10, 6],
        [0, 6, 10],
    ])


def test_pipeline_is_deterministic(random_symmetric):
    values = random_symmetric(12, seed=42)
    first = cluster_affinity_matrix(values)
    second = cluster_affinity_matrix(values)

    assert first[1] == second[1]
    np.testing.assert_array_equal(first[0], second[0])


def test_undersized_input_is_rejected():
    with pytest.raises(ValueError):
        cluster_affinity_matrix([[1]])


def test_fit_textbook_example(textbook_matrix):
    clusterer = BondEnergyClusterer(verbose=False)
    result = clusterer.fit(textbook_matrix)

    assert result.order == [1, 3, 2, 4]
    assert result.ordered_names() == ["A1", "A3", "A2", "A4"]
    assert result.affinity_before == 3766
    assert result.affinity_after == 34330
    assert [(p.left, p.candidate, p.right) for p in result.placements] == [(1, 3, 2), (2, 4, 0)]
    assert clusterer.result is result


def test_fit_with_real_values(textbook_matrix):
    result = BondEnergyClusterer(verbose=False).fit(textbook_matrix * 0.5)

    assert result.order == [1, 3, 2, 4]
    assert result.clustered.dtype == np.float64
    assert result.clustered[1, 1] == 26.5


def test_fit_rejects_wrong_number_of_names(paired_matrix):
    with pytest.raises(ValueError):
        BondEnergyClusterer(verbose=False).fit(paired_matrix, attribute_names=["a", "b"])


def test_methods_require_a_result(tmp_path):
    clusterer = BondEnergyClusterer(verbose=False)
    with pytest.raises(ValueError):
        clusterer.print_summary()
    with pytest.raises(ValueError):
        clusterer.save_result(tmp_path / "result.json")


def test_save_and_load_round_trip(textbook_matrix, tmp_path):
    names = ["id", "name", "budget", "location"]
    clusterer = BondEnergyClusterer(verbose=False)
    result = clusterer.fit(textbook_matrix, attribute_names=names)

    path = tmp_path / "nested" / "bea_result.json"
    clusterer.save_result(path)

    data = json.loads(path.read_text())
    assert data["metadata"]["n_attributes"] == 4
    assert data["order"] == [1, 3, 2, 4]

    loaded = BondEnergyClusterer(verbose=False).load_result(path)
    assert loaded.order == result.order
    assert loaded.attribute_names == names
    assert loaded.placements == result.placements
    np.testing.assert_array_equal(loaded.clustered, result.clustered)
    assert loaded.clustered.dtype == result.clustered.dtype


def test_result_dict_round_trip(paired_matrix):
    result = BondEnergyClusterer(verbose=False).fit(paired_matrix)
    restored = BEAResult.from_dict(result.to_dict())

    assert restored.affinity_after == result.affinity_after
    assert list(restored.to_dataframe().columns) == ["A1", "A3", "A2"]


def test_print_summary(textbook_matrix, capsys):
    clusterer = BondEnergyClusterer(verbose=False)
    clusterer.fit(textbook_matrix)
    clusterer.print_summary()

    out = capsys.readouterr().out
    assert "A1 A3 A2 A4" in out
    assert "cont(A2, A4, -) = 23730" in out


def test_verbose_fit_reports_progress(paired_matrix, capsys):
    BondEnergyClusterer(verbose=True).fit(paired_matrix)
    assert "✓ Clustering completed" in capsys.readouterr().out


def test_visualize_writes_figure(textbook_matrix, tmp_path):
    clusterer = BondEnergyClusterer(verbose=False)
    clusterer.fit(textbook_matrix)

    path = tmp_path / "heatmap.png"
    clusterer.visualize(save_path=path)

    assert path.exists()
    assert path.stat().st_size > 0
