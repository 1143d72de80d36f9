"""Utility functions for the attribute clustering project."""

from .matrix_io import (
    format_matrix,
    load_affinity_matrix,
    parse_affinity_text,
    read_affinity_csv,
    read_affinity_file,
    save_clustered_csv,
)

__all__ = [
    'format_matrix',
    'load_affinity_matrix',
    'parse_affinity_text',
    'read_affinity_csv',
    'read_affinity_file',
    'save_clustered_csv',
]
