"""
Matrix I/O Utilities for Bond Energy Clustering

Reads attribute affinity matrices from the plain text format
(first token N, then N x N whitespace-separated values) or from a
labelled CSV, and renders matrices in the tabular console layout.
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from models.clustering.affinity_matrix import validate_affinity_values


def _parse_number(token: str, position: int):
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"Unparseable value {token!r} at position {position}") from None


def parse_affinity_text(text: str) -> np.ndarray:
    """
    Parse the plain text affinity matrix format.

    Example:
        >>> parse_affinity_text("2\\n10 5\\n5 10\\n")
        array([[10,  5],
               [ 5, 10]])

    Args:
        text: File contents; line breaks are not significant

    Returns:
        N x N matrix (int64 when every value is an integer)
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Input is empty, expected the matrix size N")

    try:
        n = int(tokens[0])
    except ValueError:
        raise ValueError(f"Matrix size must be an integer, got {tokens[0]!r}") from None
    if n < 2:
        raise ValueError(f"Matrix size must be at least 2, got {n}")

    cells = tokens[1:]
    if len(cells) != n * n:
        raise ValueError(f"Expected {n * n} values for a {n}x{n} matrix, found {len(cells)}")

    values = [_parse_number(token, i + 1) for i, token in enumerate(cells)]
    if all(isinstance(v, int) for v in values):
        array = np.array(values, dtype=np.int64)
    else:
        array = np.array(values, dtype=np.float64)

    return validate_affinity_values(array.reshape(n, n))


def read_affinity_file(path) -> np.ndarray:
    """Read a plain text affinity matrix file."""
    with open(path, 'r') as f:
        return parse_affinity_text(f.read())


def read_affinity_csv(path) -> Tuple[np.ndarray, List[str]]:
    """
    Read a labelled affinity matrix CSV.

    The first row holds attribute names and the first column repeats them.

    Args:
        path: Path to CSV file

    Returns:
        values, names: N x N matrix and attribute names
    """
    df = pd.read_csv(path, index_col=0)

    names = [str(c) for c in df.columns]
    row_names = [str(r) for r in df.index]
    if row_names != names:
        raise ValueError(
            f"Row labels {row_names} do not match column labels {names}"
        )

    return validate_affinity_values(df.to_numpy()), names


def load_affinity_matrix(path, fmt: str = 'auto') -> Tuple[np.ndarray, Optional[List[str]]]:
    """
    Load an affinity matrix in either supported format.

    Args:
        path: Input file
        fmt: 'txt', 'csv' or 'auto' (decide from the file suffix)

    Returns:
        values, names: Matrix and attribute names (None for the text format)
    """
    path = Path(path)
    if fmt == 'auto':
        fmt = 'csv' if path.suffix.lower() == '.csv' else 'txt'

    if fmt == 'csv':
        return read_affinity_csv(path)
    if fmt == 'txt':
        return read_affinity_file(path), None

    raise ValueError(f"Unknown matrix format: {fmt}")


def format_matrix(
    values: np.ndarray,
    order: Sequence[int],
    attribute_names: Optional[Sequence[str]] = None
) -> str:
    """
    Render a matrix as header row, dashed separator and tab-separated rows.

    Args:
        values: N x N matrix
        order: Attribute identity of each column (header row)
        attribute_names: Optional names of attributes 1..N used in the header

    Returns:
        Multi-line string, one trailing tab per cell
    """
    values = np.asarray(values)
    if attribute_names is None:
        header = [str(identity) for identity in order]
    else:
        header = [str(attribute_names[identity - 1]) for identity in order]

    lines = ["".join(f"{cell}\t" for cell in header)]
    lines.append("--------" * len(header))
    for row in values:
        lines.append("".join(f"{cell}\t" for cell in row.tolist()))

    return "\n".join(lines)


def save_clustered_csv(result, output_path) -> Path:
    """
    Save a clustered matrix as a labelled CSV.

    Args:
        result: BEAResult to save
        output_path: Destination CSV path

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    result.to_dataframe().to_csv(output_path)
    return output_path
