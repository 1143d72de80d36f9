"""
Attribute Clustering Script

Reads an attribute affinity matrix and produces the clustered
affinity matrix with the Bond Energy Algorithm.

Usage:
    python training/cluster_attributes.py --input_path bea.txt --visualize
    python training/cluster_attributes.py --input_path affinity.csv --output_dir results
"""

import sys
import argparse
from pathlib import Path
import io

# Fix Windows console encoding
if sys.platform == 'win32':
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from models.clustering.bea_clusterer import BondEnergyClusterer
from utils.matrix_io import format_matrix, load_affinity_matrix, save_clustered_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Cluster attributes of an affinity matrix with the Bond Energy Algorithm'
    )
    parser.add_argument(
        '--input_path',
        type=str,
        default='bea.txt',
        help='Path to affinity matrix (text format or labelled CSV)'
    )
    parser.add_argument(
        '--format',
        type=str,
        default='auto',
        choices=['auto', 'txt', 'csv'],
        help='Input format (auto: decide from file suffix)'
    )
    parser.add_argument(
        '--output_dir',
        type=str,
        default='clustering_results',
        help='Output directory for results'
    )
    parser.add_argument(
        '--visualize',
        action='store_true',
        help='Save a heatmap of original vs clustered matrix'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar over placement rounds'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Only print the clustered matrix'
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    input_path = Path(args.input_path)
    output_dir = Path(args.output_dir)

    if verbose:
        print("\n" + "="*80)
        print("BOND ENERGY ATTRIBUTE CLUSTERING")
        print("="*80)
        print(f"\nInput path: {input_path}")
        print(f"Output directory: {output_dir}")

    # -------------------------------------------------------------------------
    # Step 1: Load Affinity Matrix
    # -------------------------------------------------------------------------
    if verbose:
        print("\n" + "─"*80)
        print("STEP 1: Loading Affinity Matrix")
        print("─"*80)

    try:
        values, names = load_affinity_matrix(input_path, fmt=args.format)
    except (OSError, ValueError) as e:
        print(f"ERROR: could not load {input_path}: {e}", file=sys.stderr)
        return 1

    if verbose:
        print(f"✓ Loaded {values.shape[0]}x{values.shape[1]} affinity matrix")

    # -------------------------------------------------------------------------
    # Step 2: Bond Energy Clustering
    # -------------------------------------------------------------------------
    if verbose:
        print("\n" + "─"*80)
        print("STEP 2: Running Bond Energy Algorithm")
        print("─"*80)

    clusterer = BondEnergyClusterer(verbose=verbose, show_progress=args.progress)
    try:
        result = clusterer.fit(values, attribute_names=names)
    except ValueError as e:
        print(f"ERROR: invalid affinity matrix: {e}", file=sys.stderr)
        return 1

    if verbose:
        clusterer.print_summary()

    # -------------------------------------------------------------------------
    # Step 3: Save Results
    # -------------------------------------------------------------------------
    if verbose:
        print("\n" + "─"*80)
        print("STEP 3: Saving Results")
        print("─"*80)

    heatmap_path = None
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        result_json_path = output_dir / 'bea_result.json'
        clusterer.save_result(result_json_path)

        matrix_csv_path = save_clustered_csv(result, output_dir / 'clustered_matrix.csv')
        if verbose:
            print(f"✓ Saved clustered matrix to {matrix_csv_path}")

        if args.visualize:
            heatmap_path = output_dir / 'affinity_heatmap.png'
            clusterer.visualize(save_path=heatmap_path)
    except OSError as e:
        print(f"ERROR: could not write results to {output_dir}: {e}", file=sys.stderr)
        return 1

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------
    print()
    print(format_matrix(result.clustered, result.order, names))

    if verbose:
        print(f"\n📁 Output files:")
        print(f"  - Clustering result: {result_json_path}")
        print(f"  - Clustered matrix: {matrix_csv_path}")
        if heatmap_path is not None:
            print(f"  - Heatmap: {heatmap_path}")

        print("\n✅ Clustering completed successfully!")
        print("="*80 + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
