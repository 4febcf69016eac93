"""
I/O utilities for the genetic MKP search.

Handles run output: YAML result summaries, best-value history CSVs and
output folder management.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import yaml

from mkp.statistics import ResultSummary


def save_summary(
    summary: ResultSummary,
    output_path: Union[str, Path],
    overwrite: bool = False,
    metadata: Optional[Dict[str, Any]] = None
) -> Path:
    """
    Save a result summary to a YAML file.

    Args:
        summary: Result of a search run
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file
        metadata: Extra entries written under 'run' (instance, settings, seed)

    Returns:
        Path to saved summary

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Summary file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = {
        'result': summary.to_dict(),
        'run': dict(metadata or {}),
    }
    document['run']['saved_at'] = datetime.now().isoformat()

    with open(output_path, 'w') as f:
        yaml.dump(document, f, default_flow_style=False, sort_keys=False)

    return output_path


def save_history_csv(
    history: Sequence[int],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save the best-ever value trace to CSV.

    Row 0 is the seeded population, row i the state after generation i.

    Args:
        history: Best-ever value per generation
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"History file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['iteration', 'best_value'])
        for iteration, value in enumerate(history):
            writer.writerow([iteration, value])

    return output_path


def prepare_output_root(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output directory for a run.

    Raises:
        FileExistsError: If the directory exists and overwrite=False
    """
    root = Path(root)

    if root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    root.mkdir(parents=True, exist_ok=overwrite)
    return root
