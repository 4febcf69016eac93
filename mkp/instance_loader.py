"""
Instance file loading.

Parses the whitespace-delimited integer format used by the OR-Library
style MKP benchmark files:

    n m q opt             header (m required, the rest informational)
    v_1 ... v_n           objective coefficients
    w_11 ... w_1n         one line per dimension (m lines)
    ...
    c_1 ... c_m           capacities

Blank lines are ignored.
"""

from pathlib import Path
from typing import List, Union

from .knapsack import InstanceError, Knapsack


class InstanceFormatError(ValueError):
    """Raised when an instance file does not follow the expected layout."""
    pass


def load_instance(path: Union[str, Path]) -> Knapsack:
    """
    Load an MKP instance file into a Knapsack.

    Args:
        path: Path to the instance text file

    Returns:
        Knapsack built from the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        InstanceFormatError: If the file is malformed
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Instance file not found: {path}")

    with open(path, 'r') as f:
        text = f.read()

    return parse_instance(text, source=str(path))


def parse_instance(text: str, source: str = "<string>") -> Knapsack:
    """
    Parse instance text into a Knapsack.

    Args:
        text: Instance file contents
        source: Name used in error messages

    Returns:
        Knapsack built from the text

    Raises:
        InstanceFormatError: On non-integer tokens, missing or extra lines,
            or inconsistent lengths
    """
    rows: List[List[int]] = []
    line_numbers: List[int] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            rows.append([int(token) for token in tokens])
        except ValueError as e:
            raise InstanceFormatError(
                f"{source}:{line_number}: non-integer token ({e})"
            ) from e
        line_numbers.append(line_number)

    if not rows:
        raise InstanceFormatError(f"{source}: file is empty")

    header = rows[0]
    if len(header) < 2:
        raise InstanceFormatError(
            f"{source}:{line_numbers[0]}: header must hold at least 'n m', got {header}"
        )

    declared_items, dimensions = header[0], header[1]
    if dimensions <= 0:
        raise InstanceFormatError(
            f"{source}:{line_numbers[0]}: dimension count must be positive, got {dimensions}"
        )

    expected_rows = dimensions + 3
    if len(rows) < expected_rows:
        raise InstanceFormatError(
            f"{source}: expected {expected_rows} non-empty lines "
            f"(header, values, {dimensions} weight lines, capacities), got {len(rows)}"
        )
    if len(rows) > expected_rows:
        raise InstanceFormatError(
            f"{source}:{line_numbers[expected_rows]}: unexpected trailing data"
        )

    values = rows[1]
    weights = rows[2:2 + dimensions]
    capacity = rows[2 + dimensions]

    for offset, row in enumerate(weights):
        if len(row) != len(values):
            raise InstanceFormatError(
                f"{source}:{line_numbers[2 + offset]}: weight line has {len(row)} entries, "
                f"expected {len(values)} (one per item)"
            )

    if len(capacity) != dimensions:
        raise InstanceFormatError(
            f"{source}:{line_numbers[-1]}: capacity line has {len(capacity)} entries, "
            f"expected {dimensions}"
        )

    known_optimum = header[3] if len(header) > 3 and header[3] > 0 else None

    try:
        return Knapsack.from_lists(
            values,
            weights,
            capacity,
            declared_items=declared_items,
            known_optimum=known_optimum,
        )
    except InstanceError as e:
        raise InstanceFormatError(f"{source}: {e}") from e
