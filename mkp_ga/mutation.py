"""
Mutation operators for the genetic MKP search.

Implements occasional point mutation followed by unconditional repair, so
every mutated chromosome is feasible.
"""

from typing import Dict, List, Optional

import numpy as np

from .data_models import Chromosome
from .repair import repair_chromosome

FIRST_FLIP_PROBABILITY = 1 / 8
SECOND_FLIP_PROBABILITY = 1 / 16


def flip_random_bit(
    chromosome: Chromosome,
    rng: np.random.Generator
) -> List[str]:
    """
    Invert one uniformly chosen position of the selection vector.

    Args:
        chromosome: Chromosome to modify in place
        rng: Random number generator

    Returns:
        Operation log
    """
    if len(chromosome.items) == 0:
        return ["flip: empty chromosome"]

    index = int(rng.integers(0, len(chromosome.items)))
    chromosome.items[index] = not chromosome.items[index]
    state = "selected" if chromosome.items[index] else "dropped"
    return [f"flip: item {index + 1} {state}"]


def mutate(
    chromosome: Chromosome,
    rng: np.random.Generator,
    config: Optional[Dict] = None
) -> Chromosome:
    """
    Point-mutate a copy of a chromosome and repair it.

    1. Copy the chromosome
    2. With first_flip_probability flip one random bit
    3. Independently, with second_flip_probability flip another
    4. Repair, so the result is always feasible

    Args:
        chromosome: Chromosome to mutate (left unchanged)
        rng: Random number generator
        config: GA configuration; reads config['mutation'] probabilities

    Returns:
        Mutated, feasible chromosome. Applied flips are listed in
        metadata['mutation_ops'].
    """
    mutation_config = (config or {}).get('mutation', {})
    first_probability = mutation_config.get('first_flip_probability', FIRST_FLIP_PROBABILITY)
    second_probability = mutation_config.get('second_flip_probability', SECOND_FLIP_PROBABILITY)

    mutated = chromosome.copy()
    ops: List[str] = []

    # occasional 1st mutation
    if rng.random() < first_probability:
        ops.extend(flip_random_bit(mutated, rng))

    # occasional 2nd mutation
    if rng.random() < second_probability:
        ops.extend(flip_random_bit(mutated, rng))

    mutated.metadata['mutation_ops'] = ops or ["no_mutation: skipped (probability)"]

    return repair_chromosome(mutated)


def mutation_statistics(original: Chromosome, mutated: Chromosome) -> Dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Chromosome before mutation
        mutated: Chromosome after mutation and repair

    Returns:
        Dictionary with mutation statistics
    """
    changed = original.items != mutated.items

    return {
        'positions_changed': int(changed.sum()),
        'items_added': int((changed & mutated.items).sum()),
        'items_dropped': int((changed & original.items).sum()),
        'value_delta': mutated.total_value() - original.total_value(),
    }
