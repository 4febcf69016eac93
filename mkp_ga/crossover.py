"""
Crossover operators for the genetic MKP search.
"""

from typing import Dict

import numpy as np

from .data_models import Chromosome


def uniform_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator
) -> Chromosome:
    """
    Combine two parents with uniform crossover.

    Positions where the parents agree are copied unchanged; every position
    where they disagree is decided by a fair coin flip.

    Args:
        parent_a: First parent
        parent_b: Second parent (same knapsack)
        rng: Random number generator

    Returns:
        Child chromosome

    Note:
        The child is not repaired and may be infeasible; mutate() repairs.
    """
    if parent_a.knapsack is not parent_b.knapsack:
        raise ValueError("Cannot cross chromosomes of different knapsacks")

    child = parent_a.copy()
    child.metadata = {'origin': 'crossover'}

    disagree = parent_a.items != parent_b.items
    child.items[disagree] = rng.random(int(disagree.sum())) < 0.5

    return child


def crossover_statistics(child: Chromosome, parent_a: Chromosome, parent_b: Chromosome) -> Dict:
    """
    Calculate statistics about a crossover.

    Args:
        child: Child chromosome
        parent_a: First parent
        parent_b: Second parent

    Returns:
        Dictionary with crossover statistics
    """
    disagree = parent_a.items != parent_b.items

    return {
        'differing_positions': int(disagree.sum()),
        'from_parent_a': int((disagree & (child.items == parent_a.items)).sum()),
        'from_parent_b': int((disagree & (child.items == parent_b.items)).sum()),
        'child_selected': child.selected_count(),
        'child_feasible': child.is_feasible(),
    }
