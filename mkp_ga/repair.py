"""
Repair and greedy construction for GA chromosomes.

Both heuristics rank items by profit density against the chromosome's
live capacity state (Knapsack.rank_items), re-ranking after every change.
"""

from typing import List

import numpy as np

from mkp.knapsack import Knapsack
from .data_models import Chromosome


def repair_chromosome(chromosome: Chromosome) -> Chromosome:
    """
    Drop items from an infeasible chromosome until it fits.

    Algorithm:
    1. While any capacity is exceeded:
       a. Rank the currently selected items by profit density
       b. Deselect the lowest-ranked one
    2. Record dropped item ids in metadata['repair_notes']

    Never selects an item, so the result is a subset of the input
    selection. Feasible input is returned untouched. Terminates because
    every drop lowers consumption and the empty selection is feasible.

    Args:
        chromosome: Chromosome to repair (modified in place)

    Returns:
        The same chromosome, now feasible
    """
    knapsack = chromosome.knapsack
    dropped: List[int] = []

    while not knapsack.is_feasible(chromosome):
        selected = [knapsack.items[i] for i in np.flatnonzero(chromosome.items)]
        worst = knapsack.rank_items(selected, chromosome)[-1]
        chromosome.items[worst.id - 1] = False
        dropped.append(worst.id)

    if dropped:
        notes = chromosome.metadata.setdefault('repair_notes', [])
        notes.append(f"repair: dropped items {dropped}")

    return chromosome


def greedy_chromosome(knapsack: Knapsack) -> Chromosome:
    """
    Build a chromosome greedily by profit density.

    Starting from the empty selection, repeatedly re-rank every remaining
    item against the partial selection and add the best one. Stops at the
    first best-ranked item that does not fit, even if lower-ranked items
    would, or when no items remain.

    Args:
        knapsack: Problem instance

    Returns:
        Feasible greedy chromosome
    """
    chromosome = Chromosome.empty(knapsack)
    chromosome.metadata['origin'] = 'greedy'
    remaining = list(knapsack.items)

    while remaining:
        best = knapsack.rank_items(remaining, chromosome)[0]
        if not knapsack.will_fit(chromosome, best):
            break
        chromosome.items[best.id - 1] = True
        remaining.remove(best)

    return chromosome
