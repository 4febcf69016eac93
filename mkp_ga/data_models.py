"""
Data models for the genetic MKP search.

A Chromosome is a boolean selection vector over the items of one Knapsack.
Every chromosome of a run borrows the same Knapsack; copies duplicate the
selection vector only.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from mkp.knapsack import Knapsack

# Fitness of an infeasible chromosome: the smallest representable value
INFEASIBLE_FITNESS = int(np.iinfo(np.int64).min)


@dataclass(eq=False)
class Chromosome:
    """
    One candidate solution (individual in the GA population).

    Attributes:
        items: Boolean selection vector, one entry per knapsack item
        knapsack: Shared problem instance (never copied)
        metadata: Operation notes (mutation_ops, repair_notes, origin)
    """
    items: np.ndarray
    knapsack: Knapsack
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize the selection vector and check its length."""
        self.items = np.asarray(self.items, dtype=bool)
        if self.items.shape != (len(self.knapsack),):
            raise ValueError(
                f"Selection vector has shape {self.items.shape}, "
                f"expected ({len(self.knapsack)},)"
            )

    @classmethod
    def empty(cls, knapsack: Knapsack) -> "Chromosome":
        """Chromosome with no item selected."""
        return cls(items=np.zeros(len(knapsack), dtype=bool), knapsack=knapsack)

    @classmethod
    def random(cls, knapsack: Knapsack, rng: np.random.Generator) -> "Chromosome":
        """Random feasible chromosome built by generate()."""
        chromosome = cls.empty(knapsack)
        chromosome.generate(rng)
        chromosome.metadata['origin'] = 'random'
        return chromosome

    def copy(self) -> "Chromosome":
        """
        Copy the selection vector and metadata.

        The knapsack reference is shared, not duplicated.
        """
        return Chromosome(
            items=self.items.copy(),
            knapsack=self.knapsack,
            metadata={
                key: list(value) if isinstance(value, list) else value
                for key, value in self.metadata.items()
            }
        )

    def generate(self, rng: np.random.Generator) -> None:
        """
        Randomly add items until a drawn item does not fit.

        Draws a uniform random item index; selects it if it fits against the
        accumulated selection, and stops at the first item that doesn't. The
        result is feasible and its size is itself random. Stops early if
        every item ends up selected.

        Args:
            rng: Random number generator
        """
        while not self.items.all():
            index = int(rng.integers(0, len(self.items)))
            if not self.knapsack.will_fit(self, self.knapsack.items[index]):
                break
            self.items[index] = True

    def fitness(self) -> int:
        """Total value, or INFEASIBLE_FITNESS if any capacity is exceeded."""
        if not self.knapsack.is_feasible(self):
            return INFEASIBLE_FITNESS
        return self.knapsack.total_value(self)

    def total_value(self) -> int:
        return self.knapsack.total_value(self)

    def is_feasible(self) -> bool:
        return self.knapsack.is_feasible(self)

    def crossover(self, other: "Chromosome", rng: np.random.Generator) -> "Chromosome":
        """Uniform crossover with another chromosome (child is not repaired)."""
        from .crossover import uniform_crossover
        return uniform_crossover(self, other, rng)

    def mutate(
        self,
        rng: np.random.Generator,
        config: Optional[Dict] = None
    ) -> "Chromosome":
        """Point-mutated and repaired copy of this chromosome."""
        from .mutation import mutate
        return mutate(self, rng, config)

    def selected_ids(self) -> List[int]:
        """Ids of selected items, ascending."""
        return [int(index) + 1 for index in np.flatnonzero(self.items)]

    def selected_count(self) -> int:
        return int(self.items.sum())
