"""
Parent selection strategies.

A Selector picks an ordered list of parent indices from a population.
The Simulator pairs consecutive indices for crossover, so selectors only
decide who reproduces, not how.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from .data_models import Chromosome

DEFAULT_TOURNAMENT_SIZE = 16


class SelectionConfigError(ValueError):
    """Raised when a selector cannot work with the given population."""
    pass


class Selector(ABC):
    """Base class for parent selection strategies."""

    def __init__(self, count: int):
        if not isinstance(count, (int, np.integer)) or count < 1:
            raise SelectionConfigError(f"Selection count must be a positive integer, got {count}")
        self.count = int(count)

    def validate(self, population_size: int) -> None:
        """
        Check the selector against a population size.

        Raises:
            SelectionConfigError: If more parents are requested than exist
        """
        if self.count > population_size:
            raise SelectionConfigError(
                f"Selection count ({self.count}) exceeds population size ({population_size})"
            )

    @abstractmethod
    def select(self, population: Sequence[Chromosome], rng: np.random.Generator) -> List[int]:
        """
        Choose parents.

        Args:
            population: Current population
            rng: Random number generator

        Returns:
            Ordered list of population indices
        """


class TournamentSelector(Selector):
    """
    Tournament selection.

    Each of `count` winners is the fittest member of a random sample of
    `tournament_size` distinct individuals. Ties go to the first sampled.
    """

    def __init__(self, count: int, tournament_size: int = DEFAULT_TOURNAMENT_SIZE):
        super().__init__(count)
        if not isinstance(tournament_size, (int, np.integer)) or tournament_size < 1:
            raise SelectionConfigError(
                f"Tournament size must be a positive integer, got {tournament_size}"
            )
        self.tournament_size = int(tournament_size)

    def validate(self, population_size: int) -> None:
        super().validate(population_size)
        if self.tournament_size > population_size:
            raise SelectionConfigError(
                f"Tournament size ({self.tournament_size}) exceeds population size ({population_size})"
            )

    def select(self, population: Sequence[Chromosome], rng: np.random.Generator) -> List[int]:
        self.validate(len(population))

        fitness = [chromosome.fitness() for chromosome in population]
        winners = []

        for _ in range(self.count):
            sample = rng.choice(len(population), size=self.tournament_size, replace=False)
            best = int(sample[0])
            for index in sample[1:]:
                if fitness[index] > fitness[best]:
                    best = int(index)
            winners.append(best)

        return winners


class MaximizeSelector(Selector):
    """Selects the `count` fittest individuals (ties keep population order)."""

    def select(self, population: Sequence[Chromosome], rng: np.random.Generator) -> List[int]:
        self.validate(len(population))

        fitness = [chromosome.fitness() for chromosome in population]
        order = sorted(range(len(population)), key=lambda i: fitness[i], reverse=True)
        return order[:self.count]


def create_selector(
    name: str,
    count: int,
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE
) -> Selector:
    """
    Build a selector by name.

    Args:
        name: "tournament" or "maximize"
        count: Number of parents to select per generation
        tournament_size: Sample size for tournament selection

    Raises:
        SelectionConfigError: If the name is unknown
    """
    if name == 'tournament':
        return TournamentSelector(count, tournament_size)
    elif name == 'maximize':
        return MaximizeSelector(count)
    else:
        raise SelectionConfigError(
            f"Unknown selector: '{name}'. Must be 'tournament' or 'maximize'"
        )
