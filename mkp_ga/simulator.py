"""
Generational search loop for the genetic MKP solver.

The Simulator owns a fixed-size population and advances it one generation
per step: select parents, cross and mutate them into children (mutation
repairs, so children are feasible), then make room for the children by
removing the same number of members. run_search wraps seeding, the step
loop, best-ever tracking and statistics collection.
"""

import time
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from mkp.knapsack import Knapsack
from mkp.statistics import ResultSummary, collect_statistics
from .crossover import crossover_statistics
from .data_models import Chromosome
from .mutation import mutation_statistics
from .repair import greedy_chromosome
from .selection import (
    DEFAULT_TOURNAMENT_SIZE,
    SelectionConfigError,
    Selector,
    TournamentSelector,
)

REPLACEMENT_POLICIES = ('random', 'worst')


class Simulator:
    """
    Sequential generational simulator.

    Attributes:
        population: Current population (modified in place by step())
        selector: Parent selection strategy
        rng: Random number generator shared by every operator
        replacement: "random" kills random members to make room for
            children, "worst" kills the least fit ones
        config: GA configuration passed to mutate()
        iterations: Steps executed so far
        step_stats: Counts from the last step (children, infeasible
            crossovers before repair, positions changed by mutation)
    """

    def __init__(
        self,
        population: List[Chromosome],
        selector: Selector,
        rng: np.random.Generator,
        replacement: str = 'random',
        config: Optional[Dict] = None
    ):
        if len(population) < 2:
            raise SelectionConfigError(
                f"Population needs at least 2 chromosomes, got {len(population)}"
            )
        if replacement not in REPLACEMENT_POLICIES:
            raise ValueError(
                f"Unknown replacement policy: '{replacement}'. "
                f"Must be one of {REPLACEMENT_POLICIES}"
            )
        selector.validate(len(population))

        self.population = population
        self.selector = selector
        self.rng = rng
        self.replacement = replacement
        self.config = config or {}
        self.iterations = 0
        self.step_stats = {'children': 0, 'infeasible_crossovers': 0, 'positions_mutated': 0}
        self._elapsed = 0.0

    def step(self) -> None:
        """Advance the population by one generation."""
        started = time.time()

        parents = self.selector.select(self.population, self.rng)
        children = []
        stats = {'children': 0, 'infeasible_crossovers': 0, 'positions_mutated': 0}

        for a, b in pair_parents(parents):
            parent_a, parent_b = self.population[a], self.population[b]
            child = parent_a.crossover(parent_b, self.rng)
            if not crossover_statistics(child, parent_a, parent_b)['child_feasible']:
                stats['infeasible_crossovers'] += 1

            mutated = child.mutate(self.rng, self.config)
            stats['positions_mutated'] += mutation_statistics(child, mutated)['positions_changed']
            children.append(mutated)

        stats['children'] = len(children)

        self._kill_off(len(children))
        self.population.extend(children)

        self.step_stats = stats
        self.iterations += 1
        self._elapsed += time.time() - started

    def get(self) -> Chromosome:
        """Fittest member of the current population (first on ties)."""
        best = self.population[0]
        best_fitness = best.fitness()
        for chromosome in self.population[1:]:
            fitness = chromosome.fitness()
            if fitness > best_fitness:
                best, best_fitness = chromosome, fitness
        return best

    def elapsed(self) -> float:
        """Seconds spent inside step()."""
        return self._elapsed

    def _kill_off(self, count: int) -> None:
        if self.replacement == 'worst':
            fitness = [chromosome.fitness() for chromosome in self.population]
            order = sorted(range(len(self.population)), key=lambda i: fitness[i])
            doomed = set(order[:count])
            self.population[:] = [
                chromosome for i, chromosome in enumerate(self.population)
                if i not in doomed
            ]
        else:
            for _ in range(count):
                index = int(self.rng.integers(0, len(self.population)))
                # swap-remove
                self.population[index] = self.population[-1]
                self.population.pop()


def pair_parents(parents: Sequence[int]) -> List[Tuple[int, int]]:
    """
    Pair consecutive selected parents for crossover.

    An odd last parent is paired with the first one, so a single selected
    parent is crossed with itself.
    """
    pairs = [(parents[i], parents[i + 1]) for i in range(0, len(parents) - 1, 2)]
    if len(parents) % 2:
        pairs.append((parents[-1], parents[0]))
    return pairs


def generate_population(
    knapsack: Knapsack,
    population_size: int,
    rng: np.random.Generator
) -> List[Chromosome]:
    """
    Seed a population.

    Slot 0 holds the greedy chromosome, the remaining slots independent
    random feasible chromosomes.

    Args:
        knapsack: Problem instance
        population_size: Number of chromosomes
        rng: Random number generator

    Returns:
        List of feasible chromosomes
    """
    population = [greedy_chromosome(knapsack)]

    for _ in range(population_size - 1):
        population.append(Chromosome.random(knapsack, rng))

    return population


def run_search(
    knapsack: Knapsack,
    population_size: int,
    selection_count: int,
    iterations: int,
    *,
    tournament_size: int = DEFAULT_TOURNAMENT_SIZE,
    selector: Optional[Selector] = None,
    replacement: str = 'random',
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    config: Optional[Dict] = None,
    verbose: bool = False
) -> ResultSummary:
    """
    Run the genetic search on an instance.

    Algorithm:
        1. Validate the configuration (before any search work)
        2. Seed the population: greedy chromosome + random chromosomes
        3. best-ever = greedy chromosome
        4. Repeat `iterations` times:
           a. Simulator.step()
           b. If the population's fittest chromosome has a strictly larger
              total value than best-ever, it becomes best-ever
        5. Collect statistics from best-ever

    Args:
        knapsack: Problem instance
        population_size: Population size (>= 2)
        selection_count: Parents selected per generation (1..population_size)
        iterations: Number of generations (>= 0)
        tournament_size: Tournament sample size (ignored if selector given)
        selector: Custom selection strategy
        replacement: "random" or "worst"
        seed: Seed for a fresh generator (ignored if rng given)
        rng: Random number generator
        config: GA configuration passed to mutate()
        verbose: Print progress

    Returns:
        ResultSummary of the best chromosome found

    Raises:
        SelectionConfigError: If population, selection or tournament sizes
            are inconsistent
        ValueError: If iterations is negative
        InternalConsistencyError: If the best chromosome violates a capacity
    """
    if population_size < 2:
        raise SelectionConfigError(f"Population size must be >= 2, got {population_size}")
    if not 1 <= selection_count <= population_size:
        raise SelectionConfigError(
            f"Selection count must be within 1..{population_size}, got {selection_count}"
        )
    if iterations < 0:
        raise ValueError(f"Iterations must be >= 0, got {iterations}")
    if replacement not in REPLACEMENT_POLICIES:
        raise ValueError(
            f"Unknown replacement policy: '{replacement}'. "
            f"Must be one of {REPLACEMENT_POLICIES}"
        )

    if selector is None:
        selector = TournamentSelector(selection_count, tournament_size)
    selector.validate(population_size)

    if rng is None:
        rng = np.random.default_rng(seed)

    population = generate_population(knapsack, population_size, rng)
    best = population[0].copy()
    best_value = best.total_value()
    history = [best_value]

    simulator = Simulator(population, selector, rng, replacement=replacement, config=config)

    if verbose:
        print(f"Seeded {population_size} chromosomes, greedy value: {best_value}")
        print(f"Running {iterations} generations...")

    for i in range(iterations):
        simulator.step()

        chromosome = simulator.get()
        value = chromosome.total_value()
        if value > best_value:
            best, best_value = chromosome.copy(), value

        history.append(best_value)

        if verbose and ((i + 1) % 10 == 0 or i == iterations - 1):
            stats = simulator.step_stats
            print(f"  Progress: {i + 1}/{iterations} generations, best value: {best_value} "
                  f"(children: {stats['children']}, "
                  f"infeasible crossovers: {stats['infeasible_crossovers']}, "
                  f"positions mutated: {stats['positions_mutated']})")

    return collect_statistics(
        knapsack,
        best,
        iterations=simulator.iterations,
        duration=simulator.elapsed(),
        best_history=history,
    )
