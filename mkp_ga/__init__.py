"""
Genetic search for the multidimensional knapsack problem

Evolves a population of selection vectors toward higher total value while
keeping every member feasible.

Key Features:
- Greedy profit-density seeding plus random feasible chromosomes
- Uniform crossover and occasional point mutation
- Repair that drops the lowest profit-density items until feasible
- Pluggable parent selection (tournament by default)
- Explicit, seedable numpy random generator

Modules:
- data_models: Chromosome (selection vector bound to a Knapsack)
- repair: Repair and greedy construction heuristics
- crossover: Uniform crossover
- mutation: Point mutation followed by repair
- selection: Selector, TournamentSelector, MaximizeSelector
- simulator: Generational loop and run_search entry point
- io_utils: Summary and history export
- cli: Run configuration loading and execution
"""

__version__ = "0.5.2"

from .data_models import Chromosome, INFEASIBLE_FITNESS
from .repair import repair_chromosome, greedy_chromosome
from .selection import Selector, TournamentSelector, MaximizeSelector, SelectionConfigError
from .simulator import Simulator, run_search

__all__ = [
    "Chromosome",
    "INFEASIBLE_FITNESS",
    "repair_chromosome",
    "greedy_chromosome",
    "Selector",
    "TournamentSelector",
    "MaximizeSelector",
    "SelectionConfigError",
    "Simulator",
    "run_search",
]
