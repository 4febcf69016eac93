"""
Tests for chromosome repair and greedy construction.
"""

import unittest
import numpy as np

from mkp.knapsack import Knapsack
from mkp_ga.data_models import Chromosome
from mkp_ga.repair import repair_chromosome, greedy_chromosome


class TestRepair(unittest.TestCase):
    """Test repair of infeasible chromosomes."""

    def setUp(self):
        """Set up a small single-dimension instance."""
        self.knapsack = Knapsack.from_lists([6, 5, 4], [[5, 4, 3]], [10])
        self.rng = np.random.default_rng(42)

    def test_repair_drops_lowest_density(self):
        """Test that repair removes the worst item of an overfull selection."""
        chromosome = Chromosome(items=[True, True, True], knapsack=self.knapsack)
        repaired = repair_chromosome(chromosome)

        self.assertIs(repaired, chromosome)
        self.assertTrue(repaired.is_feasible())
        # overdrawn capacity ranks item 3 last
        self.assertEqual(repaired.selected_ids(), [1, 2])
        self.assertEqual(repaired.metadata['repair_notes'], ["repair: dropped items [3]"])

    def test_repair_feasible_is_noop(self):
        """Test that a feasible chromosome is left untouched."""
        chromosome = Chromosome(items=[True, False, True], knapsack=self.knapsack)
        repair_chromosome(chromosome)

        self.assertEqual(chromosome.selected_ids(), [1, 3])
        self.assertNotIn('repair_notes', chromosome.metadata)

    def test_repair_empty(self):
        """Test that the empty selection needs no repair."""
        chromosome = Chromosome.empty(self.knapsack)
        repair_chromosome(chromosome)
        self.assertEqual(chromosome.selected_count(), 0)

    def test_repair_result_is_subset(self):
        """Test repair only deselects, over many random selections."""
        knapsack = Knapsack.from_lists(
            [10, 7, 3, 8, 12, 5, 1, 9],
            [[4, 3, 2, 5, 6, 1, 1, 4], [2, 5, 1, 3, 2, 4, 2, 3]],
            [12, 10]
        )
        for _ in range(50):
            items = self.rng.random(len(knapsack)) < 0.7
            chromosome = Chromosome(items=items.copy(), knapsack=knapsack)
            repair_chromosome(chromosome)

            self.assertTrue(chromosome.is_feasible())
            self.assertFalse(np.any(chromosome.items & ~items))

    def test_repair_item_heavier_than_capacity(self):
        """Test that an item that can never fit is dropped."""
        knapsack = Knapsack.from_lists([100, 1], [[20, 1]], [10])
        chromosome = Chromosome(items=[True, True], knapsack=knapsack)
        repair_chromosome(chromosome)

        self.assertEqual(chromosome.selected_ids(), [2])


class TestGreedy(unittest.TestCase):
    """Test greedy construction."""

    def test_greedy_small_instance(self):
        """Test the documented three-item scenario."""
        knapsack = Knapsack.from_lists([6, 5, 4], [[5, 4, 3]], [10])
        chromosome = greedy_chromosome(knapsack)

        self.assertEqual(chromosome.selected_ids(), [2, 3])
        self.assertEqual(chromosome.fitness(), 9)
        self.assertEqual(chromosome.metadata['origin'], 'greedy')

    def test_greedy_stops_at_first_misfit(self):
        """Test that greedy stops even if lower-ranked items would fit."""
        # item 1 ranks best and fits, item 2 ranks next but does not fit,
        # item 3 would fit but is never tried
        knapsack = Knapsack.from_lists([10, 9, 1], [[2, 9, 4]], [10])
        chromosome = greedy_chromosome(knapsack)

        self.assertEqual(chromosome.selected_ids(), [1])

    def test_greedy_selects_everything_that_fits(self):
        """Test that greedy terminates when all items are selected."""
        knapsack = Knapsack.from_lists([1, 2, 3], [[1, 1, 1]], [100])
        chromosome = greedy_chromosome(knapsack)

        self.assertEqual(chromosome.selected_ids(), [1, 2, 3])

    def test_greedy_is_feasible_multi_dimension(self):
        """Test greedy feasibility on a two-dimension instance."""
        knapsack = Knapsack.from_lists(
            [10, 7, 3, 8, 12, 5, 1, 9],
            [[4, 3, 2, 5, 6, 1, 1, 4], [2, 5, 1, 3, 2, 4, 2, 3]],
            [12, 10]
        )
        chromosome = greedy_chromosome(knapsack)

        self.assertTrue(chromosome.is_feasible())
        self.assertGreater(chromosome.total_value(), 0)

    def test_greedy_empty_instance(self):
        """Test greedy on an instance without items."""
        knapsack = Knapsack.from_lists([], [[]], [5])
        chromosome = greedy_chromosome(knapsack)

        self.assertEqual(chromosome.selected_count(), 0)
        self.assertEqual(chromosome.fitness(), 0)


if __name__ == '__main__':
    unittest.main()
