"""
Unit tests for result statistics, reporting and search settings
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from types import SimpleNamespace

import numpy as np

from mkp.knapsack import Knapsack
from mkp.statistics import (
    ResultSummary,
    InternalConsistencyError,
    collect_statistics,
    format_report,
)
from mkp.config_loader import (
    SearchSettings,
    ConfigurationError,
    load_config,
    settings_from_config,
    validate_config,
    print_config_summary,
)


def selection(*flags):
    return SimpleNamespace(items=np.array(flags, dtype=bool))


class TestCollectStatistics(unittest.TestCase):
    """Test the statistics collector"""

    def setUp(self):
        self.knapsack = Knapsack.from_lists(
            [6, 5, 4], [[5, 4, 3], [1, 2, 2]], [10, 8], known_optimum=11
        )

    def test_feasible_selection(self):
        summary = collect_statistics(self.knapsack, selection(False, True, True),
                                     iterations=3, duration=0.5, best_history=[9, 9, 9, 9])
        self.assertEqual(summary.total_profit, 9)
        self.assertEqual(summary.picked_items, [2, 3])
        self.assertEqual(summary.utilization, ["70.00%", "50.00%"])
        self.assertAlmostEqual(summary.utilization_ratios[0], 0.7)
        self.assertEqual(summary.iterations, 3)
        self.assertEqual(summary.best_history, [9, 9, 9, 9])
        self.assertEqual(summary.known_optimum, 11)

    def test_empty_selection(self):
        summary = collect_statistics(self.knapsack, selection(False, False, False))
        self.assertEqual(summary.total_profit, 0)
        self.assertEqual(summary.picked_items, [])
        self.assertEqual(summary.utilization, ["0.00%", "0.00%"])

    def test_full_utilization(self):
        knapsack = Knapsack.from_lists([1, 1], [[4, 6]], [10])
        summary = collect_statistics(knapsack, selection(True, True))
        self.assertEqual(summary.utilization, ["100.00%"])

    def test_capacity_violation_is_fatal(self):
        with self.assertRaises(InternalConsistencyError) as ctx:
            collect_statistics(self.knapsack, selection(True, True, True))
        self.assertIn("Violated knapsack capacity", str(ctx.exception))

    def test_zero_capacity_dimension(self):
        knapsack = Knapsack.from_lists([3], [[0]], [0])
        summary = collect_statistics(knapsack, selection(True))
        self.assertEqual(summary.utilization, ["0.00%"])
        self.assertEqual(summary.total_profit, 3)

    def test_optimum_gap(self):
        summary = collect_statistics(self.knapsack, selection(False, True, True))
        self.assertAlmostEqual(summary.optimum_gap, 2 / 11)
        self.assertIsNone(ResultSummary(total_profit=5).optimum_gap)


class TestReport(unittest.TestCase):
    """Test report formatting"""

    def test_report_contents(self):
        summary = ResultSummary(
            total_profit=42,
            picked_items=[1, 4],
            utilization=["50.00%", "99.10%"],
            utilization_ratios=[0.5, 0.991],
            iterations=7,
            duration=1.25,
        )
        report = format_report(summary, title="GA")
        self.assertIn("GA RESULT", report)
        self.assertIn("Total profit: 42", report)
        self.assertIn("[1, 4]", report)
        self.assertIn("50.00% 99.10%", report)
        self.assertIn("1 s 250000000 ns", report)
        self.assertNotIn("Known optimum", report)

    def test_report_with_optimum(self):
        summary = ResultSummary(total_profit=9, known_optimum=10)
        self.assertIn("gap 10.00%", format_report(summary))

    def test_to_dict(self):
        summary = ResultSummary(total_profit=9, picked_items=[2, 3],
                                utilization=["90.00%"], utilization_ratios=[0.9])
        data = summary.to_dict()
        self.assertEqual(data['total_profit'], 9)
        self.assertEqual(data['picked_count'], 2)
        self.assertEqual(data['utilization'], ["90.00%"])


class TestSearchSettings(unittest.TestCase):
    """Test settings loading and validation"""

    def test_defaults(self):
        settings = settings_from_config({})
        self.assertEqual(settings.population_size, 100)
        self.assertEqual(settings.selection_count, 25)
        self.assertEqual(settings.iterations, 50)
        self.assertEqual(settings.tournament_size, 16)
        self.assertEqual(settings.selector, 'tournament')

    def test_search_section(self):
        config = {
            'search': {'population_size': 40, 'selection_count': 10, 'random_seed': 7},
            'mutation': {'first_flip_probability': 0.5},
        }
        settings = settings_from_config(config)
        self.assertEqual(settings.population_size, 40)
        self.assertEqual(settings.random_seed, 7)
        self.assertEqual(settings.mutation_config()['mutation']['first_flip_probability'], 0.5)

    def test_overrides_take_precedence(self):
        config = {'search': {'population_size': 40}}
        settings = settings_from_config(config, population_size=60, iterations=None)
        self.assertEqual(settings.population_size, 60)
        self.assertEqual(settings.iterations, 50)

    def test_random_seed_keyword(self):
        settings = settings_from_config({'search': {'random_seed': 'random'}})
        self.assertIsNone(settings.random_seed)
        settings = settings_from_config({'search': {'random_seed': '12'}})
        self.assertEqual(settings.random_seed, 12)

    def test_unknown_key(self):
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'populaton_size': 10}})

    def test_degenerate_settings(self):
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'population_size': 1}})
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'selection_count': 0}})
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'population_size': 10, 'selection_count': 11,
                                             'tournament_size': 5}})
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'iterations': -1}})
        with self.assertRaises(ConfigurationError):
            settings_from_config({'mutation': {'second_flip_probability': 1.5}})

    def test_tournament_larger_than_population(self):
        with self.assertRaises(ConfigurationError):
            settings_from_config({'search': {'population_size': 10, 'selection_count': 5}})
        # the maximize selector has no tournament
        settings = settings_from_config({'search': {'population_size': 10, 'selection_count': 5,
                                                    'selector': 'maximize'}})
        self.assertEqual(settings.selector, 'maximize')

    def test_validate_config_lists_issues(self):
        issues = validate_config({'search': {'population_size': 1, 'replacement': 'oldest'}})
        self.assertGreaterEqual(len(issues), 2)
        self.assertEqual(validate_config({}), [])

    def test_load_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text("search:\n  iterations: 5\n")
            config = load_config(str(path))
            path.write_text("")
            empty = load_config(str(path))
        self.assertEqual(config['search']['iterations'], 5)
        self.assertEqual(empty, {})

    def test_load_config_errors(self):
        with self.assertRaises(ConfigurationError):
            load_config("/nonexistent/config.yaml")
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text("- just\n- a list\n")
            with self.assertRaises(ConfigurationError):
                load_config(str(path))

    def test_print_config_summary(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text("instance: a.txt\nsearch:\n  population_size: 1\n")
            buffer = io.StringIO()
            with redirect_stdout(buffer):
                print_config_summary(str(path))
        output = buffer.getvalue()
        self.assertIn("Instance: a.txt", output)
        self.assertIn("Validation Issues", output)

    def test_to_dict(self):
        self.assertEqual(SearchSettings().to_dict()['replacement'], 'random')


if __name__ == '__main__':
    unittest.main()
