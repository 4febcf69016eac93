#!/usr/bin/env python3
"""
Genetic MKP - Simple genetic algorithm for the multidimensional knapsack problem

Main entry point. Loads an instance file, runs the genetic search and
prints the result report.

Usage:
    python main.py -i instances/sample_10x2.txt -p 100 -s 25 -n 50
    python main.py -i instance.txt --config config.yaml --plot
    python main.py --config config.yaml --show-config
"""

import sys
import argparse
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from mkp.config_loader import load_config, print_config_summary, settings_from_config
from mkp.instance_loader import load_instance
from mkp.statistics import print_report
from mkp_ga.io_utils import save_history_csv, save_summary
from mkp_ga.selection import create_selector
from mkp_ga.simulator import run_search


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simple genetic algorithm for multidimensional knapsack problem (MKP)"
    )
    parser.add_argument("-i", "--input", default="input.txt", metavar="FILE",
                        help="Instance file (default: input.txt)")
    parser.add_argument("-p", "--population", type=int, metavar="NUMBER",
                        help="Population size (default: 100)")
    parser.add_argument("-s", "--selection", type=int, metavar="NUMBER",
                        help="Number of parents selected per generation (default: 25)")
    parser.add_argument("-n", "--iterations", type=int, metavar="NUMBER",
                        help="Number of generations (default: 50)")
    parser.add_argument("--tournament-size", type=int, metavar="NUMBER",
                        help="Tournament sample size (default: 16)")
    parser.add_argument("--selector", choices=["tournament", "maximize"],
                        help="Parent selection strategy (default: tournament)")
    parser.add_argument("--replacement", choices=["random", "worst"],
                        help="Which members make room for children (default: random)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--config", metavar="YAML",
                        help="YAML configuration file with search/mutation sections")
    parser.add_argument("--output", metavar="DIR",
                        help="Directory for summary.yaml and history.csv")
    parser.add_argument("--plot", action="store_true",
                        help="Save a convergence/utilization plot (requires --output)")
    parser.add_argument("--verbose", action="store_true", help="Print progress")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the --config summary and validation issues, then exit")
    return parser


def main():
    """Main entry point with command line interface"""
    args = build_parser().parse_args()

    if args.show_config:
        if not args.config:
            print("Error: --show-config requires --config")
            sys.exit(1)
        print_config_summary(args.config)
        return

    try:
        config = load_config(args.config) if args.config else {}
        settings = settings_from_config(
            config,
            population_size=args.population,
            selection_count=args.selection,
            iterations=args.iterations,
            tournament_size=args.tournament_size,
            selector=args.selector,
            replacement=args.replacement,
            random_seed=args.seed,
        )

        knapsack = load_instance(args.input)

        selector = create_selector(
            settings.selector, settings.selection_count, settings.tournament_size
        )
        summary = run_search(
            knapsack,
            settings.population_size,
            settings.selection_count,
            settings.iterations,
            selector=selector,
            replacement=settings.replacement,
            seed=settings.random_seed,
            config=settings.mutation_config(),
            verbose=args.verbose,
        )
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print_report(summary, title="GA")

    if args.output:
        output_root = Path(args.output)
        summary_path = save_summary(
            summary,
            output_root / "summary.yaml",
            overwrite=True,
            metadata={"instance": args.input, "settings": settings.to_dict()},
        )
        history_path = save_history_csv(
            summary.best_history, output_root / "history.csv", overwrite=True
        )
        print(f"  ✓ Summary: {summary_path}")
        print(f"  ✓ History: {history_path}")

        if args.plot:
            # Set matplotlib to non-interactive backend to avoid display issues
            import matplotlib
            matplotlib.use('Agg')
            from mkp.visualization import plot_run_summary

            plot_path = output_root / "run_plot.png"
            plot_run_summary(summary, save_path=str(plot_path))
            print(f"  ✓ Plot: {plot_path}")
    elif args.plot:
        print("--plot requires --output; no plot written")


if __name__ == "__main__":
    main()
