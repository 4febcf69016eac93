#!/usr/bin/env python3
"""
Run the genetic MKP search from a YAML run file.

The run file names the instance and holds the search, mutation and output
sections (see mkp_ga/cli.py for the layout).

Usage:
    python3 ga_cli.py config.yaml
    python3 ga_cli.py config.yaml --instance instances/other.txt
    python3 ga_cli.py config.yaml --check
"""

import sys
import argparse
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mkp_ga.cli import run_from_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Genetic MKP search driven by a YAML run file"
    )
    parser.add_argument("run_file", nargs="?", help="YAML run file")
    parser.add_argument("--config", dest="config_option", metavar="YAML",
                        help="YAML run file (alternative to the positional argument)")
    parser.add_argument("--instance", metavar="FILE",
                        help="Instance file replacing the run file's 'instance' entry")
    parser.add_argument("--check", action="store_true",
                        help="Validate the run file and parse the instance without searching")
    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    run_file = args.config_option or args.run_file
    if run_file is None:
        parser.print_help()
        sys.exit(1)

    try:
        run_from_config(run_file, instance=args.instance, check_only=args.check)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
