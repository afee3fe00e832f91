#!/usr/bin/env python3
"""
Command-line fusion of DAG edge lists.

Reads one DAG per CSV file (`tail,head` columns), fuses them under a
tree-width bound and writes the fused edge list and a JSON summary.

Usage:
    dag-fusion dag1.csv dag2.csv dag3.csv --max-treewidth 3 --iterations 200 --output fused.csv
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import load_config
from .core.genetic import fuse_dags
from .structures.edgelist import align_node_sets, read_edge_list, write_edge_list


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Fuse DAGs into one consensus DAG under a tree-width bound')
    parser.add_argument('dags', nargs='+', help='CSV edge lists, one DAG per file')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--max-treewidth', type=int)
    parser.add_argument('--iterations', type=int)
    parser.add_argument('--population', type=int)
    parser.add_argument('--seed', type=int)
    parser.add_argument('--crossover', choices=['tournament', 'roulette'])
    parser.add_argument('--workers', type=int)
    parser.add_argument('--no-parallel', action='store_true',
                        help='Evaluate fitness sequentially')
    parser.add_argument('--output', help='Fused edge list CSV; a .json summary is written beside it')
    parser.add_argument('--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # load_config falls back to defaults, which an explicit path must not do
    if args.config is not None and not Path(args.config).is_file():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        return 1

    settings = load_config(args.config)
    if args.max_treewidth is not None:
        settings.genetic.max_treewidth = args.max_treewidth
    if args.iterations is not None:
        settings.genetic.iterations = args.iterations
    if args.population is not None:
        settings.genetic.population_size = args.population
    if args.seed is not None:
        settings.random_seed = args.seed
    if args.crossover is not None:
        settings.genetic.crossover = args.crossover
    if args.workers is not None:
        settings.evaluation.workers = args.workers
    if args.no_parallel:
        settings.evaluation.parallel = False
    if args.verbose:
        settings.debug.verbose = True

    errors = settings.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.debug.log_level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        dags = align_node_sets([read_edge_list(path) for path in args.dags])
    except (OSError, ValueError) as e:
        print(f"Error reading input DAGs: {e}", file=sys.stderr)
        return 1

    try:
        result = fuse_dags(dags, settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    summary = result.to_dict()
    summary["inputs"] = list(args.dags)

    print(json.dumps(summary, indent=2))

    if args.output and result.feasible:
        out_file = Path(args.output)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        if settings.output.formats.csv:
            write_edge_list(result.dag, out_file)
        if settings.output.formats.json:
            with open(out_file.with_suffix('.json'), 'w') as f:
                json.dump(summary, f, indent=2)

    if not result.feasible:
        print("No DAG within the tree-width bound was found", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
