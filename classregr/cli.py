"""Command line: evaluate a CSV from a YAML config.

Usage
-----
python run.py --config configs/example_config.yaml
python run.py --config configs/example_config.yaml --target outcome --k 10
"""

import argparse
import sys

from .config import EvaluationConfig, load_config
from .data import CSVDataLoader
from .evaluate import evaluate
from .evaluation import best_column, print_result_table, save_result_table
from .validation import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare classifiers or elastic-net fits on a CSV using a YAML config."
    )
    parser.add_argument("--config", required=True, help="Path to YAML config file")
    parser.add_argument("--data", help="CSV path (overrides data.path)")
    parser.add_argument("--target", help="Target column (overrides data.target)")
    parser.add_argument("--k", type=int, help="Number of folds (overrides evaluation.k)")
    parser.add_argument(
        "--alpha", type=float, nargs="+", help="Alpha grid (overrides evaluation.alpha_grid)"
    )
    parser.add_argument("--output-dir", help="Where to write results (overrides output.dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)

    data_cfg = cfg.get("data") or {}
    eval_cfg = EvaluationConfig.from_dict(cfg)
    if args.verbose:
        eval_cfg.verbose = True

    path = args.data or data_cfg.get("path")
    target = args.target or data_cfg.get("target")
    if not path or not target:
        print("Error: a data path and target column are required (config or flags)")
        return 2

    k = args.k if args.k is not None else eval_cfg.k
    alpha_grid = args.alpha if args.alpha else eval_cfg.alpha_grid
    output_dir = args.output_dir or (cfg.get("output") or {}).get("dir")

    loader = CSVDataLoader(
        path=path,
        target=target,
        features=data_cfg.get("features"),
        categorical=data_cfg.get("categorical"),
    )
    try:
        df = loader.load()
        result = evaluate(df, target, k=k, alpha_grid=alpha_grid, config=eval_cfg)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    print_result_table(result, title=f"{result.mode} results for '{target}'")
    best = best_column(result)
    if best is not None:
        print(f"Best {'model' if result.mode == 'classification' else 'alpha'}: {best}")

    if output_dir:
        save_result_table(result, output_dir)
        print(f"Done. See {output_dir}/ for the full report.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
