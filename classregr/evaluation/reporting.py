"""Console display and file output for result tables."""

import json
import os
from typing import Dict, Optional

import pandas as pd

from .results import ResultTable


def format_result_table(result: ResultTable) -> str:
    """Render the metrics table as text, NaN shown as N/A."""
    return result.table.to_string(
        float_format=lambda x: f"{x:.4f}" if not pd.isna(x) else "N/A",
    )


def print_result_table(result: ResultTable, title: Optional[str] = None):
    """Print the metrics table and any fit failures.

    Parameters
    ----------
    result : ResultTable
        Output of :func:`classregr.evaluate`.
    title : str, optional
        Banner text; defaults to the evaluation mode.
    """
    title = title or f"{result.mode} results"
    print(f"\n{'='*80}")
    print(title.upper())
    print(f"{'='*80}")
    print(format_result_table(result))

    if result.failures:
        print(f"\n{'-'*80}")
        print("FIT FAILURES (columns reported as N/A)")
        print(f"{'-'*80}")
        for failure in result.failures:
            print(f"  {failure.describe()}")
    print(f"{'='*80}\n")


def best_column(result: ResultTable) -> Optional[str]:
    """Column with the best headline metric.

    Highest accuracy for classification, lowest RMSE for regression. None
    when every column failed.
    """
    table = result.table
    if result.mode == "classification":
        row = table.loc["accuracy"].dropna()
        return None if row.empty else row.idxmax()
    row = table.loc["RMSE"].dropna()
    return None if row.empty else row.idxmin()


def save_result_table(result: ResultTable, output_dir: str) -> Dict[str, str]:
    """Write ``results.csv`` and ``results.json`` into ``output_dir``.

    Returns
    -------
    Dict[str, str]
        Paths of the written files keyed by format.
    """
    os.makedirs(output_dir, exist_ok=True)

    csv_path = os.path.join(output_dir, "results.csv")
    result.table.to_csv(csv_path, index_label="metric")
    print(f"  CSV results saved to: {csv_path}")

    json_path = os.path.join(output_dir, "results.json")
    with open(json_path, "w") as f:
        json.dump(result.to_dict(), f, indent=2, default=str)
    print(f"  JSON report saved to: {json_path}")

    return {"csv": csv_path, "json": json_path}
