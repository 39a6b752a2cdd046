"""
data.loaders
------------
Reading datasets from CSV and writing planned subsets back out.
Functions:
    - load_csv: Load a CSV file into a DataFrame.
    - save_subsets: Write every subset of a plan to <label>.csv.
"""

import os
import logging

import pandas as pd

from splitting.accessor import subset

logger = logging.getLogger(__name__)


def load_csv(path):
    """
    Load a CSV file into a pandas DataFrame.

    Parameters
    ----------
    path : str
        Path to the CSV file.

    Returns
    -------
    pd.DataFrame
        Loaded DataFrame.
    """
    logger.info(f"Loading dataset from {path}")
    df = pd.read_csv(path)
    logger.info(f"Loaded {len(df)} rows and {df.shape[1]} columns")
    return df


def save_subsets(plan, output_dir):
    """
    Write each subset of a bound plan to output_dir/<label>.csv.

    Parameters
    ----------
    plan : SplitPlan
        Plan bound to its dataset.
    output_dir : str
        Directory to write into; created if missing.

    Returns
    -------
    dict
        label -> path of the written file.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = {}
    for label in plan.labels:
        path = os.path.join(output_dir, f"{label}.csv")
        view = subset(plan, label)
        view.to_frame().to_csv(path, index=False)
        logger.info(f"Saved {len(view)} {label} rows to {path}")
        paths[label] = path
    return paths
