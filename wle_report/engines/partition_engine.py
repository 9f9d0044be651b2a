#!filepath: wle_report/engines/partition_engine.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from wle_report import logs


@dataclass(frozen=True)
class Partition:
    """
    Disjoint row subsets of the labeled table.
    Union == input; both keep the input's column and row order.
    """
    train: pd.DataFrame
    holdout: pd.DataFrame


def stratified_partition(
        df: pd.DataFrame,
        *,
        outcome_column: str,
        train_fraction: float = 0.7,
        seed: int = 12345,
) -> Partition:
    """
    Stratified split on the outcome column.

    Split is drawn over row positions, then positions are sorted so each
    subset preserves the original row order. Deterministic for a seed.
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")

    positions = np.arange(len(df))
    train_pos, holdout_pos = train_test_split(
        positions,
        train_size=train_fraction,
        stratify=df[outcome_column].to_numpy(),
        random_state=seed,
        shuffle=True,
    )

    part = Partition(
        train=df.iloc[np.sort(train_pos)],
        holdout=df.iloc[np.sort(holdout_pos)],
    )

    logs.info(
        f"[Partition] seed={seed} fraction={train_fraction} "
        f"train={len(part.train)} holdout={len(part.holdout)}"
    )
    return part


def class_proportions(y: pd.Series) -> pd.Series:
    return y.value_counts(normalize=True).sort_index()
