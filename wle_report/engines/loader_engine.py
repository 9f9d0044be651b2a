#!filepath: wle_report/engines/loader_engine.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from wle_report import logs
from wle_report.utils.errors import SchemaError, UserInputError


def load_table(
        path: str | Path,
        *,
        index_col: Optional[int] = 0,
        missing_markers: Sequence[str] = ("NA",),
        encoding: str = "utf-8",
) -> pd.DataFrame:
    """
    Read one raw CSV table.

    - only `missing_markers` become NaN
    - empty fields stay "" (keep_default_na=False), so "missing" and
      "empty" remain two different column-filter criteria
    - the leading row-number column becomes the index (row identity)
    """
    p = Path(path)
    if not p.exists():
        raise UserInputError(f"Input file not found: {p}")

    return pd.read_csv(
        p,
        encoding=encoding,
        index_col=index_col,
        keep_default_na=False,
        na_values=list(missing_markers),
        low_memory=False,
    )


class LoaderEngine:
    """
    LoaderEngine（FINAL）

    Responsibility:
    - Load labeled + unlabeled tables
    - Fail fast on schema problems, naming the column

    Contract:
    - labeled table has the outcome column
    - unlabeled table has the row-id column
    - outcome values ⊆ outcome_classes (when configured)
    """

    def __init__(
            self,
            *,
            outcome_column: str,
            row_id_column: str,
            index_col: Optional[int] = 0,
            missing_markers: Sequence[str] = ("NA",),
            outcome_classes: Optional[List[str]] = None,
    ):
        self.outcome_column = outcome_column
        self.row_id_column = row_id_column
        self.index_col = index_col
        self.missing_markers = list(missing_markers)
        self.outcome_classes = outcome_classes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(
            self,
            training_file: str | Path,
            testing_file: str | Path,
    ) -> Tuple[pd.DataFrame, pd.DataFrame]:
        labeled = load_table(
            training_file,
            index_col=self.index_col,
            missing_markers=self.missing_markers,
        )
        unlabeled = load_table(
            testing_file,
            index_col=self.index_col,
            missing_markers=self.missing_markers,
        )

        self.validate_labeled(labeled)
        self.validate_unlabeled(unlabeled)

        logs.info(
            f"[LoaderEngine] labeled rows={len(labeled)} cols={labeled.shape[1]} | "
            f"unlabeled rows={len(unlabeled)} cols={unlabeled.shape[1]}"
        )
        dist = labeled[self.outcome_column].value_counts().sort_index()
        logs.info(f"[LoaderEngine] outcome distribution: {dist.to_dict()}")

        return labeled, unlabeled

    def validate_labeled(self, df: pd.DataFrame) -> None:
        if self.outcome_column not in df.columns:
            raise SchemaError(
                f"labeled table has no outcome column '{self.outcome_column}'",
                column=self.outcome_column,
            )

        y = df[self.outcome_column]
        if y.isna().any() or (y.astype(str) == "").any():
            raise SchemaError(
                f"outcome column '{self.outcome_column}' has missing values",
                column=self.outcome_column,
            )

        if self.outcome_classes is not None:
            unknown = sorted(set(y.astype(str)) - set(self.outcome_classes))
            if unknown:
                raise SchemaError(
                    f"outcome column '{self.outcome_column}' has unknown values {unknown}; "
                    f"expected {self.outcome_classes}",
                    column=self.outcome_column,
                )

        if not df.index.is_unique:
            raise SchemaError("labeled table row index is not unique")

    def validate_unlabeled(self, df: pd.DataFrame) -> None:
        if self.row_id_column not in df.columns:
            raise SchemaError(
                f"unlabeled table has no row-id column '{self.row_id_column}'",
                column=self.row_id_column,
            )
        if not df.index.is_unique:
            raise SchemaError("unlabeled table row index is not unique")
