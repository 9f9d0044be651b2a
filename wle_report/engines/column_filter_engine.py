#!filepath: wle_report/engines/column_filter_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import pandas as pd

from wle_report import logs
from wle_report.utils.errors import SchemaError


@dataclass(frozen=True)
class FilteredTable:
    predictors: pd.DataFrame
    subject: Optional[pd.Series]


@dataclass(frozen=True)
class FittedColumnFilter:
    """
    FittedColumnFilter（FROZEN）

    Semantics:
    - fitted once, from the training partition only
    - the same predictor names (in fitted order) are applied to every
      other table; nothing is recomputed per table
    """
    predictor_columns: Tuple[str, ...]
    subject_column: Optional[str]
    dropped_identifiers: Tuple[str, ...]
    dropped_missing: Tuple[str, ...]
    dropped_empty: Tuple[str, ...]

    def apply(self, df: pd.DataFrame, *, table: str = "table") -> FilteredTable:
        missing = [c for c in self.predictor_columns if c not in df.columns]
        if missing:
            raise SchemaError(
                f"{table} lacks fitted predictor column '{missing[0]}' "
                f"({len(missing)} missing)",
                column=missing[0],
            )

        predictors = pd.DataFrame(index=df.index)
        for col in self.predictor_columns:
            try:
                values = pd.to_numeric(df[col], errors="raise")
            except (ValueError, TypeError) as e:
                raise SchemaError(
                    f"{table} column '{col}' is not numeric: {e}", column=col
                ) from e
            if values.isna().any():
                raise SchemaError(
                    f"{table} column '{col}' has missing values", column=col
                )
            predictors[col] = values.astype("float64")

        subject = None
        if self.subject_column is not None:
            if self.subject_column not in df.columns:
                raise SchemaError(
                    f"{table} lacks subject column '{self.subject_column}'",
                    column=self.subject_column,
                )
            subject = df[self.subject_column].copy()

        return FilteredTable(predictors=predictors, subject=subject)


class ColumnFilterEngine:
    """
    ColumnFilterEngine（FINAL）

    Fit order:
      1. drop identifier columns by name (bookkeeping block)
      2. never use excluded columns (outcome / row id) as predictors
      3. drop columns holding any missing marker (NaN after load)
      4. of the survivors, drop columns holding any empty string

    The subject column is kept aside, not as a predictor.
    """

    def __init__(
            self,
            *,
            identifier_columns: Sequence[str],
            subject_column: Optional[str] = None,
            excluded_columns: Sequence[str] = (),
    ):
        self.identifier_columns = list(identifier_columns)
        self.subject_column = subject_column
        self.excluded_columns = list(excluded_columns)

    def fit(self, train_df: pd.DataFrame) -> FittedColumnFilter:
        absent = [c for c in self.identifier_columns if c not in train_df.columns]
        if absent:
            raise SchemaError(
                f"training table lacks identifier column '{absent[0]}'",
                column=absent[0],
            )
        if self.subject_column is not None and self.subject_column not in train_df.columns:
            raise SchemaError(
                f"training table lacks subject column '{self.subject_column}'",
                column=self.subject_column,
            )

        non_predictors = set(self.identifier_columns) | set(self.excluded_columns)
        if self.subject_column is not None:
            non_predictors.add(self.subject_column)

        candidates = [c for c in train_df.columns if c not in non_predictors]

        dropped_missing = [c for c in candidates if train_df[c].isna().any()]
        survivors = [c for c in candidates if c not in dropped_missing]

        dropped_empty = [c for c in survivors if train_df[c].eq("").any()]
        survivors = [c for c in survivors if c not in dropped_empty]

        if not survivors:
            raise SchemaError("no predictor column survived filtering")

        fitted = FittedColumnFilter(
            predictor_columns=tuple(survivors),
            subject_column=self.subject_column,
            dropped_identifiers=tuple(c for c in self.identifier_columns),
            dropped_missing=tuple(dropped_missing),
            dropped_empty=tuple(dropped_empty),
        )

        logs.info(
            f"[ColumnFilterEngine] candidates={len(candidates)} "
            f"drop_missing={len(dropped_missing)} drop_empty={len(dropped_empty)} "
            f"drop_identifiers={len(self.identifier_columns)} kept={len(survivors)}"
        )
        return fitted
