#!filepath: wle_report/engines/reduction_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from wle_report import logs
from wle_report.utils.errors import AlignmentError, SchemaError


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype="float64", copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class FittedReduction:
    """
    FittedReduction（FROZEN value object）

    center → scale → project onto principal components.
    Fitted once from training predictors; only ever applied afterwards.

    loadings: shape (n_components, n_features)
    """
    feature_names: Tuple[str, ...]
    mean: np.ndarray
    scale: np.ndarray
    loadings: np.ndarray
    explained_variance_ratio: np.ndarray

    @property
    def n_components(self) -> int:
        return int(self.loadings.shape[0])

    @property
    def component_names(self) -> Tuple[str, ...]:
        return tuple(f"PC{i + 1}" for i in range(self.n_components))


class ReductionEngine:
    """
    ReductionEngine（FINAL）

    - n_components given → exactly that many components
    - otherwise the smallest count reaching variance_threshold
    """

    def __init__(
            self,
            *,
            variance_threshold: float = 0.95,
            n_components: Optional[int] = None,
    ):
        self.variance_threshold = variance_threshold
        self.n_components = n_components

    def fit(self, X: pd.DataFrame) -> FittedReduction:
        if X.shape[1] == 0:
            raise SchemaError("no predictor columns to reduce")

        values = X.to_numpy(dtype="float64")

        scaler = StandardScaler()
        scaled = scaler.fit_transform(values)

        if self.n_components is not None:
            pca = PCA(n_components=self.n_components, svd_solver="full")
        elif self.variance_threshold >= 1.0:
            pca = PCA(svd_solver="full")
        else:
            pca = PCA(n_components=self.variance_threshold, svd_solver="full")
        pca.fit(scaled)

        # PCA centers again internally; scaled data has mean 0, so fold
        # pca.mean_ (≈0) into the centering vector to keep apply exact.
        mean = scaler.mean_ + pca.mean_ * scaler.scale_

        fitted = FittedReduction(
            feature_names=tuple(X.columns),
            mean=_frozen(mean),
            scale=_frozen(scaler.scale_),
            loadings=_frozen(pca.components_),
            explained_variance_ratio=_frozen(pca.explained_variance_ratio_),
        )

        logs.info(
            f"[ReductionEngine] features={X.shape[1]} -> components={fitted.n_components} "
            f"explained={fitted.explained_variance_ratio.sum():.4f}"
        )
        return fitted


def apply_reduction(fitted: FittedReduction, X: pd.DataFrame) -> pd.DataFrame:
    """
    Project X with already-fitted parameters. Never refits.
    Row index of X is preserved.
    """
    missing = [c for c in fitted.feature_names if c not in X.columns]
    if missing:
        raise SchemaError(
            f"table lacks reduction feature '{missing[0]}' ({len(missing)} missing)",
            column=missing[0],
        )

    values = X.loc[:, list(fitted.feature_names)].to_numpy(dtype="float64")
    projected = ((values - fitted.mean) / fitted.scale) @ fitted.loadings.T

    return pd.DataFrame(
        projected,
        index=X.index,
        columns=list(fitted.component_names),
    )


def attach_columns(projected: pd.DataFrame, **columns: Optional[pd.Series]) -> pd.DataFrame:
    """
    Re-attach retained columns (subject, outcome) by row identity.
    """
    out = projected.copy()
    for name, series in columns.items():
        if series is None:
            continue
        if len(series) != len(out) or not series.index.equals(out.index):
            raise AlignmentError(
                f"column '{name}' rows do not match projected table "
                f"({len(series)} vs {len(out)})"
            )
        out[name] = series.to_numpy()
    return out
