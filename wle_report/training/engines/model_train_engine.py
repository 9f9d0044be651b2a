from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

import numpy as np
import pandas as pd
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from wle_report import logs
from wle_report.config.training_config import ModelSpecConfig, TrainingConfig
from wle_report.training.engines.train_result import TrainedModel
from wle_report.utils.errors import FitError


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine（FINAL）

    Shared contract:
    - k-fold stratified CV (no repeats), fixed seed
    - param_grid candidates chosen by CV accuracy, refit on all rows
    - empty param_grid == one candidate (the base params)
    - degenerate input / library failure → FitError
    """

    family: str = ""

    def __init__(self, spec: ModelSpecConfig, cfg: TrainingConfig):
        self.spec = spec
        self.cfg = cfg

    @abstractmethod
    def build_estimator(self) -> Any:
        """
        Unfitted estimator with spec.params applied.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def train(self, *, X: pd.DataFrame, y: pd.Series) -> TrainedModel:
        self._check_input(X, y)

        folds = StratifiedKFold(
            n_splits=self.cfg.cv_folds,
            shuffle=True,
            random_state=self.cfg.seed,
        )
        search = GridSearchCV(
            estimator=self.build_estimator(),
            param_grid=self._param_grid(),
            cv=folds,
            scoring="accuracy",
            refit=True,
            error_score="raise",
        )

        logs.info(
            f"[{self.__class__.__name__}] fit name={self.spec.name} rows={len(X)} "
            f"features={X.shape[1]} folds={self.cfg.cv_folds} "
            f"candidates={self._n_candidates()}"
        )

        try:
            search.fit(X.to_numpy(dtype="float64"), y.to_numpy())
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as e:
            raise FitError(self.spec.name, f"fit failed: {e}") from e

        model = TrainedModel(
            name=self.spec.name,
            family=self.family,
            estimator=search.best_estimator_,
            feature_names=tuple(X.columns),
            classes=tuple(str(c) for c in search.classes_),
            seed=self.cfg.seed,
            cv_folds=self.cfg.cv_folds,
            cv_accuracy=float(search.best_score_),
            best_params=dict(search.best_params_),
        )

        logs.info(
            f"[{self.__class__.__name__}] done name={model.name} "
            f"cv_accuracy={model.cv_accuracy:.4f} best_params={model.best_params}"
        )
        return model

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _param_grid(self) -> Dict[str, List[Any]]:
        return {k: list(v) for k, v in self.spec.param_grid.items()}

    def _n_candidates(self) -> int:
        n = 1
        for values in self.spec.param_grid.values():
            n *= len(values)
        return n

    def _check_input(self, X: pd.DataFrame, y: pd.Series) -> None:
        if len(X) != len(y):
            raise FitError(
                self.spec.name, f"X rows={len(X)} != y rows={len(y)}"
            )
        if X.shape[1] == 0:
            raise FitError(self.spec.name, "no feature columns")

        counts = y.value_counts()
        if len(counts) < 2:
            raise FitError(
                self.spec.name,
                f"need at least 2 outcome categories, got {list(counts.index)}",
            )
        small = counts[counts < self.cfg.cv_folds]
        if not small.empty:
            raise FitError(
                self.spec.name,
                f"categories with fewer rows than folds ({self.cfg.cv_folds}): "
                f"{small.to_dict()}",
            )
