# wle_report/training/engines/train_result.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import pandas as pd

from wle_report.utils.errors import SchemaError


@dataclass(frozen=True)
class TrainedModel:
    """
    TrainedModel（FINAL / FROZEN）

    语义：
    - 一次完整训练的纯内存态结果
    - 不包含任何 I/O 语义
    - bound to the hyper-parameters and CV folds that produced it
    """
    name: str
    family: str
    estimator: Any
    feature_names: Tuple[str, ...]
    classes: Tuple[str, ...]
    seed: int
    cv_folds: int
    cv_accuracy: float
    best_params: Dict[str, Any] = field(default_factory=dict)

    def predict(self, X: pd.DataFrame) -> pd.Series:
        """
        Class labels for any table sharing the feature schema,
        indexed like X.
        """
        missing = [c for c in self.feature_names if c not in X.columns]
        if missing:
            raise SchemaError(
                f"[{self.name}] table lacks model feature '{missing[0]}'",
                column=missing[0],
            )

        values = X.loc[:, list(self.feature_names)].to_numpy(dtype="float64")
        preds = self.estimator.predict(values)
        return pd.Series(preds, index=X.index, name=self.name)
