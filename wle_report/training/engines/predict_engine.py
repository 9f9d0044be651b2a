# wle_report/training/engines/predict_engine.py
from __future__ import annotations

import pandas as pd

from wle_report import logs
from wle_report.training.engines.train_result import TrainedModel
from wle_report.utils.errors import AlignmentError


class PredictEngine:
    """
    PredictEngine（FINAL）

    Contract:
    - one label per unlabeled row, in the unlabeled table's row order
    - output length == input length, element i ↔ row i
    - no ground truth, output is terminal
    """

    def __init__(self, row_id_column: str = "problem_id"):
        self.row_id_column = row_id_column

    def predict(
            self,
            *,
            model: TrainedModel,
            X: pd.DataFrame,
            row_ids: pd.Series,
    ) -> pd.DataFrame:
        if len(row_ids) != len(X) or not row_ids.index.equals(X.index):
            raise AlignmentError(
                f"row ids rows={len(row_ids)} do not match table rows={len(X)}"
            )

        labels = model.predict(X)

        if len(labels) != len(X) or not labels.index.equals(X.index):
            raise AlignmentError(
                f"[{model.name}] predictions rows={len(labels)} != table rows={len(X)}"
            )

        out = pd.DataFrame(
            {
                self.row_id_column: row_ids.to_numpy(),
                "prediction": labels.to_numpy(),
            },
            index=X.index,
        )

        logs.info(
            f"[PredictEngine] model={model.name} rows={len(out)} "
            f"labels={out['prediction'].value_counts().sort_index().to_dict()}"
        )
        return out
