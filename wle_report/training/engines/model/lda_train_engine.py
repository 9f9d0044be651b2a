# wle_report/training/engines/model/lda_train_engine.py
from __future__ import annotations

from sklearn.discriminant_analysis import LinearDiscriminantAnalysis

from wle_report.training.engines.model_train_engine import ModelTrainEngine


class LDATrainEngine(ModelTrainEngine):
    """
    Linear discriminant analysis. Deterministic; seed only drives the folds.
    """

    family = "lda"

    def build_estimator(self):
        return LinearDiscriminantAnalysis(**self.spec.params)
