# wle_report/training/engines/model/rf_train_engine.py
from __future__ import annotations

from sklearn.ensemble import RandomForestClassifier

from wle_report.training.engines.model_train_engine import ModelTrainEngine


class RandomForestTrainEngine(ModelTrainEngine):
    """
    Bootstrap-aggregated decision trees.

    n_jobs is left unset so tree building follows the active WorkerPool.
    """

    family = "rf"

    def build_estimator(self):
        params = {"random_state": self.cfg.seed, **self.spec.params}
        return RandomForestClassifier(**params)
