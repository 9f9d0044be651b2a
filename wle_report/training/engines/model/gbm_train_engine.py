# wle_report/training/engines/model/gbm_train_engine.py
from __future__ import annotations

from sklearn.ensemble import GradientBoostingClassifier

from wle_report.training.engines.model_train_engine import ModelTrainEngine


class GradientBoostingTrainEngine(ModelTrainEngine):
    """
    Sequential additive tree ensemble; accuracy depends on n_estimators,
    so the default grid searches it together with max_depth.
    """

    family = "gbm"

    def build_estimator(self):
        params = {"random_state": self.cfg.seed, **self.spec.params}
        return GradientBoostingClassifier(**params)
