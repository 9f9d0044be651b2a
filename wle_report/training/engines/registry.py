from typing import Callable, Dict

from wle_report.config.training_config import ModelSpecConfig, TrainingConfig
from wle_report.training.engines.model_train_engine import ModelTrainEngine
from wle_report.training.engines.model.lda_train_engine import LDATrainEngine
from wle_report.training.engines.model.rf_train_engine import RandomForestTrainEngine
from wle_report.training.engines.model.gbm_train_engine import GradientBoostingTrainEngine

_ENGINE_REGISTRY: Dict[
    str,
    Callable[[ModelSpecConfig, TrainingConfig], ModelTrainEngine],
] = {
    "lda": lambda spec, cfg: LDATrainEngine(spec, cfg),
    "rf": lambda spec, cfg: RandomForestTrainEngine(spec, cfg),
    "gbm": lambda spec, cfg: GradientBoostingTrainEngine(spec, cfg),
}


def resolve_train_engine(
        *, spec: ModelSpecConfig, cfg: TrainingConfig
) -> ModelTrainEngine:
    key = spec.family

    if key not in _ENGINE_REGISTRY:
        available = ", ".join(sorted(_ENGINE_REGISTRY))
        raise ValueError(
            f"No ModelTrainEngine for family={key}. Available: {available}"
        )

    return _ENGINE_REGISTRY[key](spec, cfg)
