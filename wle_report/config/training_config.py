# wle_report/config/training_config.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ModelSpecConfig(BaseModel):
    """
    One trainer entry.

    family selects the train engine (unknown families are rejected by the
    engine registry); params go to the estimator;
    param_grid candidates are picked by cross-validation.
    """

    name: str
    family: str
    params: Dict[str, Any] = Field(default_factory=dict)
    param_grid: Dict[str, List[Any]] = Field(default_factory=dict)
    enabled: bool = True


class TrainingConfig(BaseModel):
    """
    TrainingConfig（FINAL）
    """

    # reproducibility
    seed: int = 12345

    # partition
    train_fraction: float = 0.7

    # cross-validation (k-fold, no repeats)
    cv_folds: int = 5

    # reduction
    variance_threshold: float = 0.95
    n_components: Optional[int] = None

    # worker pool (None → cpu_count - 1)
    max_workers: Optional[int] = None

    models: List[ModelSpecConfig] = Field(default_factory=list)

    @field_validator("train_fraction")
    @classmethod
    def _check_fraction(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"train_fraction must be in (0, 1), got {v}")
        return v

    @field_validator("cv_folds")
    @classmethod
    def _check_folds(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"cv_folds must be >= 2, got {v}")
        return v

    @field_validator("variance_threshold")
    @classmethod
    def _check_threshold(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"variance_threshold must be in (0, 1], got {v}")
        return v

    @model_validator(mode="after")
    def _unique_model_names(self) -> "TrainingConfig":
        names = [m.name for m in self.models]
        dup = {n for n in names if names.count(n) > 1}
        if dup:
            raise ValueError(f"duplicate model names: {sorted(dup)}")
        return self

    @property
    def enabled_models(self) -> List[ModelSpecConfig]:
        return [m for m in self.models if m.enabled]
