# tests/training/conftest.py
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from wle_report.config.training_config import ModelSpecConfig, TrainingConfig


@pytest.fixture
def training_cfg() -> TrainingConfig:
    return TrainingConfig(seed=12345, cv_folds=5, max_workers=1)


@pytest.fixture
def separable_2d():
    """
    两类、两特征、完全可分：
    A 聚在 (0, 0)，B 聚在 (10, 10)
    """
    rng = np.random.default_rng(7)
    n = 30
    a = rng.normal(0.0, 0.5, size=(n, 2))
    b = rng.normal(10.0, 0.5, size=(n, 2))

    X = pd.DataFrame(
        np.vstack([a, b]),
        columns=["PC1", "PC2"],
        index=pd.RangeIndex(100, 100 + 2 * n),
    )
    y = pd.Series(["A"] * n + ["B"] * n, index=X.index, name="classe")
    return X, y


@pytest.fixture
def spec_factory():
    def _make(family: str, name: str | None = None, **kw) -> ModelSpecConfig:
        return ModelSpecConfig(name=name or family, family=family, **kw)

    return _make
