# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Tuple

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from wle_report.config.app_config import AppConfig
from wle_report.utils.path import PathManager


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(autouse=True)
def _reset_path_root():
    yield
    PathManager.set_root(None)


SUBJECTS = ["adelmo", "carlitos", "charles", "eurico", "jeremy", "pedro"]
CLASSES = ["A", "B", "C", "D", "E"]
SENSORS = [
    "roll_belt",
    "pitch_belt",
    "yaw_belt",
    "total_accel_belt",
    "gyros_belt_x",
    "accel_arm_x",
    "magnet_dumbbell_y",
    "roll_forearm",
]
IDENTIFIERS = [
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
]


def make_raw_frame(n_rows: int, *, seed: int = 0, labeled: bool = True) -> pd.DataFrame:
    """
    Mimics the raw sensor file layout:

        <row number index> | identifier block | max_roll_belt (NA-only outside
        window rows) | kurtosis_roll_belt ("" / "#DIV/0!") | sensors | classe or problem_id

    Sensor means shift with the class so the classes are learnable.
    """
    rng = np.random.default_rng(seed)

    classes = np.array([CLASSES[i % len(CLASSES)] for i in range(n_rows)])
    class_pos = np.array([CLASSES.index(c) for c in classes], dtype=float)
    new_window = np.where(np.arange(n_rows) % 25 == 24, "yes", "no")

    data = {
        "user_name": [SUBJECTS[i % len(SUBJECTS)] for i in range(n_rows)],
        "raw_timestamp_part_1": 1322489729 + np.arange(n_rows),
        "raw_timestamp_part_2": rng.integers(0, 999_999, n_rows),
        "cvtd_timestamp": ["28/11/2011 14:15"] * n_rows,
        "new_window": new_window,
        "num_window": np.arange(n_rows) // 25 + 1,
        "max_roll_belt": np.where(new_window == "yes", rng.normal(0, 1, n_rows), np.nan),
        "kurtosis_roll_belt": np.where(new_window == "yes", "#DIV/0!", ""),
    }
    for j, name in enumerate(SENSORS):
        data[name] = class_pos * (1.5 + 0.25 * j) + rng.normal(0, 1, n_rows)

    df = pd.DataFrame(data, index=pd.RangeIndex(1, n_rows + 1))
    if labeled:
        df["classe"] = classes
    else:
        df["problem_id"] = np.arange(1, n_rows + 1)
    return df


def write_raw_csv(df: pd.DataFrame, path: Path) -> Path:
    df.to_csv(path, index=True, index_label="", na_rep="NA")
    return path


@pytest.fixture
def raw_frame_factory() -> Callable[..., pd.DataFrame]:
    return make_raw_frame


@pytest.fixture
def raw_csv_files(tmp_path: Path) -> Tuple[Path, Path]:
    """
    (training csv, testing csv) under tmp_path
    """
    training = write_raw_csv(make_raw_frame(300, seed=1), tmp_path / "pml-training.csv")
    testing = write_raw_csv(
        make_raw_frame(20, seed=2, labeled=False), tmp_path / "pml-testing.csv"
    )
    return training, testing


@pytest.fixture
def app_config(tmp_path: Path, raw_csv_files) -> AppConfig:
    """
    Small, fast config: single worker, tiny ensembles, no grids.
    """
    training, testing = raw_csv_files
    return AppConfig(
        log={"dir": str(tmp_path / "logs"), "level": "DEBUG"},
        data={
            "training_file": str(training),
            "testing_file": str(testing),
            "outcome_classes": CLASSES,
            "identifier_columns": IDENTIFIERS,
        },
        training={
            "seed": 12345,
            "train_fraction": 0.7,
            "cv_folds": 5,
            "variance_threshold": 0.95,
            "max_workers": 1,
            "models": [
                {"name": "lda", "family": "lda"},
                {"name": "rf", "family": "rf", "params": {"n_estimators": 25}},
                {
                    "name": "gbm",
                    "family": "gbm",
                    "params": {"n_estimators": 20},
                    "param_grid": {"max_depth": [1, 2]},
                },
            ],
        },
        output={"dir": str(tmp_path / "output"), "write_answer_files": True},
    )
