# wle_report/training/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from wle_report.engines.column_filter_engine import FittedColumnFilter
from wle_report.engines.partition_engine import Partition
from wle_report.engines.reduction_engine import FittedReduction
from wle_report.training.engines.evaluate_engine import Evaluation
from wle_report.training.engines.train_result import TrainedModel


@dataclass
class ProjectedTable:
    """
    One table after column filter + reduction.

    X: PC1..PCk only (model input)
    frame: X + re-attached subject / outcome / row-id columns
    """
    X: pd.DataFrame
    frame: pd.DataFrame
    y: Optional[pd.Series] = None
    subject: Optional[pd.Series] = None
    row_ids: Optional[pd.Series] = None


@dataclass
class ReportContext:
    """
    ReportContext（FINAL）

    Semantics:
    - One context == one pipeline run
    - run_id is immutable and mandatory
    - each artifact is written once by its step, then only read
    """

    # -------------------------
    # Identity
    # -------------------------
    run_id: str

    # -------------------------
    # Static bindings
    # -------------------------
    cfg: Any
    inst: Any
    output_dir: Path

    # -------------------------
    # Stage artifacts
    # -------------------------
    labeled: Optional[pd.DataFrame] = None
    unlabeled: Optional[pd.DataFrame] = None

    partition: Optional[Partition] = None

    column_filter: Optional[FittedColumnFilter] = None
    reduction: Optional[FittedReduction] = None

    train: Optional[ProjectedTable] = None
    holdout: Optional[ProjectedTable] = None
    testing: Optional[ProjectedTable] = None

    models: Dict[str, TrainedModel] = field(default_factory=dict)
    fit_errors: Dict[str, str] = field(default_factory=dict)

    evaluations: List[Evaluation] = field(default_factory=list)
    best_model: Optional[str] = None

    predictions: Optional[pd.DataFrame] = None

    report_files: Dict[str, Path] = field(default_factory=dict)
