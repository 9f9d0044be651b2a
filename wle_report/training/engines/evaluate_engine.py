# wle_report/training/engines/evaluate_engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import cohen_kappa_score, confusion_matrix

from wle_report.training.engines.train_result import TrainedModel
from wle_report.utils.errors import AlignmentError

IN_SAMPLE = "train"
OUT_OF_SAMPLE = "holdout"


@dataclass(frozen=True)
class Evaluation:
    """
    Read-only summary for one (model, table) pair.

    confusion: rows = actual, columns = predicted
    """
    model_name: str
    table: str
    confusion: pd.DataFrame
    accuracy: float
    kappa: float
    n_rows: int
    per_subject: Dict[str, float] = field(default_factory=dict)


def align_predictions(y_true: pd.Series, y_pred: pd.Series) -> pd.Series:
    """
    Return y_pred in y_true's row order.

    Row identity must match exactly; a length or identity mismatch raises,
    nothing is ever truncated.
    """
    if len(y_true) != len(y_pred):
        raise AlignmentError(
            f"prediction rows={len(y_pred)} != ground-truth rows={len(y_true)}"
        )
    if y_true.index.equals(y_pred.index):
        return y_pred
    if not y_pred.index.is_unique or set(y_pred.index) != set(y_true.index):
        raise AlignmentError("prediction row identity differs from ground truth")
    return y_pred.reindex(y_true.index)


def confusion_table(
        y_true: pd.Series,
        y_pred: pd.Series,
        labels: Optional[Sequence] = None,
) -> pd.DataFrame:
    if labels is None:
        labels = sorted(set(y_true) | set(y_pred))
    labels = list(labels)
    matrix = confusion_matrix(y_true.to_numpy(), y_pred.to_numpy(), labels=labels)
    return pd.DataFrame(
        matrix,
        index=pd.Index(labels, name="actual"),
        columns=pd.Index(labels, name="predicted"),
    )


def accuracy_from_confusion(matrix) -> float:
    """
    diagonal sum / total
    """
    m = np.asarray(matrix, dtype="float64")
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"confusion matrix must be square, got shape {m.shape}")
    total = m.sum()
    if total == 0:
        raise ValueError("confusion matrix is empty")
    return float(np.trace(m) / total)


class EvaluateEngine:
    """
    EvaluateEngine（FINAL / FROZEN）

    Responsibility:
    - Score a trained model on a table with ground truth
    - Return a pure Evaluation (no side effects)
    """

    def __init__(self, labels: Optional[Sequence] = None):
        self.labels = list(labels) if labels is not None else None

    def evaluate(
            self,
            *,
            model: TrainedModel,
            X: pd.DataFrame,
            y: pd.Series,
            table: str,
            subject: Optional[pd.Series] = None,
    ) -> Evaluation:
        if len(X) == 0:
            raise ValueError(f"[EvaluateEngine] empty table={table}")

        y_pred = align_predictions(y, model.predict(X))
        return self.score(
            model_name=model.name,
            y_true=y,
            y_pred=y_pred,
            table=table,
            subject=subject,
        )

    def score(
            self,
            *,
            model_name: str,
            y_true: pd.Series,
            y_pred: pd.Series,
            table: str,
            subject: Optional[pd.Series] = None,
    ) -> Evaluation:
        y_pred = align_predictions(y_true, y_pred)
        labels = self.labels or sorted(set(y_true) | set(y_pred))

        confusion = confusion_table(y_true, y_pred, labels)

        per_subject: Dict[str, float] = {}
        if subject is not None:
            subject = align_predictions(y_true, subject)
            hits = pd.Series(y_true.to_numpy() == y_pred.to_numpy(), index=y_true.index)
            per_subject = {
                str(k): float(v)
                for k, v in hits.groupby(subject.to_numpy()).mean().sort_index().items()
            }

        return Evaluation(
            model_name=model_name,
            table=table,
            confusion=confusion,
            accuracy=accuracy_from_confusion(confusion.to_numpy()),
            kappa=_kappa(y_true, y_pred, labels),
            n_rows=int(len(y_true)),
            per_subject=per_subject,
        )


def _kappa(y_true: pd.Series, y_pred: pd.Series, labels: Sequence) -> float:
    # single-class agreement leaves kappa undefined (0/0)
    if len(set(y_true) | set(y_pred)) < 2:
        return float("nan")
    return float(cohen_kappa_score(y_true.to_numpy(), y_pred.to_numpy(), labels=list(labels)))


def select_best(
        evaluations: Iterable[Evaluation],
        *,
        table: str = OUT_OF_SAMPLE,
) -> str:
    """
    Model name with the highest accuracy on `table`.
    Ties keep the first evaluation in iteration (config) order.
    """
    best: Optional[Evaluation] = None
    for ev in evaluations:
        if ev.table != table:
            continue
        if best is None or ev.accuracy > best.accuracy:
            best = ev
    if best is None:
        raise ValueError(f"no evaluation on table={table} to select from")
    return best.model_name
