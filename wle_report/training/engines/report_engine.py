# wle_report/training/engines/report_engine.py
from __future__ import annotations

import io
import math
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table

from wle_report.engines.column_filter_engine import FittedColumnFilter
from wle_report.engines.reduction_engine import FittedReduction
from wle_report.training.engines.evaluate_engine import (
    IN_SAMPLE,
    OUT_OF_SAMPLE,
    Evaluation,
)
from wle_report.training.engines.train_result import TrainedModel


class ReportEngine:
    """
    ReportEngine（FINAL）

    Responsibility:
    - Render the human-readable report (rich tables, plain-text export)
    - Build the machine-readable metrics record
    - No file I/O (ReportStep writes)
    """

    def __init__(self, width: int = 110):
        self.width = width

    # ------------------------------------------------------------------
    # Text report
    # ------------------------------------------------------------------
    def render(
            self,
            *,
            run_id: str,
            data_summary: Mapping[str, Any],
            column_filter: FittedColumnFilter,
            reduction: FittedReduction,
            models: Mapping[str, TrainedModel],
            evaluations: List[Evaluation],
            best_model: str,
            predictions: pd.DataFrame,
            fit_errors: Optional[Mapping[str, str]] = None,
    ) -> str:
        console = Console(
            record=True,
            width=self.width,
            file=io.StringIO(),
            color_system=None,
        )

        console.rule(f"Weight Lifting Exercise classification | run {run_id}")

        console.print(self._kv_table("Data", data_summary))

        console.print(self._kv_table("Column filter", {
            "identifier columns dropped": len(column_filter.dropped_identifiers),
            "columns with missing markers dropped": len(column_filter.dropped_missing),
            "columns with empty strings dropped": len(column_filter.dropped_empty),
            "predictors kept": len(column_filter.predictor_columns),
        }))

        console.print(self._kv_table("Principal components", {
            "input features": len(reduction.feature_names),
            "components": reduction.n_components,
            "explained variance": f"{reduction.explained_variance_ratio.sum():.4f}",
        }))

        console.print(self._summary_table(models, evaluations, best_model))

        for ev in evaluations:
            console.print(self._confusion_table(ev))

        for ev in evaluations:
            if ev.table == OUT_OF_SAMPLE and ev.per_subject:
                console.print(self._kv_table(
                    f"{ev.model_name} out-of-sample accuracy by subject",
                    {k: f"{v:.4f}" for k, v in ev.per_subject.items()},
                ))

        if fit_errors:
            console.print(self._kv_table("Failed trainers", dict(fit_errors)))

        console.print(self._predictions_table(predictions, best_model))

        return console.export_text()

    # ------------------------------------------------------------------
    # Metrics record
    # ------------------------------------------------------------------
    def metrics(
            self,
            *,
            run_id: str,
            models: Mapping[str, TrainedModel],
            evaluations: List[Evaluation],
            best_model: str,
            reduction: FittedReduction,
            column_filter: FittedColumnFilter,
            fit_errors: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "run_id": run_id,
            "best_model": best_model,
            "predictors": list(column_filter.predictor_columns),
            "n_components": reduction.n_components,
            "explained_variance": float(reduction.explained_variance_ratio.sum()),
            "models": {},
            "fit_errors": dict(fit_errors or {}),
        }
        for name, model in models.items():
            record["models"][name] = {
                "family": model.family,
                "cv_folds": model.cv_folds,
                "cv_accuracy": model.cv_accuracy,
                "best_params": model.best_params,
                "seed": model.seed,
            }
        for ev in evaluations:
            entry = record["models"].setdefault(ev.model_name, {})
            entry[ev.table] = {
                "accuracy": ev.accuracy,
                "kappa": None if math.isnan(ev.kappa) else ev.kappa,
                "rows": ev.n_rows,
                "confusion": ev.confusion.to_numpy().tolist(),
                "labels": [str(c) for c in ev.confusion.columns],
            }
        return record

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _kv_table(title: str, values: Mapping[str, Any]) -> Table:
        t = Table(title=title, show_header=False)
        t.add_column("key")
        t.add_column("value", justify="right")
        for k, v in values.items():
            t.add_row(str(k), str(v))
        return t

    @staticmethod
    def _summary_table(
            models: Mapping[str, TrainedModel],
            evaluations: List[Evaluation],
            best_model: str,
    ) -> Table:
        by_key = {(ev.model_name, ev.table): ev for ev in evaluations}

        t = Table(title="Accuracy")
        t.add_column("model")
        t.add_column("cv accuracy", justify="right")
        t.add_column("in-sample", justify="right")
        t.add_column("out-of-sample", justify="right")
        t.add_column("kappa (oos)", justify="right")
        t.add_column("best params")

        for name, model in models.items():
            ins = by_key.get((name, IN_SAMPLE))
            oos = by_key.get((name, OUT_OF_SAMPLE))
            t.add_row(
                f"{name} *" if name == best_model else name,
                f"{model.cv_accuracy:.4f}",
                f"{ins.accuracy:.4f}" if ins else "-",
                f"{oos.accuracy:.4f}" if oos else "-",
                f"{oos.kappa:.4f}" if oos else "-",
                ", ".join(f"{k}={v}" for k, v in model.best_params.items()) or "-",
            )
        return t

    @staticmethod
    def _confusion_table(ev: Evaluation) -> Table:
        label = "in-sample" if ev.table == IN_SAMPLE else "out-of-sample"
        t = Table(
            title=f"{ev.model_name} confusion matrix ({label}, accuracy={ev.accuracy:.4f})"
        )
        t.add_column("actual \\ predicted")
        for col in ev.confusion.columns:
            t.add_column(str(col), justify="right")
        for idx, row in ev.confusion.iterrows():
            t.add_row(str(idx), *(str(int(v)) for v in row.to_numpy()))
        return t

    @staticmethod
    def _predictions_table(predictions: pd.DataFrame, best_model: str) -> Table:
        t = Table(title=f"Predictions for unlabeled rows (model={best_model})")
        for col in predictions.columns:
            t.add_column(str(col))
        for row in predictions.itertuples(index=False):
            t.add_row(*(str(v) for v in row))
        return t
