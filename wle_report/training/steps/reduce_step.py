# wle_report/training/steps/reduce_step.py
from __future__ import annotations

import pandas as pd

from wle_report import logs
from wle_report.engines.reduction_engine import (
    ReductionEngine,
    apply_reduction,
    attach_columns,
)
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ProjectedTable, ReportContext


class ReduceStep(PipelineStep):
    """
    ReduceStep

    Contract:
    - applies ctx.column_filter to train / holdout / unlabeled
    - fits center/scale/PCA ONCE on the filtered train predictors
    - applies the same fitted value to all three tables
    - re-attaches subject (+ outcome / row id) after projection
    """

    stage = "reduce"

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "partition", "column_filter", "unlabeled")
        data_cfg = ctx.cfg.data
        train_cfg = ctx.cfg.training
        flt = ctx.column_filter

        with self.timed():
            with self.inst.timer("column_filter_apply"):
                train = flt.apply(ctx.partition.train, table="train")
                holdout = flt.apply(ctx.partition.holdout, table="holdout")
                testing = flt.apply(ctx.unlabeled, table="testing")

            engine = ReductionEngine(
                variance_threshold=train_cfg.variance_threshold,
                n_components=train_cfg.n_components,
            )
            with self.inst.timer("reduction_fit"):
                fitted = engine.fit(train.predictors)

            with self.inst.timer("reduction_apply"):
                ctx.train = self._project(
                    fitted, train,
                    y=ctx.partition.train[data_cfg.outcome_column],
                    subject_column=data_cfg.subject_column,
                    outcome_column=data_cfg.outcome_column,
                )
                ctx.holdout = self._project(
                    fitted, holdout,
                    y=ctx.partition.holdout[data_cfg.outcome_column],
                    subject_column=data_cfg.subject_column,
                    outcome_column=data_cfg.outcome_column,
                )
                ctx.testing = self._project(
                    fitted, testing,
                    row_ids=ctx.unlabeled[data_cfg.row_id_column],
                    subject_column=data_cfg.subject_column,
                    row_id_column=data_cfg.row_id_column,
                )

        logs.info(
            f"[{self.step_name}] projected train={ctx.train.X.shape} "
            f"holdout={ctx.holdout.X.shape} testing={ctx.testing.X.shape}"
        )

        ctx.reduction = fitted
        return ctx

    @staticmethod
    def _project(
            fitted,
            table,
            *,
            subject_column: str | None,
            y: pd.Series | None = None,
            row_ids: pd.Series | None = None,
            outcome_column: str | None = None,
            row_id_column: str | None = None,
    ) -> ProjectedTable:
        X = apply_reduction(fitted, table.predictors)

        extra = {}
        if subject_column is not None:
            extra[subject_column] = table.subject
        if y is not None:
            extra[outcome_column] = y
        if row_ids is not None:
            extra[row_id_column] = row_ids

        return ProjectedTable(
            X=X,
            frame=attach_columns(X, **extra),
            y=y,
            subject=table.subject,
            row_ids=row_ids,
        )
