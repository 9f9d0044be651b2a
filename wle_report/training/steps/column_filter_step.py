# wle_report/training/steps/column_filter_step.py
from __future__ import annotations

from wle_report import logs
from wle_report.engines.column_filter_engine import ColumnFilterEngine
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext


class ColumnFilterStep(PipelineStep):
    """
    ColumnFilterStep

    Contract:
    - fits the column filter on the TRAINING partition only
    - produces ctx.column_filter; applying it is ReduceStep's job
    """

    stage = "column_filter"

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "partition")
        data_cfg = ctx.cfg.data

        engine = ColumnFilterEngine(
            identifier_columns=data_cfg.identifier_columns,
            subject_column=data_cfg.subject_column,
            excluded_columns=[data_cfg.outcome_column, data_cfg.row_id_column],
        )

        with self.timed():
            with self.inst.timer("column_filter_fit"):
                fitted = engine.fit(
                    ctx.partition.train.drop(columns=[data_cfg.outcome_column])
                )

        logs.debug(f"[{self.step_name}] predictors={list(fitted.predictor_columns)}")

        ctx.column_filter = fitted
        return ctx
