# wle_report/training/steps/predict_step.py
from __future__ import annotations

from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.training.engines.predict_engine import PredictEngine


class PredictStep(PipelineStep):
    """
    PredictStep

    Contract:
    - applies ctx.models[ctx.best_model] to the projected unlabeled table
    - produces ctx.predictions, one row per unlabeled row, same order
    """

    stage = "predict"

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "testing", "best_model")
        engine = PredictEngine(row_id_column=ctx.cfg.data.row_id_column)

        with self.timed():
            with self.inst.timer("predict_testing"):
                ctx.predictions = engine.predict(
                    model=ctx.models[ctx.best_model],
                    X=ctx.testing.X,
                    row_ids=ctx.testing.row_ids,
                )
        return ctx
