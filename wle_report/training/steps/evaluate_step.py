# wle_report/training/steps/evaluate_step.py
from __future__ import annotations

from wle_report import logs
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.training.engines.evaluate_engine import (
    IN_SAMPLE,
    OUT_OF_SAMPLE,
    EvaluateEngine,
    select_best,
)


class EvaluateStep(PipelineStep):
    """
    EvaluateStep

    Contract:
    - in-sample = training partition, out-of-sample = holdout partition
    - produces ctx.evaluations and ctx.best_model (highest out-of-sample accuracy)
    - does NOT modify models
    """

    stage = "evaluate"

    def __init__(self, *, engine: EvaluateEngine | None = None, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "train", "holdout")
        engine = self.engine or EvaluateEngine(labels=ctx.cfg.data.outcome_classes)

        with self.timed():
            for name, model in ctx.models.items():
                for table, projected in ((IN_SAMPLE, ctx.train), (OUT_OF_SAMPLE, ctx.holdout)):
                    with self.inst.timer(f"evaluate_{name}_{table}"):
                        ev = engine.evaluate(
                            model=model,
                            X=projected.X,
                            y=projected.y,
                            table=table,
                            subject=projected.subject,
                        )
                    ctx.evaluations.append(ev)
                    self.inst.metrics.record(f"{name}.accuracy.{table}", round(ev.accuracy, 6))

        ctx.best_model = select_best(ctx.evaluations, table=OUT_OF_SAMPLE)
        logs.info(f"[{self.step_name}] best model={ctx.best_model}")
        return ctx
