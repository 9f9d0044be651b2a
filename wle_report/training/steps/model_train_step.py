# wle_report/training/steps/model_train_step.py
from __future__ import annotations

from wle_report import logs
from wle_report.pipeline.parallel.worker_pool import WorkerPool
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.training.engines.registry import resolve_train_engine
from wle_report.utils.errors import FitError


class ModelTrainStep(PipelineStep):
    """
    ModelTrainStep（FINAL）

    Contract:
    - consumes ctx.train (projected features + outcome)
    - one WorkerPool scope spans all trainers, released on any exit
    - trainers are independent; a FitError skips that trainer only
    - produces ctx.models (config order) / ctx.fit_errors
    - every trainer failing is fatal
    """

    stage = "model_train"

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "train")
        cfg = ctx.cfg.training

        specs = cfg.enabled_models
        if not specs:
            raise RuntimeError(f"[{self.step_name}] no enabled models in config")

        with self.timed():
            with WorkerPool(max_workers=cfg.max_workers):
                for spec in specs:
                    engine = resolve_train_engine(spec=spec, cfg=cfg)
                    try:
                        with self.inst.timer(f"train_{spec.name}"):
                            model = engine.train(X=ctx.train.X, y=ctx.train.y)
                    except FitError as e:
                        logs.error(f"[{self.step_name}] trainer failed: {e}")
                        ctx.fit_errors[spec.name] = str(e)
                        continue
                    ctx.models[spec.name] = model

        if not ctx.models:
            raise FitError(
                "all",
                f"every trainer failed: {sorted(ctx.fit_errors)}",
            )

        logs.info(
            f"[{self.step_name}] trained={list(ctx.models)} "
            f"failed={list(ctx.fit_errors)}"
        )
        return ctx
