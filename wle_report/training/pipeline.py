# wle_report/training/pipeline.py
from __future__ import annotations

from datetime import datetime
from typing import List

from wle_report import logs
from wle_report.config.app_config import AppConfig
from wle_report.observability.instrumentation import Instrumentation
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.utils.path import PathManager


class ReportPipeline:
    """
    ReportPipeline（FINAL）

    Semantics:
    - Pipeline owns run identity and step order
    - Steps execute semantics
    - One run == one context; nothing is reused across runs
    """

    def __init__(
            self,
            *,
            steps: List[PipelineStep],
            pm: PathManager,
            inst: Instrumentation,
            cfg: AppConfig,
    ):
        self.steps = steps
        self.pm = pm
        self.inst = inst
        self.cfg = cfg

    @staticmethod
    def new_run_id() -> str:
        return datetime.now().strftime("%Y%m%d-%H%M%S")

    @logs.catch(msg="report pipeline failed")
    def run(self, run_id: str | None = None) -> ReportContext:
        run_id = run_id or self.new_run_id()

        with logs.run_scope(run_id):
            self.inst.reset()
            logs.info(f"[ReportPipeline] START run_id={run_id}")

            ctx = ReportContext(
                run_id=run_id,
                cfg=self.cfg,
                inst=self.inst,
                output_dir=self.pm.run_dir(run_id, base=self.cfg.output.dir),
            )

            for step in self.steps:
                logs.info(f"[ReportPipeline] step={step.step_name}")
                ctx = step.run(ctx)

            self.inst.generate_timeline_report(run_id)

            logs.info(
                f"[ReportPipeline] DONE best={ctx.best_model} output={ctx.output_dir}"
            )
        return ctx
