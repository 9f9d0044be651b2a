# wle_report/training/steps/load_step.py
from __future__ import annotations

from wle_report import logs
from wle_report.engines.loader_engine import LoaderEngine
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.utils.path import PathManager


class LoadStep(PipelineStep):
    """
    LoadStep

    Contract:
    - produces ctx.labeled / ctx.unlabeled
    """

    stage = "load"

    def __init__(self, *, engine: LoaderEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: ReportContext) -> ReportContext:
        data_cfg = ctx.cfg.data
        training_file = PathManager.resolve(data_cfg.training_file)
        testing_file = PathManager.resolve(data_cfg.testing_file)

        logs.info(f"[{self.step_name}] training={training_file} testing={testing_file}")

        with self.timed():
            with self.inst.timer("load_tables"):
                labeled, unlabeled = self.engine.load(training_file, testing_file)

        ctx.labeled = labeled
        ctx.unlabeled = unlabeled
        return ctx
