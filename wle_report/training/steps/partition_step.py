# wle_report/training/steps/partition_step.py
from __future__ import annotations

from wle_report import logs
from wle_report.engines.partition_engine import class_proportions, stratified_partition
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext


class PartitionStep(PipelineStep):
    """
    PartitionStep

    Contract:
    - consumes ctx.labeled
    - produces ctx.partition (stratified on the outcome)
    """

    stage = "partition"

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "labeled")
        outcome = ctx.cfg.data.outcome_column

        with self.timed():
            with self.inst.timer("stratified_partition"):
                part = stratified_partition(
                    ctx.labeled,
                    outcome_column=outcome,
                    train_fraction=ctx.cfg.training.train_fraction,
                    seed=ctx.cfg.training.seed,
                )

        for name, df in (("train", part.train), ("holdout", part.holdout)):
            props = class_proportions(df[outcome]).round(4).to_dict()
            logs.info(f"[{self.step_name}] {name} proportions={props}")

        ctx.partition = part
        return ctx
