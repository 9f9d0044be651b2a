# wle_report/training/steps/report_step.py
from __future__ import annotations

from pathlib import Path

from wle_report import logs
from wle_report.pipeline.step import PipelineStep
from wle_report.training.context import ReportContext
from wle_report.training.engines.report_engine import ReportEngine
from wle_report.utils.filesystem import FileSystem


class ReportStep(PipelineStep):
    """
    ReportStep（FINAL）

    Writes into ctx.output_dir:
    - report.txt       human-readable tables
    - metrics.json     accuracies / kappa / params
    - predictions.csv  row id + predicted label
    - answers/problem_id_<id>.txt (optional, one label per file)
    """

    stage = "report"

    def __init__(self, *, engine: ReportEngine | None = None, inst=None):
        super().__init__(inst)
        self.engine = engine or ReportEngine()

    def run(self, ctx: ReportContext) -> ReportContext:
        self.require(ctx, "column_filter", "reduction", "best_model", "predictions")
        out_dir = FileSystem.ensure_dir(ctx.output_dir)

        with self.timed():
            with self.inst.timer("report_render"):
                text = self.engine.render(
                    run_id=ctx.run_id,
                    data_summary=self._data_summary(ctx),
                    column_filter=ctx.column_filter,
                    reduction=ctx.reduction,
                    models=ctx.models,
                    evaluations=ctx.evaluations,
                    best_model=ctx.best_model,
                    predictions=ctx.predictions,
                    fit_errors=ctx.fit_errors,
                )
                record = self.engine.metrics(
                    run_id=ctx.run_id,
                    models=ctx.models,
                    evaluations=ctx.evaluations,
                    best_model=ctx.best_model,
                    reduction=ctx.reduction,
                    column_filter=ctx.column_filter,
                    fit_errors=ctx.fit_errors,
                )

            with self.inst.timer("report_write"):
                report_file = out_dir / "report.txt"
                FileSystem.safe_write_text(report_file, text)
                ctx.report_files["report"] = report_file

                # timings cover every leaf up to (not including) this write
                record["timings"] = self.inst.timings()
                record["run_metrics"] = self.inst.metrics.as_dict()
                ctx.report_files["metrics"] = FileSystem.write_json(
                    out_dir / "metrics.json", record
                )

                ctx.report_files["predictions"] = FileSystem.write_frame_csv(
                    out_dir / "predictions.csv", ctx.predictions
                )

                if ctx.cfg.output.write_answer_files:
                    ctx.report_files["answers"] = self._write_answers(ctx, out_dir / "answers")

        logs.info(f"[{self.step_name}] report saved: {report_file}")
        return ctx

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _data_summary(ctx: ReportContext) -> dict:
        outcome = ctx.cfg.data.outcome_column
        return {
            "labeled rows": len(ctx.labeled),
            "labeled columns": ctx.labeled.shape[1],
            "unlabeled rows": len(ctx.unlabeled),
            "train rows": len(ctx.partition.train),
            "holdout rows": len(ctx.partition.holdout),
            "outcome classes": ", ".join(
                str(c) for c in sorted(ctx.labeled[outcome].unique())
            ),
            "seed": ctx.cfg.training.seed,
        }

    @staticmethod
    def _write_answers(ctx: ReportContext, answers_dir: Path) -> Path:
        # answers dir holds exactly this run's files
        FileSystem.remove(answers_dir)
        FileSystem.ensure_dir(answers_dir)

        row_id = ctx.cfg.data.row_id_column
        for rid, label in zip(ctx.predictions[row_id], ctx.predictions["prediction"]):
            FileSystem.safe_write_text(answers_dir / f"problem_id_{rid}.txt", str(label))

        logs.info(f"[ReportStep] answers written: {len(ctx.predictions)} files -> {answers_dir}")
        return answers_dir
