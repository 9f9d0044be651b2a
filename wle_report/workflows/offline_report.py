# wle_report/workflows/offline_report.py
from __future__ import annotations

from wle_report.config.app_config import AppConfig
from wle_report.engines.loader_engine import LoaderEngine
from wle_report.observability.instrumentation import Instrumentation
from wle_report.training.engines.evaluate_engine import EvaluateEngine
from wle_report.training.engines.report_engine import ReportEngine
from wle_report.training.pipeline import ReportPipeline
from wle_report.training.steps.column_filter_step import ColumnFilterStep
from wle_report.training.steps.evaluate_step import EvaluateStep
from wle_report.training.steps.load_step import LoadStep
from wle_report.training.steps.model_train_step import ModelTrainStep
from wle_report.training.steps.partition_step import PartitionStep
from wle_report.training.steps.predict_step import PredictStep
from wle_report.training.steps.reduce_step import ReduceStep
from wle_report.training.steps.report_step import ReportStep
from wle_report.utils.path import PathManager


def build_report_pipeline(
        cfg: AppConfig | None = None,
        inst: Instrumentation | None = None,
) -> ReportPipeline:
    """
    Offline Report Workflow (FINAL)

    load → partition → column filter → reduce → train → evaluate → predict → report
    """

    if cfg is None:
        cfg = AppConfig.load()
    pm = PathManager()
    inst = inst or Instrumentation()

    data_cfg = cfg.data

    return ReportPipeline(
        steps=[
            LoadStep(
                engine=LoaderEngine(
                    outcome_column=data_cfg.outcome_column,
                    row_id_column=data_cfg.row_id_column,
                    index_col=data_cfg.index_col,
                    missing_markers=data_cfg.missing_markers,
                    outcome_classes=data_cfg.outcome_classes,
                ),
                inst=inst,
            ),
            PartitionStep(inst),
            ColumnFilterStep(inst),
            ReduceStep(inst),
            ModelTrainStep(inst),
            EvaluateStep(engine=EvaluateEngine(labels=data_cfg.outcome_classes), inst=inst),
            PredictStep(inst),
            ReportStep(engine=ReportEngine(), inst=inst),
        ],
        pm=pm,
        inst=inst,
        cfg=cfg,
    )
