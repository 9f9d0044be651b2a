# tests/training/test_predict_engine.py
import pandas as pd
import pytest

from wle_report.training.engines.predict_engine import PredictEngine
from wle_report.training.engines.registry import resolve_train_engine
from wle_report.utils.errors import AlignmentError


@pytest.fixture
def lda_model(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    return resolve_train_engine(spec=spec_factory("lda"), cfg=training_cfg).train(X=X, y=y)


def test_predictions_match_unlabeled_rows(lda_model):
    # 未标注表：行号 1..4，顺序刻意交替
    X = pd.DataFrame(
        {"PC1": [10.0, 0.0, 9.5, 0.2], "PC2": [10.0, 0.1, 10.2, -0.3]},
        index=pd.Index([1, 2, 3, 4]),
    )
    row_ids = pd.Series([11, 12, 13, 14], index=X.index, name="problem_id")

    out = PredictEngine().predict(model=lda_model, X=X, row_ids=row_ids)

    assert len(out) == len(X)
    assert out.index.equals(X.index)
    assert list(out.columns) == ["problem_id", "prediction"]
    assert list(out["problem_id"]) == [11, 12, 13, 14]
    assert list(out["prediction"]) == ["B", "A", "B", "A"]


def test_row_id_mismatch(lda_model):
    X = pd.DataFrame({"PC1": [0.0, 1.0], "PC2": [0.0, 1.0]})
    row_ids = pd.Series([1, 2, 3])

    with pytest.raises(AlignmentError):
        PredictEngine().predict(model=lda_model, X=X, row_ids=row_ids)


def test_custom_row_id_column(lda_model):
    X = pd.DataFrame({"PC1": [0.0], "PC2": [0.0]})
    out = PredictEngine(row_id_column="id").predict(
        model=lda_model, X=X, row_ids=pd.Series([7])
    )
    assert list(out.columns) == ["id", "prediction"]
