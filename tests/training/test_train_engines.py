# tests/training/test_train_engines.py
import numpy as np
import pandas as pd
import pytest

from wle_report.config.training_config import ModelSpecConfig
from wle_report.training.engines.evaluate_engine import EvaluateEngine
from wle_report.training.engines.model.gbm_train_engine import GradientBoostingTrainEngine
from wle_report.training.engines.model.lda_train_engine import LDATrainEngine
from wle_report.training.engines.model.rf_train_engine import RandomForestTrainEngine
from wle_report.training.engines.registry import resolve_train_engine
from wle_report.utils.errors import FitError, SchemaError


def test_rf_separable_in_sample_perfect(separable_2d, training_cfg, spec_factory):
    """
    可分数据上随机森林的样本内准确率为 100%，混淆矩阵非对角为 0
    """
    X, y = separable_2d
    model = resolve_train_engine(
        spec=spec_factory("rf", params={"n_estimators": 20}), cfg=training_cfg
    ).train(X=X, y=y)

    ev = EvaluateEngine().evaluate(model=model, X=X, y=y, table="train")

    m = ev.confusion.to_numpy()
    assert ev.accuracy == 1.0
    assert m[0, 1] == 0 and m[1, 0] == 0
    assert m.trace() == len(y)


@pytest.mark.parametrize(
    "family, engine_cls",
    [
        ("lda", LDATrainEngine),
        ("rf", RandomForestTrainEngine),
        ("gbm", GradientBoostingTrainEngine),
    ],
)
def test_registry_resolves_family(family, engine_cls, training_cfg, spec_factory):
    engine = resolve_train_engine(spec=spec_factory(family), cfg=training_cfg)

    assert isinstance(engine, engine_cls)
    assert engine.family == family


def test_registry_unknown_family(training_cfg):
    spec = ModelSpecConfig(name="svm", family="svm")

    with pytest.raises(ValueError, match="Available: gbm, lda, rf"):
        resolve_train_engine(spec=spec, cfg=training_cfg)


def test_trained_model_metadata(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    spec = spec_factory(
        "gbm",
        params={"n_estimators": 10},
        param_grid={"max_depth": [1, 2]},
    )
    model = resolve_train_engine(spec=spec, cfg=training_cfg).train(X=X, y=y)

    assert model.name == "gbm"
    assert model.family == "gbm"
    assert model.feature_names == ("PC1", "PC2")
    assert model.classes == ("A", "B")
    assert model.seed == 12345
    assert model.cv_folds == 5
    assert 0.0 <= model.cv_accuracy <= 1.0
    assert model.best_params["max_depth"] in (1, 2)


def test_training_is_repeatable(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    noisy = X + np.random.default_rng(1).normal(0, 4.0, size=X.shape)

    spec = spec_factory("rf", params={"n_estimators": 15})
    a = resolve_train_engine(spec=spec, cfg=training_cfg).train(X=noisy, y=y)
    b = resolve_train_engine(spec=spec, cfg=training_cfg).train(X=noisy, y=y)

    assert a.cv_accuracy == b.cv_accuracy
    pd.testing.assert_series_equal(a.predict(noisy), b.predict(noisy))


def test_predict_keeps_index_and_checks_schema(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    model = resolve_train_engine(spec=spec_factory("lda"), cfg=training_cfg).train(X=X, y=y)

    pred = model.predict(X[["PC2", "PC1"]])
    assert pred.index.equals(X.index)
    assert pred.name == "lda"

    with pytest.raises(SchemaError) as err:
        model.predict(X[["PC1"]])
    assert err.value.column == "PC2"


def test_single_class_is_fit_error(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    one = y.where(y == "A", "A")

    with pytest.raises(FitError) as err:
        resolve_train_engine(spec=spec_factory("lda"), cfg=training_cfg).train(X=X, y=one)
    assert err.value.model_name == "lda"


def test_too_few_rows_per_class_is_fit_error(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    keep = list(X.index[:30]) + list(X.index[30:33])

    with pytest.raises(FitError, match="fewer rows than folds"):
        resolve_train_engine(spec=spec_factory("rf"), cfg=training_cfg).train(
            X=X.loc[keep], y=y.loc[keep]
        )


def test_library_failure_is_fit_error(separable_2d, training_cfg, spec_factory):
    X, y = separable_2d
    spec = spec_factory("gbm", params={"n_estimators": -3})

    with pytest.raises(FitError) as err:
        resolve_train_engine(spec=spec, cfg=training_cfg).train(X=X, y=y)
    assert "[gbm]" in str(err.value)
