#!filepath: tests/engines/test_partition_engine.py
import numpy as np
import pandas as pd
import pytest

from wle_report.engines.partition_engine import class_proportions, stratified_partition


@pytest.fixture
def labeled():
    rng = np.random.default_rng(0)
    # 不均衡类别分布
    classes = np.repeat(["A", "B", "C", "D", "E"], [280, 190, 170, 160, 180])
    return pd.DataFrame(
        {"x": rng.normal(size=len(classes)), "classe": classes},
        index=pd.RangeIndex(1, len(classes) + 1),
    )


def test_sizes_and_disjoint_union(labeled):
    part = stratified_partition(labeled, outcome_column="classe")

    assert len(part.train) + len(part.holdout) == len(labeled)
    assert part.train.index.intersection(part.holdout.index).empty
    assert set(part.train.index) | set(part.holdout.index) == set(labeled.index)
    assert abs(len(part.train) - 0.7 * len(labeled)) <= 5


def test_class_proportions_preserved(labeled):
    part = stratified_partition(labeled, outcome_column="classe")

    full = class_proportions(labeled["classe"])
    train = class_proportions(part.train["classe"])
    holdout = class_proportions(part.holdout["classe"])

    assert (train - full).abs().max() < 0.01
    assert (holdout - full).abs().max() < 0.01


def test_deterministic_for_seed(labeled):
    a = stratified_partition(labeled, outcome_column="classe", seed=12345)
    b = stratified_partition(labeled, outcome_column="classe", seed=12345)
    c = stratified_partition(labeled, outcome_column="classe", seed=1)

    assert a.train.index.equals(b.train.index)
    assert a.holdout.index.equals(b.holdout.index)
    assert not a.train.index.equals(c.train.index)


def test_row_and_column_order_kept(labeled):
    part = stratified_partition(labeled, outcome_column="classe")

    assert part.train.index.is_monotonic_increasing
    assert part.holdout.index.is_monotonic_increasing
    assert list(part.train.columns) == list(labeled.columns)


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.3])
def test_bad_fraction(labeled, fraction):
    with pytest.raises(ValueError):
        stratified_partition(labeled, outcome_column="classe", train_fraction=fraction)
