#!filepath: tests/base_test/test_filesystem.py
import json

import numpy as np
import pandas as pd

from wle_report.utils.filesystem import FileSystem


def test_ensure_dir(tmp_path):
    """测试 ensure_dir 是否能正确创建目录"""
    new_dir = tmp_path / "a" / "b"
    assert not new_dir.exists()

    FileSystem.ensure_dir(new_dir)
    assert new_dir.is_dir()


def test_safe_write_text(tmp_path):
    """原子写入，不残留 tmp 文件"""
    file_path = tmp_path / "out" / "report.txt"

    FileSystem.safe_write_text(file_path, "accuracy 0.98")

    assert file_path.read_text() == "accuracy 0.98"
    assert not (tmp_path / "out" / "report.txt.tmp").exists()


def test_safe_write_overwrites(tmp_path):
    file_path = tmp_path / "metrics.json"
    FileSystem.safe_write(file_path, b"{}")
    FileSystem.safe_write(file_path, b'{"a": 1}')

    assert file_path.read_bytes() == b'{"a": 1}'


def test_write_json_numpy_values(tmp_path):
    path = FileSystem.write_json(
        tmp_path / "metrics.json",
        {"accuracy": np.float64(0.8), "rows": np.int64(50), "dir": tmp_path},
    )

    record = json.loads(path.read_text())
    assert record["accuracy"] == 0.8
    assert record["rows"] == 50
    assert record["dir"] == str(tmp_path)


def test_write_frame_csv(tmp_path):
    df = pd.DataFrame({"problem_id": [3, 1, 2], "prediction": ["B", "A", "E"]}, index=[7, 8, 9])

    path = FileSystem.write_frame_csv(tmp_path / "predictions.csv", df)

    assert path.read_text().splitlines() == [
        "problem_id,prediction",
        "3,B",
        "1,A",
        "2,E",
    ]


def test_remove_dir_and_missing(tmp_path):
    d = tmp_path / "answers"
    d.mkdir()
    (d / "problem_id_1.txt").write_text("A")

    FileSystem.remove(d)
    assert not d.exists()

    # 不存在的路径不报错
    FileSystem.remove(d)
