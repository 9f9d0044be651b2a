#!filepath: tests/base_test/test_logger.py
import pytest
from loguru import logger

from wle_report import logs
from wle_report.config.log_config import LogConfig
from wle_report.utils.logger import Logging


@pytest.fixture
def records():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(msg.record))
    yield captured
    logger.remove(sink_id)


def test_run_scope_tags_lines(records):
    with logs.run_scope("r42"):
        logs.info("inside")
    logs.info("outside")

    assert records[0]["extra"]["run_id"] == "r42"
    assert records[1]["extra"].get("run_id") != "r42"


def test_catch_logs_and_reraises(records):
    @logs.catch(msg="fit blew up")
    def boom():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        boom()

    assert any("fit blew up" in r["message"] for r in records)


def test_catch_returns_result():
    @logs.catch(log_time=False)
    def ok():
        return 3

    assert ok() == 3


def test_from_config_writes_file(tmp_path):
    log_dir = tmp_path / "logs"
    Logging.from_config(LogConfig(dir=str(log_dir), level="DEBUG"))
    logs.info("hello")
    logger.complete()

    files = list(log_dir.glob("wle_report_*.log"))
    assert len(files) == 1
    assert "run=-" in files[0].read_text()
