#!filepath: tests/observability/test_timeline.py

from loguru import logger

from wle_report.observability.timeline_reporter import TimelineReporter


def test_timeline_log_output():
    tl = {
        "load_tables": 1.23,
        "train_rf": 2.34,
    }
    reporter = TimelineReporter(tl, "demo")

    captured = []

    # 临时添加一个 sink 捕获 Loguru 输出
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    reporter.print()

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "Pipeline timeline for demo" in output
    assert "load_tables" in output
    assert "1.23" in output
    assert "train_rf" in output
    assert "3.570s" in output


def test_timeline_returns_total_and_slowest():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    total = TimelineReporter({"reduce": 0.5, "train_gbm": 1.5}, "r").print()

    logger.remove(sink_id)

    assert total == 2.0
    assert "slowest leaf: train_gbm" in "\n".join(captured)
    assert " 75.0%" in "\n".join(captured)


def test_empty_timeline():
    assert TimelineReporter({}, "r").print() == 0.0
