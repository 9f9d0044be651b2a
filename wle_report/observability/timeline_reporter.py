#!filepath: wle_report/observability/timeline_reporter.py
from typing import Dict

from wle_report import logs


class TimelineReporter:
    """
    Pipeline Timeline 报告：
    - leaf timer → 耗时秒数 + 占比
    - 最慢的 leaf 单独标出（通常是 train_gbm）
    """

    def __init__(self, timeline: Dict[str, float], run_id: str):
        self.timeline = timeline
        self.run_id = run_id

    def print(self) -> float:
        total = sum(self.timeline.values())

        logs.info(f"[Timeline] ===== Pipeline timeline for {self.run_id} =====")
        for name, sec in self.timeline.items():
            share = sec / total * 100 if total > 0 else 0.0
            logs.info(f"[Timeline] {str(name):<28} {sec:>8.3f}s {share:>5.1f}%")
        logs.info(f"[Timeline] {'Total':<28} {total:>8.3f}s")

        if self.timeline:
            slowest = max(self.timeline, key=self.timeline.get)
            logs.info(f"[Timeline] slowest leaf: {slowest}")

        return total
