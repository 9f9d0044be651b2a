#!filepath: wle_report/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import Dict, Iterator

from wle_report.observability.metrics import MetricRecorder
from wle_report.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting + Parent scope）

    Rules:
    1. Timeline 只记录叶子节点（record=True），例如 train_rf / reduction_fit
    2. Step 级 timer 仅作为时间语义边界（record=False）
    3. 同名 leaf 再次计时会累加（重复 evaluate 等）
    4. 每次 run 开始时 reset()，timeline / metrics 不跨 run 累积
    """

    enabled: bool = True

    def __post_init__(self):
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timeline: Dict[str, float] = OrderedDict()

    @contextmanager
    def timer(self, name: str, *, record: bool = True) -> Iterator[None]:
        if not self.enabled or not record:
            yield
            return

        start = perf_counter()
        try:
            yield
        finally:
            self.timeline[name] = self.timeline.get(name, 0.0) + perf_counter() - start

    def reset(self) -> None:
        """Fresh timeline + metrics; called at the start of every run."""
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timeline = OrderedDict()

    def timings(self) -> Dict[str, float]:
        """Leaf seconds so far, rounded, in execution order."""
        return {name: round(sec, 4) for name, sec in self.timeline.items()}

    def generate_timeline_report(self, run_id: str) -> float:
        return TimelineReporter(self.timeline, run_id).print()


class NoOpInstrumentation:
    """Step 未注入 inst 时使用；接口相同，不产生任何记录。"""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = OrderedDict()

    @contextmanager
    def timer(self, name: str, *, record: bool = True) -> Iterator[None]:
        yield

    def reset(self) -> None:
        pass

    def timings(self) -> Dict[str, float]:
        return {}

    def generate_timeline_report(self, run_id: str) -> float:
        return 0.0
