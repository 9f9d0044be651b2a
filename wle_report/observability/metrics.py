#!filepath: wle_report/observability/metrics.py
from dataclasses import dataclass, field
from typing import Dict, Any

from wle_report import logs


@dataclass
class MetricRecorder:
    """
    Run-scoped scalar metrics, e.g. "rf.accuracy.holdout".

    Values are recorded once; recording the same name twice is a bug in
    the caller and raises.
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        if name in self.metrics:
            raise KeyError(f"metric already recorded: {name}")
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.metrics)
