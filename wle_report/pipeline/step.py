from __future__ import annotations

from typing import TYPE_CHECKING

from wle_report.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)

if TYPE_CHECKING:
    from wle_report.training.context import ReportContext


class PipelineStep:
    """
    Pipeline Step 基类（FINAL）

    Responsibility:
      1. orchestration 层：读 ctx → 调 engine → 写 ctx
      2. 提供 Step 级时间语义边界（parent scope）

    Rules:
      - Step 不做任何 pandas / 统计逻辑（全部在 engine）
      - Step 本身不进入 timeline，leaf timer 在 Step 内部
      - Step 行为不依赖 inst 是否存在
    """

    stage: str = ""

    def __init__(self, inst: Instrumentation | None = None):
        # 永远保证 inst 可用（No-op 语义）
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """默认使用类名作为 Step 名称。"""
        return self.__class__.__name__

    def timed(self):
        """
        Step 级时间语义边界（record=False，不进入 timeline）
        """
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: "ReportContext") -> "ReportContext":
        raise NotImplementedError

    # --------------------------------------------------
    # Context contract helpers
    # --------------------------------------------------
    def require(self, ctx: "ReportContext", *attrs: str) -> None:
        """
        Upstream artifacts must exist before this step runs.
        """
        missing = [a for a in attrs if getattr(ctx, a, None) is None]
        if missing:
            raise RuntimeError(
                f"[{self.step_name}] upstream artifacts missing: {missing}"
            )
