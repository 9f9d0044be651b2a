# wle_report/pipeline/parallel/worker_pool.py
from __future__ import annotations

import os

from joblib import parallel_config
from joblib.externals.loky import reusable_executor

from wle_report import logs


class WorkerPool:
    """
    WorkerPool（scoped）

    Semantics:
    - size = cpu_count - 1 (min 1) unless max_workers is given
    - while the scope is open, joblib (and scikit-learn n_jobs=None calls)
      dispatch onto a loky process pool of that size
    - on exit, config is restored and worker processes are shut down,
      whether the body succeeded or raised

    Usage:
        with WorkerPool() as pool:
            engine.train(X=X, y=y)
    """

    backend = "loky"

    def __init__(self, max_workers: int | None = None):
        self.size = self.resolve_workers(max_workers)
        self._config = None
        self._active = False

    @staticmethod
    def resolve_workers(max_workers: int | None) -> int:
        if max_workers is not None:
            return max(1, int(max_workers))
        cpu = os.cpu_count() or 1
        return max(1, cpu - 1)

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> "WorkerPool":
        if self._active:
            raise RuntimeError("[WorkerPool] already acquired")

        self._config = parallel_config(backend=self.backend, n_jobs=self.size)
        self._config.__enter__()
        self._active = True
        logs.info(f"[WorkerPool] acquired backend={self.backend} workers={self.size}")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self._config.__exit__(exc_type, exc, tb)
        finally:
            self._config = None
            self._active = False
            self._shutdown_executor()
            logs.info(
                f"[WorkerPool] released workers={self.size} "
                f"error={exc_type.__name__ if exc_type else None}"
            )
        return False

    @staticmethod
    def _shutdown_executor() -> None:
        # only an executor joblib already spawned; never create one here
        executor = reusable_executor._executor
        if executor is not None:
            executor.shutdown(wait=True)
