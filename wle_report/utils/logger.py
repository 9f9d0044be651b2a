#!filepath: wle_report/utils/logger.py
import os
from contextlib import contextmanager
from functools import wraps
from time import perf_counter
from typing import Callable, Iterator

from loguru import logger

from wle_report.config.log_config import LogConfig

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | run={extra[run_id]} | {message}"


class Logging:
    """
    报告日志模块
    ---------------------------------------
    - 按日期切割 / 保留周期
    - 每行带 run_id（run_scope 内自动注入）
    - warning / error 同时打印到终端
    - catch 装饰器：记录异常堆栈后原样抛出
    ---------------------------------------

    loguru 的 logger 是进程级全局对象：
    重新构造 Logging 会替换所有 sink，已导入的 `logs` 无需替换。
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    @classmethod
    def from_config(cls, cfg: LogConfig) -> "Logging":
        return cls(
            log_dir=cfg.dir,
            rotation=cfg.rotation,
            retention=cfg.retention,
            log_level=cfg.level,
        )

    def _configure(self) -> None:
        logger.remove()
        logger.configure(extra={"run_id": "-"})

        logger.add(
            sink=os.path.join(self.log_dir, "wle_report_{time:YYYY-MM-DD}.log"),
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format=_FORMAT,
            enqueue=True,  # 多进程安全（loky worker）
            backtrace=True,
            diagnose=True,
        )

        logger.info(f"-----------Logger initialized: dir={self.log_dir} level={self.level}-----------")

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        print(msg)
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        print(msg)
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- run 作用域 ----------
    @contextmanager
    def run_scope(self, run_id: str) -> Iterator[None]:
        """
        scope 内所有日志行带上 run_id
        """
        with logger.contextualize(run_id=run_id):
            yield

    # ---------- 日志装饰器 ----------
    def catch(self, msg: str = "Exception occurred", log_time: bool = True) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__qualname__}: {msg}")
                    raise

                if log_time:
                    logger.info(f"[TIME] {func.__qualname__} took {perf_counter() - start:.4f}s")
                return result

            return wrapper

        return decorator


# 默认全局 logs（CLI 会按 LogConfig 重新初始化）
logs = Logging()
