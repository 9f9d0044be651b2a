#!filepath: wle_report/utils/filesystem.py
import json
import shutil
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from wle_report import logs


class FileSystem:
    """
    Report 输出文件工具

    - 所有写入都是原子的（同目录 tmp 文件 → replace）
    - 读报告的人永远不会看到半个 metrics.json
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        p = Path(path)
        p.mkdir(parents=True, exist_ok=True)
        return p

    @staticmethod
    def safe_write(path: str | Path, data: bytes) -> Path:
        path = Path(path)
        FileSystem.ensure_dir(path.parent)

        # keep the real suffix: "metrics.json" → "metrics.json.tmp"
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(data)
        tmp_path.replace(path)

        logs.debug(f"[FS] wrote {path} ({len(data)} bytes)")
        return path

    @staticmethod
    def safe_write_text(path: str | Path, text: str, encoding: str = "utf-8") -> Path:
        return FileSystem.safe_write(path, text.encode(encoding))

    @staticmethod
    def write_json(path: str | Path, record: Mapping[str, Any]) -> Path:
        """
        numpy scalars / Paths fall back to str()
        """
        text = json.dumps(record, indent=2, ensure_ascii=False, default=_json_default)
        return FileSystem.safe_write_text(path, text + "\n")

    @staticmethod
    def write_frame_csv(path: str | Path, df: pd.DataFrame) -> Path:
        """Row order as given, no index column."""
        return FileSystem.safe_write_text(path, df.to_csv(index=False))

    @staticmethod
    def remove(path: str | Path) -> None:
        p = Path(path)
        if not p.exists():
            return

        if p.is_dir():
            shutil.rmtree(p)
        else:
            p.unlink()
        logs.debug(f"[FS] removed {p}")


def _json_default(value: Any) -> Any:
    if hasattr(value, "item"):
        return value.item()
    return str(value)
