#!filepath: wle_report/utils/path.py
from pathlib import Path
from typing import Optional

from wle_report import logs


class PathManager:
    """
    项目目录结构：

    <root>
     ├── wle_report/...
     │     └── config/base.yml
     ├── data/
     │     ├── pml-training.csv
     │     └── pml-testing.csv
     └── output/
           └── <run_id>/
                 ├── report.txt
                 ├── metrics.json
                 ├── predictions.csv
                 └── answers/

    Relative paths in config are resolved against root.
    """

    _root: Optional[Path] = None

    # ---------------------------------------------------------
    # root detection
    # ---------------------------------------------------------
    @classmethod
    def detect_root(cls) -> Path:
        """
        当前文件位于：
            <root>/wle_report/utils/path.py
        因此 root = parents[2]
        """
        current = Path(__file__).resolve()

        try:
            root = current.parents[2]
            logs.debug(f"[PathManager] detect_root = {root}")
            return root
        except IndexError:
            logs.warning("[PathManager] detect_root failed, fallback to cwd()")
            return Path.cwd()

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = cls.detect_root()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    @classmethod
    def resolve(cls, path: Path | str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else cls.root() / p

    # ---------------------------------------------------------
    # Top-level dirs
    # ---------------------------------------------------------
    @classmethod
    def output_dir(cls, base: Path | str = "output") -> Path:
        return cls.resolve(base)

    @classmethod
    def run_dir(cls, run_id: str, base: Path | str = "output") -> Path:
        return cls.output_dir(base) / run_id

    # ---------------------------------------------------------
    # config
    # ---------------------------------------------------------
    @classmethod
    def project_config_dir(cls) -> Path:
        """包内配置：wle_report/config/"""
        return Path(__file__).resolve().parents[1] / "config"

    @classmethod
    def config_file(cls, name: str = "base.yml") -> Path:
        return cls.project_config_dir() / name
