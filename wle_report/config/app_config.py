#!filepath: wle_report/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .data_config import DataConfig
from .output_config import OutputConfig
from .training_config import TrainingConfig
from wle_report import logs
from wle_report.utils.path import PathManager


# env var -> (section, key)
_ENV_OVERRIDES = {
    "WLE_TRAINING_FILE": ("data", "training_file"),
    "WLE_TESTING_FILE": ("data", "testing_file"),
    "WLE_OUTPUT_DIR": ("output", "dir"),
}


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig
    training: TrainingConfig
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 wle_report/config/base.yml
        - 不依赖当前工作目录
        """
        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(PathManager.root() / ".env")

        # 2) 决定配置文件路径
        if path is None:
            path = PathManager.config_file()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        for env_key, (section, key) in _ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value:
                raw.setdefault(section, {})[key] = value
                logs.info(f"[AppConfig] {section}.{key} overridden by {env_key}")

        return cls(**raw)
