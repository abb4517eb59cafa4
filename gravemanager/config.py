from __future__ import annotations

# gravemanager/config.py
import os
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

# 配置解析顺序：
# 1) 环境变量 GRAVE_DB_PATH / GRAVE_LOG_LEVEL（最高优先级）
# 2) config.yaml（GRAVE_CONFIG 指定路径，否则项目根目录）
# 3) 默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_DEFAULT_CFG = os.path.join(_PROJECT_ROOT, "config.yaml")


class Settings(BaseModel):
    db_path: str = "gravemanager.db"
    test_db_path: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("db_path")
    def db_path_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("db_path must not be blank")
        return v.strip()

    @field_validator("log_level")
    def log_level_upper(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return v


def config_path() -> str:
    return os.environ.get("GRAVE_CONFIG") or _DEFAULT_CFG


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise yaml.YAMLError(f"{path}: top-level YAML value must be a mapping")
    return {k: cfg[k] for k in ("db_path", "test_db_path", "log_level") if cfg.get(k) is not None}


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def load_settings(path: str | None = None) -> Settings:
    """Build settings from env vars, then config.yaml, then defaults."""
    values = _read_config_yaml(path or config_path())
    env_db = os.environ.get("GRAVE_DB_PATH")
    env_level = os.environ.get("GRAVE_LOG_LEVEL")
    if env_db:
        values["db_path"] = env_db
    elif is_test_env() and values.get("test_db_path"):
        values["db_path"] = values["test_db_path"]
    if env_level:
        values["log_level"] = env_level
    return Settings(**values)
