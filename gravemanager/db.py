from __future__ import annotations

# gravemanager/db.py
import sqlite3
from contextlib import contextmanager
from importlib import resources
from typing import Callable, ContextManager, Iterator
import os

import yaml

from .config import load_settings

# 连接提供者：无参调用，返回一个产出 sqlite3.Connection 的上下文管理器
ConnectionProvider = Callable[[], ContextManager[sqlite3.Connection]]


def get_db_path() -> str:
    path = load_settings().db_path
    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    打开 foreign_keys，设置 row_factory 为 Row。
    自动提交模式：写操作需要显式 BEGIN。
    """
    try:
        path = db_path or get_db_path()
    except (OSError, ValueError, yaml.YAMLError) as ex:
        # 路径无法准备（配置错误或目录不可创建）按连接失败处理
        raise sqlite3.OperationalError(f"cannot prepare database path: {ex}") from ex
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def provider_for(db_path: str) -> ConnectionProvider:
    """Connection provider bound to a fixed database file."""
    def _provider() -> ContextManager[sqlite3.Connection]:
        return get_conn(db_path)
    return _provider


def read_sql_script(name: str) -> str:
    return resources.files("gravemanager.sql").joinpath(name).read_text(encoding="utf-8")


def execute_sql_script(provider: ConnectionProvider, name: str) -> None:
    """Run one of the bundled scripts (create_tables.sql / drop_tables.sql)."""
    script = read_sql_script(name)
    with provider() as conn:
        conn.executescript(script)
