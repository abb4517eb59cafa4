import datetime as dt
import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from gravemanager.db import execute_sql_script, provider_for  # noqa: E402

# 固定“今天”，让未来日期校验可重复
TODAY = dt.date(2016, 2, 29)


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "gravemanager_test.db"
    # Point the package to this temp DB
    os.environ["GRAVE_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture()
def provider(tmp_db_path):
    # Safety: ensure we only ever create/drop tables in the temp DB
    assert os.environ.get("GRAVE_DB_PATH") == tmp_db_path, "Refusing to touch non-temp DB"
    p = provider_for(tmp_db_path)
    execute_sql_script(p, "create_tables.sql")
    yield p
    execute_sql_script(p, "drop_tables.sql")


@pytest.fixture()
def clock():
    return lambda: TODAY


@pytest.fixture()
def row_count(tmp_db_path):
    def _count(table: str) -> int:
        conn = sqlite3.connect(tmp_db_path)
        try:
            return conn.execute(f"SELECT COUNT(1) FROM {table}").fetchone()[0]
        finally:
            conn.close()
    return _count
