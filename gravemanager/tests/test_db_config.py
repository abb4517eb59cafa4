from __future__ import annotations

import logging
import sqlite3
from unittest.mock import MagicMock

import pydantic
import pytest
import yaml

from gravemanager.config import load_settings
from gravemanager.db import execute_sql_script, get_conn, provider_for
from gravemanager.scripts import init_db
from gravemanager.services.utils import rollback_quietly, transaction


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("GRAVE_DB_PATH", raising=False)
    monkeypatch.delenv("GRAVE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("GRAVE_CONFIG", str(tmp_path / "config.yaml"))
    return tmp_path / "config.yaml"


def test_defaults_without_config_file(clean_env):
    s = load_settings()
    assert s.db_path == "gravemanager.db"
    assert s.log_level == "INFO"


def test_yaml_values_and_env_override(clean_env, monkeypatch):
    clean_env.write_text("db_path: data/graves.db\nlog_level: debug\n", encoding="utf-8")
    s = load_settings()
    assert s.db_path == "data/graves.db"
    assert s.log_level == "DEBUG"

    monkeypatch.setenv("GRAVE_DB_PATH", "/tmp/override.db")
    monkeypatch.setenv("GRAVE_LOG_LEVEL", "warning")
    s = load_settings()
    assert s.db_path == "/tmp/override.db"
    assert s.log_level == "WARNING"


def test_test_db_path_used_under_pytest(clean_env):
    clean_env.write_text("db_path: prod.db\ntest_db_path: test.db\n", encoding="utf-8")
    assert load_settings().db_path == "test.db"


def test_invalid_log_level_rejected(clean_env):
    clean_env.write_text("log_level: LOUD\n", encoding="utf-8")
    with pytest.raises(pydantic.ValidationError):
        load_settings()


def test_get_conn_closes_connection(tmp_path):
    with get_conn(str(tmp_path / "x.db")) as conn:
        assert conn.row_factory is sqlite3.Row
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")


def test_create_and_drop_scripts(tmp_path):
    provider = provider_for(str(tmp_path / "schema.db"))
    execute_sql_script(provider, "create_tables.sql")
    with provider() as conn:
        names = {r["name"] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"Body", "Grave"} <= names

    execute_sql_script(provider, "drop_tables.sql")
    with provider() as conn:
        names = {r["name"] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert "Body" not in names and "Grave" not in names


def test_init_db_script(tmp_path):
    db = tmp_path / "cli.db"
    assert init_db.main(["create", "--db", str(db)]) == 0
    with get_conn(str(db)) as conn:
        assert conn.execute("SELECT COUNT(1) FROM Body").fetchone()[0] == 0
    assert init_db.main(["drop", "--db", str(db)]) == 0


def test_transaction_commits(tmp_path):
    with get_conn(str(tmp_path / "tx.db")) as conn:
        conn.execute("CREATE TABLE t (v INTEGER)")
        with transaction(conn):
            conn.execute("INSERT INTO t VALUES (1)")
        assert not conn.in_transaction
        assert conn.execute("SELECT COUNT(1) FROM t").fetchone()[0] == 1


def test_transaction_rolls_back_and_reraises(tmp_path):
    with get_conn(str(tmp_path / "tx.db")) as conn:
        conn.execute("CREATE TABLE t (v INTEGER)")
        with pytest.raises(KeyError):
            with transaction(conn):
                conn.execute("INSERT INTO t VALUES (1)")
                raise KeyError("boom")
        assert conn.execute("SELECT COUNT(1) FROM t").fetchone()[0] == 0


def test_rollback_failure_is_logged_not_raised(caplog):
    conn = MagicMock()
    conn.in_transaction = True
    conn.rollback.side_effect = sqlite3.OperationalError("cannot rollback")
    with caplog.at_level(logging.ERROR, logger="gravemanager.services.utils"):
        rollback_quietly(conn)
    assert "Error when doing rollback" in caplog.text


def test_non_mapping_yaml_rejected(clean_env):
    clean_env.write_text("- db_path\n- log_level\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError, match="must be a mapping"):
        load_settings()
