"""
Process entry point: startup failures, exit codes and a full SQLite run.
"""
import logging

import pytest
from sqlalchemy import create_engine, text

from bulk_loader.main import build_parser, main


@pytest.fixture
def sqlite_env(monkeypatch, tmp_path):
    """Point the loader at a SQLite database holding an empty ``domain`` table."""
    db_path = tmp_path / "main.db"
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text('CREATE TABLE domain ("id" TEXT, "name" TEXT)'))
    engine.dispose()

    monkeypatch.setenv("LOADER_DB_DRIVER", "sqlite")
    monkeypatch.setenv("POSTGRES_DBNAME", str(db_path))
    monkeypatch.setenv("LOADER_MAX_OPEN_CONNECTIONS", "4")
    monkeypatch.setenv("LOADER_MAX_IDLE_CONNECTIONS", "2")
    monkeypatch.delenv("LOADER_COLUMNS", raising=False)
    monkeypatch.delenv("LOADER_TABLE", raising=False)
    return db_path


def absent_env(tmp_path):
    return str(tmp_path / "absent.env")


def test_parser_options():
    args = build_parser().parse_args(["--file", "a.csv", "--table", "t", "--workers", "3"])
    assert (args.file, args.table, args.workers) == ("a.csv", "t", 3)
    assert args.env_file == ".env"


def test_full_run_exits_zero(sqlite_env, csv_file_factory, tmp_path, caplog):
    path = csv_file_factory([["id", "name"], ["1", "a"], ["2", "b"]])

    with caplog.at_level(logging.INFO):
        code = main(["--file", path, "--workers", "2", "--env-file", absent_env(tmp_path)])

    assert code == 0
    engine = create_engine(f"sqlite:///{sqlite_env}")
    with engine.connect() as conn:
        rows = sorted(tuple(r) for r in conn.execute(text("SELECT id, name FROM domain")))
    engine.dispose()
    assert rows == [("1", "a"), ("2", "b")]
    assert any(r.getMessage().startswith("Done in ") for r in caplog.records)


def test_missing_input_file_exits_non_zero(sqlite_env, tmp_path):
    code = main(["--file", str(tmp_path / "nope.csv"), "--env-file", absent_env(tmp_path)])
    assert code == 1


def test_unreachable_database_exits_non_zero(monkeypatch, csv_file_factory, tmp_path):
    monkeypatch.setenv("LOADER_DB_DRIVER", "sqlite")
    monkeypatch.setenv("POSTGRES_DBNAME", str(tmp_path / "no_dir" / "x.db"))
    path = csv_file_factory([["id"], ["1"]])

    assert main(["--file", path, "--env-file", absent_env(tmp_path)]) == 1


def test_invalid_configuration_exits_non_zero(monkeypatch, tmp_path):
    monkeypatch.setenv("LOADER_QUEUE_SIZE", "0")
    assert main(["--env-file", absent_env(tmp_path)]) == 1
