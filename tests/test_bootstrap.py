from src.attendance_ledger.attendance_ledger.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements


def test_statements_split_outside_quotes():
    sql = "-- comment\nCREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('x;y')",
        "SELECT 1",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE foo;\nUSE foo;\nCREATE TABLE t (x INT);"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (x INT)"]


def test_bundled_schema_creates_snapshot_ledger():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    assert len(statements) == 1
    assert "monthly_balance_snapshots" in statements[0]


def test_db_config_defaults_from_partial_settings():
    from src.attendance_ledger.attendance_ledger.database.connection import DBConfig

    cfg = DBConfig.from_settings({"host": "db", "port": "3307", "user": "hr"})
    assert cfg.port == 3307
    assert cfg.password == ""
    assert cfg.database == "attendance_ledger"
