from src.employee_management.employee_management.database.bootstrap import (
    _iter_sql_statements,
    _strip_create_db_and_use,
)


def test_create_database_and_use_lines_are_removed():
    sql = "CREATE DATABASE IF NOT EXISTS employee_management;\nUSE employee_management;\nCREATE TABLE a (id INT);\n"

    cleaned = _strip_create_db_and_use(sql)

    assert "CREATE DATABASE" not in cleaned
    assert "USE " not in cleaned
    assert "CREATE TABLE a" in cleaned


def test_statements_split_on_semicolons_outside_quotes():
    sql = """
    -- employees
    CREATE TABLE t (note VARCHAR(20) DEFAULT 'a;b');
    INSERT INTO t VALUES ("x;y");
    """

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 2
    assert "'a;b'" in statements[0]
    assert statements[1].startswith("INSERT INTO t")
