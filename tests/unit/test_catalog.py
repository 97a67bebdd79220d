"""Unit tests for the provider catalog and kind dispatch."""

from __future__ import annotations

import pytest

from dbprobe.domains.connections.app.probe_service import list_supported_kinds
from dbprobe.domains.connections.providers import (
    get_default_port,
    get_display_name,
    get_supported_db_types,
    is_file_based,
    requires_auth,
    resolve,
)
from dbprobe.domains.connections.providers.exceptions import UnsupportedKindError
from dbprobe.domains.connections.providers.mongodb.adapter import MongoDBAdapter
from dbprobe.domains.connections.providers.mssql.adapter import SQLServerAdapter
from dbprobe.domains.connections.providers.mysql.adapter import MySQLAdapter
from dbprobe.domains.connections.providers.oracle.adapter import OracleAdapter
from dbprobe.domains.connections.providers.postgresql.adapter import PostgreSQLAdapter
from dbprobe.domains.connections.providers.sqlite.adapter import SQLiteAdapter


def test_supported_kinds_are_fixed():
    assert set(get_supported_db_types()) == {"mysql", "postgresql", "mongodb", "mssql", "oracle", "sqlite"}


@pytest.mark.parametrize(
    "kind,adapter_class",
    [
        ("mysql", MySQLAdapter),
        ("MySQL", MySQLAdapter),
        ("postgresql", PostgreSQLAdapter),
        ("postgres", PostgreSQLAdapter),
        ("mongodb", MongoDBAdapter),
        ("MONGO", MongoDBAdapter),
        ("mssql", SQLServerAdapter),
        ("sqlserver", SQLServerAdapter),
        ("oracle", OracleAdapter),
        (" sqlite ", SQLiteAdapter),
    ],
)
def test_resolve_aliases(kind, adapter_class):
    assert isinstance(resolve(kind), adapter_class)


@pytest.mark.parametrize("kind", ["unknown-db", "", "maria", "sql server"])
def test_resolve_unknown_kind(kind):
    with pytest.raises(UnsupportedKindError):
        resolve(kind)


def test_resolve_is_deterministic():
    assert type(resolve("postgres")) is type(resolve("postgres"))


def test_metadata_helpers():
    assert get_default_port("mysql") == "3306"
    assert get_default_port("sqlite") == ""
    assert get_display_name("sqlserver") == "SQL Server"
    assert is_file_based("sqlite") is True
    assert is_file_based("oracle") is False
    assert requires_auth("mongodb") is False
    assert requires_auth("mssql") is True


def test_metadata_helpers_tolerate_unknown_kind():
    assert get_default_port("nope") == ""
    assert get_display_name("nope") == "nope"
    assert is_file_based("nope") is False
    assert requires_auth("nope") is True


def test_list_supported_kinds_table():
    table = {entry["kind"]: entry for entry in list_supported_kinds()}

    assert set(table) == set(get_supported_db_types())
    assert table["mysql"]["defaultPort"] == 3306
    assert table["oracle"]["defaultPort"] == 1521
    assert table["sqlite"]["defaultPort"] is None
    assert table["mssql"]["displayName"] == "SQL Server"
    for entry in table.values():
        assert set(entry) == {"kind", "displayName", "defaultPort", "description"}
        assert entry["description"]


def test_system_databases_per_adapter():
    assert MySQLAdapter().system_databases == frozenset({"information_schema", "performance_schema", "mysql", "sys"})
    assert PostgreSQLAdapter().system_databases == frozenset({"template0", "template1", "postgres"})
    assert MongoDBAdapter().system_databases == frozenset({"admin", "local", "config"})
    assert SQLServerAdapter().system_databases == frozenset({"master", "tempdb", "model", "msdb"})
    assert SQLiteAdapter().system_databases == frozenset()
