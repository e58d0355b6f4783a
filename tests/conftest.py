"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings require Supabase credentials at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Generator

import services.catalog_service as catalog_service_module
import services.catalog_import_service as catalog_import_service_module
import services.upload_history_service as upload_history_service_module


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    eq() and in_() filter the rows; ordering, paging and text search
    are accepted and ignored.
    """

    def __init__(self, client: "MockSupabaseClient", table: str, data: list = None, count: int = None):
        self._client = client
        self._table = table
        self._data = data or []
        self._count = count
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        self._client.record(self._table, "insert", data)
        if isinstance(data, dict):
            data = [data]
        rows = []
        for item in data:
            row = dict(item)
            row.setdefault("id", "test-uuid-123")
            row["created_at"] = datetime.utcnow().isoformat() + "Z"
            row["updated_at"] = datetime.utcnow().isoformat() + "Z"
            rows.append(row)
        self._data = rows
        return self

    def upsert(self, data, **kwargs):
        self._client.record(self._table, "upsert", data, **kwargs)
        self._data = data if isinstance(data, list) else [data]
        return self

    def update(self, data):
        self._client.record(self._table, "update", data)
        self._data = [
            {**item, **data, "updated_at": datetime.utcnow().isoformat() + "Z"}
            for item in self._data
        ]
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def in_(self, column, values):
        self._client.record(self._table, "in_", list(values), column=column)
        wanted = set(values)
        self._data = [row for row in self._data if row.get(column) in wanted]
        return self

    def or_(self, filters, **kwargs):
        self._client.record(self._table, "or_", filters)
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, **kwargs):
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        return self

    def execute(self) -> MockSupabaseResponse:
        error = self._client.errors.get(self._table)
        if error is not None:
            raise error

        if self._is_single:
            data = self._data[0] if self._data else None
            return MockSupabaseResponse(data=data, count=1 if data else 0)
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseClient:
    """Mock Supabase client that records write calls."""

    def __init__(self):
        self._tables = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[dict] = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise."""
        self.errors[table_name] = error

    def record(self, table: str, operation: str, payload, **kwargs):
        self.calls.append({
            "table": table,
            "operation": operation,
            "payload": payload,
            "kwargs": kwargs,
        })

    def calls_for(self, table: str, operation: str) -> list[dict]:
        return [
            c for c in self.calls
            if c["table"] == table and c["operation"] == operation
        ]

    def table(self, name: str) -> MockSupabaseQuery:
        """Get a query on the mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseQuery(self, name, [dict(row) for row in config["data"]], config["count"])


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("product_catalog", [
                {"sku": "SKU1", "product_code": "CAT:A", ...}
            ])
    """
    return MockSupabaseClient()


def _reset_singletons():
    catalog_service_module._catalog_service = None
    catalog_import_service_module._catalog_import_service = None
    upload_history_service_module._service = None


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("product_catalog", [...])
            # Now any service using get_supabase_client() gets the mock
    """
    _reset_singletons()
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.catalog_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.upload_history_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase
    _reset_singletons()


@pytest.fixture
def products_csv() -> str:
    """Products export with one coded and one uncoded product."""
    return (
        "Id,Name,StockKeepingUnit,ProductCode\n"
        "P1,Widget,SKU1,CAT:A\n"
        "P2,Gadget,SKU2,\n"
    )


@pytest.fixture
def product_media_csv() -> str:
    """ProductMedia export linking P1 to M1."""
    return (
        "ProductId,ElectronicMediaId\n"
        "P1,M1\n"
    )


@pytest.fixture
def managed_content_csv() -> str:
    """ManagedContent export resolving M1 to K1."""
    return (
        "Id,ContentKey\n"
        "M1,K1\n"
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("product_catalog", [...])
            response = test_client_with_mock_db.get("/api/catalog")
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
