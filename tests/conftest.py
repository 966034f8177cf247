from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from app.main import create_app


@pytest.fixture()
def client() -> Iterator[TestClient]:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_workbook() -> Callable[..., Workbook]:
    """Build an in-memory workbook whose first sheet holds the given rows."""

    def _make(rows: list[list[Any]], title: str = "Sheet1") -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = title
        for row in rows:
            ws.append(row)
        return wb

    return _make


@pytest.fixture()
def make_xlsx_bytes(make_workbook: Callable[..., Workbook]) -> Callable[..., bytes]:
    """Serialize rows into the bytes of an .xlsx file."""

    def _make(rows: list[list[Any]], title: str = "Sheet1") -> bytes:
        buffer = io.BytesIO()
        make_workbook(rows, title=title).save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture()
def price_list_rows() -> list[list[Any]]:
    """Header row and two data rows of a typical dealer price list."""
    return [
        [
            "Model",
            "Variant Code",
            "Ex Showroom price (excl Incentives/ Subsidy)",
            "EMPS",
            "State Subsidy",
            "Post GST Discount",
            "Insurance",
            "RTO - Road safety tax / CESS.",
            "Postal Charges",
            "Road tax",
        ],
        ["450X", "45X-PRO", 145000, 5000, 0, 1500, 5230, 620, 300, 0],
        ["450S", "45S-STD", 129999, 5000, 0, 1000, 4980, 590, 300, 0],
    ]
