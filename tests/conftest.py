"""Shared pytest fixtures for all tests."""

import pytest

from insight_engine.models import Dataset


@pytest.fixture
def sales_rows():
    """Small sales table with a category, two correlated metrics and a date."""
    return [
        {"region": "East", "product": "A", "sales": 100, "units": 10, "order_date": "2024-01-05"},
        {"region": "East", "product": "B", "sales": 50, "units": 5, "order_date": "2024-01-12"},
        {"region": "West", "product": "A", "sales": 30, "units": 3, "order_date": "2024-02-01"},
        {"region": "North", "product": "C", "sales": 80, "units": 8, "order_date": "2024-02-20"},
        {"region": "West", "product": "B", "sales": 40, "units": 4, "order_date": "2024-03-03"},
    ]


@pytest.fixture
def sales_dataset(sales_rows):
    return Dataset(
        name="sales.csv",
        columns=["region", "product", "sales", "units", "order_date"],
        column_types={
            "region": "string",
            "product": "string",
            "sales": "number",
            "units": "number",
            "order_date": "date",
        },
        rows=sales_rows,
    )


@pytest.fixture
def region_dataset():
    """The three-row example: East 100, East 50, West 30."""
    return Dataset(
        name="regions",
        columns=["region", "sales"],
        column_types={"region": "string", "sales": "number"},
        rows=[
            {"region": "East", "sales": 100},
            {"region": "East", "sales": 50},
            {"region": "West", "sales": 30},
        ],
    )


@pytest.fixture
def empty_dataset():
    return Dataset(
        name="empty.csv",
        columns=["region", "sales"],
        column_types={"region": "string", "sales": "number"},
        rows=[],
    )
