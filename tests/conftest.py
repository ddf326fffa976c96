# tests/conftest.py

import pandas as pd
import pytest

from retailpulse.schema import (
    STORE, ITEM, MONTH, INVENTORY, SOLD, COST, REVENUE, REQUIRED_COLUMNS
)


def make_frame(rows):
    """rows: (store, item, month, inventory, sold, cost, revenue) tuples."""
    return pd.DataFrame(rows, columns=REQUIRED_COLUMNS)


@pytest.fixture
def two_group_df():
    """Store A/Item X sells 650-660-670, Store B/Item Y a flat 100 (rows shuffled)."""
    return make_frame([
        ('Store A', 'Item X', 'Mar', 1000, 670, 100, 300),
        ('Store B', 'Item Y', 'Feb', 200, 100, 50, 150),
        ('Store A', 'Item X', 'Jan', 1000, 650, 100, 300),
        ('Store B', 'Item Y', 'Jan', 200, 100, 50, 150),
        ('Store A', 'Item X', 'Feb', 1000, 660, 100, 300),
        ('Store B', 'Item Y', 'Mar', 200, 100, 50, 150),
    ])


@pytest.fixture
def messy_df():
    """Malformed cells in different columns."""
    return make_frame([
        ('S1', 'Mug', 'Jan', 100, 40, 20, 60),
        ('S1', 'Mug', 'Feb', 'n/a', 35, 20, 60),
        ('S1', 'Mug', 'Mar', 90, 'abc', 20, 60),
        ('S1', 'Card', 'Jan', 50, 10, float('inf'), 30),
        ('S1', 'Card', 'Feb', 60, 12, 5, None),
        ('S2', 'Card', 'Jan', 70, 14, 6, 35),
    ])


@pytest.fixture
def constant_df():
    return make_frame([
        ('S1', 'Pen', m, 100, 50, 10, 40) for m in ['Jan', 'Feb', 'Mar', 'Apr']
    ])


@pytest.fixture
def csv_text():
    return (
        "Store,Item Name,Month,Number Stored in Inventory,Number Sold,Cost (PHP),Revenue (PHP)\n"
        "Store A,Item X,Jan,1000,650,100,300\n"
        "Store A,Item X,Feb,1000,660,100,300\n"
        "Store A,Item X,Mar,1000,670,100,300\n"
        "Store B,Item Y,Jan,200,100,50,150\n"
        "Store B,Item Y,Feb,200,100,50,150\n"
        "Store B,Item Y,Mar,200,100,50,150\n"
    )
