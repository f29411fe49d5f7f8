"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta

from cashflow_engine.domain.models import CollectionItem, Transaction


FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    """Fixed evaluation date; tests never read the real clock"""
    return FIXED_TODAY


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Two months of office activity with a sharp rise in May expenses"""
    return [
        # April
        Transaction("apr-fee", date(2024, 4, 3), 8000.0, "income", "fee", description="Retainer"),
        Transaction("apr-rent", date(2024, 4, 5), 600.0, "expense", "operational", description="Office rent"),
        Transaction("apr-vat", date(2024, 4, 15), 400.0, "expense", "tax", description="VAT"),
        # May
        Transaction("may-fee", date(2024, 5, 2), 7500.0, "income", "fee", description="Retainer"),
        Transaction("may-rent", date(2024, 5, 5), 600.0, "expense", "operational", description="Office rent"),
        Transaction("may-loan", date(2024, 5, 10), 900.0, "expense", "loan", description="Loan repayment"),
        Transaction(
            "may-adj", date(2024, 5, 20), -35.5, "expense", "bank_adjustment", description="Bank fee correction"
        ),
        Transaction(
            "may-draw", date(2024, 5, 28), 250.0, "expense", "personal", status="pending", description="Withdrawal"
        ),
    ]


@pytest.fixture
def sample_collection_items() -> list[CollectionItem]:
    """Items across all three trackers, paid and unpaid"""
    return [
        CollectionItem(
            item_id="l-1",
            source="lloyds",
            account_number="LL-100",
            demand_date=FIXED_TODAY - timedelta(days=95),
            amount=12000.0,
            is_paid=False,
            claimant_name="Harbor Marine",
        ),
        CollectionItem(
            item_id="g-1",
            source="generic",
            account_number="GN-200",
            demand_date=FIXED_TODAY - timedelta(days=40),
            amount=3500.0,
            is_paid=False,
            client_name="Atlas Builders",
        ),
        CollectionItem(
            item_id="a-1",
            source="access",
            account_number="AC-300",
            demand_date=FIXED_TODAY - timedelta(days=10),
            amount=1800.0,
            is_paid=False,
            insured_name="Dana Levi",
        ),
        CollectionItem(
            item_id="g-2",
            source="generic",
            account_number="GN-201",
            demand_date=FIXED_TODAY - timedelta(days=200),
            amount=2200.0,
            is_paid=True,
            updated_at=datetime(2024, 1, 20, 11, 30),
            client_name="Atlas Builders",
        ),
    ]
