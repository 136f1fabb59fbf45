"""
The initial Alembic revision builds the same schema as the ORM models
"""

import importlib.util
import os

import pytest
from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from mytaxy.database.database import Base

REVISION = os.path.join(os.path.dirname(__file__), "..", "alembic", "versions", "0001_initial.py")


def load_revision():
    spec = importlib.util.spec_from_file_location("initial_revision", REVISION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def migrated_engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            load_revision().upgrade()
    yield engine
    engine.dispose()


def test_revision_matches_models(migrated_engine):
    with migrated_engine.connect() as conn:
        diff = compare_metadata(MigrationContext.configure(conn), Base.metadata)
    assert diff == []


def test_unique_indexes(migrated_engine):
    inspector = inspect(migrated_engine)
    unique = {
        (table, index["name"])
        for table in ("users", "captains", "receipts", "payments")
        for index in inspector.get_indexes(table)
        if index["unique"]
    }
    assert unique == {
        ("users", "ix_users_email"),
        ("captains", "ix_captains_email"),
        ("receipts", "ix_receipts_receipt_number"),
        ("receipts", "ix_receipts_ride_id"),
        ("payments", "ix_payments_order_id"),
        ("payments", "ix_payments_payment_id"),
    }


def test_transaction_id_check_constraint(migrated_engine):
    names = [c["name"] for c in inspect(migrated_engine).get_check_constraints("receipts")]
    assert "ck_receipts_transaction_id" in names
