import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi.testclient import TestClient

from groupsplit.main import app
from groupsplit.db.mongo import get_db
from groupsplit.models.ledger import GroupMember, MemberBalance

COLLECTIONS = ["groups", "group_members", "users", "expenses", "expense_shares", "payments"]


def _make_cursor(docs):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def _make_balance(user_id: str, balance, first_name: str = None, last_name: str = "") -> MemberBalance:
    return MemberBalance(
        user_id=user_id,
        first_name=first_name if first_name is not None else user_id.upper(),
        last_name=last_name,
        balance=Decimal(str(balance))
    )


@pytest.fixture
def make_cursor():
    """Build a motor-style aggregation cursor whose to_list() returns docs."""
    return _make_cursor


@pytest.fixture
def make_balance():
    """Build a MemberBalance with only the balance filled in."""
    return _make_balance


@pytest.fixture
def mock_db():
    """Database stand-in: one MagicMock per collection, indexable by name."""
    return {name: MagicMock() for name in COLLECTIONS}


@pytest.fixture
def group_id():
    return str(ObjectId())


@pytest.fixture
def trio():
    """Alice, Bob and Carol, in membership order."""
    ids = sorted(ObjectId() for _ in range(3))
    return [
        GroupMember(user_id=ids[0], first_name="Alice", last_name="Ng", email="alice@example.com"),
        GroupMember(user_id=ids[1], first_name="Bob", last_name="Diaz", email="bob@example.com"),
        GroupMember(user_id=ids[2], first_name="Carol", last_name="Wu", email="carol@example.com"),
    ]


@pytest.fixture
def test_client(mock_db):
    """FastAPI test client wired to the mock database (no lifespan, no MongoDB)."""
    app.dependency_overrides[get_db] = lambda: mock_db
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()
