import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from pymongo.errors import ServerSelectionTimeoutError

from groupsplit.core.errors import GroupNotFoundError
from groupsplit.models.stats import ExpensePeriodTotal, PayerTotal, TimeFrame
from groupsplit.repositories.stats_repo import StatsRepository
from groupsplit.services.stats_service import StatsService


@pytest.fixture
def repo(trio, group_id):
    alice, bob, carol = trio
    repo = MagicMock(spec=StatsRepository)
    repo.get_group = AsyncMock(return_value={"_id": group_id, "name": "Trip"})
    repo.get_members = AsyncMock(return_value=trio)
    repo.sum_paid_by_user = AsyncMock(return_value={alice.user_id: Decimal("90")})
    repo.sum_owed_by_user = AsyncMock(return_value={m.user_id: Decimal("30") for m in trio})
    repo.sum_sent_by_user = AsyncMock(return_value={})
    repo.sum_received_by_user = AsyncMock(return_value={})
    return repo


@pytest.mark.asyncio
async def test_get_group_balances(repo, trio, group_id):
    balances = await StatsService.get_group_balances(repo, group_id)

    assert [b.user_id for b in balances] == [m.user_id for m in trio]
    assert [b.balance for b in balances] == [Decimal("60.00"), Decimal("-30.00"), Decimal("-30.00")]
    repo.get_members.assert_awaited_once_with(group_id)
    repo.sum_received_by_user.assert_awaited_once_with(group_id)


@pytest.mark.asyncio
async def test_get_payment_suggestions(repo, trio, group_id):
    alice, bob, carol = trio

    suggestions = await StatsService.get_payment_suggestions(repo, group_id)

    assert [(s.from_user_id, s.to_user_id, s.amount) for s in suggestions] == [
        (bob.user_id, alice.user_id, Decimal("30.00")),
        (carol.user_id, alice.user_id, Decimal("30.00")),
    ]
    assert suggestions[0].from_name == "Bob Diaz"


@pytest.mark.asyncio
async def test_unknown_group(repo, group_id):
    repo.get_group.return_value = None

    with pytest.raises(GroupNotFoundError):
        await StatsService.get_group_balances(repo, group_id)

    repo.get_members.assert_not_awaited()


@pytest.mark.asyncio
async def test_database_failure_propagates(repo, group_id):
    """A failed fetch must not turn into zero balances."""
    repo.sum_owed_by_user.side_effect = ServerSelectionTimeoutError("no primary")

    with pytest.raises(ServerSelectionTimeoutError):
        await StatsService.get_payment_suggestions(repo, group_id)


@pytest.mark.asyncio
async def test_get_expense_summary(repo, trio, group_id):
    alice = trio[0]
    repo.expense_time_series = AsyncMock(return_value=[
        ExpensePeriodTotal(period="2024-05", total=Decimal("90"))
    ])
    repo.expenses_by_payer = AsyncMock(return_value=[
        PayerTotal(user_id=alice.user_id, first_name="Alice", last_name="Ng", total=Decimal("90"))
    ])

    time_series, by_payer = await StatsService.get_expense_summary(repo, group_id, TimeFrame.YEARLY)

    assert time_series[0].period == "2024-05"
    assert by_payer[0].user_id == alice.user_id
    repo.expense_time_series.assert_awaited_once_with(group_id, TimeFrame.YEARLY)
