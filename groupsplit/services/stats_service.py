import logging
from typing import List, Tuple

from groupsplit.core.errors import GroupNotFoundError
from groupsplit.models.ledger import MemberBalance
from groupsplit.models.settlement import SettlementSuggestion
from groupsplit.models.stats import ExpensePeriodTotal, PayerTotal, TimeFrame
from groupsplit.repositories.stats_repo import StatsRepository
from groupsplit.services.balance_service import compute_balances
from groupsplit.services.settlement_service import simplify_debts

logger = logging.getLogger(__name__)


class StatsService:
    @staticmethod
    async def _require_group(repo: StatsRepository, group_id: str) -> None:
        group = await repo.get_group(group_id)
        if group is None:
            raise GroupNotFoundError(group_id)

    @staticmethod
    async def get_group_balances(repo: StatsRepository, group_id: str) -> List[MemberBalance]:
        """
        Balance of every group member, in membership order.
        """
        await StatsService._require_group(repo, group_id)

        members = await repo.get_members(group_id)
        paid = await repo.sum_paid_by_user(group_id)
        owed = await repo.sum_owed_by_user(group_id)
        sent = await repo.sum_sent_by_user(group_id)
        received = await repo.sum_received_by_user(group_id)

        balances = compute_balances(members, paid, owed, sent, received)
        logger.debug("Computed %d balances for group %s", len(balances), group_id)
        return balances

    @staticmethod
    async def get_payment_suggestions(
        repo: StatsRepository, group_id: str
    ) -> List[SettlementSuggestion]:
        """Suggested transfers that settle the group."""
        balances = await StatsService.get_group_balances(repo, group_id)
        suggestions = simplify_debts(balances)
        logger.debug("Suggested %d transfers for group %s", len(suggestions), group_id)
        return suggestions

    @staticmethod
    async def get_expense_summary(
        repo: StatsRepository, group_id: str, time_frame: TimeFrame = TimeFrame.MONTHLY
    ) -> Tuple[List[ExpensePeriodTotal], List[PayerTotal]]:
        """Expense totals per period and per payer."""
        await StatsService._require_group(repo, group_id)

        time_series = await repo.expense_time_series(group_id, time_frame)
        by_payer = await repo.expenses_by_payer(group_id)
        return time_series, by_payer
