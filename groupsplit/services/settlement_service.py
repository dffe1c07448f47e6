"""
Debt simplification.

Greedy largest-creditor / largest-debtor matching over signed member balances.
Not a proven minimum number of transfers, but deterministic: the same balances
always give the same suggestions in the same order.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from groupsplit.models.base import round_money, SETTLED_TOLERANCE
from groupsplit.models.ledger import MemberBalance
from groupsplit.models.settlement import SettlementSuggestion

logger = logging.getLogger(__name__)


@dataclass
class _Position:
    """Working copy of one member's balance during a single simplification."""
    user_id: str
    name: str
    balance: Decimal


def simplify_debts(balances: Sequence[MemberBalance]) -> List[SettlementSuggestion]:
    """
    Turn member balances into suggested transfers.

    Algorithm:
    1. Split members into creditors (> 0) and debtors (< 0); zero is ignored
    2. Creditors largest first, debtors most negative first, ties by user id
    3. Walk both lists with two pointers, each step moving
       min(credit, |debt|) (both rounded to cents) from debtor to creditor
    4. Advance whichever side is within 0.01 of zero (possibly both)
    5. Stop when either list runs out; leftover drift is not suggested

    The input is never mutated.
    """
    creditors = [
        _Position(b.user_id, b.display_name, b.balance)
        for b in balances if b.balance > 0
    ]
    debtors = [
        _Position(b.user_id, b.display_name, b.balance)
        for b in balances if b.balance < 0
    ]

    creditors.sort(key=lambda p: (-p.balance, p.user_id))
    debtors.sort(key=lambda p: (p.balance, p.user_id))

    suggestions: List[SettlementSuggestion] = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        creditor = creditors[i]
        debtor = debtors[j]

        credit_amount = round_money(creditor.balance)
        debt_amount = round_money(abs(debtor.balance))
        transfer = min(credit_amount, debt_amount)

        if transfer > 0:
            suggestions.append(
                SettlementSuggestion(
                    from_user_id=debtor.user_id,
                    from_name=debtor.name,
                    to_user_id=creditor.user_id,
                    to_name=creditor.name,
                    amount=transfer,
                )
            )

        creditor.balance -= transfer
        debtor.balance += transfer

        if abs(creditor.balance) < SETTLED_TOLERANCE:
            i += 1
        if abs(debtor.balance) < SETTLED_TOLERANCE:
            j += 1

    if i < len(creditors) or j < len(debtors):
        logger.debug(
            "Unmatched balance left after simplification: %d creditor(s), %d debtor(s)",
            len(creditors) - i,
            len(debtors) - j,
        )

    return suggestions
