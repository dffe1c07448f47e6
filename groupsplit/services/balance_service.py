"""
Balance aggregation.

Reduces the four per-user sums of a group (paid, owed, sent, received) to one
signed balance per member:

    balance = (paid + sent) - (received + owed)

Sums are kept exact; only the final balance is rounded to cents.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Mapping, Sequence

from groupsplit.models.base import round_money, SETTLED_TOLERANCE
from groupsplit.models.ledger import GroupMember, LedgerContribution, MemberBalance

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def build_contributions(
    members: Sequence[GroupMember],
    paid_by_user: Mapping[str, Decimal],
    owed_by_user: Mapping[str, Decimal],
    sent_by_user: Mapping[str, Decimal],
    received_by_user: Mapping[str, Decimal],
) -> Dict[str, LedgerContribution]:
    """Validate the raw sums into one LedgerContribution per roster member.

    Users missing from a mapping contribute zero for that category.
    Raises pydantic.ValidationError if any sum is negative.
    """
    contributions = {}
    for member in members:
        user_id = member.user_id
        contributions[user_id] = LedgerContribution(
            user_id=user_id,
            paid=paid_by_user.get(user_id, ZERO),
            owed=owed_by_user.get(user_id, ZERO),
            sent=sent_by_user.get(user_id, ZERO),
            received=received_by_user.get(user_id, ZERO),
        )
    return contributions


def compute_balances(
    members: Sequence[GroupMember],
    paid_by_user: Mapping[str, Decimal],
    owed_by_user: Mapping[str, Decimal],
    sent_by_user: Mapping[str, Decimal],
    received_by_user: Mapping[str, Decimal],
) -> List[MemberBalance]:
    """Compute a balance for every member, in roster order.

    A user listed more than once is reported once, at their first position.
    Contribution amounts are shown rounded to cents; the balance is computed
    from the unrounded sums and rounded once.
    """
    contributions = build_contributions(
        members, paid_by_user, owed_by_user, sent_by_user, received_by_user
    )

    balances = []
    seen = set()
    for member in members:
        if member.user_id in seen:
            logger.warning("Duplicate membership for user %s ignored", member.user_id)
            continue
        seen.add(member.user_id)

        contribution = contributions[member.user_id]
        balances.append(
            MemberBalance(
                user_id=member.user_id,
                first_name=member.first_name,
                last_name=member.last_name,
                email=member.email,
                avatar_url=member.avatar_url,
                paid_amount=round_money(contribution.paid),
                owed_amount=round_money(contribution.owed),
                sent_amount=round_money(contribution.sent),
                received_amount=round_money(contribution.received),
                balance=round_money(contribution.net()),
            )
        )

    # Contributions from users outside the roster are not reported, but they
    # would break conservation, so make that visible.
    known = set(contributions)
    strays = (
        set(paid_by_user) | set(owed_by_user) | set(sent_by_user) | set(received_by_user)
    ) - known
    if strays:
        logger.warning("Ignoring contributions from non-members: %s", sorted(strays))

    drift = sum((b.balance for b in balances), ZERO)
    if abs(drift) >= SETTLED_TOLERANCE * max(len(balances), 1):
        logger.warning("Group balances do not net to zero (drift %s)", drift)

    return balances
