"""
Ledger models - what each group member put in and took out.

Sign convention:
- balance > 0: the group owes this member (creditor)
- balance < 0: this member owes the group (debtor)
- |balance| < 0.01: settled
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, field_validator

from groupsplit.models.base import Money, ObjectIdStr


class MembershipStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"      # join request awaiting approval
    REJECTED = "rejected"


class GroupMember(BaseModel):
    """A roster entry: group membership joined with the user's profile."""
    user_id: ObjectIdStr
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class LedgerContribution(BaseModel):
    """
    The four independent per-user sums within one group.

    Invariants:
    - every amount is >= 0
    - amounts are left unrounded; rounding happens on the final balance
    """
    user_id: ObjectIdStr
    paid: Money = Decimal("0")      # expenses this user paid for
    owed: Money = Decimal("0")      # expense shares allocated to this user
    sent: Money = Decimal("0")      # settlement payments made
    received: Money = Decimal("0")  # settlement payments received

    @field_validator("paid", "owed", "sent", "received")
    @classmethod
    def non_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError(f"contribution sums must be non-negative, got {value}")
        return value

    def net(self) -> Decimal:
        return (self.paid + self.sent) - (self.received + self.owed)


class MemberBalance(BaseModel):
    """A member's contributions and the resulting signed balance (2 dp)."""
    user_id: ObjectIdStr
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    paid_amount: Money = Decimal("0")
    owed_amount: Money = Decimal("0")
    sent_amount: Money = Decimal("0")
    received_amount: Money = Decimal("0")
    balance: Money = Decimal("0")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
