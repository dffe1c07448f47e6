from enum import Enum
from pydantic import BaseModel

from groupsplit.models.base import Money, ObjectIdStr


class TimeFrame(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


# $dateToString formats; weekly uses the ISO week-numbering year
PERIOD_FORMATS = {
    TimeFrame.DAILY: "%Y-%m-%d",
    TimeFrame.WEEKLY: "%G-%V",
    TimeFrame.MONTHLY: "%Y-%m",
    TimeFrame.YEARLY: "%Y",
}


class ExpensePeriodTotal(BaseModel):
    """Total spent by a group within one period."""
    period: str
    total: Money


class PayerTotal(BaseModel):
    """Total a member has paid for group expenses."""
    user_id: ObjectIdStr
    first_name: str = ""
    last_name: str = ""
    total: Money
