from decimal import Decimal
from pydantic import BaseModel, field_validator
from groupsplit.models.base import Money, ObjectIdStr


class SettlementSuggestion(BaseModel):
    """Advisory transfer: from_user should pay to_user the amount. Never persisted."""
    from_user_id: ObjectIdStr
    from_name: str = ""
    to_user_id: ObjectIdStr
    to_name: str = ""
    amount: Money

    @field_validator("amount")
    @classmethod
    def positive(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError("suggested amount must be positive")
        return value
