"""Response envelopes for the stats endpoints (camelCase on the wire)."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from groupsplit.models.base import Money
from groupsplit.models.ledger import MemberBalance
from groupsplit.models.settlement import SettlementSuggestion
from groupsplit.models.stats import ExpensePeriodTotal, PayerTotal


class BalanceEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    paid_amount: Money = Field(alias="paidAmount")
    owed_amount: Money = Field(alias="owedAmount")
    sent_amount: Money = Field(alias="sentAmount")
    received_amount: Money = Field(alias="receivedAmount")
    balance: Money

    @classmethod
    def from_balance(cls, balance: MemberBalance) -> "BalanceEntry":
        return cls(**balance.model_dump())


class BalancesData(BaseModel):
    balances: List[BalanceEntry]


class BalancesResponse(BaseModel):
    success: bool = True
    data: BalancesData


class UserRef(BaseModel):
    id: str
    name: str


class PaymentSuggestionEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_user: UserRef = Field(alias="from")
    to_user: UserRef = Field(alias="to")
    amount: Money

    @classmethod
    def from_suggestion(cls, suggestion: SettlementSuggestion) -> "PaymentSuggestionEntry":
        return cls(
            from_user=UserRef(id=suggestion.from_user_id, name=suggestion.from_name),
            to_user=UserRef(id=suggestion.to_user_id, name=suggestion.to_name),
            amount=suggestion.amount
        )


class PaymentSuggestionsData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_suggestions: List[PaymentSuggestionEntry] = Field(
        alias="paymentSuggestions"
    )


class PaymentSuggestionsResponse(BaseModel):
    success: bool = True
    data: PaymentSuggestionsData


class PeriodTotalEntry(BaseModel):
    period: str
    total: Money


class PayerTotalEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    total: Money


class ExpenseSummaryData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time_series_data: List[PeriodTotalEntry] = Field(alias="timeSeriesData")
    by_payer: List[PayerTotalEntry] = Field(alias="byPayer")

    @classmethod
    def from_totals(
        cls, time_series: List[ExpensePeriodTotal], by_payer: List[PayerTotal]
    ) -> "ExpenseSummaryData":
        return cls(
            time_series_data=[PeriodTotalEntry(**t.model_dump()) for t in time_series],
            by_payer=[PayerTotalEntry(**p.model_dump()) for p in by_payer]
        )


class ExpenseSummaryResponse(BaseModel):
    success: bool = True
    data: ExpenseSummaryData
