from fastapi import APIRouter, Depends, Query

from groupsplit.db.mongo import get_db
from groupsplit.models.stats import TimeFrame
from groupsplit.repositories.stats_repo import StatsRepository
from groupsplit.schemas.stats import (
    BalanceEntry,
    BalancesData,
    BalancesResponse,
    ExpenseSummaryData,
    ExpenseSummaryResponse,
    PaymentSuggestionEntry,
    PaymentSuggestionsData,
    PaymentSuggestionsResponse,
)
from groupsplit.services.stats_service import StatsService

router = APIRouter()


@router.get("/group/{group_id}/expenses", response_model=ExpenseSummaryResponse)
async def get_group_expense_summary(
    group_id: str,
    time_frame: TimeFrame = Query(TimeFrame.MONTHLY, alias="timeFrame"),
    db = Depends(get_db)
):
    """Expense totals per period and per payer"""
    time_series, by_payer = await StatsService.get_expense_summary(
        StatsRepository(db), group_id, time_frame
    )
    return ExpenseSummaryResponse(
        data=ExpenseSummaryData.from_totals(time_series, by_payer)
    )


@router.get("/group/{group_id}/balances", response_model=BalancesResponse)
async def get_group_balances(group_id: str, db = Depends(get_db)):
    """Balance of every member of a group"""
    balances = await StatsService.get_group_balances(StatsRepository(db), group_id)
    return BalancesResponse(
        data=BalancesData(balances=[BalanceEntry.from_balance(b) for b in balances])
    )


@router.get("/group/{group_id}/payment-suggestions", response_model=PaymentSuggestionsResponse)
async def get_payment_suggestions(group_id: str, db = Depends(get_db)):
    """Suggested transfers that would settle a group"""
    suggestions = await StatsService.get_payment_suggestions(StatsRepository(db), group_id)
    return PaymentSuggestionsResponse(
        data=PaymentSuggestionsData(
            payment_suggestions=[PaymentSuggestionEntry.from_suggestion(s) for s in suggestions]
        )
    )
