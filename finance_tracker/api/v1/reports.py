"""GET /v1/reports/monthly - dashboard figures for one month"""

from fastapi import APIRouter, Depends, Query, Request

from finance_tracker.api.dependencies import get_request_id, get_store
from finance_tracker.api.v1.errors import ledger_errors
from finance_tracker.api.v1.schemas import MonthlyReportResponse
from finance_tracker.infrastructure.database.store import LedgerStore

router = APIRouter()


@router.get("/reports/monthly", response_model=MonthlyReportResponse)
def get_monthly_report(
    request: Request,
    year: int = Query(..., ge=1, le=9999, description="Calendar year"),
    month: int = Query(..., ge=1, le=12, description="Calendar month (1-12)"),
    store: LedgerStore = Depends(get_store),
):
    """
    Income/expense summary, expense by category and card usage for a month.

    Balance is signed; savings is clamped at zero. Card availability is the
    limit minus that card's expenses dated in the month.
    """
    with ledger_errors("monthly_report", get_request_id(request)):
        report = store.monthly_report(year, month)

    return MonthlyReportResponse.from_domain(report)
