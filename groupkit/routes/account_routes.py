from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from groupkit.database import get_db
from groupkit.dependencies import get_group_context
from groupkit.models.group_context import GroupContext
from groupkit.services.account_service import AccountService
from groupkit.schemas.account_schemas import (
    AccountSummaryResponse,
    DepositCreate,
    WithdrawalCreate,
    ManagementTypeUpdate,
    TransactionListResponse,
)

router = APIRouter()


@router.get("/{group_id}/account", response_model=AccountSummaryResponse)
async def get_account(
    context: GroupContext = Depends(get_group_context), db: Session = Depends(get_db)
):
    """Get the group account with per-person share, entry fee and refund amount"""
    service = AccountService(db)
    return service.get_account_summary(context)


@router.patch("/{group_id}/account", response_model=AccountSummaryResponse)
async def change_management_type(
    data: ManagementTypeUpdate,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """Switch the account between fair and operating settlement"""
    service = AccountService(db)
    return service.change_management_type(data.management_type, context)


@router.post(
    "/{group_id}/account/deposits",
    response_model=AccountSummaryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def deposit(
    data: DepositCreate,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """Pay dues into the group account"""
    service = AccountService(db)
    return service.deposit(data, context)


@router.post(
    "/{group_id}/account/withdrawals",
    response_model=AccountSummaryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def withdraw(
    data: WithdrawalCreate,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """Spend from the group account (owner or treasurer)"""
    service = AccountService(db)
    return service.withdraw(data, context)


@router.get("/{group_id}/account/transactions", response_model=TransactionListResponse)
async def list_transactions(
    limit: int = Query(100, ge=1, le=1000, description="Max results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Account history: deposits, withdrawals, entry fees and refunds.

    - Newest first
    - Any approved member may read it
    """
    service = AccountService(db)
    return service.list_transactions(context, limit=limit, offset=offset)
