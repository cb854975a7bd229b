from datetime import datetime
from pydantic import BaseModel, Field
from groupkit.models.account_snapshot import ManagementType
from groupkit.models.group_transaction import TransactionKind


class AccountSummaryResponse(BaseModel):
    """Stored and derived figures of a group account"""

    group_id: int
    management_type: ManagementType
    total_balance: int
    member_count: int
    total_deposited: int
    total_used: int
    per_person_share: int
    entry_fee: int
    refund_amount: int
    undistributed_remainder: int


class DepositCreate(BaseModel):
    """Schema for paying dues into the group account"""

    amount: int = Field(..., gt=0)
    note: str | None = Field(None, max_length=255)


class WithdrawalCreate(BaseModel):
    """Schema for spending from the group account"""

    amount: int = Field(..., gt=0)
    purpose: str = Field(..., min_length=1, max_length=255)


class ManagementTypeUpdate(BaseModel):
    """Switch the settlement model of the account"""

    management_type: ManagementType


class TransactionResponse(BaseModel):
    """One movement on the group account"""

    model_config = {"from_attributes": True}

    id: int
    group_id: int
    user_id: int | None
    kind: TransactionKind
    amount: int
    note: str | None
    created_at: datetime


class TransactionListResponse(BaseModel):
    """Page of account history with the total row count"""

    transactions: list[TransactionResponse]
    total: int
