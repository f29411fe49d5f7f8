"""Pydantic schemas for plain-data snapshots and their conversion to domain objects"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cashflow_engine.domain.models import (
    BANK_ADJUSTMENT,
    COLLECTION_SOURCES,
    EXPENSE_GROUPS,
    INCOME_GROUPS,
    CollectionItem,
    Transaction,
)
from cashflow_engine.domain.exceptions import (
    InvalidCollectionDataError,
    InvalidTransactionDataError,
)
from cashflow_engine.utils.date_utils import parse_date_key


class _Record(BaseModel):
    """Accepts both the camelCase keys of the tracker backups and snake_case names"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TransactionRecord(_Record):
    """Single transaction as stored by the tracker"""

    id: str = Field(..., min_length=1)
    date: str = Field(..., description="Calendar day key YYYY-MM-DD")
    amount: float
    type: Literal["income", "expense"]
    group: Literal["fee", "other_income", "operational", "tax", "loan", "personal", "bank_adjustment"]
    status: Literal["pending", "completed"] = "completed"
    description: str = ""
    category: str = ""
    client_reference: Optional[str] = Field(None, alias="clientReference")

    def to_domain(self) -> Transaction:
        """
        Convert to a domain transaction.

        Raises:
            ParseError: date is not a valid day key
            InvalidTransactionDataError: group and direction disagree, or a
                non-adjustment amount is negative
        """
        if self.group in INCOME_GROUPS and self.type != "income":
            raise InvalidTransactionDataError(f"Transaction {self.id}: group {self.group} must be income")
        if self.group in EXPENSE_GROUPS and self.type != "expense":
            raise InvalidTransactionDataError(f"Transaction {self.id}: group {self.group} must be expense")
        if self.group != BANK_ADJUSTMENT and self.amount < 0:
            raise InvalidTransactionDataError(f"Transaction {self.id}: amount must be an unsigned magnitude")

        return Transaction(
            transaction_id=self.id,
            date=parse_date_key(self.date),
            amount=self.amount,
            type=self.type,
            group=self.group,
            status=self.status,
            description=self.description,
            category=self.category,
            client_reference=self.client_reference or None,
        )


class CollectionRecord(_Record):
    """Collection tracker row; which name fields are filled depends on the tracker"""

    id: str = Field(..., min_length=1)
    account_number: str = Field(..., alias="accountNumber")
    demand_date: Optional[str] = Field(None, alias="demandDate")
    amount: float = Field(0.0, ge=0)
    is_paid: bool = Field(False, alias="isPaid")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    claimant_name: str = Field("", alias="claimantName")
    insured_name: str = Field("", alias="insuredName")
    client_name: str = Field("", alias="clientName")
    case_name: str = Field("", alias="caseName")

    def to_domain(self, source: str) -> CollectionItem:
        """
        Convert to a domain collection item for the given tracker.

        Raises:
            ParseError: demand date is present but not a valid day key
            InvalidCollectionDataError: unknown tracker
        """
        if source not in COLLECTION_SOURCES:
            raise InvalidCollectionDataError(f"Unknown collection source: {source!r}")

        demand_date: Optional[date] = parse_date_key(self.demand_date) if self.demand_date else None
        return CollectionItem(
            item_id=self.id,
            source=source,
            account_number=self.account_number.strip(),
            demand_date=demand_date,
            amount=self.amount,
            is_paid=self.is_paid,
            created_at=self.created_at,
            updated_at=self.updated_at,
            claimant_name=self.claimant_name.strip(),
            insured_name=self.insured_name.strip(),
            client_name=self.client_name.strip(),
            case_name=self.case_name.strip(),
        )


class SnapshotRecord(_Record):
    """Backup envelope holding every engine input"""

    transactions: List[TransactionRecord] = Field(default_factory=list)
    initial_balance: float = Field(0.0, alias="initialBalance")
    lloyds_collection: List[CollectionRecord] = Field(default_factory=list, alias="lloydsCollection")
    generic_collection: List[CollectionRecord] = Field(default_factory=list, alias="genericCollection")
    access_collection: List[CollectionRecord] = Field(default_factory=list, alias="accessCollection")

    def domain_transactions(self) -> List[Transaction]:
        return [record.to_domain() for record in self.transactions]

    def domain_collection_items(self) -> List[CollectionItem]:
        """All collection items, tracker by tracker in insertion order"""
        return [
            *(record.to_domain("lloyds") for record in self.lloyds_collection),
            *(record.to_domain("generic") for record in self.generic_collection),
            *(record.to_domain("access") for record in self.access_collection),
        ]


COLLECTION_FIELDS = {
    "lloydsCollection",
    "genericCollection",
    "accessCollection",
    "lloyds_collection",
    "generic_collection",
    "access_collection",
}


def parse_snapshot(payload: dict) -> SnapshotRecord:
    """
    Validate a plain-data snapshot.

    Raises:
        InvalidCollectionDataError: every schema error sits in a collection list
        InvalidTransactionDataError: any other schema error
    """
    try:
        return SnapshotRecord.model_validate(payload)
    except ValidationError as e:
        errors = e.errors()
        if errors and all(err["loc"] and err["loc"][0] in COLLECTION_FIELDS for err in errors):
            raise InvalidCollectionDataError(f"Invalid collection data: {e.error_count()} error(s)") from e
        raise InvalidTransactionDataError(f"Invalid snapshot data: {e.error_count()} error(s)") from e
