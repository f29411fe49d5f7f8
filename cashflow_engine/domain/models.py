"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Literal, Optional, Tuple, Union

from cashflow_engine.utils.date_utils import to_date_key

TransactionGroup = Literal[
    "fee", "other_income", "operational", "tax", "loan", "personal", "bank_adjustment"
]
CollectionSource = Literal["lloyds", "generic", "access"]
AlertSeverity = Literal["info", "warning", "high"]
AlertCategory = Literal["overdue-collection", "expense-spike", "client-trend"]

INCOME_GROUPS: Tuple[str, ...] = ("fee", "other_income")
EXPENSE_GROUPS: Tuple[str, ...] = ("operational", "tax", "loan", "personal")
BANK_ADJUSTMENT = "bank_adjustment"
TRANSACTION_GROUPS: Tuple[str, ...] = INCOME_GROUPS + EXPENSE_GROUPS + (BANK_ADJUSTMENT,)

# Emission order of overdue alerts
COLLECTION_SOURCES: Tuple[str, ...] = ("lloyds", "generic", "access")

SEVERITY_WEIGHT: Dict[str, int] = {"high": 2, "warning": 1, "info": 0}


@dataclass(frozen=True)
class Transaction:
    """Dated cash movement booked in the office ledger"""

    transaction_id: str
    date: date
    amount: float
    type: str  # "income" or "expense"
    group: str  # one of TRANSACTION_GROUPS
    status: str = "completed"  # "pending" or "completed"
    description: str = ""
    category: str = ""
    client_reference: Optional[str] = None


@dataclass(frozen=True)
class LedgerRow:
    """One calendar day of aggregated activity plus the running balance"""

    date: date
    fee: float = 0.0
    other_income: float = 0.0
    operational: float = 0.0
    tax: float = 0.0
    loan: float = 0.0
    personal: float = 0.0
    bank_adjustment: float = 0.0
    daily_total: float = 0.0
    balance: float = 0.0
    pending_total: float = 0.0
    transaction_ids: Tuple[str, ...] = ()

    @property
    def date_key(self) -> str:
        return to_date_key(self.date)

    @property
    def total_income(self) -> float:
        return self.fee + self.other_income

    @property
    def total_expenses(self) -> float:
        return self.operational + self.tax + self.loan + self.personal


@dataclass(frozen=True)
class CollectionItem:
    """
    Accounts-receivable demand from one of the collection trackers.

    All three trackers share this shape; `source` decides which of the name
    fields identify the client (see client_trend.client_label).
    """

    item_id: str
    source: str  # one of COLLECTION_SOURCES
    account_number: str
    demand_date: Optional[date]
    amount: float
    is_paid: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None  # payment time once is_paid
    claimant_name: str = ""
    insured_name: str = ""
    client_name: str = ""
    case_name: str = ""


@dataclass(frozen=True)
class CollectionTarget:
    """Navigate to a collection tracker row"""

    source: str
    item_id: str
    type: str = "collection"


@dataclass(frozen=True)
class FlowTarget:
    """Navigate to a ledger day, optionally highlighting transactions"""

    date: str
    transaction_ids: Tuple[str, ...] = ()
    group: Optional[str] = None
    type: str = "flow"


@dataclass(frozen=True)
class DashboardTarget:
    """Fallback navigation to a dashboard section"""

    section: str = "insights"
    type: str = "dashboard"


AlertTarget = Union[CollectionTarget, FlowTarget, DashboardTarget]


@dataclass(frozen=True)
class Alert:
    """Derived anomaly finding, recomputed on every evaluation"""

    alert_id: str
    category: str
    severity: str
    title: str
    description: str
    source_label: Optional[str] = None
    account_number: Optional[str] = None
    demand_date: Optional[str] = None
    amount: Optional[float] = None
    overdue_days: Optional[int] = None
    target: Optional[AlertTarget] = None


@dataclass(frozen=True)
class AlertCounts:
    """Badge counters for an alert feed"""

    total: int
    by_severity: Dict[str, int]
    collection: int


@dataclass(frozen=True)
class AlertBundle:
    """Ranked alert feed of one evaluation"""

    alerts: Tuple[Alert, ...]
    counts: AlertCounts


@dataclass(frozen=True)
class AlertPolicy:
    """
    Thresholds used by the detectors.

    Defaults are the business constants in use by the office; they are kept
    configurable rather than derived (see config.Settings).
    """

    overdue_warning_days: int = 30
    overdue_high_days: int = 90
    expense_spike_growth: float = 0.25
    expense_spike_high_growth: float = 0.40
    client_recent_window_days: int = 30
    client_baseline_window_days: int = 120
    client_min_baseline_samples: int = 2
    client_slowdown_ratio: float = 1.3
    client_high_ratio: float = 1.6


DEFAULT_POLICY = AlertPolicy()


@dataclass(frozen=True)
class CashflowReport:
    """Output of a full snapshot evaluation"""

    ledger: Tuple[LedgerRow, ...]
    alerts: AlertBundle
    current_balance: float
    opening_balance: float
    window_start: date
    window_end: date
    rows_in_window: Tuple[LedgerRow, ...]
