# -*- coding: utf-8 -*-
"""
Registration entity models.

Read-only data the wizard loads once per session: the registrant, the
originating financial record, the catalog of program offerings and the
looked-up detail of a transfer target.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

PAYMENT_STATUS_PAID = "Paid"
PAYMENT_STATUS_PARTIAL = "Partial Payment"
PAYMENT_STATUS_NOT_AVAILABLE = "N/A"


def to_decimal(value: Any, default: Optional[Decimal] = Decimal("0")) -> Optional[Decimal]:
    """Read a wire amount without losing precision."""
    if value is None or value == "":
        return default
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    return amount if amount.is_finite() else default


def _flag(value: Any) -> bool:
    """Read a boolean that some backends send as "Yes"/"No"."""
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "true", "1")
    return bool(value)


@dataclass
class Registrant:
    """The individual whose registration is being changed."""

    registrant_id: str = ""
    first_name: str = ""
    last_name: str = ""
    record_name: str = ""
    program_id: Optional[str] = None
    program_name: str = ""

    @property
    def display_name(self) -> str:
        """'First Last', falling back to the record name."""
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or self.record_name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registrant":
        return cls(
            registrant_id=data.get("id") or "",
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            record_name=data.get("name") or "",
            program_id=data.get("programId"),
            program_name=data.get("programName") or "",
        )


@dataclass
class FinancialRecord:
    """Order/invoice-like record tied to the current registration."""

    record_id: str = ""
    name: str = ""
    amount: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    payment_status: Optional[str] = None
    is_bundled: bool = False
    discount_amount: Decimal = Decimal("0")
    account_id: Optional[str] = None
    pricing_context_id: Optional[str] = None

    @property
    def payment_status_display(self) -> str:
        return self.payment_status or PAYMENT_STATUS_NOT_AVAILABLE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinancialRecord":
        return cls(
            record_id=data.get("id") or "",
            name=data.get("name") or "",
            amount=to_decimal(data.get("amount")),
            balance=to_decimal(data.get("balance")),
            payment_status=data.get("paymentStatus") or None,
            is_bundled=_flag(data.get("isBundled", False)),
            discount_amount=to_decimal(data.get("discountAmount")),
            account_id=data.get("accountId"),
            pricing_context_id=data.get("pricingContextId"),
        )


@dataclass
class ProgramOffering:
    """Catalog row a registrant can be registered against."""

    program_id: str = ""
    name: str = ""
    code: str = ""
    acronym: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    expected_program_fee: Optional[Decimal] = None

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name, code or acronym."""
        needle = term.lower()
        return any(
            value and needle in value.lower()
            for value in (self.name, self.code, self.acronym)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgramOffering":
        return cls(
            program_id=data.get("id") or "",
            name=data.get("name") or "",
            code=data.get("code") or "",
            acronym=data.get("acronym") or "",
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            expected_program_fee=to_decimal(data.get("expectedProgramFee"), default=None),
        )


@dataclass
class ProgramDetail:
    """Pricing looked up for a transfer target."""

    expected_program_fee: Optional[Decimal] = None
    transfer_fee_unit_price: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProgramDetail":
        data = data or {}
        return cls(
            expected_program_fee=to_decimal(data.get("expectedProgramFee"), default=None),
            transfer_fee_unit_price=to_decimal(data.get("transferFeeUnitPrice"), default=None),
        )


@dataclass
class Contact:
    """Candidate substitute registrant."""

    contact_id: str = ""
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    account_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        return cls(
            contact_id=data.get("id") or "",
            name=data.get("name") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            account_name=data.get("accountName"),
        )


@dataclass
class InitData:
    """Everything loaded at session start."""

    registrant: Registrant = field(default_factory=Registrant)
    financial_record: FinancialRecord = field(default_factory=FinancialRecord)
    available_programs: List[ProgramOffering] = field(default_factory=list)
    original_program_fee_total: Decimal = Decimal("0")
    discount_total: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "InitData":
        data = data or {}
        return cls(
            registrant=Registrant.from_dict(data.get("registrant") or {}),
            financial_record=FinancialRecord.from_dict(data.get("originatingFinancialRecord") or {}),
            available_programs=[
                ProgramOffering.from_dict(row) for row in data.get("availablePrograms") or []
            ],
            original_program_fee_total=to_decimal(data.get("originalProgramFeeTotal")),
            discount_total=to_decimal(data.get("discountTotal")),
        )
