# -*- coding: utf-8 -*-
"""
Change request models.

Enumerations shared by the wizard and the immutable payloads sent to the
backend at the execute step.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class ChangeType(str, Enum):
    """The three mutually exclusive registration changes."""
    NONE = ""
    CANCELLATION = "Cancellation"
    SUBSTITUTION = "Substitution"
    TRANSFER = "Transfer"

    @classmethod
    def parse(cls, value: Any) -> "ChangeType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value or "")
        except ValueError:
            return cls.NONE


class SettlementType(str, Enum):
    """How a refund or credit resulting from a change is disposed of."""
    NONE = ""
    REFUND = "Refund"
    UNAPPLIED_FUNDS = "Unapplied Funds"
    APPLY_TO_BALANCE = "Apply to Remaining Balance"

    @classmethod
    def parse(cls, value: Any) -> "SettlementType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value or "")
        except ValueError:
            return cls.NONE


def _money(value: Decimal) -> str:
    # Plain notation keeps every digit; float would round large amounts
    return format(value, "f")


@dataclass(frozen=True)
class TransferRequest:
    registrant_id: str
    original_record_id: str
    new_program_id: str
    apply_transfer_fee: bool
    transfer_fee_amount: Decimal
    apply_discount: bool
    discount_amount: Decimal
    discount_code: str
    settlement_type: Optional[SettlementType]
    same_program_transfer: bool
    new_program_fee_amount: Decimal
    comments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registrantId": self.registrant_id,
            "originalRecordId": self.original_record_id,
            "newProgramId": self.new_program_id,
            "applyTransferFee": self.apply_transfer_fee,
            "transferFeeAmount": _money(self.transfer_fee_amount),
            "applyDiscount": self.apply_discount,
            "discountAmount": _money(self.discount_amount),
            "discountCode": self.discount_code,
            "settlementType": self.settlement_type.value if self.settlement_type else None,
            "sameProgramTransfer": self.same_program_transfer,
            "newProgramFeeAmount": _money(self.new_program_fee_amount),
            "comments": self.comments,
        }


@dataclass(frozen=True)
class CancellationRequest:
    registrant_id: str
    original_record_id: str
    apply_cancellation_fee: bool
    cancellation_fee_amount: Decimal
    settlement_type: Optional[SettlementType]
    comments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registrantId": self.registrant_id,
            "originalRecordId": self.original_record_id,
            "applyCancellationFee": self.apply_cancellation_fee,
            "cancellationFeeAmount": _money(self.cancellation_fee_amount),
            "settlementType": self.settlement_type.value if self.settlement_type else None,
            "comments": self.comments,
        }


@dataclass(frozen=True)
class SubstitutionRequest:
    registrant_id: str
    original_record_id: str
    substitute_contact_id: str
    apply_discount: bool
    comments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registrantId": self.registrant_id,
            "originalRecordId": self.original_record_id,
            "substituteContactId": self.substitute_contact_id,
            "applyDiscount": self.apply_discount,
            "comments": self.comments,
        }
