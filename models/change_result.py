# -*- coding: utf-8 -*-
"""
Execution results returned by the backend.

A result with ``success`` false is a business failure: the call itself
worked and ``error_message`` explains why the change was refused.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from models.registration import to_decimal


@dataclass
class TransferResult:
    success: bool = False
    new_opportunity_id: Optional[str] = None
    new_attendee_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TransferResult":
        data = data or {}
        return cls(
            success=bool(data.get("success")),
            new_opportunity_id=data.get("newOpportunityId"),
            new_attendee_id=data.get("newAttendeeId"),
            error_message=data.get("errorMessage"),
        )


@dataclass
class CancellationResult:
    success: bool = False
    opportunity_id: Optional[str] = None
    payment_id: Optional[str] = None
    unapplied_funds_id: Optional[str] = None
    refund_amount: Optional[Decimal] = None
    error_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CancellationResult":
        data = data or {}
        return cls(
            success=bool(data.get("success")),
            opportunity_id=data.get("opportunityId"),
            payment_id=data.get("paymentId"),
            unapplied_funds_id=data.get("unappliedFundsId"),
            refund_amount=to_decimal(data.get("refundAmount"), default=None),
            error_message=data.get("errorMessage"),
        )


@dataclass
class SubstitutionResult:
    success: bool = False
    new_opportunity_id: Optional[str] = None
    new_attendee_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SubstitutionResult":
        data = data or {}
        return cls(
            success=bool(data.get("success")),
            new_opportunity_id=data.get("newOpportunityId"),
            new_attendee_id=data.get("newAttendeeId"),
            error_message=data.get("errorMessage"),
        )
