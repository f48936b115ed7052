# -*- coding: utf-8 -*-
"""
Financial calculations for registration changes.

Pure functions only: callers recompute on every read so no derived
amount can drift from the inputs it was computed from.
"""

from decimal import Decimal
from typing import Any, List, Optional

from app.config import Config
from models.change_request import SettlementType
from models.registration import (
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PARTIAL,
    to_decimal,
)
from utils.helpers import format_number

ZERO = Decimal("0")

SETTLEMENT_REQUIRED_STATUSES = (PAYMENT_STATUS_PAID, PAYMENT_STATUS_PARTIAL)

TRANSFER_SETTLEMENT_OPTIONS = (
    SettlementType.NONE,
    SettlementType.REFUND,
    SettlementType.UNAPPLIED_FUNDS,
)

CANCEL_SETTLEMENT_OPTIONS_PAID = (
    SettlementType.REFUND,
    SettlementType.UNAPPLIED_FUNDS,
)

CANCEL_SETTLEMENT_OPTIONS_BUNDLE = (
    SettlementType.APPLY_TO_BALANCE,
    SettlementType.REFUND,
    SettlementType.UNAPPLIED_FUNDS,
)


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse raw field input; None when blank or not a number."""
    return to_decimal(value, default=None)


def effective_amount(apply: bool, value: Any) -> Decimal:
    """Amount that may contribute to a total: zero unless its toggle is on."""
    if not apply:
        return ZERO
    return parse_amount(value) or ZERO


def is_positive_amount(value: Any) -> bool:
    amount = parse_amount(value)
    return amount is not None and amount > 0


def cancellation_refund_amount(originating_amount: Any, apply_fee: bool, fee_amount: Any) -> Decimal:
    """Originating amount less the cancellation fee, when one is charged."""
    return (parse_amount(originating_amount) or ZERO) - effective_amount(apply_fee, fee_amount)


def net_credit_amount(original_fee_total: Any, apply_transfer_fee: bool, transfer_fee_amount: Any) -> Decimal:
    """Original program fee total less the transfer fee, when one is charged."""
    return (parse_amount(original_fee_total) or ZERO) - effective_amount(apply_transfer_fee, transfer_fee_amount)


def requires_settlement_step(payment_status: Optional[str]) -> bool:
    """Cancellation shows the settlement step only when money was received."""
    return payment_status in SETTLEMENT_REQUIRED_STATUSES


def cancel_settlement_options(is_bundled: bool, payment_status: Optional[str]) -> List[SettlementType]:
    # Both conditions are needed to unlock "Apply to Remaining Balance"
    if is_bundled and payment_status == PAYMENT_STATUS_PARTIAL:
        return list(CANCEL_SETTLEMENT_OPTIONS_BUNDLE)
    return list(CANCEL_SETTLEMENT_OPTIONS_PAID)


def transfer_settlement_options() -> List[SettlementType]:
    return list(TRANSFER_SETTLEMENT_OPTIONS)


def is_same_program_transfer(selected_program_id: Optional[str], current_program_id: Optional[str]) -> bool:
    if not selected_program_id or not current_program_id:
        return False
    return selected_program_id == current_program_id


def format_currency(value: Any) -> str:
    """Format an amount for display, e.g. ``$1,234.50`` or ``-$100.00``."""
    amount = parse_amount(value) or ZERO
    text = format_number(abs(amount), decimals=2)
    sign = "-" if amount < 0 else ""
    return f"{sign}{Config.CURRENCY_SYMBOL}{text}"
