# -*- coding: utf-8 -*-
"""
Derived display values for the registration change wizard.

Every function reads the context and returns a fresh value; nothing is
cached. Amounts are formatted here and only here.
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from app.config import Config
from models.change_request import ChangeType, SettlementType
from services.translation_manager import tr
from services.wizard import financial_calculator as calc
from services.wizard.step_paths import get_path, visible_step_count, visible_step_number
from utils.helpers import format_date

_SETTLEMENT_LABEL_KEYS = {
    SettlementType.NONE: "settlement.none",
    SettlementType.REFUND: "settlement.refund",
    SettlementType.UNAPPLIED_FUNDS: "settlement.unapplied_funds",
    SettlementType.APPLY_TO_BALANCE: "settlement.apply_to_balance",
}

_EXECUTE_LABEL_KEYS = {
    ChangeType.TRANSFER: "button.execute_transfer",
    ChangeType.CANCELLATION: "button.execute_cancellation",
    ChangeType.SUBSTITUTION: "button.execute_substitution",
}


# ============ Registrant and originating record ============

def registrant_name(context) -> str:
    if context.init_data is None:
        return ""
    return context.init_data.registrant.display_name


def current_program_name(context) -> str:
    if context.init_data is None:
        return ""
    return context.init_data.registrant.program_name


def original_record_name(context) -> str:
    if context.init_data is None:
        return ""
    return context.init_data.financial_record.name


def formatted_original_fee(context) -> str:
    return calc.format_currency(context.original_program_fee_total)


def formatted_original_discount(context) -> str:
    record = context.init_data.financial_record if context.init_data else None
    return calc.format_currency(record.discount_amount if record else 0)


def formatted_registration_total(context) -> str:
    return calc.format_currency(context.originating_amount)


def formatted_payment_balance(context) -> str:
    record = context.init_data.financial_record if context.init_data else None
    return calc.format_currency(record.balance if record else 0)


# ============ Settlement options ============

def settlement_label(settlement: SettlementType) -> str:
    return tr(_SETTLEMENT_LABEL_KEYS[SettlementType.parse(settlement)])


def settlement_choices(options: List[SettlementType]) -> List[Tuple[str, str]]:
    """(label, value) pairs for a picklist."""
    return [(settlement_label(option), option.value) for option in options]


def cancel_settlement_options(context) -> List[SettlementType]:
    return calc.cancel_settlement_options(context.is_bundled_registration, context.payment_status)


def transfer_settlement_options(context) -> List[SettlementType]:
    return calc.transfer_settlement_options()


# ============ Transfer ============

def expected_program_fee(context) -> Decimal:
    """Catalog fee of the selected program, else the looked-up fee."""
    catalog_fee = context.selected_program.expected_program_fee if context.selected_program else None
    detail_fee = context.program_detail.expected_program_fee if context.program_detail else None
    return catalog_fee or detail_fee or calc.ZERO


def formatted_expected_fee(context) -> str:
    return calc.format_currency(expected_program_fee(context))


def formatted_new_fee(context) -> str:
    return calc.format_currency(context.new_program_fee_amount)


def formatted_transfer_fee(context) -> str:
    return calc.format_currency(calc.effective_amount(context.apply_transfer_fee, context.transfer_fee_amount))


def formatted_credit_amount(context) -> str:
    return calc.format_currency(-context.original_program_fee_total)


def formatted_discount_amount(context) -> str:
    return calc.format_currency(-calc.effective_amount(context.apply_discount, context.discount_amount))


def net_credit_amount(context) -> Decimal:
    return calc.net_credit_amount(
        context.original_program_fee_total,
        context.apply_transfer_fee,
        context.transfer_fee_amount,
    )


def formatted_net_credit(context) -> str:
    return calc.format_currency(net_credit_amount(context))


def same_program_transfer(context) -> bool:
    selected_id = context.selected_program.program_id if context.selected_program else None
    current_id = context.init_data.registrant.program_id if context.init_data else None
    return calc.is_same_program_transfer(selected_id, current_id)


def show_settlement_info(context) -> bool:
    return context.settlement_type != SettlementType.NONE


def settlement_description(context) -> str:
    if context.settlement_type == SettlementType.REFUND:
        return tr("settlement.transfer.refund")
    if context.settlement_type == SettlementType.UNAPPLIED_FUNDS:
        return tr("settlement.transfer.unapplied_funds")
    return ""


def review_discount_code(context) -> str:
    code = (context.discount_code or "").strip() if context.apply_discount else ""
    return f" ({code})" if code else ""


def selected_program_start_date(context) -> str:
    if context.selected_program is None or not context.selected_program.start_date:
        return ""
    return format_date(context.selected_program.start_date, Config.DATE_FORMAT_DISPLAY)


# ============ Cancellation ============

def cancellation_refund_amount(context) -> Decimal:
    return calc.cancellation_refund_amount(
        context.originating_amount,
        context.apply_cancellation_fee,
        context.cancellation_fee_amount,
    )


def formatted_cancellation_fee(context) -> str:
    return calc.format_currency(
        calc.effective_amount(context.apply_cancellation_fee, context.cancellation_fee_amount)
    )


def formatted_cancellation_refund(context) -> str:
    return calc.format_currency(cancellation_refund_amount(context))


def cancel_settlement_description(context) -> str:
    amount = formatted_cancellation_refund(context)
    if context.cancel_settlement_type == SettlementType.REFUND:
        return tr("settlement.cancel.refund", amount=amount)
    if context.cancel_settlement_type == SettlementType.UNAPPLIED_FUNDS:
        return tr("settlement.cancel.unapplied_funds", amount=amount)
    if context.cancel_settlement_type == SettlementType.APPLY_TO_BALANCE:
        return tr("settlement.cancel.apply_to_balance")
    return ""


# ============ Substitution ============

def discount_applied_label(context) -> str:
    if context.apply_substitution_discount:
        return tr("substitution.discount_applied")
    return tr("substitution.discount_not_applied")


def formatted_prior_discount(context) -> str:
    return calc.format_currency(context.init_data.discount_total if context.init_data else 0)


# ============ Terminal results ============

def record_url(record_kind: str, record_id: Optional[str]) -> str:
    """Link to a backend record, e.g. ``<base>/records/opportunity/<id>``."""
    if not record_id:
        return ""
    return f"{Config.RECORD_URL_BASE.rstrip('/')}/records/{record_kind}/{record_id}"


def transfer_result_links(context) -> dict:
    result = context.transfer_result
    if result is None:
        return {}
    return {
        "opportunity": record_url("opportunity", result.new_opportunity_id),
        "attendee": record_url("attendee", result.new_attendee_id),
    }


def cancellation_result_links(context) -> dict:
    result = context.cancellation_result
    if result is None:
        return {}
    return {
        "opportunity": record_url("opportunity", result.opportunity_id),
        "payment": record_url("payment", result.payment_id),
        "unapplied_funds": record_url("unapplied-funds", result.unapplied_funds_id),
    }


def substitution_result_links(context) -> dict:
    result = context.substitution_result
    if result is None:
        return {}
    return {
        "opportunity": record_url("opportunity", result.new_opportunity_id),
        "attendee": record_url("attendee", result.new_attendee_id),
    }


def show_refund_info(context) -> bool:
    result = context.cancellation_result
    return bool(result and result.refund_amount and result.payment_id)


def show_unapplied_funds_info(context) -> bool:
    result = context.cancellation_result
    return bool(result and result.unapplied_funds_id)


def formatted_result_refund(context) -> str:
    result = context.cancellation_result
    return calc.format_currency(result.refund_amount if result and result.refund_amount else 0)


# ============ Footer and buttons ============

def is_ready(context) -> bool:
    return not context.is_loading and not context.has_error


def is_terminal(context) -> bool:
    path = get_path(context.change_type)
    return path is not None and context.current_step == path.terminal_step


def is_execute_step(context) -> bool:
    path = get_path(context.change_type)
    return path is not None and context.current_step == path.execute_step


def show_footer(context) -> bool:
    return is_ready(context) and not is_terminal(context)


def show_back_button(context) -> bool:
    return context.current_step != 0


def show_execute_button(context) -> bool:
    return is_execute_step(context)


def execute_button_enabled(context) -> bool:
    return show_execute_button(context) and not context.is_processing


def show_warning_banner(context) -> bool:
    # Every step between selection and the terminal step
    return context.current_step != 0 and get_path(context.change_type) is not None and not is_terminal(context)


def execute_button_label(context) -> str:
    if context.is_processing:
        return tr("button.processing")
    key = _EXECUTE_LABEL_KEYS.get(context.change_type, "button.execute_transfer")
    return tr(key)


def step_progress_label(context) -> str:
    # A skipped settlement step counts toward neither position nor total
    return tr(
        "step.progress",
        current=visible_step_number(context.change_type, context.current_step, context),
        total=visible_step_count(context.change_type, context),
    )
