# -*- coding: utf-8 -*-
"""
Request assembly for the execute step.

Builds the immutable payloads from the current context. Amounts behind a
switched-off toggle are sent as zero whatever the field still holds.
"""

from typing import Optional

from app.config import Config
from models.change_request import (
    CancellationRequest,
    SettlementType,
    SubstitutionRequest,
    TransferRequest,
)
from services.exceptions import ValidationException
from services.translation_manager import tr
from services.wizard.financial_calculator import (
    ZERO,
    effective_amount,
    is_same_program_transfer,
    parse_amount,
)
from utils.logger import get_logger

logger = get_logger(__name__)


def resolve_registrant_id(context) -> str:
    """
    Registrant id for the execute call.

    Prefers the id the session was opened with and falls back to the loaded
    registrant. Raises ValidationException when neither is usable.
    """
    loaded_id = context.init_data.registrant.registrant_id if context.init_data else None
    registrant_id = context.registrant_id or loaded_id

    if not registrant_id or len(registrant_id) < Config.MIN_REGISTRANT_ID_LENGTH:
        logger.warning(
            f"Registrant id unresolved: session={context.registrant_id!r}, loaded={loaded_id!r}"
        )
        raise ValidationException(
            tr("error.registrant_unresolved"), field="registrant_id", context="execute"
        )
    return registrant_id


def _original_record_id(context) -> str:
    if context.init_data is None:
        raise ValidationException(tr("error.not_loaded"), context="execute")
    return context.init_data.financial_record.record_id


def _settlement(value: SettlementType) -> Optional[SettlementType]:
    return value if value and value != SettlementType.NONE else None


def build_transfer_request(context) -> TransferRequest:
    registrant_id = resolve_registrant_id(context)
    if context.selected_program is None:
        raise ValidationException(tr("error.no_program_selected"), field="selected_program", context="execute")

    current_program_id = context.init_data.registrant.program_id if context.init_data else None

    return TransferRequest(
        registrant_id=registrant_id,
        original_record_id=_original_record_id(context),
        new_program_id=context.selected_program.program_id,
        apply_transfer_fee=context.apply_transfer_fee,
        transfer_fee_amount=effective_amount(context.apply_transfer_fee, context.transfer_fee_amount),
        apply_discount=context.apply_discount,
        discount_amount=effective_amount(context.apply_discount, context.discount_amount),
        discount_code=(context.discount_code or "").strip() if context.apply_discount else "",
        settlement_type=_settlement(context.settlement_type),
        same_program_transfer=is_same_program_transfer(
            context.selected_program.program_id, current_program_id
        ),
        new_program_fee_amount=parse_amount(context.new_program_fee_amount) or ZERO,
        comments=context.transfer_comments or "",
    )


def build_cancellation_request(context) -> CancellationRequest:
    registrant_id = resolve_registrant_id(context)

    return CancellationRequest(
        registrant_id=registrant_id,
        original_record_id=_original_record_id(context),
        apply_cancellation_fee=context.apply_cancellation_fee,
        cancellation_fee_amount=effective_amount(
            context.apply_cancellation_fee, context.cancellation_fee_amount
        ),
        settlement_type=_settlement(context.cancel_settlement_type),
        comments=context.cancel_comments or "",
    )


def build_substitution_request(context) -> SubstitutionRequest:
    registrant_id = resolve_registrant_id(context)
    if context.selected_contact is None:
        raise ValidationException(tr("error.no_contact_selected"), field="selected_contact", context="execute")

    return SubstitutionRequest(
        registrant_id=registrant_id,
        original_record_id=_original_record_id(context),
        substitute_contact_id=context.selected_contact.contact_id,
        # Only meaningful when the original registration carried a discount
        apply_discount=context.apply_substitution_discount if context.has_original_discount else False,
        comments=context.substitution_comments or "",
    )
