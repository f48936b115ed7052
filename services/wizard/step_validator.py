# -*- coding: utf-8 -*-
"""
Step validation service for the Registration Change Wizard.

Validates context data for each step without UI coupling. ``is_step_allowed``
is the advisory gate behind the Next button; ``validate_transition`` is the
authoritative check run when the operator actually moves forward.
"""

from typing import Tuple

from models.change_request import ChangeType
from services.translation_manager import tr
from services.wizard.financial_calculator import (
    cancel_settlement_options,
    is_positive_amount,
    parse_amount,
    requires_settlement_step,
)
from services.wizard.step_paths import get_path


class StepValidator:
    """Validates wizard step data based on context."""

    # Step constants
    STEP_CHANGE_TYPE = 0

    TRANSFER_SELECT_PROGRAM = 1
    TRANSFER_DETAILS = 2
    TRANSFER_REVIEW = 3

    CANCELLATION_FEE = 1
    CANCELLATION_SETTLEMENT = 2
    CANCELLATION_REVIEW = 3

    SUBSTITUTION_SELECT_CONTACT = 1
    SUBSTITUTION_REVIEW = 2

    @staticmethod
    def is_step_allowed(change_type: ChangeType, step: int, context) -> bool:
        """
        Decide whether the Next control is enabled.

        Args:
            change_type: Active change type
            step: Current step
            context: RegistrationChangeContext object

        Returns:
            True when forward navigation may be attempted
        """
        if step == StepValidator.STEP_CHANGE_TYPE:
            return ChangeType.parse(change_type) != ChangeType.NONE

        if change_type == ChangeType.TRANSFER:
            if step == StepValidator.TRANSFER_SELECT_PROGRAM:
                return context.selected_program is not None
            return True

        if change_type == ChangeType.CANCELLATION:
            if step == StepValidator.CANCELLATION_FEE:
                return StepValidator._cancellation_fee_ok(context)
            if step == StepValidator.CANCELLATION_SETTLEMENT:
                return StepValidator._cancel_settlement_ok(context)
            return True

        if change_type == ChangeType.SUBSTITUTION:
            if step == StepValidator.SUBSTITUTION_SELECT_CONTACT:
                return context.selected_contact is not None
            return True

        return False

    @staticmethod
    def validate_transition(change_type: ChangeType, step: int, context) -> Tuple[bool, str]:
        """
        Validate step data from context before leaving the step.

        Args:
            change_type: Active change type
            step: Step being left
            context: RegistrationChangeContext object

        Returns:
            Tuple of (is_valid, error_message)
        """
        if step == StepValidator.STEP_CHANGE_TYPE:
            if ChangeType.parse(change_type) == ChangeType.NONE:
                return False, tr("validation.select_change_type")
            return True, ""

        if change_type == ChangeType.TRANSFER:
            if step == StepValidator.TRANSFER_SELECT_PROGRAM:
                if context.selected_program is None:
                    return False, tr("validation.select_program")
                return True, ""

            elif step == StepValidator.TRANSFER_DETAILS:
                return StepValidator._validate_transfer_details(context)

            return True, ""

        if change_type == ChangeType.CANCELLATION:
            if step == StepValidator.CANCELLATION_FEE:
                if not StepValidator._cancellation_fee_ok(context):
                    return False, tr("validation.cancellation_fee")
                return True, ""

            elif step == StepValidator.CANCELLATION_SETTLEMENT:
                if not StepValidator._cancel_settlement_ok(context):
                    return False, tr("validation.select_settlement")
                return True, ""

            return True, ""

        if change_type == ChangeType.SUBSTITUTION:
            if step == StepValidator.SUBSTITUTION_SELECT_CONTACT:
                if context.selected_contact is None:
                    return False, tr("validation.select_contact")
                return True, ""

            return True, ""

        return False, tr("validation.select_change_type")

    @staticmethod
    def validate_execution(change_type: ChangeType, context) -> Tuple[bool, str]:
        """
        Re-check every field gate of the path right before execution.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if change_type == ChangeType.TRANSFER:
            for step in (StepValidator.TRANSFER_SELECT_PROGRAM, StepValidator.TRANSFER_DETAILS):
                is_valid, message = StepValidator.validate_transition(change_type, step, context)
                if not is_valid:
                    return is_valid, message
            return True, ""

        if change_type == ChangeType.CANCELLATION:
            is_valid, message = StepValidator.validate_transition(
                change_type, StepValidator.CANCELLATION_FEE, context
            )
            if not is_valid:
                return is_valid, message
            if requires_settlement_step(context.payment_status):
                return StepValidator.validate_transition(
                    change_type, StepValidator.CANCELLATION_SETTLEMENT, context
                )
            return True, ""

        if change_type == ChangeType.SUBSTITUTION:
            return StepValidator.validate_transition(
                change_type, StepValidator.SUBSTITUTION_SELECT_CONTACT, context
            )

        return False, tr("validation.select_change_type")

    # =========================================================================
    # Field rules
    # =========================================================================

    @staticmethod
    def _cancellation_fee_ok(context) -> bool:
        # A fee that is switched off always passes (treated as zero)
        if not context.apply_cancellation_fee:
            return True
        return is_positive_amount(context.cancellation_fee_amount)

    @staticmethod
    def _cancel_settlement_ok(context) -> bool:
        offered = cancel_settlement_options(context.is_bundled_registration, context.payment_status)
        return context.cancel_settlement_type in offered

    @staticmethod
    def _validate_transfer_details(context) -> Tuple[bool, str]:
        raw_fee = context.new_program_fee_amount
        if raw_fee is None or (isinstance(raw_fee, str) and not raw_fee.strip()):
            return False, tr("validation.fee_required")

        fee = parse_amount(raw_fee)
        if fee is None:
            return False, tr("validation.fee_required")
        if fee < 0:
            return False, tr("validation.fee_negative")

        if context.apply_discount:
            has_amount = is_positive_amount(context.discount_amount)
            has_code = bool(context.discount_code and str(context.discount_code).strip())
            if not has_amount and not has_code:
                return False, tr("validation.discount_required")

        return True, ""

    @staticmethod
    def get_step_name(change_type: ChangeType, step: int) -> str:
        """Get display name for a step of a path."""
        path = get_path(change_type)
        if path is None:
            return tr("step.change_type") if step == StepValidator.STEP_CHANGE_TYPE else ""
        return path.step_title(step)
