# -*- coding: utf-8 -*-
"""
Tests for RegistrationChangeContext.

Tests cover:
- Initial field values
- Init data accessors
- Reset
- Serialization for logs
"""

from decimal import Decimal

from models.change_request import ChangeType, SettlementType
from models.change_result import CancellationResult, SubstitutionResult, TransferResult
from models.registration import Contact, ProgramDetail, ProgramOffering
from ui.wizards.registration_change.change_context import RegistrationChangeContext


class TestInitialState:
    """Test a fresh context."""

    def test_defaults(self):
        context = RegistrationChangeContext("a0B5e000001AbCdEAK")

        assert context.change_type == ChangeType.NONE
        assert context.current_step == 0
        assert context.apply_transfer_fee is True
        assert context.apply_cancellation_fee is False
        assert context.apply_substitution_discount is True
        assert context.terminal_result is None
        assert context.reference_number.startswith("REG-")

    def test_not_loaded(self):
        context = RegistrationChangeContext()
        assert context.is_loaded is False
        assert context.payment_status == "N/A"
        assert context.originating_amount == Decimal("0")
        assert context.available_programs == []


class TestInitDataAccessors:
    """Test values read through the loaded data."""

    def test_loaded_values(self, context):
        assert context.is_loaded is True
        assert context.payment_status == "Paid"
        assert context.originating_amount == Decimal("1000.00")
        assert context.original_program_fee_total == Decimal("800.00")
        assert context.is_bundled_registration is False
        assert context.has_original_discount is False
        assert len(context.available_programs) == 3

    def test_bundled_flag_from_yes(self, make_context):
        assert make_context(is_bundled="Yes").is_bundled_registration is True

    def test_original_discount(self, make_context):
        assert make_context(discount_total="100").has_original_discount is True


class TestReset:
    """Test reset returns every field to its initial value."""

    def test_reset_restores_all_fields(self, context):
        fresh = RegistrationChangeContext(context.registrant_id)
        loaded = context.init_data

        context.change_type = ChangeType.TRANSFER
        context.current_step = 4
        context.is_processing = True
        context.program_search_term = "fall"
        context.filtered_programs = list(loaded.available_programs)
        context.selected_program = ProgramOffering(program_id="a0P5e000000PrgBBB")
        context.program_detail = ProgramDetail(transfer_fee_unit_price=Decimal("75"))
        context.new_program_fee_amount = "600"
        context.apply_transfer_fee = False
        context.transfer_fee_amount = "75"
        context.settlement_type = SettlementType.REFUND
        context.apply_discount = True
        context.discount_amount = "40"
        context.discount_code = "ALUMNI10"
        context.transfer_comments = "note"
        context.transfer_result = TransferResult(success=True)
        context.apply_cancellation_fee = True
        context.cancellation_fee_amount = "50"
        context.cancel_settlement_type = SettlementType.UNAPPLIED_FUNDS
        context.cancel_comments = "note"
        context.visited_settlement_step = True
        context.cancellation_result = CancellationResult(success=True)
        context.contact_search_term = "jo"
        context.contact_search_results = [Contact(contact_id="0035e00000CntAAAQ")]
        context.is_searching_contacts = True
        context.selected_contact = Contact(contact_id="0035e00000CntAAAQ")
        context.apply_substitution_discount = False
        context.substitution_comments = "note"
        context.substitution_result = SubstitutionResult(success=True)
        context.mark_step_completed(1)

        context.reset()

        skip = {"wizard_id", "reference_number", "created_at", "updated_at", "init_data"}
        for name, value in vars(fresh).items():
            if name in skip:
                continue
            assert getattr(context, name) == value, name

        assert context.init_data is loaded
        assert context.transfer_result is None
        assert context.cancellation_result is None
        assert context.substitution_result is None

    def test_reset_keeps_session_identity(self, context):
        reference = context.reference_number
        context.reset()
        assert context.reference_number == reference
        assert context.registrant_id == "a0B5e000001AbCdEAK"


class TestSerialization:
    """Test to_dict snapshots."""

    def test_to_dict(self, context):
        context.change_type = ChangeType.CANCELLATION
        context.cancel_settlement_type = SettlementType.REFUND

        data = context.to_dict()

        assert data["change_type"] == "Cancellation"
        assert data["cancel_settlement_type"] == "Refund"
        assert data["registrant_id"] == "a0B5e000001AbCdEAK"
        assert data["has_result"] is False

    def test_progress_snapshot_fields(self, context):
        context.mark_step_completed(0)
        context.current_step = 1

        data = context.to_dict()

        assert data["completed_steps"] == [0]
        assert data["current_step"] == 1
        assert data["status"] == "draft"
        assert "data" not in data
