# -*- coding: utf-8 -*-
"""
Tests for request assembly.

Tests cover:
- Registrant id resolution
- Disabled amounts sent as zero
- Payload field names
- Substitution discount flag
"""

from decimal import Decimal

import pytest

from models.change_request import SettlementType
from models.registration import Contact, ProgramOffering
from services.exceptions import ValidationException
from services.wizard.request_builder import (
    build_cancellation_request,
    build_substitution_request,
    build_transfer_request,
    resolve_registrant_id,
)

CURRENT_PROGRAM = ProgramOffering(program_id="a0P5e000000PrgAAA", name="Spring Leadership Summit")
OTHER_PROGRAM = ProgramOffering(program_id="a0P5e000000PrgBBB", name="Fall Finance Forum")


class TestRegistrantResolution:
    """Test resolve_registrant_id."""

    def test_session_id_preferred(self, make_context):
        context = make_context(registrant_id="a0B5e000001SessAAA")
        assert resolve_registrant_id(context) == "a0B5e000001SessAAA"

    def test_falls_back_to_loaded_registrant(self, make_context):
        context = make_context(registrant_id=None, loaded_registrant_id="a0B5e000001LoadAAA")
        assert resolve_registrant_id(context) == "a0B5e000001LoadAAA"

    def test_short_id_aborts(self, make_context):
        """Test ids under 15 characters are refused."""
        context = make_context(registrant_id=None, loaded_registrant_id="a0B5e0001")
        with pytest.raises(ValidationException) as exc_info:
            resolve_registrant_id(context)
        assert exc_info.value.message == "Unable to determine Registrant ID. Please refresh and try again."

    def test_missing_id_aborts(self, make_context):
        context = make_context(registrant_id=None, loaded_registrant_id="")
        with pytest.raises(ValidationException):
            resolve_registrant_id(context)


class TestTransferRequest:
    """Test build_transfer_request."""

    def test_disabled_amounts_are_zero(self, context):
        """Test switched-off fee and discount never reach the payload."""
        context.selected_program = OTHER_PROGRAM
        context.new_program_fee_amount = "600"
        context.apply_transfer_fee = False
        context.transfer_fee_amount = "75"
        context.apply_discount = False
        context.discount_amount = "40"
        context.discount_code = "ALUMNI10"

        request = build_transfer_request(context)

        assert request.transfer_fee_amount == Decimal("0")
        assert request.discount_amount == Decimal("0")
        assert request.discount_code == ""

    def test_payload(self, context):
        context.selected_program = OTHER_PROGRAM
        context.new_program_fee_amount = "600"
        context.transfer_fee_amount = Decimal("75")
        context.apply_discount = True
        context.discount_code = " ALUMNI10 "
        context.settlement_type = SettlementType.REFUND
        context.transfer_comments = "Requested by phone"

        payload = build_transfer_request(context).to_dict()

        assert payload == {
            "registrantId": "a0B5e000001AbCdEAK",
            "originalRecordId": "0065e00000OppAAAQ",
            "newProgramId": "a0P5e000000PrgBBB",
            "applyTransferFee": True,
            "transferFeeAmount": "75",
            "applyDiscount": True,
            "discountAmount": "0",
            "discountCode": "ALUMNI10",
            "settlementType": "Refund",
            "sameProgramTransfer": False,
            "newProgramFeeAmount": "600",
            "comments": "Requested by phone",
        }

    def test_large_amounts_keep_every_digit(self, context):
        context.selected_program = OTHER_PROGRAM
        context.new_program_fee_amount = "12345678901234567.89"
        context.transfer_fee_amount = Decimal("1E+2")

        payload = build_transfer_request(context).to_dict()

        assert payload["newProgramFeeAmount"] == "12345678901234567.89"
        assert payload["transferFeeAmount"] == "100"

    def test_no_settlement_sent_as_none(self, context):
        context.selected_program = OTHER_PROGRAM
        payload = build_transfer_request(context).to_dict()
        assert payload["settlementType"] is None

    def test_same_program_transfer(self, context):
        context.selected_program = CURRENT_PROGRAM
        assert build_transfer_request(context).same_program_transfer is True

    def test_requires_program(self, context):
        with pytest.raises(ValidationException):
            build_transfer_request(context)


class TestCancellationRequest:
    """Test build_cancellation_request."""

    def test_disabled_fee_is_zero(self, context):
        context.apply_cancellation_fee = False
        context.cancellation_fee_amount = "50"
        context.cancel_settlement_type = SettlementType.UNAPPLIED_FUNDS

        payload = build_cancellation_request(context).to_dict()

        assert payload == {
            "registrantId": "a0B5e000001AbCdEAK",
            "originalRecordId": "0065e00000OppAAAQ",
            "applyCancellationFee": False,
            "cancellationFeeAmount": "0",
            "settlementType": "Unapplied Funds",
            "comments": "",
        }

    def test_applied_fee(self, context):
        context.apply_cancellation_fee = True
        context.cancellation_fee_amount = "50"
        assert build_cancellation_request(context).cancellation_fee_amount == Decimal("50")


class TestSubstitutionRequest:
    """Test build_substitution_request."""

    def test_requires_contact(self, context):
        with pytest.raises(ValidationException) as exc_info:
            build_substitution_request(context)
        assert exc_info.value.message == "No substitute contact selected."

    def test_discount_flag_dropped_without_original_discount(self, context):
        context.selected_contact = Contact(contact_id="0035e00000CntAAAQ", name="John Smith")
        context.apply_substitution_discount = True

        request = build_substitution_request(context)

        assert request.apply_discount is False
        assert request.substitute_contact_id == "0035e00000CntAAAQ"

    def test_discount_flag_sent_with_original_discount(self, make_context):
        context = make_context(discount_total="100")
        context.selected_contact = Contact(contact_id="0035e00000CntAAAQ", name="John Smith")
        context.apply_substitution_discount = True

        assert build_substitution_request(context).apply_discount is True

        context.apply_substitution_discount = False
        assert build_substitution_request(context).apply_discount is False
