# -*- coding: utf-8 -*-
"""
Registration Change Context - State of one registration change session.

This context extends WizardContext with:
- Session inputs (registrant id, loaded init data)
- Transfer path fields
- Cancellation path fields
- Substitution path fields
- The terminal result of whichever path was executed
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from models.change_request import ChangeType, SettlementType
from models.change_result import CancellationResult, SubstitutionResult, TransferResult
from models.registration import (
    Contact,
    InitData,
    PAYMENT_STATUS_NOT_AVAILABLE,
    ProgramDetail,
    ProgramOffering,
)
from ui.wizards.framework.wizard_context import WizardContext


class RegistrationChangeContext(WizardContext):
    """Mutable state of the registration change wizard."""

    def __init__(self, registrant_id: Optional[str] = None):
        """Initialize an empty session for a registrant."""
        super().__init__()
        self.registrant_id: Optional[str] = registrant_id

        # Loading state (owned by the init load, survives reset)
        self.init_data: Optional[InitData] = None
        self.is_loading: bool = False
        self.has_error: bool = False
        self.error_message: str = ""

        self._reset_fields()

    def _get_reference_prefix(self) -> str:
        """Override to use registration change prefix."""
        return "REG"

    def _reset_fields(self):
        # Common
        self.change_type: ChangeType = ChangeType.NONE
        self.is_processing: bool = False

        # Transfer path
        self.program_search_term: str = ""
        self.filtered_programs: List[ProgramOffering] = []
        self.selected_program: Optional[ProgramOffering] = None
        self.program_detail: Optional[ProgramDetail] = None
        self.new_program_fee_amount: Any = Decimal("0")
        self.apply_transfer_fee: bool = True
        self.transfer_fee_amount: Any = Decimal("0")
        self.settlement_type: SettlementType = SettlementType.NONE
        self.apply_discount: bool = False
        self.discount_amount: Any = Decimal("0")
        self.discount_code: str = ""
        self.transfer_comments: str = ""
        self.transfer_result: Optional[TransferResult] = None

        # Cancellation path
        self.apply_cancellation_fee: bool = False
        self.cancellation_fee_amount: Any = Decimal("0")
        self.cancel_settlement_type: SettlementType = SettlementType.NONE
        self.cancel_comments: str = ""
        self.visited_settlement_step: bool = False
        self.cancellation_result: Optional[CancellationResult] = None

        # Substitution path
        self.contact_search_term: str = ""
        self.contact_search_results: List[Contact] = []
        self.is_searching_contacts: bool = False
        self.selected_contact: Optional[Contact] = None
        self.apply_substitution_discount: bool = True
        self.substitution_comments: str = ""
        self.substitution_result: Optional[SubstitutionResult] = None

    def reset(self):
        """Start over from step 0 with the already-loaded init data."""
        super().reset()
        self._reset_fields()

    # =========================================================================
    # Init data accessors
    # =========================================================================

    @property
    def is_loaded(self) -> bool:
        return self.init_data is not None

    @property
    def payment_status(self) -> str:
        if self.init_data is None:
            return PAYMENT_STATUS_NOT_AVAILABLE
        return self.init_data.financial_record.payment_status_display

    @property
    def is_bundled_registration(self) -> bool:
        return bool(self.init_data and self.init_data.financial_record.is_bundled)

    @property
    def originating_amount(self) -> Decimal:
        if self.init_data is None:
            return Decimal("0")
        return self.init_data.financial_record.amount

    @property
    def original_program_fee_total(self) -> Decimal:
        if self.init_data is None:
            return Decimal("0")
        return self.init_data.original_program_fee_total

    @property
    def has_original_discount(self) -> bool:
        return bool(self.init_data and self.init_data.discount_total)

    @property
    def available_programs(self) -> List[ProgramOffering]:
        return self.init_data.available_programs if self.init_data else []

    @property
    def terminal_result(self):
        """The populated terminal result, if any path has completed."""
        return self.transfer_result or self.cancellation_result or self.substitution_result

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary (for logging)."""
        base_data = super().to_dict()

        change_data = {
            "registrant_id": self.registrant_id,
            "change_type": self.change_type.value,
            "is_loading": self.is_loading,
            "is_processing": self.is_processing,
            "has_error": self.has_error,
            "selected_program_id": self.selected_program.program_id if self.selected_program else None,
            "new_program_fee_amount": str(self.new_program_fee_amount),
            "apply_transfer_fee": self.apply_transfer_fee,
            "transfer_fee_amount": str(self.transfer_fee_amount),
            "settlement_type": self.settlement_type.value,
            "apply_discount": self.apply_discount,
            "discount_amount": str(self.discount_amount),
            "discount_code": self.discount_code,
            "apply_cancellation_fee": self.apply_cancellation_fee,
            "cancellation_fee_amount": str(self.cancellation_fee_amount),
            "cancel_settlement_type": self.cancel_settlement_type.value,
            "visited_settlement_step": self.visited_settlement_step,
            "selected_contact_id": self.selected_contact.contact_id if self.selected_contact else None,
            "apply_substitution_discount": self.apply_substitution_discount,
            "has_result": self.terminal_result is not None,
        }

        base_data.update(change_data)
        return base_data
