# -*- coding: utf-8 -*-
"""
Registration Change Controller
==============================
Orchestrates one registration change session.

Handles:
- Loading the registrant, originating record and program catalog
- Field updates for the Transfer, Cancellation and Substitution paths
- Step navigation through the StepNavigator
- Request assembly and execution against the backend
- User notifications for every outcome
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from controllers.base_controller import BaseController, OperationResult
from models.change_request import ChangeType, SettlementType
from models.change_result import CancellationResult, SubstitutionResult, TransferResult
from models.registration import Contact, InitData, ProgramDetail, ProgramOffering
from services.api_client import get_api_client
from services.exceptions import ValidationException
from services.translation_manager import tr
from services.wizard import change_summary
from services.wizard.financial_calculator import (
    ZERO,
    cancel_settlement_options,
    transfer_settlement_options,
)
from services.wizard.request_builder import (
    build_cancellation_request,
    build_substitution_request,
    build_transfer_request,
)
from services.wizard.step_paths import STEP_CHANGE_TYPE
from services.wizard.step_validator import StepValidator
from ui.wizards.framework.busy_guard import busy_flag, with_busy_flag
from ui.wizards.framework.step_navigator import StepNavigator
from ui.wizards.registration_change.change_context import RegistrationChangeContext
from utils.logger import get_logger

logger = get_logger(__name__)

NOTIFY_SUCCESS = "success"
NOTIFY_ERROR = "error"


@dataclass(frozen=True)
class ExecuteOperation:
    """How one change type is executed and where its result lands."""
    api_method: str
    build_request: Callable
    result_type: type
    result_attr: str
    message_prefix: str


EXECUTE_OPERATIONS = {
    ChangeType.TRANSFER: ExecuteOperation(
        api_method="execute_transfer",
        build_request=build_transfer_request,
        result_type=TransferResult,
        result_attr="transfer_result",
        message_prefix="transfer",
    ),
    ChangeType.CANCELLATION: ExecuteOperation(
        api_method="execute_cancellation",
        build_request=build_cancellation_request,
        result_type=CancellationResult,
        result_attr="cancellation_result",
        message_prefix="cancellation",
    ),
    ChangeType.SUBSTITUTION: ExecuteOperation(
        api_method="execute_substitution",
        build_request=build_substitution_request,
        result_type=SubstitutionResult,
        result_attr="substitution_result",
        message_prefix="substitution",
    ),
}


class RegistrationChangeController(BaseController):
    """
    Controller for the registration change wizard.

    Owns the session context and the step navigator. The UI binds to the
    signals below and reads derived values from services.wizard.change_summary.
    """

    # Signals
    state_changed = pyqtSignal()
    step_changed = pyqtSignal(int, int)  # old_step, new_step
    notification = pyqtSignal(str, str, str)  # title, message, variant

    def __init__(self, registrant_id: Optional[str] = None, api_client=None, parent=None):
        super().__init__(parent)
        self.context = RegistrationChangeContext(registrant_id)
        self._api = api_client

        self.navigator = StepNavigator(self.context, self)
        self.navigator.step_changed.connect(self._on_step_changed)
        self.navigator.validation_failed.connect(self._on_validation_failed)

        self.navigator.register_on_next(ChangeType.TRANSFER, StepValidator.TRANSFER_SELECT_PROGRAM,
                                        self._load_program_detail)
        self.navigator.register_on_enter(ChangeType.CANCELLATION, StepValidator.CANCELLATION_FEE,
                                         self._on_enter_cancellation_fee)
        self.navigator.register_on_enter(ChangeType.CANCELLATION, StepValidator.CANCELLATION_SETTLEMENT,
                                         self._on_enter_cancellation_settlement)

    # ==================== Properties ====================

    @property
    def api(self):
        """Backend client; the shared instance unless one was injected."""
        if self._api is None:
            self._api = get_api_client()
        return self._api

    @property
    def current_step(self) -> int:
        return self.context.current_step

    @property
    def change_type(self) -> ChangeType:
        return self.context.change_type

    @property
    def can_go_next(self) -> bool:
        return self.navigator.can_go_next()

    @property
    def can_go_previous(self) -> bool:
        return self.navigator.can_go_previous()

    # ==================== Loading ====================

    def load_init_data(self, registrant_id: Optional[str] = None) -> OperationResult[InitData]:
        """
        Load the change context for the registrant.

        A failure leaves the session in an error state that blocks the
        wizard; calling this again retries.
        """
        if registrant_id:
            self.context.registrant_id = registrant_id
        self._log_operation("load_init_data", registrant_id=self.context.registrant_id)

        if self.context.is_loading:
            logger.warning("Refusing duplicate dispatch: init data is already loading")
            return OperationResult.fail(message=tr("button.processing"))

        self.context.has_error = False
        self.context.error_message = ""

        with busy_flag(self.context, "is_loading", self._loading_changed):
            result = self.execute_with_error_handling(
                "load_init_data", self.api.get_change_context, self.context.registrant_id
            )

        if not result.success:
            self.context.has_error = True
            self.context.error_message = result.message
            self.state_changed.emit()
            return result

        self.context.init_data = InitData.from_dict(result.data)
        logger.info(
            f"Loaded registration {self.context.init_data.financial_record.record_id} "
            f"(status={self.context.payment_status}, "
            f"programs={len(self.context.available_programs)})"
        )
        self.state_changed.emit()
        return OperationResult.ok(data=self.context.init_data)

    @with_busy_flag("is_loading")
    def _load_program_detail(self) -> bool:
        """Seed the transfer fee fields from the selected program's pricing."""
        program = self.context.selected_program
        record = self.context.init_data.financial_record if self.context.init_data else None
        pricing_context_id = record.pricing_context_id if record else None

        result = self.execute_with_error_handling(
            "load_program_detail", self.api.get_program_details, program.program_id, pricing_context_id
        )
        if not result.success:
            self._notify(tr("dialog.error"), tr("error.program_details_failed", message=result.message))
            return False

        detail = ProgramDetail.from_dict(result.data)
        self.context.program_detail = detail
        self.context.new_program_fee_amount = (
            detail.expected_program_fee or program.expected_program_fee or ZERO
        )
        if detail.transfer_fee_unit_price is not None and self.context.apply_transfer_fee:
            self.context.transfer_fee_amount = detail.transfer_fee_unit_price

        logger.debug(
            f"Program detail for {program.program_id}: fee={self.context.new_program_fee_amount}, "
            f"transfer fee={self.context.transfer_fee_amount}"
        )
        return True

    # ==================== Step 0 ====================

    def select_change_type(self, value: Any) -> bool:
        """Choose the change path. Only possible on step 0."""
        if self.context.current_step != STEP_CHANGE_TYPE:
            logger.warning(f"Change type can only be chosen on step 0 (now on {self.context.current_step})")
            return False

        change_type = ChangeType.parse(value)
        if change_type != self.context.change_type:
            # Options differ per path
            self.context.settlement_type = SettlementType.NONE
            self.context.cancel_settlement_type = SettlementType.NONE
            logger.info(f"Change type: {self.context.change_type.value or '-'} -> {change_type.value or '-'}")

        self.context.change_type = change_type
        self._changed()
        return True

    # ==================== Transfer ====================

    def search_programs(self, term: str) -> List[ProgramOffering]:
        """Filter the loaded catalog by name, code or acronym."""
        term = term or ""
        self.context.program_search_term = term

        if len(term.strip()) < Config.SEARCH_MIN_CHARS:
            self.context.filtered_programs = []
        else:
            self.context.filtered_programs = [
                program for program in self.context.available_programs if program.matches(term.strip())
            ]

        self._changed()
        return self.context.filtered_programs

    def select_program(self, program_id: Optional[str]) -> bool:
        """Select a catalog row, or clear the selection with None."""
        if not program_id:
            self.context.selected_program = None
            self.context.program_detail = None
            self._changed()
            return True

        candidates = self.context.filtered_programs or self.context.available_programs
        program = next((p for p in candidates if p.program_id == program_id), None)
        if program is None:
            logger.warning(f"Program {program_id} is not in the loaded catalog")
            return False

        if self.context.selected_program is None or self.context.selected_program.program_id != program_id:
            self.context.program_detail = None
        self.context.selected_program = program
        self._changed()
        return True

    def set_new_program_fee(self, value: Any):
        self.context.new_program_fee_amount = value
        self._changed()

    def set_apply_transfer_fee(self, apply: bool):
        self.context.apply_transfer_fee = bool(apply)
        if not apply:
            self.context.transfer_fee_amount = ZERO
        else:
            detail = self.context.program_detail
            unit_price = detail.transfer_fee_unit_price if detail else None
            self.context.transfer_fee_amount = unit_price if unit_price is not None else ZERO
        self._changed()

    def set_transfer_fee_amount(self, value: Any):
        self.context.transfer_fee_amount = value if self.context.apply_transfer_fee else ZERO
        self._changed()

    def set_settlement_type(self, value: Any) -> bool:
        settlement = SettlementType.parse(value)
        if settlement not in transfer_settlement_options():
            logger.warning(f"Settlement {value!r} is not offered for transfers")
            return False
        self.context.settlement_type = settlement
        self._changed()
        return True

    def set_apply_discount(self, apply: bool):
        self.context.apply_discount = bool(apply)
        if not apply:
            self.context.discount_amount = ZERO
            self.context.discount_code = ""
        self._changed()

    def set_discount_amount(self, value: Any):
        self.context.discount_amount = value if self.context.apply_discount else ZERO
        self._changed()

    def set_discount_code(self, code: str):
        self.context.discount_code = (code or "") if self.context.apply_discount else ""
        self._changed()

    def set_transfer_comments(self, comments: str):
        self.context.transfer_comments = comments or ""
        self._changed()

    # ==================== Cancellation ====================

    def set_apply_cancellation_fee(self, apply: bool):
        self.context.apply_cancellation_fee = bool(apply)
        if not apply:
            self.context.cancellation_fee_amount = ZERO
        self._changed()

    def set_cancellation_fee_amount(self, value: Any):
        self.context.cancellation_fee_amount = value if self.context.apply_cancellation_fee else ZERO
        self._changed()

    def set_cancel_settlement_type(self, value: Any) -> bool:
        settlement = SettlementType.parse(value)
        if settlement not in self._offered_cancel_settlements():
            logger.warning(f"Settlement {value!r} is not offered for this cancellation")
            return False
        self.context.cancel_settlement_type = settlement
        self._changed()
        return True

    def set_cancel_comments(self, comments: str):
        self.context.cancel_comments = comments or ""
        self._changed()

    def _offered_cancel_settlements(self) -> List[SettlementType]:
        return cancel_settlement_options(self.context.is_bundled_registration, self.context.payment_status)

    def _on_enter_cancellation_fee(self):
        self.context.visited_settlement_step = False

    def _on_enter_cancellation_settlement(self):
        self.context.visited_settlement_step = True
        current = self.context.cancel_settlement_type
        if current != SettlementType.NONE and current not in self._offered_cancel_settlements():
            logger.info(f"Clearing settlement {current.value!r}: no longer offered")
            self.context.cancel_settlement_type = SettlementType.NONE

    # ==================== Substitution ====================

    def search_contacts(self, term: str) -> OperationResult[List[Contact]]:
        """Search substitute contacts; short terms clear the results without a call."""
        term = term or ""
        self.context.contact_search_term = term

        if len(term.strip()) < Config.SEARCH_MIN_CHARS:
            self.context.contact_search_results = []
            self._changed()
            return OperationResult.ok(data=[])

        result = self._run_contact_search(term.strip())
        if result is None:
            return OperationResult.fail(message=tr("button.processing"))
        return result

    @with_busy_flag("is_searching_contacts")
    def _run_contact_search(self, term: str) -> OperationResult[List[Contact]]:
        record = self.context.init_data.financial_record if self.context.init_data else None
        account_id = record.account_id if record else None

        result = self.execute_with_error_handling("search_contacts", self.api.search_contacts, term, account_id)
        if not result.success:
            self.context.contact_search_results = []
            self._notify(tr("dialog.error"), tr("error.contact_search_failed", message=result.message))
            return result

        self.context.contact_search_results = [Contact.from_dict(row) for row in result.data or []]
        logger.info(f"Contact search '{term}' returned {len(self.context.contact_search_results)} contacts")
        return OperationResult.ok(data=self.context.contact_search_results)

    def select_contact(self, contact_id: str) -> bool:
        contact = next(
            (c for c in self.context.contact_search_results if c.contact_id == contact_id), None
        )
        if contact is None:
            logger.warning(f"Contact {contact_id} is not among the search results")
            return False
        self.context.selected_contact = contact
        self._changed()
        return True

    def clear_contact_selection(self):
        self.context.selected_contact = None
        self.context.contact_search_term = ""
        self.context.contact_search_results = []
        self._changed()

    def set_apply_substitution_discount(self, apply: bool):
        self.context.apply_substitution_discount = bool(apply)
        self._changed()

    def set_substitution_comments(self, comments: str):
        self.context.substitution_comments = comments or ""
        self._changed()

    # ==================== Navigation ====================

    def next_step(self) -> bool:
        return self.navigator.next_step()

    def previous_step(self) -> bool:
        return self.navigator.previous_step()

    def cancel(self):
        """Abandon the current change and return to step 0."""
        logger.info(f"Change cancelled on step {self.context.current_step}")
        self.reset()

    def reset(self):
        """Start over with the already-loaded data; nothing is re-fetched."""
        self.navigator.reset()
        self.context.reset()
        self.navigator.refresh()
        self.state_changed.emit()

    # ==================== Execute ====================

    def execute(self) -> OperationResult:
        """
        Submit the change for the active path.

        Validation and resolution failures never reach the backend. On
        success the result is stored and the wizard moves to the terminal step.
        """
        change_type = self.context.change_type
        operation = EXECUTE_OPERATIONS.get(change_type)
        if operation is None or not self.navigator.is_execute_step():
            logger.warning(f"execute() ignored on step {self.context.current_step} ({change_type.value or '-'})")
            return OperationResult.fail(message=tr("validation.select_change_type"))

        if self.context.is_processing:
            logger.warning(f"Refusing duplicate dispatch: {operation.api_method} already in progress")
            return OperationResult.fail(message=tr("button.processing"))

        is_valid, message = StepValidator.validate_execution(change_type, self.context)
        if not is_valid:
            self._notify(tr("dialog.validation_error"), message)
            return OperationResult.fail(message=message)

        try:
            request = operation.build_request(self.context)
        except ValidationException as e:
            logger.warning(f"{operation.api_method} aborted: {e.message}")
            self._notify(tr("dialog.error"), e.message)
            return OperationResult.fail(message=e.message)

        self._log_operation(operation.api_method, registrant_id=request.registrant_id)
        with busy_flag(self.context, "is_processing", self._processing_changed):
            response = self.execute_with_error_handling(
                operation.api_method, getattr(self.api, operation.api_method), request.to_dict()
            )

        if not response.success:
            self._notify(tr("dialog.error"), response.message)
            return response

        result = operation.result_type.from_dict(response.data)
        if not result.success:
            message = result.error_message or ""
            logger.warning(f"{operation.api_method} rejected: {message}")
            self._notify(tr(f"{operation.message_prefix}.failed_title"), message)
            return OperationResult.fail(message=message, data=result)

        setattr(self.context, operation.result_attr, result)
        self.navigator.complete()
        self._notify(
            tr(f"{operation.message_prefix}.success_title"),
            self._success_message(operation.message_prefix),
            NOTIFY_SUCCESS,
        )
        return OperationResult.ok(data=result)

    def _success_message(self, prefix: str) -> str:
        program = self.context.selected_program
        contact = self.context.selected_contact
        return tr(
            f"{prefix}.success",
            name=change_summary.registrant_name(self.context),
            program=program.name if program else "",
            contact=contact.name if contact else "",
        )

    # ==================== Internals ====================

    def _notify(self, title: str, message: str, variant: str = NOTIFY_ERROR):
        if variant == NOTIFY_ERROR:
            logger.warning(f"Notify [{title}]: {message}")
        self.notification.emit(title, message, variant)

    def _changed(self):
        self.context.touch()
        self.navigator.refresh()
        self.state_changed.emit()

    def _loading_changed(self, busy: bool):
        self._set_loading(busy)
        self.navigator.refresh()
        self.state_changed.emit()

    def _processing_changed(self, busy: bool):
        self.navigator.refresh()
        self.state_changed.emit()

    def _on_busy_changed(self, flag: str, busy: bool):
        if flag == "is_loading":
            self._loading_changed(busy)
        else:
            self.state_changed.emit()

    def _on_step_changed(self, old_step: int, new_step: int):
        self.step_changed.emit(old_step, new_step)
        self.state_changed.emit()

    def _on_validation_failed(self, message: str):
        self._notify(tr("dialog.validation_error"), message)
