# -*- coding: utf-8 -*-
"""
Tests for StepNavigator.

Tests cover:
- Validation before forward navigation
- Step hooks
- Execute and terminal step rules
- Back navigation
- Progress tracking
"""

from decimal import Decimal

import pytest

from models.change_request import ChangeType
from models.registration import ProgramOffering
from ui.wizards.framework.step_navigator import StepNavigator
from ui.wizards.framework.wizard_context import WIZARD_STATUS_COMPLETED


@pytest.fixture
def navigator(qapp, context):
    return StepNavigator(context)


@pytest.fixture
def program():
    return ProgramOffering(program_id="a0P5e000000PrgBBB", name="Fall Finance Forum",
                           expected_program_fee=Decimal("600"))


class TestForwardNavigation:
    """Test next_step."""

    def test_blocked_without_change_type(self, navigator, record_signal):
        failures = record_signal(navigator.validation_failed)

        assert navigator.can_go_next() is False
        assert navigator.next_step() is False
        assert navigator.current_step == 0
        assert failures.last == ("Please select a change type.",)

    def test_moves_along_path(self, navigator, context, program, record_signal):
        steps = record_signal(navigator.step_changed)
        context.change_type = ChangeType.TRANSFER

        assert navigator.next_step() is True
        context.selected_program = program
        assert navigator.next_step() is True

        assert context.current_step == 2
        assert steps.emissions == [(0, 1), (1, 2)]
        assert context.is_step_completed(1)

    def test_failed_validation_keeps_step(self, navigator, context, record_signal):
        failures = record_signal(navigator.validation_failed)
        context.change_type = ChangeType.TRANSFER
        navigator.next_step()

        assert navigator.next_step() is False
        assert context.current_step == 1
        assert failures.last == ("Please select a program to transfer to.",)

    def test_on_next_hook_runs_after_validation(self, navigator, context, program):
        calls = []
        navigator.register_on_next(ChangeType.TRANSFER, 1, lambda: calls.append("hook") or True)
        context.change_type = ChangeType.TRANSFER
        navigator.next_step()

        navigator.next_step()
        assert calls == []

        context.selected_program = program
        assert navigator.next_step() is True
        assert calls == ["hook"]

    def test_on_next_hook_can_abort(self, navigator, context, program):
        navigator.register_on_next(ChangeType.TRANSFER, 1, lambda: False)
        context.change_type = ChangeType.TRANSFER
        context.selected_program = program
        navigator.next_step()

        assert navigator.next_step() is False
        assert context.current_step == 1

    def test_on_enter_hook(self, navigator, context):
        entered = []
        navigator.register_on_enter(ChangeType.CANCELLATION, 1, lambda: entered.append(context.current_step))
        context.change_type = ChangeType.CANCELLATION

        navigator.next_step()

        assert entered == [1]

    def test_unpaid_cancellation_skips_settlement(self, qapp, make_context):
        context = make_context(payment_status=None)
        navigator = StepNavigator(context)
        context.change_type = ChangeType.CANCELLATION

        navigator.next_step()
        navigator.next_step()

        assert context.current_step == 3


class TestExecuteAndTerminal:
    """Test the execute and terminal step rules."""

    @pytest.fixture
    def at_review(self, navigator, context, program):
        context.change_type = ChangeType.TRANSFER
        context.selected_program = program
        context.new_program_fee_amount = "600"
        for _ in range(3):
            navigator.next_step()
        assert context.current_step == 3
        return navigator

    def test_execute_step_does_not_advance_by_next(self, at_review):
        assert at_review.can_go_next() is False
        assert at_review.next_step() is False
        assert at_review.current_step == 3

    def test_complete_moves_to_terminal(self, at_review, context):
        assert at_review.complete() is True
        assert context.current_step == 4
        assert context.status == WIZARD_STATUS_COMPLETED

    def test_terminal_is_one_way(self, at_review):
        at_review.complete()
        assert at_review.can_go_previous() is False
        assert at_review.previous_step() is False
        assert at_review.next_step() is False

    def test_complete_outside_execute_step(self, navigator, context):
        context.change_type = ChangeType.TRANSFER
        navigator.next_step()
        assert navigator.complete() is False
        assert context.current_step == 1


class TestBackNavigation:
    """Test previous_step and reset."""

    def test_no_back_from_step_zero(self, navigator):
        assert navigator.can_go_previous() is False
        assert navigator.previous_step() is False

    def test_back_to_change_type(self, navigator, context):
        context.change_type = ChangeType.SUBSTITUTION
        navigator.next_step()

        assert navigator.previous_step() is True
        assert context.current_step == 0

    def test_reset(self, navigator, context, record_signal):
        steps = record_signal(navigator.step_changed)
        context.change_type = ChangeType.CANCELLATION
        navigator.next_step()

        navigator.reset()

        assert context.current_step == 0
        assert steps.last == (1, 0)


class TestGateState:
    """Test Next control state and its signal."""

    @pytest.mark.parametrize("flag", ["is_loading", "is_processing"])
    def test_disabled_while_busy(self, navigator, context, flag):
        context.change_type = ChangeType.SUBSTITUTION
        assert navigator.can_go_next() is True

        setattr(context, flag, True)
        assert navigator.can_go_next() is False

        setattr(context, flag, False)
        assert navigator.can_go_next() is True

    def test_refresh_emits_gate_state(self, navigator, context, record_signal):
        can_next = record_signal(navigator.can_go_next_changed)
        navigator.refresh()
        context.change_type = ChangeType.SUBSTITUTION
        navigator.refresh()
        assert can_next.emissions == [(False,), (True,)]
