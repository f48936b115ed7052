# -*- coding: utf-8 -*-
"""
Step paths for the registration change wizard.

Each change type owns one step sequence. All sequences share step 0
(change type selection). A path is a table from step number to the
resolvers of its next and previous steps, so adding a change type means
adding a table entry rather than another branch in the navigator.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from models.change_request import ChangeType
from services.translation_manager import tr
from services.wizard.financial_calculator import requires_settlement_step

STEP_CHANGE_TYPE = 0

StepResolver = Callable[["RegistrationChangeContext"], int]


def _fixed(step: int) -> StepResolver:
    return lambda context: step


@dataclass(frozen=True)
class StepPath:
    """Step sequence of one change type."""

    change_type: ChangeType
    title_keys: Dict[int, str]
    forward: Dict[int, StepResolver]
    backward: Dict[int, StepResolver]
    execute_step: int
    terminal_step: int
    skippable_steps: Dict[int, Callable] = field(default_factory=dict)

    @property
    def step_count(self) -> int:
        return len(self.title_keys)

    def is_valid_step(self, step: int) -> bool:
        return step in self.title_keys

    def next_step(self, step: int, context) -> Optional[int]:
        resolver = self.forward.get(step)
        return resolver(context) if resolver else None

    def previous_step(self, step: int, context) -> Optional[int]:
        if step == self.terminal_step:
            return None
        resolver = self.backward.get(step)
        return resolver(context) if resolver else None

    def step_title(self, step: int) -> str:
        key = self.title_keys.get(step)
        return tr(key) if key else ""


# ============================================================================
# Transfer: select program -> details -> review/execute -> complete
# ============================================================================

TRANSFER_PATH = StepPath(
    change_type=ChangeType.TRANSFER,
    title_keys={
        0: "step.change_type",
        1: "step.select_program",
        2: "step.transfer_details",
        3: "step.review",
        4: "step.complete",
    },
    forward={0: _fixed(1), 1: _fixed(2), 2: _fixed(3), 3: _fixed(4)},
    backward={1: _fixed(0), 2: _fixed(1), 3: _fixed(2)},
    execute_step=3,
    terminal_step=4,
)


# ============================================================================
# Cancellation: fee -> [settlement] -> review/execute -> complete
# ============================================================================

def _cancellation_after_fee(context) -> int:
    if requires_settlement_step(context.payment_status):
        return 2
    return 3


def _cancellation_before_review(context) -> int:
    # Follow the path actually taken, not a fresh evaluation of the rule
    return 2 if context.visited_settlement_step else 1


CANCELLATION_PATH = StepPath(
    change_type=ChangeType.CANCELLATION,
    title_keys={
        0: "step.change_type",
        1: "step.cancellation_fee",
        2: "step.settlement",
        3: "step.review",
        4: "step.complete",
    },
    forward={0: _fixed(1), 1: _cancellation_after_fee, 2: _fixed(3), 3: _fixed(4)},
    backward={1: _fixed(0), 2: _fixed(1), 3: _cancellation_before_review},
    execute_step=3,
    terminal_step=4,
    skippable_steps={2: lambda context: not requires_settlement_step(context.payment_status)},
)


# ============================================================================
# Substitution: select contact -> review/execute -> complete
# ============================================================================

SUBSTITUTION_PATH = StepPath(
    change_type=ChangeType.SUBSTITUTION,
    title_keys={
        0: "step.change_type",
        1: "step.select_contact",
        2: "step.review_and_execute",
        3: "step.complete",
    },
    forward={0: _fixed(1), 1: _fixed(2), 2: _fixed(3)},
    backward={1: _fixed(0), 2: _fixed(1)},
    execute_step=2,
    terminal_step=3,
)


STEP_PATHS: Dict[ChangeType, StepPath] = {
    ChangeType.TRANSFER: TRANSFER_PATH,
    ChangeType.CANCELLATION: CANCELLATION_PATH,
    ChangeType.SUBSTITUTION: SUBSTITUTION_PATH,
}


def get_path(change_type: ChangeType) -> Optional[StepPath]:
    """Path for a change type; None while no change type is chosen."""
    return STEP_PATHS.get(ChangeType.parse(change_type))


def visible_step_count(change_type: ChangeType, context) -> int:
    """Number of steps the operator will actually see on this path."""
    path = get_path(change_type)
    if path is None:
        return 1
    skipped = sum(1 for is_skipped in path.skippable_steps.values() if is_skipped(context))
    return path.step_count - skipped


def visible_step_number(change_type: ChangeType, step: int, context) -> int:
    """1-based position of ``step`` among the steps shown on this path."""
    path = get_path(change_type)
    if path is None:
        return step + 1
    hidden_before = sum(
        1 for skipped_step, is_skipped in path.skippable_steps.items()
        if skipped_step < step and is_skipped(context)
    )
    return step + 1 - hidden_before
