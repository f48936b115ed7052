# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression along the active change type's path (next/previous)
- Step validation before navigation
- Step hooks (before leaving, on entering)
- Completed step tracking
"""

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from models.change_request import ChangeType
from services.wizard.step_paths import STEP_CHANGE_TYPE, StepPath, get_path
from services.wizard.step_validator import StepValidator
from ui.wizards.framework.wizard_context import WIZARD_STATUS_COMPLETED, WIZARD_STATUS_IN_PROGRESS
from utils.logger import get_logger

logger = get_logger(__name__)

StepKey = Tuple[ChangeType, int]


class StepNavigator(QObject):
    """
    Manages navigation between wizard steps.

    Responsibilities:
    - Track current step on the context
    - Validate before navigation
    - Run step hooks
    - Emit signals for UI updates
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_step, new_step
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)
    validation_failed = pyqtSignal(str)  # error message

    def __init__(self, context, parent: Optional[QObject] = None):
        """
        Initialize the navigator.

        Args:
            context: Wizard context holding change_type and current_step
        """
        super().__init__(parent)
        self.context = context
        self._on_next_hooks: Dict[StepKey, List[Callable[[], bool]]] = defaultdict(list)
        self._on_enter_hooks: Dict[StepKey, List[Callable[[], None]]] = defaultdict(list)

    # =========================================================================
    # Hooks
    # =========================================================================

    def register_on_next(self, change_type: ChangeType, step: int, hook: Callable[[], bool]):
        """Run ``hook`` after validation when leaving a step; False aborts the move."""
        self._on_next_hooks[(change_type, step)].append(hook)

    def register_on_enter(self, change_type: ChangeType, step: int, hook: Callable[[], None]):
        """Run ``hook`` every time a step becomes active."""
        self._on_enter_hooks[(change_type, step)].append(hook)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def current_step(self) -> int:
        return self.context.current_step

    def get_path(self) -> Optional[StepPath]:
        return get_path(self.context.change_type)

    def get_step_count(self) -> int:
        """Get total number of steps on the active path."""
        path = self.get_path()
        return path.step_count if path else 1

    def is_terminal(self) -> bool:
        path = self.get_path()
        return path is not None and self.current_step == path.terminal_step

    def is_execute_step(self) -> bool:
        path = self.get_path()
        return path is not None and self.current_step == path.execute_step

    def can_go_next(self) -> bool:
        """Whether the Next control should be enabled."""
        if self.is_terminal() or self.is_execute_step():
            return False
        if self.context.is_loading or self.context.is_processing:
            return False
        return StepValidator.is_step_allowed(self.context.change_type, self.current_step, self.context)

    def can_go_previous(self) -> bool:
        """Whether the Back control should be enabled."""
        if self.current_step == STEP_CHANGE_TYPE:
            return False
        path = self.get_path()
        if path is None:
            return False
        return path.previous_step(self.current_step, self.context) is not None

    # =========================================================================
    # Navigation
    # =========================================================================

    def next_step(self, skip_validation: bool = False) -> bool:
        """
        Navigate to the next step of the active path.

        Args:
            skip_validation: If True, skip validation and hooks

        Returns:
            True if navigation was successful
        """
        path = self.get_path()
        step = self.current_step
        if path is None:
            if not skip_validation:
                _, message = StepValidator.validate_transition(ChangeType.NONE, step, self.context)
                self.validation_failed.emit(message)
            return False

        if step in (path.execute_step, path.terminal_step):
            logger.debug(f"Cannot go next from step {step}: execute or terminal step")
            return False

        change_type = self.context.change_type
        logger.info(f"Navigating ({change_type.value}): step {step} → next")

        if not skip_validation:
            is_valid, message = StepValidator.validate_transition(change_type, step, self.context)
            if not is_valid:
                logger.warning(f"Step {step} validation failed: {message}")
                self.validation_failed.emit(message)
                return False

            for hook in self._on_next_hooks.get((change_type, step), []):
                logger.debug(f"Calling on_next hook for step {step}")
                if not hook():
                    logger.info(f"on_next hook aborted navigation from step {step}")
                    return False

            self.context.mark_step_completed(step)

        target = path.next_step(step, self.context)
        return self._navigate_to(target)

    def previous_step(self) -> bool:
        """Navigate to the previous step of the active path."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous from step {self.current_step}")
            return False

        target = self.get_path().previous_step(self.current_step, self.context)
        logger.info(f"Navigating back: step {self.current_step} → {target}")
        return self._navigate_to(target)

    def complete(self) -> bool:
        """Move from the execute step to the terminal step after a successful execution."""
        path = self.get_path()
        if path is None or self.current_step != path.execute_step:
            logger.error(f"complete() called outside the execute step (step {self.current_step})")
            return False

        self.context.mark_step_completed(self.current_step)
        result = self._navigate_to(path.terminal_step)
        self.context.status = WIZARD_STATUS_COMPLETED
        return result

    def reset(self):
        """Return to step 0 without running hooks."""
        old_step = self.current_step
        self.context.current_step = STEP_CHANGE_TYPE
        self._emit_navigation(old_step, STEP_CHANGE_TYPE)

    def _navigate_to(self, new_step: Optional[int]) -> bool:
        """
        Internal method to navigate to a step.

        Args:
            new_step: Target step

        Returns:
            True if navigation was successful
        """
        path = self.get_path()
        if new_step is None or path is None or not path.is_valid_step(new_step):
            logger.error(f"Invalid step {new_step} for change type {self.context.change_type!r}")
            return False

        old_step = self.current_step
        self.context.current_step = new_step
        self.context.status = WIZARD_STATUS_IN_PROGRESS
        self.context.touch()

        for hook in self._on_enter_hooks.get((self.context.change_type, new_step), []):
            hook()

        self._emit_navigation(old_step, new_step)
        logger.info(f"Navigation complete: step {new_step} ({path.step_title(new_step)}) is now active")
        return True

    def _emit_navigation(self, old_step: int, new_step: int):
        self.step_changed.emit(old_step, new_step)
        self.refresh()

    def refresh(self):
        """Re-evaluate the navigation controls after a field change."""
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())
