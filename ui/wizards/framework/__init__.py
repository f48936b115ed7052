# -*- coding: utf-8 -*-
"""
Wizard Framework - Shared pieces of the registration change wizard.

Provides the base context, the path-driven step navigator and the busy
guard used around backend calls.
"""

from .wizard_context import WizardContext
from .step_navigator import StepNavigator
from .busy_guard import OperationInProgress, busy_flag, with_busy_flag

__all__ = [
    'WizardContext',
    'StepNavigator',
    'OperationInProgress',
    'busy_flag',
    'with_busy_flag',
]
