# -*- coding: utf-8 -*-
"""
Registration Change Wizard - Cancellation, Substitution and Transfer.
"""

from .change_context import RegistrationChangeContext

__all__ = ['RegistrationChangeContext']
