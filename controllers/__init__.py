# -*- coding: utf-8 -*-
"""
Registration Change Controllers
===============================
Controller layer between the wizard UI and the backend services.

Controllers provide:
- Standardized error handling via OperationResult
- Qt signals for UI updates
- Validation and business rules

Usage:
    from controllers import RegistrationChangeController

    controller = RegistrationChangeController(registrant_id)
    result = controller.load_init_data()
    if not result.success:
        print(f"Error: {result.message}")
"""

# Base controller and result types
from controllers.base_controller import (
    BaseController,
    OperationResult,
)

# Domain controllers
from controllers.registration_change_controller import (
    EXECUTE_OPERATIONS,
    RegistrationChangeController,
)

# All public exports
__all__ = [
    # Base
    "BaseController",
    "OperationResult",

    # Registration change
    "EXECUTE_OPERATIONS",
    "RegistrationChangeController",
]
