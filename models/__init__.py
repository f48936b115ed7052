# -*- coding: utf-8 -*-
"""
Registration Change Data Models
"""

from .registration import (
    Contact,
    FinancialRecord,
    InitData,
    ProgramDetail,
    ProgramOffering,
    Registrant,
)
from .change_request import (
    CancellationRequest,
    ChangeType,
    SettlementType,
    SubstitutionRequest,
    TransferRequest,
)
from .change_result import CancellationResult, SubstitutionResult, TransferResult

__all__ = [
    "Contact",
    "FinancialRecord",
    "InitData",
    "ProgramDetail",
    "ProgramOffering",
    "Registrant",
    "CancellationRequest",
    "ChangeType",
    "SettlementType",
    "SubstitutionRequest",
    "TransferRequest",
    "CancellationResult",
    "SubstitutionResult",
    "TransferResult",
]
