# -*- coding: utf-8 -*-
"""
Wizard Context - Base class for managing wizard state and data.

Provides unified interface for:
- Session identity and reference number
- State tracking (status, current step, completed steps)
- Snapshotting for logs
"""

from typing import Dict, Any, Optional
from datetime import datetime
import uuid

WIZARD_STATUS_DRAFT = "draft"
WIZARD_STATUS_IN_PROGRESS = "in_progress"
WIZARD_STATUS_COMPLETED = "completed"


class WizardContext:
    """
    Base class for wizard context.

    Subclasses add their own fields and extend to_dict() and reset().
    """

    def __init__(self):
        """Initialize base context properties."""
        self.wizard_id: str = str(uuid.uuid4())
        self.created_at: datetime = datetime.now()
        self.user_id: Optional[str] = None
        self.reference_number: str = self._generate_reference_number()
        self._reset_progress()

    def _reset_progress(self):
        self.status: str = WIZARD_STATUS_DRAFT
        self.updated_at: datetime = datetime.now()
        self.current_step: int = 0
        self.completed_steps: set = set()

    def _generate_reference_number(self) -> str:
        """
        Generate a unique reference number for the wizard session.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_UUID}
        Example: WIZ-20260118153045-A3F2
        """
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        short_id = self.wizard_id[:4].upper()
        prefix = self._get_reference_prefix()
        return f"{prefix}-{timestamp}-{short_id}"

    def _get_reference_prefix(self) -> str:
        """Get the prefix for reference number. Override in subclasses."""
        return "WIZ"

    def touch(self):
        self.updated_at = datetime.now()

    def mark_step_completed(self, step_index: int):
        """Mark a step as completed."""
        self.completed_steps.add(step_index)
        self.touch()

    def is_step_completed(self, step_index: int) -> bool:
        """Check if a step is completed."""
        return step_index in self.completed_steps

    def reset(self):
        """Return progress tracking to its initial values; the session identity is kept."""
        self._reset_progress()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize context to dictionary.

        Subclasses should call super().to_dict() and add their own fields.
        """
        return {
            "wizard_id": self.wizard_id,
            "reference_number": self.reference_number,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step": self.current_step,
            "user_id": self.user_id,
            "completed_steps": sorted(self.completed_steps)
        }
