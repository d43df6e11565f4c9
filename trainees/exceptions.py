# File: trainees/exceptions.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from django.core.exceptions import PermissionDenied


class TimeComputationError(ValueError):
    """Base class for calculator failures on input that should have been validated."""


class NegativeDuration(TimeComputationError):
    def __init__(self, session: str):
        self.session = session
        super().__init__(f"{session.upper()} time out is not after time in.")


class InvalidTraineeConfig(TimeComputationError):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class EditWindowClosed(PermissionDenied):
    """Trainee tried to change a record older than the edit window."""
