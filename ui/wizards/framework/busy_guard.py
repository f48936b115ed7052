# -*- coding: utf-8 -*-
"""
Busy guard for wizard operations that call the backend.

A busy flag is set on the context before the call and cleared on every
exit path, including faults, so controls bound to it never stay disabled.
"""

from contextlib import contextmanager
from functools import wraps
from typing import Callable, Optional

from utils.logger import get_logger

logger = get_logger(__name__)


class OperationInProgress(RuntimeError):
    """Raised when a call is dispatched while the same call is still running."""

    def __init__(self, flag: str):
        super().__init__(f"Operation already in progress ({flag})")
        self.flag = flag


@contextmanager
def busy_flag(context, flag: str, on_change: Optional[Callable[[bool], None]] = None):
    """
    Hold ``context.<flag>`` True for the duration of the block.

    Usage:
        with busy_flag(self.context, "is_processing"):
            result = self.api.execute_transfer(request)

    Raises:
        OperationInProgress: if the flag is already set
    """
    if getattr(context, flag):
        logger.warning(f"Refusing duplicate dispatch: {flag} already set")
        raise OperationInProgress(flag)

    setattr(context, flag, True)
    if on_change:
        on_change(True)
    try:
        yield
    finally:
        setattr(context, flag, False)
        if on_change:
            on_change(False)


def with_busy_flag(flag: str):
    """
    Decorator form of busy_flag for controller methods.

    The decorated method's owner must expose ``context`` and may expose
    ``_on_busy_changed(flag, busy)``. A duplicate dispatch returns None
    without calling the method.

    Usage:
        @with_busy_flag("is_searching_contacts")
        def _run_contact_search(self, term):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            if getattr(self.context, flag):
                logger.warning(f"Skipping {func.__name__}: {flag} already set")
                return None

            notify = getattr(self, "_on_busy_changed", None)
            on_change = (lambda busy: notify(flag, busy)) if notify else None
            with busy_flag(self.context, flag, on_change):
                return func(self, *args, **kwargs)

        return wrapper
    return decorator
