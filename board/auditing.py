"""
Current-auditor context used to stamp ``created_by`` / ``modified_by``.

The identity dependency in ``board.dependencies`` sets the auditor for the
duration of a request; scripts and tests use :func:`auditing`.  Column
defaults on :class:`board.models.AuditingFields` read the value at flush
time, so whoever is "current" when the INSERT/UPDATE is emitted is recorded.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

SYSTEM_AUDITOR = "system"

current_auditor_var: ContextVar[str | None] = ContextVar("current_auditor", default=None)


def get_current_auditor() -> str:
    return current_auditor_var.get() or SYSTEM_AUDITOR


@contextmanager
def auditing(user_id: str | None) -> Iterator[None]:
    token = current_auditor_var.set(user_id)
    try:
        yield
    finally:
        current_auditor_var.reset(token)
