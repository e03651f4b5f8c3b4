from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollRecord


class PayrollRepository(Protocol):
    """Read-only access; payroll rows are populated outside this application."""

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, year: Optional[int] = None) -> Sequence[PayrollRecord]:
        """Newest period first (year desc, month desc)."""

        raise NotImplementedError

    def list_all(self, *, year: Optional[int] = None, month: Optional[int] = None) -> Sequence[PayrollRecord]:
        """Organization-wide listing; callers must hold an hr/admin session."""

        raise NotImplementedError
