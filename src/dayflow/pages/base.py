"""Page controller lifecycle shared by every screen.

A page is activated for a resolved session, loads its view model, and may
run mutations that re-load on success. Results that arrive after the page
was deactivated (or re-loaded) are discarded.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Optional, TypeVar

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.exceptions import AuthorizationError, DataAccessError, ValidationError
from ..users.model import SessionContext

logger = logging.getLogger(__name__)

V = TypeVar("V")

REDIRECT_DASHBOARD = "dashboard"

KIND_VALIDATION = "validation"
KIND_FORBIDDEN = "forbidden"
KIND_WRITE_FAILED = "write_failed"
KIND_BUSY = "busy"


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    message: str
    field: Optional[str] = None
    kind: Optional[str] = None


def to_dict(view: Any) -> dict:
    return asdict(view)


class Page(Generic[V]):
    name = "page"
    requires_hr_or_admin = False
    read_error_message = "Could not load data. Please try again."

    def __init__(self, container: Container, session: SessionContext, *, now: Optional[datetime] = None):
        self._c = container
        self.session = session
        self.now = now or now_local()
        self.today = self.now.date()
        self.view: Optional[V] = None
        self._active = False
        self._generation = 0
        self._lock = threading.Lock()

    # lifecycle

    def activate(self) -> Optional[str]:
        """Return a redirect target when the role may not see this page."""
        if self.requires_hr_or_admin and not self.session.is_hr_or_admin:
            logger.info("User %s (%s) redirected away from %s", self.session.user_id, self.session.role.value, self.name)
            return REDIRECT_DASHBOARD
        with self._lock:
            self._active = True
            self._generation += 1
        return None

    def deactivate(self) -> None:
        with self._lock:
            self._active = False
            self._generation += 1

    @property
    def is_active(self) -> bool:
        return self._active

    def load(self) -> Optional[V]:
        with self._lock:
            if not self._active:
                raise RuntimeError(f"{self.name} page is not active")
            generation = self._generation

        try:
            view = self.build()
        except DataAccessError:
            logger.exception("Loading %s failed", self.name)
            view = self.empty(self.read_error_message)

        with self._lock:
            if not self._active or generation != self._generation:
                logger.debug("Discarding stale %s result", self.name)
                return None
            self.view = view
        return view

    def reload(self) -> Optional[V]:
        with self._lock:
            self._generation += 1
        return self.load()

    # mutations

    def mutate(self, key: str, action: Callable[[], Any], *, success: str) -> MutationResult:
        """Run one write; the same user's same write is refused while one is in flight.

        The in-flight registry lives on the container, so concurrent requests
        (each with its own page) see each other.
        """
        claim = (self.session.user_id, key)
        if not self._c.in_flight.acquire(claim):
            logger.info("%s: %s already in flight for user %s", self.name, key, self.session.user_id)
            return MutationResult(False, "This action is already in progress", kind=KIND_BUSY)

        try:
            action()
        except ValidationError as e:
            return MutationResult(False, str(e), field=e.field, kind=KIND_VALIDATION)
        except AuthorizationError as e:
            return MutationResult(False, str(e), kind=KIND_FORBIDDEN)
        except DataAccessError:
            logger.exception("%s: %s failed", self.name, key)
            return MutationResult(False, "Could not save your changes. Please try again.", kind=KIND_WRITE_FAILED)
        finally:
            self._c.in_flight.release(claim)

        if self._active:
            self.reload()
        return MutationResult(True, success)

    # subclass hooks

    def build(self) -> V:
        raise NotImplementedError

    def empty(self, error: str) -> V:
        raise NotImplementedError
