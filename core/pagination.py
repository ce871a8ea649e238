"""
Cursor pagination for the applicant dashboard.

Applicants are listed newest first by ``(created, id)``. The pager keeps two
opaque cursors (the first and last row of the page on screen), a page
counter and a "more pages may exist" flag. Only those values are persisted
between requests; the rows themselves are re-read from the cursor range.
"""
import logging
from dataclasses import dataclass, field, replace

from django.conf import settings
from django.core import signing
from django.db import DatabaseError
from django.db.models import Q
from django.utils.dateparse import parse_datetime

from .models import Applicant


logger = logging.getLogger(__name__)

CURSOR_SALT = "core.pagination.applicant-cursor"
SESSION_PAGER_KEY = "dashboard_pager"


class Direction:
    INIT = "init"
    NEXT = "next"
    PREV = "prev"

    choices = (INIT, NEXT, PREV)

    @classmethod
    def parse(cls, raw: str | None) -> str:
        value = (raw or "").strip().lower()
        return value if value in cls.choices else cls.INIT


class InvalidCursor(ValueError):
    pass


def encode_cursor(applicant: Applicant) -> str:
    return signing.Signer(salt=CURSOR_SALT).sign_object({"c": applicant.created.isoformat(), "id": applicant.pk})


def decode_cursor(token: str):
    try:
        data = signing.Signer(salt=CURSOR_SALT).unsign_object(token)
        created = parse_datetime(data["c"])
        pk = int(data["id"])
    except (signing.BadSignature, KeyError, TypeError, ValueError) as exc:
        raise InvalidCursor(token) from exc
    if created is None:
        raise InvalidCursor(token)
    return created, pk


@dataclass(frozen=True)
class PagerState:
    first: str = ""
    last: str = ""
    page: int = 0
    has_more: bool = False

    def as_session(self) -> dict:
        return {"first": self.first, "last": self.last, "page": self.page, "has_more": self.has_more}

    @classmethod
    def from_session(cls, data: dict | None) -> "PagerState":
        if not data:
            return cls()
        return cls(
            first=data.get("first", ""),
            last=data.get("last", ""),
            page=int(data.get("page") or 0),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class PageResult:
    items: list
    state: PagerState
    total: int | None = None
    notice: str = ""
    error: str = ""
    changed: bool = field(default=True)


class ApplicantPager:
    def __init__(self, queryset=None, state: PagerState | None = None, page_size: int | None = None):
        self.queryset = queryset if queryset is not None else Applicant.objects.all()
        self.state = state or PagerState()
        self.page_size = page_size or getattr(settings, "DASHBOARD_PAGE_SIZE", 15)

    def _ordered(self):
        return self.queryset.order_by("-created", "-id")

    def _after(self, token: str) -> list:
        created, pk = decode_cursor(token)
        return list(
            self._ordered().filter(Q(created__lt=created) | Q(created=created, id__lt=pk))[: self.page_size]
        )

    def _before(self, token: str) -> list:
        created, pk = decode_cursor(token)
        rows = list(
            self.queryset.filter(Q(created__gt=created) | Q(created=created, id__gt=pk))
            .order_by("created", "id")[: self.page_size]
        )
        rows.reverse()
        return rows

    def current(self) -> list:
        """Rows between the stored cursors, inclusive."""
        if not self.state.first or not self.state.last:
            return []
        first_created, first_pk = decode_cursor(self.state.first)
        last_created, last_pk = decode_cursor(self.state.last)
        return list(
            self._ordered()
            .filter(Q(created__lt=first_created) | Q(created=first_created, id__lte=first_pk))
            .filter(Q(created__gt=last_created) | Q(created=last_created, id__gte=last_pk))
        )

    def _state_for(self, rows: list, page: int) -> PagerState:
        return PagerState(
            first=encode_cursor(rows[0]),
            last=encode_cursor(rows[-1]),
            page=page,
            has_more=len(rows) == self.page_size,
        )

    def load(self, direction: str = Direction.INIT) -> PageResult:
        previous = self.state
        try:
            total = self.queryset.count()
            if direction == Direction.NEXT and previous.last:
                rows = self._after(previous.last)
                if not rows:
                    self.state = replace(previous, has_more=False)
                    return PageResult(
                        items=self.current(),
                        state=self.state,
                        total=total,
                        notice="No more applications.",
                        changed=False,
                    )
                self.state = self._state_for(rows, previous.page + 1)
                return PageResult(items=rows, state=self.state, total=total)

            if direction == Direction.PREV and previous.first and previous.page > 1:
                rows = self._before(previous.first)
                if rows:
                    self.state = self._state_for(rows, max(1, previous.page - 1))
                    return PageResult(items=rows, state=self.state, total=total)

            rows = list(self._ordered()[: self.page_size])
            if rows:
                self.state = self._state_for(rows, 1)
            else:
                self.state = PagerState(page=1)
            return PageResult(items=rows, state=self.state, total=total)
        except InvalidCursor:
            logger.warning("dashboard_cursor_invalid", extra={"direction": direction})
            self.state = PagerState()
            return self.load(Direction.INIT)
        except DatabaseError:
            logger.exception("dashboard_page_load_failed", extra={"direction": direction})
            self.state = previous
            return PageResult(
                items=self._current_or_empty(),
                state=previous,
                error="Failed to load applications.",
                changed=False,
            )

    def refresh(self) -> PageResult:
        """Re-read the page on screen without moving; a fresh pager loads the first page."""
        if self.state.page == 0 or not self.state.first:
            return self.load(Direction.INIT)
        try:
            rows = self.current()
            total = self.queryset.count()
        except InvalidCursor:
            logger.warning("dashboard_cursor_invalid", extra={"direction": "refresh"})
            self.state = PagerState()
            return self.load(Direction.INIT)
        except DatabaseError:
            logger.exception("dashboard_page_load_failed", extra={"direction": "refresh"})
            return PageResult(items=[], state=self.state, error="Failed to load applications.", changed=False)
        if not rows and self.state.page > 1:
            # Every row on this page was deleted; fall back to the first page
            return self.load(Direction.INIT)
        return PageResult(items=rows, state=self.state, total=total, changed=False)

    def _current_or_empty(self) -> list:
        try:
            return self.current()
        except (DatabaseError, InvalidCursor):
            return []
