"""
Route gate for the admin dashboard.

``AuthGate`` resolves a user to ``CHECKING -> AUTHORIZED | UNAUTHORIZED``.
With the role check on, only a profile whose role is ``admin`` passes; any
failure while reading the role counts as unauthorized.
"""
import logging
from enum import Enum
from typing import Any, Callable

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import resolve_url

from .models import Role, UserProfile
from .session_events import SessionChange, SessionChannel, Subscription


logger = logging.getLogger(__name__)


class GateState(str, Enum):
    CHECKING = "CHECKING"
    AUTHORIZED = "AUTHORIZED"
    UNAUTHORIZED = "UNAUTHORIZED"


def profile_role(user: Any) -> str:
    return UserProfile.objects.values_list("role", flat=True).get(user=user)


class AuthGate:
    def __init__(
        self,
        require_role: bool | None = None,
        role_lookup: Callable[[Any], str] = profile_role,
        required_role: str = Role.ADMIN,
    ):
        self.require_role = settings.ADMIN_ROLE_CHECK if require_role is None else require_role
        self.role_lookup = role_lookup
        self.required_role = required_role
        self.state = GateState.CHECKING
        self._subscription: Subscription | None = None

    @property
    def authorized(self) -> bool:
        return self.state == GateState.AUTHORIZED

    def evaluate(self, user: Any) -> str:
        self.state = GateState.CHECKING
        if user is None or not getattr(user, "is_authenticated", False):
            self.state = GateState.UNAUTHORIZED
        elif not self.require_role:
            self.state = GateState.AUTHORIZED
        else:
            try:
                role = self.role_lookup(user)
            except Exception:
                logger.warning("auth_gate_role_lookup_failed", extra={"user_id": getattr(user, "pk", None)}, exc_info=True)
                self.state = GateState.UNAUTHORIZED
            else:
                self.state = GateState.AUTHORIZED if role == self.required_role else GateState.UNAUTHORIZED
        return self.state

    def attach(self, channel: SessionChannel) -> Subscription:
        """Re-evaluate whenever a user signs in or out until ``detach`` is called."""
        self.detach()
        self._subscription = channel.subscribe(self._on_session_change)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_session_change(self, change: SessionChange) -> None:
        self.evaluate(change.user if change.signed_in else None)


class AdminRequiredMixin:
    """Run the view only once the gate has authorized the request user."""

    gate_class = AuthGate
    denied_message = "Access Denied. Admins only."

    def get_gate(self) -> AuthGate:
        return self.gate_class()

    def dispatch(self, request, *args, **kwargs):
        gate = self.get_gate()
        if gate.evaluate(request.user) != GateState.AUTHORIZED:
            return self.handle_unauthorized(request)
        self.gate = gate
        return super().dispatch(request, *args, **kwargs)

    def handle_unauthorized(self, request):
        if request.user.is_authenticated:
            logger.info("auth_gate_denied", extra={"user_id": request.user.pk, "path": request.path})
            messages.error(request, self.denied_message)
        return redirect_to_login(request.get_full_path(), resolve_url(settings.LOGIN_URL))
