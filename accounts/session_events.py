"""
Sign-in/sign-out notifications with an explicit lifetime.

Django's ``user_logged_in`` and ``user_logged_out`` signals are process-wide;
``SessionChannel.subscribe`` wraps both behind one callback and hands back a
``Subscription`` whose ``unsubscribe()`` disconnects them again.
"""
import itertools
from dataclasses import dataclass
from typing import Any, Callable

from django.contrib.auth.signals import user_logged_in, user_logged_out


@dataclass(frozen=True)
class SessionChange:
    user: Any
    request: Any
    signed_in: bool


class Subscription:
    def __init__(self, dispatch_uid: str):
        self.dispatch_uid = dispatch_uid
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        user_logged_in.disconnect(dispatch_uid=f"{self.dispatch_uid}:in")
        user_logged_out.disconnect(dispatch_uid=f"{self.dispatch_uid}:out")
        self.active = False


class SessionChannel:
    _ids = itertools.count(1)

    def __init__(self, name: str = "session"):
        self.name = name

    def subscribe(self, callback: Callable[[SessionChange], None]) -> Subscription:
        uid = f"{self.name}:{next(self._ids)}"

        def on_login(sender, request=None, user=None, **kwargs):
            callback(SessionChange(user=user, request=request, signed_in=True))

        def on_logout(sender, request=None, user=None, **kwargs):
            callback(SessionChange(user=user, request=request, signed_in=False))

        # Closures would be collected straight away with weak references
        user_logged_in.connect(on_login, weak=False, dispatch_uid=f"{uid}:in")
        user_logged_out.connect(on_logout, weak=False, dispatch_uid=f"{uid}:out")
        return Subscription(uid)


session_channel = SessionChannel()
