from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"

    def ready(self):
        from . import signals
        from .session_events import session_channel

        self.session_subscription = session_channel.subscribe(signals.handle_session_change)
