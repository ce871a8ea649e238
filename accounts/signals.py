import logging

from django.contrib.auth.signals import user_login_failed
from django.dispatch import receiver

from .models import AuthProvider, Role, UserProfile
from .session_events import SessionChange


logger = logging.getLogger(__name__)


def _client_ip(request) -> str:
	xff = request.META.get("HTTP_X_FORWARDED_FOR", "") if request else ""
	if xff:
		return xff.split(",")[0].strip()
	return (request.META.get("REMOTE_ADDR", "") if request else "") or ""


def ensure_profile(user, provider: str | None = None) -> UserProfile:
	"""Create the profile on first sign-in; an existing role is never touched."""
	profile, created = UserProfile.objects.get_or_create(
		user=user,
		defaults={
			"role": Role.USER,
			"signup_provider": provider or AuthProvider.PASSWORD,
			"last_provider": provider or "",
		},
	)
	if not created and provider and profile.last_provider != provider:
		profile.last_provider = provider
		profile.save(update_fields=["last_provider", "updated_at"])
	if created:
		logger.info("profile_created", extra={"user_id": user.pk, "provider": profile.signup_provider})
	return profile


def handle_session_change(change: SessionChange) -> None:
	request = change.request
	if change.signed_in:
		ensure_profile(change.user)
		logger.info("auth_session_started", extra={"user_id": change.user.pk, "ip": _client_ip(request)})
	else:
		logger.info(
			"auth_session_ended",
			extra={"user_id": getattr(change.user, "pk", None), "ip": _client_ip(request)},
		)


@receiver(user_login_failed)
def log_auth_failed(sender, credentials, request=None, **kwargs):  # type: ignore
	logger.warning(
		"login_failed",
		extra={
			"has_username": bool(credentials.get("username")) if isinstance(credentials, dict) else False,
			"ip": _client_ip(request),
			"path": (getattr(request, "path", "") or "")[:500],
		},
	)
