"""Google OAuth helpers for the "Continue with Google" sign-in."""
import logging
import os

from django.conf import settings
from django.http import Http404
from django.urls import reverse
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token
from google_auth_oauthlib.flow import Flow


logger = logging.getLogger(__name__)

GOOGLE_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]


class GoogleIdentityError(RuntimeError):
    pass


def _client_config() -> dict:
    return {
        "web": {
            "client_id": settings.GOOGLE_OAUTH_CLIENT_ID,
            "client_secret": settings.GOOGLE_OAUTH_CLIENT_SECRET,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
        }
    }


def redirect_uri_for(request) -> str:
    return settings.GOOGLE_OAUTH_REDIRECT_URI or request.build_absolute_uri(reverse("accounts:google_callback"))


def build_flow(redirect_uri: str, state: str | None = None, code_verifier: str | None = None) -> Flow:
    if not settings.GOOGLE_OAUTH_ENABLED:
        raise Http404("Google sign-in not configured.")
    if settings.DEBUG:
        # Local callbacks arrive over plain http
        os.environ.setdefault("OAUTHLIB_INSECURE_TRANSPORT", "1")
    flow = Flow.from_client_config(_client_config(), scopes=GOOGLE_SCOPES, state=state)
    flow.redirect_uri = redirect_uri
    if code_verifier:
        flow.code_verifier = code_verifier
    return flow


def fetch_identity(flow: Flow, authorization_response: str) -> dict:
    """Exchange the callback code and return the verified ID token claims."""
    flow.fetch_token(authorization_response=authorization_response)
    raw_token = getattr(flow.credentials, "id_token", None)
    if not raw_token:
        raise GoogleIdentityError("Google did not return an ID token.")
    claims = google_id_token.verify_oauth2_token(
        raw_token,
        google_requests.Request(),
        settings.GOOGLE_OAUTH_CLIENT_ID,
    )
    if not claims.get("email"):
        raise GoogleIdentityError("No email returned from Google.")
    if claims.get("email_verified") is False:
        raise GoogleIdentityError("Google email address is not verified.")
    return claims
