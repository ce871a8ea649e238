"""Tests for sign-in, sign-up, Google sign-in and the admin gate."""
from unittest.mock import Mock, patch

import pytest
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.gate import AuthGate, GateState
from accounts.models import AuthProvider, Role, UserProfile
from accounts.session_events import SessionChannel
from accounts.views import GOOGLE_SESSION_KEY


pytestmark = pytest.mark.django_db

User = get_user_model()


def _flashes(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


class TestAuthGate:
    def test_states_are_plain_string_values(self):
        assert [state.value for state in GateState] == ["CHECKING", "AUTHORIZED", "UNAUTHORIZED"]
        assert GateState.AUTHORIZED == "AUTHORIZED"

    def test_anonymous_is_unauthorized(self):
        gate = AuthGate()
        assert gate.state == GateState.CHECKING
        assert gate.evaluate(None) == GateState.UNAUTHORIZED

    def test_admin_role_is_authorized(self, hero_admin):
        assert AuthGate().evaluate(hero_admin) == GateState.AUTHORIZED

    def test_user_role_is_unauthorized(self, member):
        assert AuthGate().evaluate(member) == GateState.UNAUTHORIZED

    def test_role_check_can_be_disabled(self, member, settings):
        settings.ADMIN_ROLE_CHECK = False
        assert AuthGate().evaluate(member) == GateState.AUTHORIZED

    def test_lookup_failure_fails_closed(self, hero_admin):
        gate = AuthGate(role_lookup=Mock(side_effect=RuntimeError("db down")))
        assert gate.evaluate(hero_admin) == GateState.UNAUTHORIZED

    def test_missing_profile_fails_closed(self, hero_admin):
        UserProfile.objects.filter(user=hero_admin).delete()
        assert AuthGate().evaluate(hero_admin) == GateState.UNAUTHORIZED

    def test_follows_session_changes_until_detached(self, client, hero_admin):
        gate = AuthGate()
        subscription = gate.attach(SessionChannel("test"))

        client.force_login(hero_admin)
        assert gate.state == GateState.AUTHORIZED
        client.logout()
        assert gate.state == GateState.UNAUTHORIZED

        gate.detach()
        assert subscription.active is False
        client.force_login(hero_admin)
        assert gate.state == GateState.UNAUTHORIZED


def test_login_success_sends_admin_to_dashboard(client, hero_admin):
    response = client.post("/login/", {"username": "Boss@hero-hq.com", "password": "league-of-heroes"})
    assert response.status_code == 302
    assert response["Location"] == "/admin/"
    assert "Welcome back, Commander." in _flashes(response)
    assert UserProfile.objects.get(user=hero_admin).last_provider == AuthProvider.PASSWORD


def test_login_honours_next(client, member):
    response = client.post("/login/?next=/apply/", {"username": member.email, "password": "league-of-heroes", "next": "/apply/"})
    assert response["Location"] == "/apply/"


def test_login_failure(client, member):
    response = client.post("/login/", {"username": member.email, "password": "wrong"})
    assert response.status_code == 200
    assert "Access Denied. Invalid credentials." in _flashes(response)
    assert not response.wsgi_request.user.is_authenticated


def test_signup_creates_user_role(client):
    response = client.post(
        "/signup/",
        {"email": "New.Hero@Example.com", "password1": "flying-fast", "password2": "flying-fast"},
    )
    assert response.status_code == 302
    assert response["Location"] == "/"
    assert "Account created! Welcome to the team." in _flashes(response)

    user = User.objects.get(username="new.hero@example.com")
    assert user.profile.role == Role.USER
    assert response.wsgi_request.user == user


def test_signup_duplicate_email(client, member):
    response = client.post(
        "/signup/",
        {"email": member.email.upper(), "password1": "flying-fast", "password2": "flying-fast"},
    )
    assert response.status_code == 400
    assert "Email already in use. Try logging in." in _flashes(response)


def test_signup_password_mismatch(client):
    response = client.post(
        "/signup/",
        {"email": "hero@example.com", "password1": "flying-fast", "password2": "flying-slow"},
    )
    assert response.status_code == 400
    assert response.context["form"].errors["password2"] == ["Passwords do not match!"]
    assert not User.objects.filter(username="hero@example.com").exists()


def test_logout_redirects_home(hero_admin_client):
    response = hero_admin_client.post("/logout/")
    assert response["Location"] == "/"
    assert "_auth_user_id" not in hero_admin_client.session


class TestGoogleSignIn:
    @pytest.fixture(autouse=True)
    def google_enabled(self, settings):
        settings.GOOGLE_OAUTH_ENABLED = True
        settings.GOOGLE_OAUTH_CLIENT_ID = "client-id.apps.googleusercontent.com"
        settings.GOOGLE_OAUTH_CLIENT_SECRET = "secret"

    def _start(self, client, state="state-123"):
        session = client.session
        session[GOOGLE_SESSION_KEY] = {"state": state, "code_verifier": "verifier", "next": None}
        session.save()

    def test_login_redirects_to_google(self, client):
        flow = Mock()
        flow.authorization_url.return_value = ("https://accounts.google.com/o/oauth2/auth?x=1", "state-123")
        flow.code_verifier = "verifier"
        with patch("accounts.views.build_flow", return_value=flow):
            response = client.get("/login/google/")
        assert response.status_code == 302
        assert response["Location"].startswith("https://accounts.google.com/")
        assert client.session[GOOGLE_SESSION_KEY]["state"] == "state-123"

    def test_callback_creates_user(self, client):
        self._start(client)
        claims = {"email": "Clark@DailyPlanet.com", "email_verified": True, "given_name": "Clark", "family_name": "Kent"}
        with patch("accounts.views.build_flow") as build_flow, patch("accounts.views.fetch_identity", return_value=claims):
            response = client.get("/login/google/callback/?state=state-123&code=abc")

        assert build_flow.call_args.kwargs["code_verifier"] == "verifier"
        assert response.status_code == 302
        assert response["Location"] == "/"
        assert "Welcome aboard!" in _flashes(response)
        user = User.objects.get(username="clark@dailyplanet.com")
        assert user.first_name == "Clark"
        assert not user.has_usable_password()
        assert user.profile.role == Role.USER
        assert user.profile.signup_provider == AuthProvider.GOOGLE

    def test_callback_keeps_existing_admin_role(self, client, hero_admin):
        self._start(client)
        claims = {"email": hero_admin.email, "email_verified": True}
        with patch("accounts.views.build_flow"), patch("accounts.views.fetch_identity", return_value=claims):
            response = client.get("/login/google/callback/?state=state-123&code=abc")

        assert response["Location"] == "/admin/"
        profile = UserProfile.objects.get(user=hero_admin)
        assert profile.role == Role.ADMIN
        assert profile.last_provider == AuthProvider.GOOGLE
        assert User.objects.filter(email__iexact=hero_admin.email).count() == 1

    def test_state_mismatch_fails(self, client):
        self._start(client)
        with patch("accounts.views.fetch_identity") as fetch:
            response = client.get("/login/google/callback/?state=other&code=abc")
        fetch.assert_not_called()
        assert response["Location"] == "/login/"
        assert "Google Login failed." in _flashes(response)

    def test_exchange_error_fails(self, client):
        self._start(client)
        with patch("accounts.views.build_flow"), patch("accounts.views.fetch_identity", side_effect=ValueError("bad token")):
            response = client.get("/login/google/callback/?state=state-123&code=abc")
        assert response["Location"] == "/login/"
        assert "Google Login failed." in _flashes(response)
        assert not response.wsgi_request.user.is_authenticated

    def test_disabled_google_is_404(self, client, settings):
        settings.GOOGLE_OAUTH_ENABLED = False
        assert client.get("/login/google/").status_code == 404


def test_promote_admin_command(member):
    call_command("promote_admin", "SIDEKICK@hero-hq.com")
    assert UserProfile.objects.get(user=member).role == Role.ADMIN

    call_command("promote_admin", member.email, "--revoke")
    assert UserProfile.objects.get(user=member).role == Role.USER


def test_promote_admin_unknown_email():
    with pytest.raises(CommandError):
        call_command("promote_admin", "nobody@example.com")
