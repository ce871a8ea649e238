import logging
import os

import requests
from django.conf import settings
from django.contrib import messages
from django.contrib.auth import get_user_model, login, logout
from django.contrib.auth.views import LoginView as DjangoLoginView
from django.core.cache import cache
from django.db import DatabaseError
from django.http import FileResponse, Http404, HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from google.auth.exceptions import GoogleAuthError
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from core.inspector import Inspector, attachment_url, force_download_url
from core.models import Applicant
from core.pagination import SESSION_PAGER_KEY, ApplicantPager, Direction, PagerState
from core.resume_stores import ResumeStoreError, StorageResumeStore

from .forms import LoginForm, SignupForm
from .gate import AdminRequiredMixin
from .google import GoogleIdentityError, build_flow, fetch_identity, redirect_uri_for
from .models import AuthProvider, Role
from .signals import ensure_profile


logger = logging.getLogger(__name__)

User = get_user_model()

GOOGLE_FLOW_TTL = 600
GOOGLE_SESSION_KEY = "google_oauth"
REFRESH_PARAMS = frozenset({"refresh", "inspect", "close"})


def _safe_next(request: HttpRequest, candidate: str | None) -> str | None:
    if candidate and url_has_allowed_host_and_scheme(candidate, allowed_hosts={request.get_host()}, require_https=request.is_secure()):
        return candidate
    return None


def _dashboard_refresh() -> str:
    return f"{reverse('accounts:dashboard')}?refresh=1"


def _landing_for(user) -> str:
    profile = getattr(user, "profile", None)
    if profile is not None and profile.role == Role.ADMIN:
        return reverse("accounts:dashboard")
    return reverse("core:home")


class LoginView(DjangoLoginView):
    template_name = "accounts/login.html"
    form_class = LoginForm

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["google_enabled"] = settings.GOOGLE_OAUTH_ENABLED
        return ctx

    def form_valid(self, form):
        response = super().form_valid(form)
        ensure_profile(form.get_user(), AuthProvider.PASSWORD)
        messages.success(self.request, "Welcome back, Commander.")
        return response

    def form_invalid(self, form):
        messages.error(self.request, "Access Denied. Invalid credentials.")
        return super().form_invalid(form)

    def get_success_url(self):
        next_url = self.get_redirect_url()
        if next_url:
            return next_url
        return _landing_for(self.request.user)


class SignupView(View):
    template_name = "accounts/signup.html"

    def get(self, request: HttpRequest) -> HttpResponse:
        if request.user.is_authenticated:
            return redirect(_landing_for(request.user))
        return render(request, self.template_name, {"form": SignupForm(), "google_enabled": settings.GOOGLE_OAUTH_ENABLED})

    def post(self, request: HttpRequest) -> HttpResponse:
        form = SignupForm(request.POST)
        if not form.is_valid():
            errors = [error for field_errors in form.errors.values() for error in field_errors]
            if errors:
                messages.error(request, errors[0])
            return render(
                request,
                self.template_name,
                {"form": form, "google_enabled": settings.GOOGLE_OAUTH_ENABLED},
                status=400,
            )

        user = form.save()
        ensure_profile(user, AuthProvider.PASSWORD)
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        logger.info("signup_success", extra={"user_id": user.pk})
        messages.success(request, "Account created! Welcome to the team.")
        return redirect("core:home")


class LogoutView(View):
    """Explicit logout view to ensure session is cleared and redirect occurs reliably."""

    def get(self, request: HttpRequest) -> HttpResponse:
        logout(request)
        next_url = _safe_next(request, request.GET.get("next"))
        if next_url:
            return redirect(next_url)
        return redirect("core:home")

    def post(self, request: HttpRequest) -> HttpResponse:
        return self.get(request)


class GoogleLoginView(View):
    def get(self, request: HttpRequest) -> HttpResponse:
        if not settings.GOOGLE_OAUTH_ENABLED:
            raise Http404("Google sign-in not configured.")

        flow = build_flow(redirect_uri_for(request))
        auth_url, state = flow.authorization_url(prompt="select_account", include_granted_scopes="true")
        pending = {
            "state": state,
            "code_verifier": getattr(flow, "code_verifier", None),
            "next": _safe_next(request, request.GET.get("next")),
        }
        request.session[GOOGLE_SESSION_KEY] = pending
        cache.set(f"google_flow:{state}", pending, timeout=GOOGLE_FLOW_TTL)
        logger.info("google_login_flow", extra={"host": request.get_host(), "state": state})
        return redirect(auth_url)


class GoogleCallbackView(View):
    failure_message = "Google Login failed."

    def _fail(self, request: HttpRequest, event: str, **extra) -> HttpResponse:
        logger.warning(event, extra=extra)
        messages.error(request, self.failure_message)
        return redirect("accounts:login")

    def get(self, request: HttpRequest) -> HttpResponse:
        if not settings.GOOGLE_OAUTH_ENABLED:
            raise Http404("Google sign-in not configured.")

        state = request.GET.get("state")
        pending = request.session.pop(GOOGLE_SESSION_KEY, None)
        if not pending and state:
            pending = cache.get(f"google_flow:{state}")
        if state:
            cache.delete(f"google_flow:{state}")

        if request.GET.get("error"):
            return self._fail(request, "google_login_denied", error=request.GET.get("error"))
        if not pending:
            return self._fail(request, "google_login_flow_missing", state=state)
        if state != pending.get("state"):
            return self._fail(request, "google_login_state_mismatch", expected=pending.get("state"), got=state)

        flow = build_flow(redirect_uri_for(request), state=pending["state"], code_verifier=pending.get("code_verifier"))
        try:
            claims = fetch_identity(flow, request.build_absolute_uri())
        except (GoogleIdentityError, GoogleAuthError, OAuth2Error, requests.RequestException, ValueError) as exc:
            logger.error("google_login_error", extra={"error": str(exc)})
            messages.error(request, self.failure_message)
            return redirect("accounts:login")

        user = self._merge_user(claims)
        ensure_profile(user, AuthProvider.GOOGLE)
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        logger.info("google_login_success", extra={"user_id": user.pk})
        messages.success(request, "Welcome aboard!")
        return redirect(_safe_next(request, pending.get("next")) or _landing_for(user))

    def _merge_user(self, claims: dict):
        email = claims["email"].strip().lower()
        user = User.objects.filter(username__iexact=email).first() or User.objects.filter(email__iexact=email).first()
        if user is None:
            # No password argument leaves the account usable only through Google
            return User.objects.create_user(
                username=email,
                email=email,
                first_name=(claims.get("given_name") or "")[:150],
                last_name=(claims.get("family_name") or "")[:150],
            )

        # Existing accounts only gain blank fields
        updates = []
        if not user.email:
            user.email = email
            updates.append("email")
        if not user.first_name and claims.get("given_name"):
            user.first_name = claims["given_name"][:150]
            updates.append("first_name")
        if not user.last_name and claims.get("family_name"):
            user.last_name = claims["family_name"][:150]
            updates.append("last_name")
        if updates:
            user.save(update_fields=updates)
        return user


class DashboardView(AdminRequiredMixin, View):
    template_name = "accounts/dashboard.html"

    def get(self, request: HttpRequest) -> HttpResponse:
        inspector = Inspector(request.session)
        if request.GET.get("close"):
            inspector.close()
        inspect_pk = request.GET.get("inspect")
        if inspect_pk and inspect_pk.isdigit():
            inspector.open(get_object_or_404(Applicant, pk=int(inspect_pk)))

        pager = ApplicantPager(state=PagerState.from_session(request.session.get(SESSION_PAGER_KEY)))
        if "direction" in request.GET:
            result = pager.load(Direction.parse(request.GET.get("direction")))
        elif REFRESH_PARAMS.intersection(request.GET):
            # Inspector actions and post-delete redirects stay on the page on screen
            result = pager.refresh()
        else:
            result = pager.load(Direction.INIT)
        request.session[SESSION_PAGER_KEY] = result.state.as_session()

        if result.notice:
            messages.info(request, result.notice)
        if result.error:
            messages.error(request, result.error)

        selected = inspector.selected()
        return render(
            request,
            self.template_name,
            {
                "applicants": result.items,
                "page": result.state,
                "total": result.total,
                "selected": selected,
                "selected_download_url": attachment_url(selected) if selected else "",
            },
        )


class ApplicantDeleteView(AdminRequiredMixin, View):
    template_name = "accounts/applicant_confirm_delete.html"

    def get(self, request: HttpRequest, pk: int) -> HttpResponse:
        applicant = get_object_or_404(Applicant, pk=pk)
        return render(request, self.template_name, {"applicant": applicant})

    def post(self, request: HttpRequest, pk: int) -> HttpResponse:
        applicant = get_object_or_404(Applicant, pk=pk)
        try:
            applicant.delete()
        except DatabaseError:
            logger.exception("applicant_delete_failed", extra={"applicant_id": pk})
            messages.error(request, "Failed to delete application")
            return redirect(_dashboard_refresh())

        Inspector(request.session).forget(pk)
        logger.info("applicant_deleted", extra={"applicant_id": pk, "user_id": request.user.pk})
        messages.success(request, "Application deleted successfully")
        return redirect(_dashboard_refresh())


class ApplicantResumeView(AdminRequiredMixin, View):
    """Serve a stored resume as a download rather than an inline preview."""

    def get(self, request: HttpRequest, pk: int) -> HttpResponse:
        applicant = get_object_or_404(Applicant, pk=pk)
        if not applicant.resume_key or "cloudinary.com" in applicant.resume_url:
            if not applicant.resume_url:
                raise Http404("No resume on file.")
            return redirect(force_download_url(applicant.resume_url))

        store = StorageResumeStore()
        file_name = applicant.resume_name or os.path.basename(applicant.resume_key)
        try:
            if store.supports_signed_downloads():
                return redirect(store.signed_attachment_url(applicant.resume_key, file_name))
            if not store.exists(applicant.resume_key):
                raise Http404("Resume file not found.")
            return FileResponse(store.open(applicant.resume_key), as_attachment=True, filename=file_name)
        except ResumeStoreError:
            logger.exception("resume_download_failed", extra={"applicant_id": pk})
            messages.error(request, "Could not open that resume. Please try again.")
            return redirect(_dashboard_refresh())
