from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    USER = "user", "User"
    ADMIN = "admin", "Admin"


class AuthProvider(models.TextChoices):
    PASSWORD = "password", "Email & password"
    GOOGLE = "google", "Google"


class UserProfile(models.Model):
    """Authorization attributes for a sign-in account.

    ``role`` is written as ``user`` at sign-up and never raised by this app's
    own flows; promotion to ``admin`` happens in the Django admin or through
    ``manage.py promote_admin``.
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.USER, blank=True)
    signup_provider = models.CharField(max_length=16, choices=AuthProvider.choices, default=AuthProvider.PASSWORD)
    last_provider = models.CharField(max_length=16, choices=AuthProvider.choices, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"UserProfile({self.user_id}, {self.role or 'unset'})"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
