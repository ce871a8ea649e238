"""
Pytest fixtures for the Hero HQ tests.
Files go to a temporary MEDIA_ROOT, the cache is cleared around every test and
Google sign-in stays off unless a test turns it on.
"""
from datetime import timedelta

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from accounts.models import Role, UserProfile
from core.models import Applicant


PDF_HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def make_resume(name="resume.pdf", size=2048, content_type="application/pdf") -> SimpleUploadedFile:
    body = PDF_HEADER + b"0" * max(0, size - len(PDF_HEADER))
    return SimpleUploadedFile(name, body, content_type=content_type)


@pytest.fixture(autouse=True)
def isolated_media(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.BASE_URL = ""
    settings.RESUME_STORE = "storage"
    settings.GOOGLE_OAUTH_ENABLED = False
    settings.ADMIN_ROLE_CHECK = True
    return settings.MEDIA_ROOT


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def resume_file():
    return make_resume()


@pytest.fixture
def hero_admin(django_user_model):
    user = django_user_model.objects.create_user(
        username="boss@hero-hq.com", email="boss@hero-hq.com", password="league-of-heroes"
    )
    UserProfile.objects.update_or_create(user=user, defaults={"role": Role.ADMIN})
    return user


@pytest.fixture
def member(django_user_model):
    user = django_user_model.objects.create_user(
        username="sidekick@hero-hq.com", email="sidekick@hero-hq.com", password="league-of-heroes"
    )
    UserProfile.objects.update_or_create(user=user, defaults={"role": Role.USER})
    return user


@pytest.fixture
def hero_admin_client(client, hero_admin):
    client.force_login(hero_admin)
    return client


@pytest.fixture
def member_client(client, member):
    client.force_login(member)
    return client


@pytest.fixture
def make_applicants(db):
    """Create ``count`` applicants, one minute apart; the last one is the newest."""

    def _make(count: int, **overrides):
        start = timezone.now() - timedelta(days=1)
        created = []
        for i in range(count):
            fields = {
                "name": f"Applicant {i:02d}",
                "email": f"applicant{i:02d}@example.com",
                "message": "Ready to save the day.",
                "resume_url": f"https://cdn.example.com/resumes/{i:02d}.pdf",
                **overrides,
            }
            applicant = Applicant.objects.create(**fields)
            Applicant.objects.filter(pk=applicant.pk).update(created=start + timedelta(minutes=i))
            applicant.refresh_from_db()
            created.append(applicant)
        return created

    return _make
