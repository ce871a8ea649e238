"""Single-selection inspector state and resume download links for the dashboard."""
from django.urls import reverse

from .models import Applicant


SESSION_INSPECTOR_KEY = "dashboard_inspect"


def force_download_url(url: str) -> str:
    """Rewrite a Cloudinary delivery URL so browsers download rather than preview."""
    if not url:
        return "#"
    if "cloudinary.com" in url and "/upload/" in url and "/upload/fl_attachment/" not in url:
        return url.replace("/upload/", "/upload/fl_attachment/", 1)
    return url


def attachment_url(applicant: Applicant) -> str:
    if applicant.resume_key and "cloudinary.com" not in applicant.resume_url:
        return reverse("accounts:applicant_resume", args=[applicant.pk])
    return force_download_url(applicant.resume_url)


class Inspector:
    """Tracks which applicant is open; opening another replaces it."""

    def __init__(self, session):
        self.session = session

    @property
    def selected_id(self) -> int | None:
        raw = self.session.get(SESSION_INSPECTOR_KEY)
        return int(raw) if raw else None

    def open(self, applicant: Applicant) -> None:
        self.session[SESSION_INSPECTOR_KEY] = applicant.pk

    def close(self) -> None:
        self.session.pop(SESSION_INSPECTOR_KEY, None)

    def selected(self) -> Applicant | None:
        pk = self.selected_id
        if pk is None:
            return None
        applicant = Applicant.objects.filter(pk=pk).first()
        if applicant is None:
            self.close()
        return applicant

    def forget(self, pk: int) -> bool:
        """Close the inspector if ``pk`` is the open record."""
        if self.selected_id == pk:
            self.close()
            return True
        return False
