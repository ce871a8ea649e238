"""Application intake: upload the resume, then write the Applicant row."""
import logging
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError

from .models import Applicant, ApplicantStatus
from .uploads import ResumeUploader, StoredResume


logger = logging.getLogger(__name__)

SESSION_RESUME_KEY = "intake_resume"


class IntakeError(RuntimeError):
    user_message = "Something went wrong. Please try again."


class SubmissionInFlight(RuntimeError):
    user_message = "Your application is already being sent."


@contextmanager
def submission_lock(owner: str):
    """Allow one submission per session at a time."""
    key = f"intake_lock:{owner}"
    if not cache.add(key, 1, timeout=settings.INTAKE_LOCK_TIMEOUT):
        raise SubmissionInFlight(owner)
    try:
        yield
    finally:
        cache.delete(key)


def submit_application(
    cleaned_data: dict,
    *,
    uploader: ResumeUploader,
    resume_file=None,
    uploaded: StoredResume | None = None,
    user_agent: str = "",
) -> Applicant:
    """
    Create one Applicant. When no resume has been uploaded yet the file is sent
    first; the row is only written once the store has returned a URL.

    Raises ResumeRejected / ResumeUploadError from the uploader and IntakeError
    when the database write fails.
    """
    if uploaded is None:
        uploaded = uploader.upload(resume_file)
    if not uploaded.url:
        raise IntakeError("Resume upload did not return a URL.")

    try:
        applicant = Applicant.objects.create(
            name=cleaned_data["name"].strip(),
            email=cleaned_data["email"].strip().lower(),
            phone=(cleaned_data.get("phone") or "").strip(),
            message=cleaned_data.get("message") or "",
            resume_url=uploaded.url,
            resume_key=uploaded.key,
            resume_name=uploaded.file_name,
            status=ApplicantStatus.NEW,
            user_agent=user_agent,
        )
    except DatabaseError as exc:
        # The uploaded object is not rolled back
        logger.warning(
            "intake_orphaned_resume",
            extra={"resume_key": uploaded.key, "resume_url": uploaded.url},
        )
        raise IntakeError(str(exc)) from exc

    logger.info("application_received", extra={"applicant_id": applicant.pk, "resume_key": applicant.resume_key})
    return applicant
