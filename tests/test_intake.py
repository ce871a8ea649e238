"""Tests for the landing page application form and resume pre-upload endpoints."""
from unittest.mock import Mock, patch

import pytest
from django.contrib.messages import get_messages
from django.db import DatabaseError

from core.intake import (
    SESSION_RESUME_KEY,
    IntakeError,
    SubmissionInFlight,
    submission_lock,
    submit_application,
)
from core.models import Applicant, ApplicantStatus
from core.resume_stores import ResumeStoreError
from core.uploads import ResumeRejected, ResumeUploader, StoredResume
from tests.conftest import make_resume


pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "name": "Jane Doe",
        "email": "Jane@Example.com",
        "phone": "555-0100",
        "message": "I can fly.",
    }
    data.update(overrides)
    return data


def _flashes(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


def test_jane_doe_application_is_recorded(client, isolated_media):
    response = client.post("/apply/", {**_payload(), "resume": make_resume(name="jane.pdf")})

    assert response.status_code == 302
    assert response["Location"] == "/#application-form"
    assert "Application received! We'll be in touch." in _flashes(response)

    applicant = Applicant.objects.get()
    assert applicant.name == "Jane Doe"
    assert applicant.email == "jane@example.com"
    assert applicant.status == ApplicantStatus.NEW
    assert applicant.resume_url.startswith("http://testserver/media/resumes/")
    assert applicant.resume_name == "jane.pdf"
    assert (isolated_media / applicant.resume_key).exists()


def test_oversized_resume_is_rejected_before_upload(client):
    with patch("core.resume_stores.StorageResumeStore.save") as save:
        response = client.post("/apply/", {**_payload(), "resume": make_resume(size=6 * 1024 * 1024)})

    assert response.status_code == 400
    assert response.context["form"].errors["resume"] == ["File is too large. Max 5MB allowed."]
    save.assert_not_called()
    assert not Applicant.objects.exists()


def test_missing_resume_is_rejected(client):
    response = client.post("/apply/", _payload())
    assert response.status_code == 400
    assert response.context["form"].errors["resume"] == ["Please upload your resume first!"]
    assert not Applicant.objects.exists()


def test_message_is_required(client):
    response = client.post("/apply/", {**_payload(message=""), "resume": make_resume()})
    assert response.status_code == 400
    assert "message" in response.context["form"].errors


def test_store_failure_shows_upload_error(client):
    with patch("core.resume_stores.StorageResumeStore.save", side_effect=ResumeStoreError("down")):
        response = client.post("/apply/", {**_payload(), "resume": make_resume()})

    assert response.status_code == 502
    assert "Upload failed. Please try again." in _flashes(response)
    assert not Applicant.objects.exists()


def test_database_failure_keeps_uploaded_resume_for_retry(client):
    with patch("core.intake.Applicant.objects.create", side_effect=DatabaseError("locked")):
        response = client.post("/apply/", {**_payload(), "resume": make_resume(name="jane.pdf")})

    assert response.status_code == 502
    assert "Something went wrong. Please try again." in _flashes(response)
    kept = client.session[SESSION_RESUME_KEY]
    assert kept["file_name"] == "jane.pdf"

    with patch("core.resume_stores.StorageResumeStore.save") as save:
        retry = client.post("/apply/", _payload())
    save.assert_not_called()
    assert retry.status_code == 302
    assert Applicant.objects.get().resume_url == kept["url"]
    assert SESSION_RESUME_KEY not in client.session


def test_duplicate_submit_is_blocked(client):
    session_key = client.session.session_key
    with submission_lock(session_key):
        response = client.post("/apply/", {**_payload(), "resume": make_resume()})
    assert response.status_code == 302
    assert "Your application is already being sent." in _flashes(response)
    assert not Applicant.objects.exists()


def test_submission_lock_is_exclusive_and_released():
    with submission_lock("abc"):
        with pytest.raises(SubmissionInFlight):
            with submission_lock("abc"):
                pass
    with submission_lock("abc"):
        pass


def test_submit_application_requires_url():
    uploader = Mock(spec=ResumeUploader)
    with pytest.raises(IntakeError):
        submit_application(
            _payload(),
            uploader=uploader,
            uploaded=StoredResume(url="", key="", file_name="a.pdf", size=1),
        )
    assert not Applicant.objects.exists()


def test_submit_application_propagates_rejection():
    store = Mock()
    with pytest.raises(ResumeRejected):
        submit_application(_payload(), uploader=ResumeUploader(store), resume_file=None)
    store.save.assert_not_called()


def test_pre_upload_endpoint_stores_resume_in_session(client):
    response = client.post("/apply/resume/", {"resume": make_resume(name="cv.pdf"), "upload_id": "abcdef123456"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SUCCESS"
    assert body["progress"] == 100
    assert body["file_name"] == "cv.pdf"
    assert client.session[SESSION_RESUME_KEY]["url"] == body["url"]

    progress = client.get("/apply/resume/progress/abcdef123456/").json()
    assert progress == {"upload_id": "abcdef123456", "status": "SUCCESS", "progress": 100}


def test_pre_upload_endpoint_rejects_bad_type(client):
    response = client.post("/apply/resume/", {"resume": make_resume(name="cv.txt", content_type="text/plain")})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid file type. Please upload a PDF or DOCX."
    assert SESSION_RESUME_KEY not in client.session


def test_unknown_upload_reports_idle(client):
    assert client.get("/apply/resume/progress/nothing-here/").json()["status"] == "IDLE"


def test_clear_resume_forgets_upload(client):
    client.post("/apply/resume/", {"resume": make_resume()})
    response = client.post("/apply/resume/clear/")
    assert response.status_code == 302
    assert SESSION_RESUME_KEY not in client.session
