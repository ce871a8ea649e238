"""
Resume upload controller.

``ResumeUploader`` validates a file locally, then streams it to the configured
resume store while tracking ``IDLE -> UPLOADING -> SUCCESS | ERROR`` and a
0-100 progress value. A failed precondition never reaches the store.
"""
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import urljoin

from django.conf import settings
from django.core.cache import cache
from django.core.exceptions import ValidationError
from django.core.files import File
from django.utils import timezone
from django.utils.text import get_valid_filename

from .resume_stores import ResumeStoreError, get_resume_store


logger = logging.getLogger(__name__)

ALLOWED_RESUME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
ALLOWED_RESUME_EXTENSIONS = {"pdf", "doc", "docx"}


class UploadStatus(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ResumeRejected(ValidationError):
    """File failed a local precondition; nothing was sent to the store."""


class ResumeUploadError(RuntimeError):
    user_message = "Upload failed. Please try again."


@dataclass(frozen=True)
class StoredResume:
    url: str
    key: str
    file_name: str
    size: int

    def as_session(self) -> dict:
        return {"url": self.url, "key": self.key, "file_name": self.file_name, "size": self.size}

    @classmethod
    def from_session(cls, data: dict | None) -> "StoredResume | None":
        if not data or not data.get("url"):
            return None
        return cls(
            url=data["url"],
            key=data.get("key", ""),
            file_name=data.get("file_name", ""),
            size=int(data.get("size") or 0),
        )


def max_resume_bytes() -> int:
    return int(getattr(settings, "RESUME_MAX_UPLOAD_MB", 5)) * 1024 * 1024


def validate_resume(file, max_bytes: int | None = None) -> None:
    if file is None:
        raise ResumeRejected("Please upload your resume first!", code="missing")
    max_bytes = max_bytes if max_bytes is not None else max_resume_bytes()
    if file.size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ResumeRejected(f"File is too large. Max {limit_mb}MB allowed.", code="too_large")
    content_type = (getattr(file, "content_type", "") or "").split(";")[0].strip().lower()
    ext = (file.name.rsplit(".", 1)[-1] if "." in file.name else "").lower()
    if content_type not in ALLOWED_RESUME_TYPES or ext not in ALLOWED_RESUME_EXTENSIONS:
        raise ResumeRejected("Invalid file type. Please upload a PDF or DOCX.", code="invalid_type")


def build_resume_key(folder: str, file_name: str, now=None) -> str:
    """``<folder>/<year>/<uuid>_<name>``; the uuid keeps uploads from overwriting each other."""
    now = now or timezone.now()
    safe_name = get_valid_filename(file_name.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]) or "resume"
    if len(safe_name) > 120:
        stem, dot, ext = safe_name.rpartition(".")
        safe_name = f"{stem[: 119 - len(ext)]}{dot}{ext}" if dot else safe_name[:120]
    return f"{folder.strip('/')}/{now.year}/{uuid.uuid4().hex}_{safe_name}"


class ProgressTracker:
    """Publishes upload status to the cache so the browser can poll it."""

    key_prefix = "resume_upload"

    def __init__(self, upload_id: str, timeout: int | None = None):
        self.upload_id = upload_id
        self.timeout = timeout if timeout is not None else settings.RESUME_UPLOAD_PROGRESS_TTL

    @classmethod
    def cache_key(cls, upload_id: str) -> str:
        return f"{cls.key_prefix}:{upload_id}"

    def publish(self, status: str, progress: int) -> None:
        cache.set(self.cache_key(self.upload_id), {"status": UploadStatus(status).value, "progress": progress}, timeout=self.timeout)

    @classmethod
    def read(cls, upload_id: str) -> dict | None:
        return cache.get(cls.cache_key(upload_id))


class ProgressFile(File):
    """File proxy that reports bytes handed to the storage backend."""

    def __init__(self, file, total: int, callback: Callable[[int, int], None]):
        super().__init__(file, name=getattr(file, "name", None))
        self._total = total
        self._sent = 0
        self._callback = callback

    def read(self, *args, **kwargs):
        data = self.file.read(*args, **kwargs)
        if data:
            self._sent += len(data)
            self._callback(self._sent, self._total)
        return data


class ResumeUploader:
    def __init__(
        self,
        store=None,
        *,
        folder: str | None = None,
        max_bytes: int | None = None,
        base_url: str = "",
        tracker: ProgressTracker | None = None,
        on_progress: Callable[[int], None] | None = None,
    ):
        self.store = store if store is not None else get_resume_store()
        self.folder = folder or getattr(settings, "RESUME_FOLDER", "resumes")
        self.max_bytes = max_bytes if max_bytes is not None else max_resume_bytes()
        self.base_url = base_url
        self.tracker = tracker
        self.on_progress = on_progress
        self.reset()

    def reset(self) -> None:
        self.status = UploadStatus.IDLE
        self.progress = 0
        self.result: StoredResume | None = None
        self.error = ""
        self._publish()

    def validate(self, file) -> None:
        validate_resume(file, self.max_bytes)

    def upload(self, file) -> StoredResume:
        self.validate(file)

        key = build_resume_key(self.folder, file.name)
        self._transition(UploadStatus.UPLOADING)
        logger.info(
            "resume_upload_started",
            extra={"key": key, "size_bytes": file.size, "store": getattr(self.store, "name", "")},
        )
        try:
            stored = self.store.save(key, ProgressFile(file, file.size, self._on_bytes), file.content_type)
        except ResumeStoreError as exc:
            self.error = ResumeUploadError.user_message
            self._transition(UploadStatus.ERROR)
            logger.error("resume_upload_failed", extra={"key": key, "error": str(exc)})
            raise ResumeUploadError(str(exc)) from exc

        self.result = StoredResume(
            url=urljoin(self.base_url, stored["url"]) if self.base_url else stored["url"],
            key=stored["key"],
            file_name=file.name,
            size=file.size,
        )
        self._set_progress(100)
        self._transition(UploadStatus.SUCCESS)
        logger.info("resume_upload_success", extra={"key": self.result.key, "url": self.result.url})
        return self.result

    def _on_bytes(self, sent: int, total: int) -> None:
        if total <= 0:
            return
        self._set_progress(min(100, int(sent * 100 / total)))

    def _set_progress(self, value: int) -> None:
        if value <= self.progress:
            return
        self.progress = value
        if self.on_progress:
            self.on_progress(value)
        self._publish()

    def _transition(self, status: str) -> None:
        self.status = status
        self._publish()

    def _publish(self) -> None:
        if self.tracker:
            self.tracker.publish(self.status, self.progress)
