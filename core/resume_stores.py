"""
Backends that hold uploaded resumes.

``StorageResumeStore`` writes through Django's storage API (local filesystem
in development, S3 via django-storages once a bucket is configured).
``CloudinaryResumeStore`` posts to the Cloudinary upload API with an unsigned
upload preset, so no API secret lives in this app.
"""
import logging
import posixpath

import requests
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.files.storage import default_storage


logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud}/raw/upload"


class ResumeStoreError(RuntimeError):
    pass


class StorageResumeStore:
    name = "storage"

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def save(self, key: str, content, content_type: str) -> dict:
        try:
            stored_name = self.storage.save(key, content)
            url = self.storage.url(stored_name)
        except (OSError, BotoCoreError, ClientError) as exc:
            raise ResumeStoreError(f"Storage write failed for {key}: {exc}") from exc
        return {"key": stored_name, "url": url}

    def supports_signed_downloads(self) -> bool:
        # S3Storage.url() accepts response overrides; FileSystemStorage does not
        return hasattr(self.storage, "bucket_name")

    def signed_attachment_url(self, key: str, file_name: str) -> str:
        disposition = f'attachment; filename="{file_name or posixpath.basename(key)}"'
        try:
            return self.storage.url(key, parameters={"ResponseContentDisposition": disposition})
        except (BotoCoreError, ClientError) as exc:
            raise ResumeStoreError(f"Could not sign download for {key}: {exc}") from exc

    def open(self, key: str):
        try:
            return self.storage.open(key, "rb")
        except (OSError, BotoCoreError, ClientError) as exc:
            raise ResumeStoreError(f"Storage read failed for {key}: {exc}") from exc

    def exists(self, key: str) -> bool:
        try:
            return bool(key) and self.storage.exists(key)
        except (OSError, BotoCoreError, ClientError) as exc:
            raise ResumeStoreError(f"Storage lookup failed for {key}: {exc}") from exc


class CloudinaryResumeStore:
    name = "cloudinary"

    def __init__(self, cloud_name: str | None = None, upload_preset: str | None = None, timeout: float | None = None):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.upload_preset = upload_preset or settings.CLOUDINARY_UPLOAD_PRESET
        self.timeout = timeout if timeout is not None else settings.CLOUDINARY_TIMEOUT
        if not self.cloud_name or not self.upload_preset:
            raise ImproperlyConfigured("CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET must be set.")

    def save(self, key: str, content, content_type: str) -> dict:
        folder, _, public_id = key.rpartition("/")
        try:
            response = requests.post(
                CLOUDINARY_UPLOAD_URL.format(cloud=self.cloud_name),
                data={
                    "upload_preset": self.upload_preset,
                    "folder": folder,
                    "public_id": public_id,
                },
                files={"file": (public_id, content, content_type)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise ResumeStoreError(f"Cloudinary upload failed for {key}: {exc}") from exc
        except ValueError as exc:
            raise ResumeStoreError("Cloudinary returned a non-JSON response.") from exc

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise ResumeStoreError("Cloudinary response did not include a URL.")
        return {"key": payload.get("public_id") or key, "url": url}

    def supports_signed_downloads(self) -> bool:
        return False

    def exists(self, key: str) -> bool:
        return False


def get_resume_store(name: str | None = None):
    backend = (name or getattr(settings, "RESUME_STORE", "storage") or "storage").strip().lower()
    if backend == StorageResumeStore.name:
        return StorageResumeStore()
    if backend == CloudinaryResumeStore.name:
        return CloudinaryResumeStore()
    raise ImproperlyConfigured(f"Unknown RESUME_STORE {backend!r}; expected 'storage' or 'cloudinary'.")
