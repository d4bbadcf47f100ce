import logging
import mimetypes
import re
from typing import IO, Union
from uuid import uuid4

from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient
from pydantic import BaseModel

from app.core.config import settings
from app.core.exceptions import InternalError, ValidationError
from app.services.azure_blob import create_blob_service_client, get_container_client

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_FOLDER = "farmer-profiles"
ALLOWED_MIME_PREFIX = "image/"

_FOLDER_SEGMENT = re.compile(r"[^a-z0-9_-]+")


class UploadResult(BaseModel):
    url: str
    public_id: str


def _clean_path_segment(value: str | None) -> str:
    if not value:
        return ""
    return value.strip().strip("/")


def normalize_folder(folder: str | None) -> str:
    """
    Lower-cases each segment of the requested folder and drops characters
    that are not safe in a blob path. Empty input yields the default folder.
    """
    segments = [
        _FOLDER_SEGMENT.sub("-", segment.strip().lower()).strip("-")
        for segment in _clean_path_segment(folder).split("/")
    ]
    segments = [segment for segment in segments if segment and segment != ".."]
    return "/".join(segments) or DEFAULT_UPLOAD_FOLDER


def build_blob_name(user_id: str, folder: str | None, mime_type: str) -> str:
    cleaned_user_id = _clean_path_segment(user_id)
    if not cleaned_user_id:
        raise ValidationError("user_id is required for uploads.")

    ext = mimetypes.guess_extension(mime_type) or ""
    if mime_type == "image/jpeg" and ext in [".jpe", ".jpeg"]:
        ext = ".jpg"

    return "/".join(
        [
            settings.UPLOAD_ROOT_FOLDER,
            normalize_folder(folder),
            cleaned_user_id,
            f"{uuid4().hex}{ext}",
        ]
    )


class BlobUploader:
    """
    Relays user uploads to Azure Blob Storage. The service client is created
    lazily and closed with the application.
    """

    def __init__(
        self,
        container_name: str | None = None,
        blob_service_client: BlobServiceClient | None = None,
    ):
        self.container_name = (
            container_name or settings.AZURE_STORAGE_UPLOAD_CONTAINER_NAME
        )
        self._blob_service_client = blob_service_client

    @property
    def blob_service_client(self) -> BlobServiceClient:
        if self._blob_service_client is None:
            self._blob_service_client = create_blob_service_client()
        return self._blob_service_client

    async def upload(
        self,
        file_stream: Union[bytes, IO[bytes]],
        user_id: str,
        folder: str | None = None,
        mime_type: str | None = None,
    ) -> UploadResult:
        if not mime_type or not mime_type.startswith(ALLOWED_MIME_PREFIX):
            raise ValidationError("Only image uploads are supported.")

        blob_name = build_blob_name(user_id, folder, mime_type)
        try:
            container_client = await get_container_client(
                self.blob_service_client, self.container_name
            )
            blob_client = container_client.get_blob_client(blob_name)
            await blob_client.upload_blob(
                file_stream,
                overwrite=True,
                content_settings=ContentSettings(content_type=mime_type),
            )
        except Exception as e:
            logger.exception("Upload of %s failed", blob_name)
            raise InternalError("Upload failed") from e

        service_url = self.blob_service_client.url.rstrip("/")
        return UploadResult(
            url=f"{service_url}/{self.container_name}/{blob_name}",
            public_id=blob_name,
        )

    async def close(self) -> None:
        if self._blob_service_client is not None:
            await self._blob_service_client.close()
            self._blob_service_client = None
