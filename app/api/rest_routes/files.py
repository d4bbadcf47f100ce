from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.api.dependencies import get_uploader
from app.core.security import verify_jwt
from app.models.session import SessionClaims
from app.services.files import DEFAULT_UPLOAD_FOLDER, BlobUploader, UploadResult

router = APIRouter(prefix="/upload", tags=["Files"])


@router.post("", response_model=UploadResult, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(DEFAULT_UPLOAD_FOLDER),
    claims: SessionClaims = Depends(verify_jwt),
    uploader: BlobUploader = Depends(get_uploader),
) -> UploadResult:
    """
    Uploads an image as multipart/form-data to Azure Blob Storage and returns
    its public URL.
    """
    return await uploader.upload(
        file_stream=file.file,
        user_id=claims.sub,
        folder=folder,
        mime_type=file.content_type,
    )
