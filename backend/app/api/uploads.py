"""
File upload endpoint.

Admin screens upload aho images and sounds here and store the returned URL
in the game settings.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile
from pydantic import BaseModel

from app.api.deps import StorageProvider
from app.core.exceptions import ValidationError
from app.utils.datetime_utils import epoch_millis, now_utc

router = APIRouter()


class UploadResponse(BaseModel):
    url: str


def build_upload_filename(original_name: Optional[str]) -> str:
    """Millisecond timestamp prefix plus the client's base name."""
    name = Path(original_name or "").name or "upload"
    return f"{epoch_millis(now_utc())}-{name}"


def request_base_url(request: Request) -> str:
    """Scheme and host as seen by the client, honouring X-Forwarded-Proto."""
    forwarded = request.headers.get("x-forwarded-proto")
    scheme = forwarded.split(",")[0].strip() if forwarded else request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    request: Request,
    storage: StorageProvider,
    file: Optional[UploadFile] = File(None),
):
    """Store one file and return its public URL."""
    if file is None:
        raise ValidationError("No file uploaded.")

    filename = build_upload_filename(file.filename)
    data = await file.read()
    await storage.upload(filename, data, content_type=file.content_type)
    return UploadResponse(url=storage.get_public_url(filename, request_base_url(request)))
