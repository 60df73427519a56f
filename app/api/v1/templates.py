"""Proposal template endpoints: download the active .docx, upload a replacement, reset to default."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.deps import get_template_store
from app.schemas.auth import TokenClaims
from app.schemas.common import MessageResponse
from app.services.templates import CUSTOM_TEMPLATE_NAME, DOCX_MEDIA_TYPE, TemplateStore

router = APIRouter()


@router.get("/download", response_class=FileResponse)
def download_template(
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    templates: Annotated[TemplateStore, Depends(get_template_store)],
) -> FileResponse:
    return FileResponse(
        templates.current_path(),
        media_type=DOCX_MEDIA_TYPE,
        filename=CUSTOM_TEMPLATE_NAME,
    )


@router.post("/upload", response_model=MessageResponse)
def upload_template(
    template: Annotated[UploadFile, File(description="Word document (.docx)")],
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    templates: Annotated[TemplateStore, Depends(get_template_store)],
) -> MessageResponse:
    """Replace the active template. Send multipart/form-data with a .docx file in field `template`."""
    # Read one byte past the limit so oversize uploads are detected without loading them whole.
    content = template.file.read(templates.max_bytes + 1)
    templates.save(template.filename, content)
    return MessageResponse(message="Template uploaded successfully")


@router.post("/reset", response_model=MessageResponse)
def reset_template(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    templates: Annotated[TemplateStore, Depends(get_template_store)],
) -> MessageResponse:
    templates.reset()
    return MessageResponse(message="Template reset to default")
