"""Proposal document template on disk: a custom upload with a bundled default as fallback."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from app.core.errors import InvalidTemplateFile, TemplateNotFound, TemplateStorageError

logger = logging.getLogger(__name__)

CUSTOM_TEMPLATE_NAME = "proposal_template.docx"
DEFAULT_TEMPLATE_NAME = "proposal_template_default.docx"
ALLOWED_TEMPLATE_EXTENSIONS = frozenset({".docx"})
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TemplateStore:
    def __init__(self, directory: str | Path, max_bytes: int) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    @property
    def custom_path(self) -> Path:
        return self.directory / CUSTOM_TEMPLATE_NAME

    @property
    def default_path(self) -> Path:
        return self.directory / DEFAULT_TEMPLATE_NAME

    def current_path(self) -> Path:
        """The uploaded template if any, else the default; TemplateNotFound when neither exists."""
        if self.custom_path.is_file():
            return self.custom_path
        if self.default_path.is_file():
            return self.default_path
        raise TemplateNotFound()

    def is_available(self) -> bool:
        return self.custom_path.is_file() or self.default_path.is_file()

    def save(self, filename: str | None, content: bytes) -> Path:
        """Replace the custom template with an uploaded .docx file."""
        suffix = Path(filename or "").suffix.lower()
        if suffix not in ALLOWED_TEMPLATE_EXTENSIONS:
            raise InvalidTemplateFile(field="template")
        if not content:
            raise InvalidTemplateFile("Uploaded template is empty", field="template")
        if len(content) > self.max_bytes:
            raise InvalidTemplateFile(
                f"Template must not exceed {self.max_bytes // (1024 * 1024)} MB",
                field="template",
            )

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".upload")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(content)
                os.replace(tmp_name, self.custom_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.exception("Failed to write proposal template")
            raise TemplateStorageError() from e
        logger.info("Proposal template replaced (%s bytes)", len(content))
        return self.custom_path

    def reset(self) -> Path:
        """Drop the uploaded template and restore a copy of the default."""
        if not self.default_path.is_file():
            raise TemplateStorageError("Default template is missing")
        try:
            self.custom_path.unlink(missing_ok=True)
            shutil.copyfile(self.default_path, self.custom_path)
        except OSError as e:
            logger.exception("Failed to reset proposal template")
            raise TemplateStorageError("Failed to reset template") from e
        logger.info("Proposal template reset to default")
        return self.custom_path
