"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CheckAuthResponse,
    LoginRequest,
    LoginResponse,
    TokenClaims,
    UserPublic,
)
from app.schemas.catalog import ServiceItem, ServiceUpsert
from app.schemas.common import MessageResponse
from app.schemas.forms import (
    DEFAULT_FORM_STRUCTURE,
    FormField,
    FormSection,
    FormStructureResponse,
    FormStructureSaveRequest,
    FormStructureVersionItem,
)
from app.schemas.health import HealthResponse
from app.schemas.proposals import ProposalCreated, ProposalItem
from app.schemas.users import (
    ProfileUpdateRequest,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
    UserUpdateResponse,
)

__all__ = [
    "CheckAuthResponse",
    "DEFAULT_FORM_STRUCTURE",
    "FormField",
    "FormSection",
    "FormStructureResponse",
    "FormStructureSaveRequest",
    "FormStructureVersionItem",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProfileUpdateRequest",
    "ProposalCreated",
    "ProposalItem",
    "ServiceItem",
    "ServiceUpsert",
    "TokenClaims",
    "UserCreateRequest",
    "UserPublic",
    "UserResponse",
    "UserUpdateRequest",
    "UserUpdateResponse",
]
