"""
Terms API endpoints - localized legal / help text per section
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_api.api.responses import DataResponse, MessageResponse
from catalog_api.errors import NotFoundError, RequestValidationFailed, translate_storage_errors
from catalog_api.models.term import SUPPORTED_LANGUAGES, TermLanguage
from catalog_api.repositories.term import TermRepository, get_term_repository
from catalog_api.utils.logger import get_logger
from catalog_api.utils.validators import parse_model, parse_uuid, require_fields

router = APIRouter()
logger = get_logger(__name__)

REQUIRED_FIELDS = ("language", "section_key", "title", "content")
NOT_FOUND_MESSAGE = "Term not found"


# --- Pydantic Schemas ---

class TermResponse(BaseModel):
    id: UUID
    language: str
    section_key: str
    title: str
    content: str
    order_index: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TermCreate(BaseModel):
    language: TermLanguage
    section_key: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    order_index: int = 0
    is_active: bool = True


class TermUpdate(BaseModel):
    language: Optional[TermLanguage] = None
    section_key: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    order_index: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("*")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value


# --- Helpers ---

def _check_language(language: str) -> str:
    if language not in SUPPORTED_LANGUAGES:
        raise RequestValidationFailed(
            "Invalid language parameter",
            supported=list(SUPPORTED_LANGUAGES),
        )
    return language


def _term_id(raw_id: str) -> UUID:
    term_id = parse_uuid(raw_id)
    if term_id is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return term_id


def _values(model: BaseModel, **dump_kwargs) -> Dict[str, Any]:
    values = model.model_dump(**dump_kwargs)
    if isinstance(values.get("language"), TermLanguage):
        values["language"] = values["language"].value
    return values


# --- Endpoints ---

@router.get("/terms/{language}", response_model=DataResponse[List[TermResponse]])
async def list_terms(
    language: str,
    repo: TermRepository = Depends(get_term_repository),
):
    """All active terms for a language, newest first"""
    _check_language(language)
    with translate_storage_errors("List terms"):
        terms = await repo.list_active(language)
    return DataResponse[List[TermResponse]](data=[TermResponse.model_validate(t) for t in terms])


@router.get("/terms/{language}/{section_key}", response_model=DataResponse[List[TermResponse]])
async def list_section_terms(
    language: str,
    section_key: str,
    repo: TermRepository = Depends(get_term_repository),
):
    _check_language(language)
    with translate_storage_errors("List section terms"):
        terms = await repo.list_active(language, section_key=section_key)
    return DataResponse[List[TermResponse]](data=[TermResponse.model_validate(t) for t in terms])


@router.post(
    "/terms",
    response_model=DataResponse[TermResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_term(
    payload: Optional[Dict[str, Any]] = Body(None),
    repo: TermRepository = Depends(get_term_repository),
):
    data = parse_model(TermCreate, require_fields(payload, REQUIRED_FIELDS))

    with translate_storage_errors("Create term"):
        term = await repo.create(_values(data))

    logger.info(f"Created term {term.id} ({term.language}/{term.section_key})")
    return DataResponse[TermResponse](data=TermResponse.model_validate(term))


@router.put("/terms/{term_id}", response_model=DataResponse[TermResponse])
async def update_term(
    term_id: str,
    data: TermUpdate,
    repo: TermRepository = Depends(get_term_repository),
):
    pk = _term_id(term_id)
    updates = _values(data, exclude_unset=True)

    with translate_storage_errors("Update term"):
        updated = await repo.update(pk, updates)
        term = await repo.find_by_id(pk) if updated else None

    if not term:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info(f"Updated term {pk}: {sorted(updates)}")
    return DataResponse[TermResponse](data=TermResponse.model_validate(term))


@router.delete("/terms/{term_id}", response_model=MessageResponse)
async def delete_term(
    term_id: str,
    repo: TermRepository = Depends(get_term_repository),
):
    pk = _term_id(term_id)
    with translate_storage_errors("Delete term"):
        deleted = await repo.delete(pk)
    if not deleted:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    logger.info(f"Deleted term {pk}")
    return MessageResponse(message="Term deleted successfully")
