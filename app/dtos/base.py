"""Common DTO base classes."""

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.entities.base import PyObjectIdStr

T = TypeVar("T")


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class BaseResponse(ApiModel):
    """Shared response fields for stored documents."""

    id: PyObjectIdStr = Field(
        ...,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="id",
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PageResponse(ApiModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], total: int, page: int, limit: int):
        total_pages = (total + limit - 1) // limit if limit else 0
        return cls(
            data=items, total=total, page=page, limit=limit, total_pages=total_pages
        )


class Envelope(ApiModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class MessageResponse(ApiModel):
    message: str


class DataResponse(ApiModel, Generic[T]):
    data: T
