"""
Response envelopes shared by the resource routers
"""
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class CreatedResponse(DataResponse[T], Generic[T]):
    message: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class Page(BaseModel, Generic[T]):
    count: int
    rows: List[T]
