"""
Shared base models and response envelopes.

Both directions accept camelCase or snake_case keys; responses are read from
ORM attributes and serialised in camelCase.  Every response is
wrapped in an envelope carrying ``success``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class ResponseModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Envelope(ResponseModel, Generic[DataT]):
    success: bool = True
    message: str | None = None
    data: DataT


class MessageEnvelope(ResponseModel):
    success: bool = True
    message: str


class Pagination(ResponseModel):
    page: int
    limit: int
    pages: int


class PageEnvelope(ResponseModel, Generic[DataT]):
    success: bool = True
    count: int
    total: int
    pagination: Pagination | None = None
    data: list[DataT]
