"""Response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

from snapgram.core.codes import ResponseCode

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Successful response: a numeric code plus the payload."""

    code: int
    status: Literal["success"] = "success"
    data: DataT

    @classmethod
    def success(cls, code: ResponseCode, data: DataT) -> "Envelope[DataT]":
        return cls(code=int(code), data=data)


class ErrorEnvelope(BaseModel):
    """Error response: a numeric code plus a human readable message."""

    code: int
    status: Literal["error"] = "error"
    message: str
