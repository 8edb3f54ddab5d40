"""Pydantic schemas for the relay API."""

from typing import Literal

from pydantic import BaseModel


class UploadResult(BaseModel):
    """A file successfully relayed to the CDN."""

    url: str
    filename: str
    size: int
    sizeFormatted: str
    format: str
    mimetype: str

    model_config = {"frozen": True}


class FileInfo(BaseModel):
    """Metadata of an upload, computed locally."""

    name: str
    size: int
    sizeFormatted: str
    mimetype: str
    extension: str

    model_config = {"frozen": True}


class UploadResponse(BaseModel):
    success: Literal[True] = True
    data: UploadResult


class FileInfoResponse(BaseModel):
    success: Literal[True] = True
    data: FileInfo


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
