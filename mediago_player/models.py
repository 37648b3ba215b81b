"""Pydantic models shared across the application."""

from pydantic import BaseModel


class Video(BaseModel):
    """A playable file found under the video root."""
    title: str  # base file name, as found on disk
    url: str  # "videos/<percent-encoded base name>", root-relative


class ErrorResponse(BaseModel):
    error: str


class ServerInfo(BaseModel):
    ip: str
    port: str
    video_root_configured: bool
