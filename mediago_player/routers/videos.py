"""Videos router — library listing and file streaming."""

import logging
import os
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

from mediago_player.errors import ScanError
from mediago_player.models import ErrorResponse, ServerInfo, Video
from mediago_player.services.content_type import type_by_extension
from mediago_player.services.video import VideoService, get_local_ip, port_from_addr

logger = logging.getLogger(__name__)

router = APIRouter(tags=["videos"])
stream_router = APIRouter(tags=["videos"])


def _service(request: Request) -> Optional[VideoService]:
    return request.app.state.video_service


@router.get("/videos", response_model=list[Video], responses={500: {"model": ErrorResponse}})
def list_videos(request: Request):
    """Return every video file under the configured directory."""
    service = _service(request)
    if service is None:
        return []
    try:
        return service.list_videos()
    except ScanError:
        logger.exception("Video scan failed for %s", service.video_dir)
        return JSONResponse(status_code=500, content={"error": "Failed to retrieve video files"})


@router.get("/server", response_model=ServerInfo)
def server_info(request: Request):
    """Report the address the library is reachable on."""
    service = _service(request)
    if service is not None:
        return ServerInfo(ip=service.server_ip, port=service.port, video_root_configured=True)
    return ServerInfo(
        ip=get_local_ip(),
        port=port_from_addr(request.app.state.settings.http_addr),
        video_root_configured=False,
    )


@stream_router.api_route(
    "/videos/{filepath:path}",
    methods=["GET", "HEAD"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def stream_video(filepath: str, request: Request):
    """Serve a video file; Range, ETag and Last-Modified come from FileResponse."""
    full_path = _service(request).stream_path(filepath)
    media_type = type_by_extension(os.path.splitext(full_path)[1])
    return FileResponse(full_path, media_type=media_type)
