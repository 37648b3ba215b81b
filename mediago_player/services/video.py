"""Video library: directory scan and stream path resolution."""

import logging
import os
import socket
from typing import Iterator
from urllib.parse import quote

from mediago_player.errors import ConfigError, PathError, PathErrorKind, ScanError
from mediago_player.models import Video
from mediago_player.services.content_type import type_by_extension

logger = logging.getLogger(__name__)

URL_PREFIX = "videos/"
DEFAULT_PORT = "8080"


def is_video_file(name: str) -> bool:
    """Classify by extension only; file contents are never read here."""
    mime_type = type_by_extension(os.path.splitext(name)[1])
    return bool(mime_type) and mime_type.startswith("video/")


def video_url(file_name: str) -> str:
    # Same escaping as a single URL path segment: "/", "?", ";" and "," are encoded.
    return URL_PREFIX + quote(file_name, safe="$&+:=@")


def port_from_addr(server_addr: str) -> str:
    """Extract the port from ":8080" or "host:8080" style addresses."""
    _, sep, port = server_addr.rpartition(":")
    if not sep:
        port = server_addr
    return port or DEFAULT_PORT


def get_local_ip() -> str:
    """Best-effort LAN address of this host, for diagnostics only."""
    # UDP connect sends nothing; it only selects the outbound interface.
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("8.8.8.8", 80))
        return sock.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        sock.close()


def resolve_stream_path(video_dir: str, requested: str, strict: bool = False) -> str:
    """
    Turn a client-supplied relative path into an absolute path under video_dir.

    Any ".." in the raw request is rejected before the path is joined. With
    strict=True the resolved real path must also stay inside the real root,
    which catches symlinks pointing elsewhere.

    Raises:
        PathError(BAD_REQUEST): the path contains a traversal token
        PathError(NOT_FOUND): the path cannot be made absolute
    """
    if ".." in requested:
        raise PathError(PathErrorKind.BAD_REQUEST, "Invalid file path")

    # All leading slashes go: an absolute component would make join discard video_dir.
    relative = requested.lstrip("/")
    try:
        full_path = os.path.abspath(os.path.join(video_dir, relative))
    except (ValueError, OSError):
        raise PathError(PathErrorKind.NOT_FOUND, "File not found")

    if strict:
        root = os.path.realpath(video_dir)
        try:
            contained = os.path.commonpath([root, os.path.realpath(full_path)]) == root
        except ValueError:
            contained = False
        if not contained:
            raise PathError(PathErrorKind.BAD_REQUEST, "Invalid file path")

    return full_path


class VideoService:
    """Lists and locates video files under a fixed root directory."""

    def __init__(self, video_dir: str, server_addr: str = "", strict_paths: bool = False):
        if not video_dir:
            raise ConfigError("video directory not configured")
        if not os.path.exists(video_dir):
            raise ConfigError(f"video directory does not exist: {video_dir}")

        self.video_dir = video_dir
        self.strict_paths = strict_paths
        self.port = port_from_addr(server_addr)
        self.server_ip = get_local_ip()

    def iter_videos(self) -> Iterator[Video]:
        """
        Walk the video root and yield an entry for every video file.

        Directories and files are visited in sorted name order, so an
        unchanged tree always produces the same sequence.

        Raises:
            ScanError: the root or a subdirectory could not be read
        """
        def _raise(err: OSError):
            raise ScanError(f"failed to scan video directory: {err}") from err

        for dirpath, dirnames, filenames in os.walk(self.video_dir, onerror=_raise):
            dirnames.sort()
            for name in sorted(filenames):
                if is_video_file(name):
                    yield Video(title=name, url=video_url(name))

    def list_videos(self) -> list[Video]:
        videos = list(self.iter_videos())
        logger.debug("Found %d videos under %s", len(videos), self.video_dir)
        return videos

    def stream_path(self, requested: str) -> str:
        """Resolve a request path and make sure it names an existing file."""
        full_path = resolve_stream_path(self.video_dir, requested, strict=self.strict_paths)
        if not os.path.isfile(full_path):
            raise PathError(PathErrorKind.NOT_FOUND, "File not found")
        return full_path
