"""Content-type resolution for served files.

Extension lookup comes first. Only when the extension is unknown do we look at
the bytes, and for a handful of web asset extensions a fixed override wins over
whatever sniffing produced.
"""

import mimetypes
import posixpath
import struct
from typing import Optional

SNIFF_LEN = 512

# Built-in table only: mimetypes.MimeTypes() does not read the host's
# /etc/mime.types, so results do not depend on the machine.
_registry = mimetypes.MimeTypes()

_EXTRA_TYPES = {
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
    ".m4v": "video/x-m4v",
    ".flv": "video/x-flv",
    ".wmv": "video/x-ms-wmv",
    ".3gp": "video/3gpp",
    ".ogv": "video/ogg",
    ".mpg": "video/mpeg",
    ".mpeg": "video/mpeg",
    ".m2ts": "video/mp2t",
}
for _ext, _type in _EXTRA_TYPES.items():
    if _ext not in _registry.types_map[True]:
        _registry.add_type(_type, _ext)

_TEXT_LIKE = {"application/javascript", "application/json"}

_OVERRIDES = {
    ".js": "application/javascript; charset=utf-8",
    ".mjs": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".wasm": "application/wasm",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".ico": "image/x-icon",
    ".webmanifest": "application/manifest+json",
}


def type_by_extension(ext: str) -> Optional[str]:
    """Look up a MIME type for an extension such as ".mp4"."""
    if not ext:
        return None
    strict, common = _registry.types_map[True], _registry.types_map[False]
    lower = ext.lower()
    return strict.get(ext) or strict.get(lower) or common.get(ext) or common.get(lower)


def resolve_content_type(file_name: str, data: bytes) -> str:
    """Return the Content-Type header value for a file name and its bytes."""
    ext = posixpath.splitext(file_name)[1]
    mime_type = type_by_extension(ext)
    if mime_type:
        if mime_type.startswith("text/") or mime_type in _TEXT_LIKE:
            return f"{mime_type}; charset=utf-8"
        return mime_type

    sniffed = sniff_content_type(data)
    return _OVERRIDES.get(ext, sniffed)


# ── Sniffing ────────────────────────────────────────────────────

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)

# Each signature is a tuple of (offset, bytes) checks that must all match.
_SIGNATURES = (
    (((0, b"<?xml"),), "text/xml; charset=utf-8"),
    (((0, b"%PDF-"),), "application/pdf"),
    (((0, b"%!PS-Adobe-"),), "application/postscript"),
    (((0, b"\xfe\xff"),), "text/plain; charset=utf-16be"),
    (((0, b"\xff\xfe"),), "text/plain; charset=utf-16le"),
    (((0, b"\xef\xbb\xbf"),), "text/plain; charset=utf-8"),
    (((0, b"\x00\x00\x01\x00"),), "image/x-icon"),
    (((0, b"\x00\x00\x02\x00"),), "image/x-icon"),
    (((0, b"BM"),), "image/bmp"),
    (((0, b"GIF87a"),), "image/gif"),
    (((0, b"GIF89a"),), "image/gif"),
    (((0, b"RIFF"), (8, b"WEBPVP")), "image/webp"),
    (((0, b"\x89PNG\r\n\x1a\n"),), "image/png"),
    (((0, b"\xff\xd8\xff"),), "image/jpeg"),
    (((0, b"FORM"), (8, b"AIFF")), "audio/aiff"),
    (((0, b"ID3"),), "audio/mpeg"),
    (((0, b"OggS\x00"),), "application/ogg"),
    (((0, b"MThd\x00\x00\x00\x06"),), "audio/midi"),
    (((0, b"RIFF"), (8, b"AVI ")), "video/avi"),
    (((0, b"RIFF"), (8, b"WAVE")), "audio/wave"),
    (((0, b"\x1aE\xdf\xa3"),), "video/webm"),
    (((0, b"\x00\x01\x00\x00"),), "font/ttf"),
    (((0, b"OTTO"),), "font/otf"),
    (((0, b"ttcf"),), "font/collection"),
    (((0, b"wOFF"),), "font/woff"),
    (((0, b"wOF2"),), "font/woff2"),
    (((0, b"\x1f\x8b\x08"),), "application/x-gzip"),
    (((0, b"PK\x03\x04"),), "application/zip"),
    (((0, b"Rar!\x1a\x07\x00"),), "application/x-rar-compressed"),
    (((0, b"Rar!\x1a\x07\x01\x00"),), "application/x-rar-compressed"),
    (((0, b"\x00asm"),), "application/wasm"),
)

_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _is_html(data: bytes) -> bool:
    body = data.lstrip(b"\t\n\x0c\r ")
    upper = body.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and len(body) > len(tag) and body[len(tag)] in b" >":
            return True
    return False


def _is_mp4(data: bytes) -> bool:
    if len(data) < 12:
        return False
    box_size = struct.unpack(">I", data[:4])[0]
    if box_size % 4 != 0 or len(data) < box_size or data[4:8] != b"ftyp":
        return False
    for start in range(8, box_size, 4):
        if start == 12:
            continue  # minor version
        if data[start:start + 3] == b"mp4":
            return True
    return False


def sniff_content_type(data: bytes) -> str:
    """Guess a content type from the leading bytes of a file."""
    head = data[:SNIFF_LEN]
    if _is_html(head):
        return "text/html; charset=utf-8"
    for checks, mime_type in _SIGNATURES:
        if all(head[offset:offset + len(sig)] == sig for offset, sig in checks):
            return mime_type
    if _is_mp4(head):
        return "video/mp4"
    if any(byte in _BINARY_BYTES for byte in head):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"
