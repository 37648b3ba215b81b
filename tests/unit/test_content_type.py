"""Unit tests for mediago_player/services/content_type.py"""
import struct

import pytest

from mediago_player.services.content_type import (
    resolve_content_type,
    sniff_content_type,
    type_by_extension,
)


@pytest.mark.unit
class TestExtensionLookup:
    def test_html_gets_charset(self):
        assert resolve_content_type("index.html", b"") == "text/html; charset=utf-8"

    def test_css_gets_charset(self):
        assert resolve_content_type("app.css", b"body{}") == "text/css; charset=utf-8"

    def test_javascript_gets_charset(self):
        ct = resolve_content_type("assets/app.js", b"let a = 1")
        assert "javascript" in ct
        assert ct.endswith("; charset=utf-8")

    def test_binary_type_has_no_charset(self):
        assert resolve_content_type("logo.png", b"") == "image/png"

    def test_extension_hit_ignores_content(self):
        # PNG bytes, but the extension decides.
        assert resolve_content_type("page.html", b"\x89PNG\r\n\x1a\n") == "text/html; charset=utf-8"

    def test_uppercase_extension(self):
        assert type_by_extension(".MP4") == "video/mp4"

    def test_video_containers_known(self):
        for ext in (".mp4", ".mkv", ".webm", ".mov", ".avi", ".m4v"):
            assert type_by_extension(ext).startswith("video/"), ext

    def test_unknown_and_empty(self):
        assert type_by_extension("") is None
        assert type_by_extension(".definitely-not-a-type") is None


@pytest.mark.unit
class TestOverrides:
    def test_wasm_regardless_of_content(self):
        assert resolve_content_type("app.wasm", b"arbitrary bytes") == "application/wasm"
        assert resolve_content_type("app.wasm", b"<html><body>") == "application/wasm"

    def test_woff2(self):
        assert resolve_content_type("font.woff2", b"wOF2\x00\x01") == "font/woff2"

    def test_webmanifest(self):
        ct = resolve_content_type("site.webmanifest", b'{"name": "x"}')
        assert ct == "application/manifest+json"


@pytest.mark.unit
class TestSniffing:
    def test_unknown_extension_text(self):
        assert resolve_content_type("README.unknownext", b"hello world") == "text/plain; charset=utf-8"

    def test_unknown_extension_binary(self):
        assert resolve_content_type("blob.unknownext", b"\x00\x01\x02\x03") == "application/octet-stream"

    def test_no_extension_png(self):
        assert resolve_content_type("logo", b"\x89PNG\r\n\x1a\n\x00\x00") == "image/png"

    def test_html_with_leading_whitespace(self):
        assert sniff_content_type(b"  \n<!DOCTYPE html><html>") == "text/html; charset=utf-8"

    def test_html_tag_needs_terminator(self):
        # "<a" followed by a letter is not a tag we recognise
        assert sniff_content_type(b"<abc") == "text/plain; charset=utf-8"

    def test_pdf(self):
        assert sniff_content_type(b"%PDF-1.7\n") == "application/pdf"

    def test_webp_riff(self):
        assert sniff_content_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_mp4_ftyp(self):
        data = struct.pack(">I", 24) + b"ftypisom" + b"\x00\x00\x02\x00" + b"isommp41"
        assert sniff_content_type(data) == "video/mp4"

    def test_empty_is_text(self):
        assert sniff_content_type(b"") == "text/plain; charset=utf-8"
