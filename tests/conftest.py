"""
Shared pytest fixtures.
Video files are tiny placeholders; nothing here needs real media.
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mediago_player.config import Settings
from mediago_player.main import create_app


# ---------------------------------------------------------------------------
# In-memory asset tree
# ---------------------------------------------------------------------------
class MemoryNode:
    """Minimal Traversable over a {"dir/file": bytes} mapping."""

    def __init__(self, files: dict[str, bytes], path: str = ""):
        self._files = files
        self._path = path

    def joinpath(self, *parts: str) -> "MemoryNode":
        path = "/".join(p for p in (self._path, *parts) if p)
        return MemoryNode(self._files, path)

    def is_file(self) -> bool:
        return self._path in self._files

    def read_bytes(self) -> bytes:
        try:
            return self._files[self._path]
        except KeyError:
            raise FileNotFoundError(self._path)


INDEX_HTML = b"<!doctype html><html><body><div id=root></div></body></html>"
MOBILE_HTML = b"<!doctype html><html><body>mobile</body></html>"


@pytest.fixture
def memory_files() -> dict[str, bytes]:
    return {
        "ui/index.html": INDEX_HTML,
        "ui/assets/app.js": b"console.log('hi')",
        "ui/assets/app.wasm": b"\x00asm\x01\x00\x00\x00",
        "ui/favicon.svg": b"<svg xmlns='http://www.w3.org/2000/svg'/>",
        "ui/api/anything": b"should never be served",
        "mobile/index.html": MOBILE_HTML,
    }


# ---------------------------------------------------------------------------
# Video library on disk
# ---------------------------------------------------------------------------
@pytest.fixture
def video_dir(tmp_path: Path) -> Path:
    root = tmp_path / "videos"
    (root / "sub" / "dir").mkdir(parents=True)
    (root / "movie.mp4").write_bytes(b"fake mp4 payload")
    (root / "notes.txt").write_text("not a video")
    (root / "cover.jpg").write_bytes(b"\xff\xd8\xff")
    (root / "sub" / "dir" / "clip.mkv").write_bytes(b"fake mkv")
    return root


@pytest.fixture
def ui_dir(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    (root / "ui" / "assets").mkdir(parents=True)
    (root / "mobile").mkdir()
    (root / "ui" / "index.html").write_bytes(INDEX_HTML)
    (root / "ui" / "assets" / "app.css").write_text("body { margin: 0 }")
    (root / "mobile" / "index.html").write_bytes(MOBILE_HTML)
    return root


@pytest.fixture
def make_client(ui_dir: Path):
    """Build a TestClient for an app with the given settings overrides."""
    def _make(**overrides) -> TestClient:
        overrides.setdefault("ui_dir", str(ui_dir))
        cfg = Settings(**overrides)
        return TestClient(create_app(cfg))
    return _make
