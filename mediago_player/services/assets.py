"""Static asset serving for the bundled single-page apps.

Each SPAMount maps URL paths onto a read-only asset tree. Paths with no
matching file fall back to the mount's index document so client-side routing
keeps working after a reload. Mounts are tried in order; a mount that has
nothing to say for a path declines and the next one gets a chance.
"""

import logging
import posixpath
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterable, Union

from mediago_player.services.content_type import resolve_content_type

logger = logging.getLogger(__name__)

DEFAULT_INDEX_FILE = "index.html"


class AssetTree:
    """Read-only view over a directory or packaged resource tree."""

    def __init__(self, root: Traversable):
        self._root = root

    @classmethod
    def from_package(cls, package: str, subdir: str = "") -> "AssetTree":
        root = resources.files(package)
        return cls(root.joinpath(subdir) if subdir else root)

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "AssetTree":
        return cls(Path(directory))

    def sub(self, subpath: str) -> "AssetTree":
        """Return the tree rooted at a slash-separated subpath."""
        node = self._root
        for part in _split(subpath):
            node = node.joinpath(part)
        return AssetTree(node)

    def read(self, key: str) -> bytes:
        """Read a file by its slash-separated key.

        Raises FileNotFoundError when the key does not name a readable file.
        """
        parts = _split(key)
        if not parts or ".." in parts:
            raise FileNotFoundError(key)
        node = self._root
        for part in parts:
            node = node.joinpath(part)
        if not node.is_file():
            raise FileNotFoundError(key)
        return node.read_bytes()

    def exists(self, key: str) -> bool:
        try:
            self.read(key)
        except OSError:
            return False
        return True


def _split(path: str) -> list[str]:
    return [part for part in path.split("/") if part and part != "."]


@dataclass(frozen=True)
class ResolvedAsset:
    name: str  # file actually served, may be the index fallback
    data: bytes
    content_type: str


@dataclass(frozen=True)
class Handled:
    asset: ResolvedAsset


class _Declined:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DECLINED"

    def __bool__(self) -> bool:
        return False


DECLINED = _Declined()

Outcome = Union[Handled, _Declined]


@dataclass(frozen=True)
class SPAMount:
    """One single-page app served from an asset tree.

    Args:
        tree: asset tree holding the built app
        root: subdirectory of the tree holding the app (e.g. "ui")
        path_prefix: URL prefix the app lives under ("" for the site root)
        index_file: document served for "/" and for unmatched paths
        exclude_prefixes: URL prefixes never handled by this mount, matched
            against the original request path
    """
    tree: AssetTree
    root: str = ""
    path_prefix: str = ""
    index_file: str = DEFAULT_INDEX_FILE
    exclude_prefixes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.index_file:
            object.__setattr__(self, "index_file", DEFAULT_INDEX_FILE)
        object.__setattr__(self, "exclude_prefixes", tuple(self.exclude_prefixes))

    @property
    def files(self) -> AssetTree:
        return self.tree.sub(self.root)

    def is_excluded(self, url_path: str) -> bool:
        for prefix in self.exclude_prefixes:
            if url_path.startswith(prefix) or url_path == prefix.rstrip("/"):
                return True
        return False

    def serve(self, url_path: str) -> Outcome:
        if self.is_excluded(url_path):
            return DECLINED

        if self.path_prefix:
            prefix = self.path_prefix.rstrip("/")
            if url_path != prefix and not url_path.startswith(prefix + "/"):
                return DECLINED
            url_path = url_path[len(prefix):]

        # Rooted before normalizing so ".." can never climb above the mount.
        clean = posixpath.normpath("/" + url_path.lstrip("/"))
        key = self.index_file if clean == "/" else clean.lstrip("/")

        files = self.files
        try:
            data = files.read(key)
        except OSError:
            try:
                data = files.read(self.index_file)
            except OSError:
                return DECLINED
            key = self.index_file

        return Handled(ResolvedAsset(
            name=key,
            data=data,
            content_type=resolve_content_type(key, data),
        ))


class SPAChain:
    """Ordered list of mounts; the first one that handles a path wins."""

    def __init__(self, mounts: Iterable[SPAMount] = ()):
        self.mounts: tuple[SPAMount, ...] = tuple(mounts)

    def resolve(self, url_path: str) -> Outcome:
        for mount in self.mounts:
            outcome = mount.serve(url_path)
            if isinstance(outcome, Handled):
                return outcome
        return DECLINED


def build_default_chain(
    ui_dir: str = "",
    exclude_prefixes: Iterable[str] = (),
) -> SPAChain:
    """Mobile app under /m, then the desktop app at the site root."""
    if ui_dir:
        tree = AssetTree.from_directory(ui_dir)
        source = ui_dir
    else:
        tree = AssetTree.from_package("mediago_player", "assets")
        source = "package assets"

    excluded = tuple(exclude_prefixes)
    candidates = [
        SPAMount(tree=tree, root="mobile", path_prefix="/m", exclude_prefixes=excluded),
        SPAMount(tree=tree, root="ui", exclude_prefixes=excluded),
    ]

    mounts: list[SPAMount] = []
    for mount in candidates:
        if mount.files.exists(mount.index_file):
            mounts.append(mount)
            logger.info("SPA mounted at %s -> %s/%s", mount.path_prefix or "/", source, mount.root)
        else:
            logger.warning("No %s in %s/%s; SPA at %s disabled", mount.index_file, source, mount.root, mount.path_prefix or "/")
    return SPAChain(mounts)

