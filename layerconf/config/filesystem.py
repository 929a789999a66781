"""
layerconf.config.filesystem
===========================

Read-only file sources consumed by the configuration pipeline.

* :class:`EmbeddedFS` – defaults shipped with the application as package data
  (any ``importlib.resources`` traversable, or a plain directory).
* :class:`DiskFS`     – the regular filesystem, optionally rooted at a base
  directory, used for on-disk overrides.

Both expand glob patterns the same way: ``*``, ``?`` and ``[...]`` match
within a single path segment only, dot-files are not special, and matches are
returned in sorted order so that merging is reproducible.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import List, Optional, Protocol, Union

_MAGIC = re.compile(r"[*?\[]")


class FileSource(Protocol):
    """Minimal interface the merger needs from a file source."""

    def glob(self, pattern: str) -> List[str]: ...

    def read_bytes(self, path: str) -> bytes: ...


def _segment_pattern(segment: str) -> str:
    # Character class negation is written "[^...]" in glob patterns we accept
    # and "[!...]" in fnmatch.
    return segment.replace("[^", "[!")


def _glob_node(node, segments: List[str]) -> List[List[str]]:
    """Expand *segments* under *node*, returning matched relative segment lists."""
    if not segments:
        return [[]]
    head, rest = segments[0], segments[1:]
    if head in ("", "."):
        return _glob_node(node, rest)

    if not _MAGIC.search(head):
        child = node / head
        if not rest:
            return [[head]] if child.is_file() or child.is_dir() else []
        if not child.is_dir():
            return []
        return [[head] + tail for tail in _glob_node(child, rest)]

    if not node.is_dir():
        return []
    pattern = _segment_pattern(head)
    matches: List[List[str]] = []
    for child in node.iterdir():
        if not fnmatchcase(child.name, pattern):
            continue
        if rest:
            if child.is_dir():
                matches.extend([child.name] + tail for tail in _glob_node(child, rest))
        else:
            matches.append([child.name])
    return matches


class EmbeddedFS:
    """
    Read-only view over bundled default files.

    Parameters
    ----------
    root : Traversable | str | Path
        Directory (or package resource root) that contains the ``embeds/``
        tree. Use :meth:`from_package` for data shipped inside a package.
    """

    def __init__(self, root: Union[Traversable, str, Path]) -> None:
        self._root = Path(root) if isinstance(root, str) else root

    @classmethod
    def from_package(cls, package: str) -> "EmbeddedFS":
        """Build an embedded source from the data files of *package*."""
        return cls(resources.files(package))

    def glob(self, pattern: str) -> List[str]:
        segments = PurePosixPath(pattern.lstrip("/")).parts
        found = _glob_node(self._root, list(segments))
        return sorted("/".join(parts) for parts in found if parts)

    def read_bytes(self, path: str) -> bytes:
        node = self._root
        for part in PurePosixPath(path.lstrip("/")).parts:
            node = node / part
        if not node.is_file():
            raise FileNotFoundError(f"{path!r} not found in embedded files")
        return node.read_bytes()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={str(self._root)!r})"


class DiskFS:
    """
    Regular filesystem source.

    With *root* set every path (absolute or not) is resolved below *root*,
    which keeps tests and sandboxes away from the real filesystem.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None) -> None:
        self._root = Path(root) if root is not None else None

    def _resolve(self, path: str) -> Path:
        if self._root is None:
            return Path(path)
        return self._root / path.lstrip("/")

    def glob(self, pattern: str) -> List[str]:
        if self._root is not None:
            base: Path = self._root
            segments = PurePosixPath(pattern.lstrip("/")).parts
            prefix = "/" if pattern.startswith("/") else ""
        elif Path(pattern).is_absolute():
            anchor = Path(pattern).anchor
            base = Path(anchor)
            segments = Path(pattern).parts[1:]
            prefix = anchor
        else:
            base = Path(".")
            segments = Path(pattern).parts
            prefix = ""
        found = _glob_node(base, list(segments))
        return sorted(prefix + "/".join(parts) for parts in found if parts)

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={str(self._root) if self._root else None!r})"
