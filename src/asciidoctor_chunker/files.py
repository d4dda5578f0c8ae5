"""Filesystem helpers for writing chunks and copying linked resources."""

from __future__ import annotations

import asyncio
import logging
import re
import shutil
from pathlib import Path, PurePosixPath

from asciidoctor_chunker.dom import Node

logger = logging.getLogger(__name__)

_NOT_RELATIVE_RE = re.compile(r"^(#|https:|http:|file:|data:)")


def source_is_newer_than(source: Path, target: Path) -> bool:
    """Check whether ``source`` was modified after ``target``.

    A missing target always counts as older.
    """
    if not target.exists():
        return True
    return source.stat().st_mtime > target.stat().st_mtime


def copy_if_newer(source: Path, target: Path) -> bool:
    """Copy ``source`` to ``target`` unless the target is up to date.

    Parent directories of ``target`` are created as needed.

    Returns:
        True if the file was copied, False if the target was newer.

    Raises:
        FileNotFoundError: If ``source`` does not exist.
    """
    if not source.exists():
        raise FileNotFoundError(f"No such file: {source}")
    if not source_is_newer_than(source, target):
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return True


def remove_parameters(url: str) -> str:
    """Drop a ``?query`` suffix from the last path segment of ``url``."""
    path = PurePosixPath(url)
    index = path.name.find("?")
    if index == -1:
        return url
    return str(path.with_name(path.name[:index]))


def get_local_files(document: Node) -> list[str]:
    """List the relative paths of stylesheets, scripts and images the page links to."""
    local_files: list[str] = []
    for element in document.find("link[href], script[src], img[src]"):
        url = element.get_attr("href") or element.get_attr("src") or ""
        if not url or _NOT_RELATIVE_RE.match(url) or PurePosixPath(url).is_absolute():
            continue
        local_files.append(remove_parameters(url))
    return local_files


def copy_relative_files(source_file: Path, outdir: Path, files: list[str]) -> list[Path]:
    """Copy files referenced relative to ``source_file`` into ``outdir``.

    Missing files are logged and skipped.

    Returns:
        The target paths that were copied.
    """
    base_dir = source_file.parent
    copied: list[Path] = []
    for relative in files:
        source = base_dir / relative
        target = outdir / relative
        try:
            if copy_if_newer(source, target):
                copied.append(target)
        except FileNotFoundError:
            logger.warning("Local file linked from the document is missing: %s", source)
    return copied


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)
