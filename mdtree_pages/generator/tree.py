"""Walk the content tree, discover Markdown documents, and mirror assets."""

from __future__ import annotations

import shutil
import typing as typ

from mdtree_pages._constants import HIDDEN_PREFIX, RESERVED_NAMES
from mdtree_pages.layout import is_markdown

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def is_excluded(name: str) -> bool:
    """Return True for reserved directory names and hidden entries."""
    return name.startswith(HIDDEN_PREFIX) or name in RESERVED_NAMES


def iter_site_files(
    root: Path, *, exclude: cabc.Collection[Path] = ()
) -> cabc.Iterator[Path]:
    """Yield every regular file under ``root`` in sorted, depth-first order.

    Parameters
    ----------
    root : Path
        Directory to walk.
    exclude : Collection[Path], optional
        Resolved directories to skip entirely, such as an output root that
        lives inside the content root.

    Notes
    -----
    Hidden entries, reserved names, and symbolic links are skipped.
    """
    for entry in sorted(root.iterdir(), key=lambda path: path.name):
        if is_excluded(entry.name) or entry.is_symlink():
            continue
        if entry.is_dir():
            if entry.resolve() in exclude:
                continue
            yield from iter_site_files(entry, exclude=exclude)
        elif entry.is_file():
            yield entry


def find_markdown_files(
    root: Path, *, exclude: cabc.Collection[Path] = ()
) -> list[Path]:
    """Return every Markdown document under ``root``."""
    return [
        path
        for path in iter_site_files(root, exclude=exclude)
        if is_markdown(path.name)
    ]


def copy_tree(
    root: Path, output_root: Path, *, exclude: cabc.Collection[Path] = ()
) -> int:
    """Copy every site file under ``root`` into ``output_root`` byte-for-byte.

    Returns
    -------
    int
        Number of files copied.
    """
    copied = 0
    for path in iter_site_files(root, exclude=exclude):
        destination = output_root / path.relative_to(root)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, destination)
        copied += 1
    return copied


__all__ = ["copy_tree", "find_markdown_files", "is_excluded", "iter_site_files"]
