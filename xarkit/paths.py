"""Splitting of paths being added to an archive, and component stripping."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ArchivePath:
    """A path as it is placed in the archive tree.

    ``names`` are the entry names from the top of the archive down to the
    entry itself. ``fs_paths`` holds, for each of them, the filesystem path
    the entry is read from. ``skipped_parent`` tells whether ".." components
    were dropped, and ``trailing_slash`` whether the last entry was given
    with a trailing separator and so is taken as a directory.
    """

    names: Tuple[str, ...]
    fs_paths: Tuple[str, ...]
    absolute: bool = False
    skipped_parent: bool = False
    trailing_slash: bool = False

    @property
    def name(self) -> str:
        """Name of the entry the path leads to."""
        return self.names[-1]

    @property
    def fs_path(self) -> str:
        """Filesystem path of the entry the path leads to."""
        return self.fs_paths[-1]

    @property
    def parents(self) -> Tuple[str, ...]:
        """Names of the directories above the entry."""
        return self.names[:-1]

    def __str__(self) -> str:
        return "/".join(self.names)


def split_archive_path(path):
    """Split ``path`` into the archive entries it names.

    Empty components and "." are ignored; ".." is skipped in the archive
    tree but kept in the filesystem path of the next component. A path
    ending in "." or "..", or naming no entry at all, raises ValueError.
    """
    if path is None:
        raise ValueError("path is required")

    absolute = path.startswith("/")
    root = "/" if absolute else ""
    remaining: Optional[str] = path[1:] if absolute else path

    names = []
    fs_paths = []
    prefix = ""
    skipped = False
    last_had_tail = False

    while remaining:
        component, sep, tail = remaining.partition("/")
        if component == "":
            remaining = tail
            continue
        if component == "..":
            skipped = True
            if not sep:
                raise ValueError(f"path ends in '..': {path!r}")
            prefix += "../"
            remaining = tail
            continue
        if component == ".":
            if not sep:
                raise ValueError(f"path ends in '.': {path!r}")
            remaining = tail
            continue

        if fs_paths:
            parent = fs_paths[-1]
            if prefix == "../" and parent.endswith(component):
                # The component names the directory we are already in.
                prefix = ""
                last_had_tail = bool(sep)
                remaining = tail
                continue
            fs_paths.append(f"{parent}/{prefix}{component}")
        else:
            fs_paths.append(f"{root}{prefix}{component}")
        names.append(component)
        prefix = ""
        last_had_tail = bool(sep)
        remaining = tail

    if not names:
        raise ValueError(f"path names no archive entry: {path!r}")

    return ArchivePath(
        names=tuple(names),
        fs_paths=tuple(fs_paths),
        absolute=absolute,
        skipped_parent=skipped,
        trailing_slash=last_had_tail,
    )


def strip_components(path, components):
    """Drop the first ``components`` leading components of ``path``.

    Runs of separators count as one. Returns None when the path has too
    few components to strip that many and still leave a name.
    """
    if components < 0:
        raise ValueError("component count must not be negative")
    for _ in range(components):
        slash = path.find("/")
        if slash < 0:
            return None
        rest = path[slash:].lstrip("/")
        if not rest:
            return None
        path = rest
    return path