"""FileScanner: resolves a glob pattern against a project root.

Returns absolute file paths, files only, sorted by their POSIX path relative
to the root and free of duplicates. Symlinked directories are not descended
unless ``follow_symlinks`` is set; when it is, each real directory is visited
at most once so link cycles terminate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from ..exceptions import InvalidPathError, ValidationCancelledError
from ..logging_config import get_logger
from .patterns import GlobMatcher

logger = get_logger(__name__)


class CancelSignal(Protocol):
    """Anything with ``is_set()``; ``threading.Event`` qualifies."""

    def is_set(self) -> bool: ...


def validate_root_directory(path: Union[str, Path]) -> Path:
    """
    Validate that a project root exists and is a readable directory.

    Args:
        path: Directory path to validate

    Returns:
        Resolved absolute path

    Raises:
        InvalidPathError: If path is missing, not a directory or unreadable
    """
    path = Path(path)
    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(path, f"Cannot resolve path: {e}")

    if not resolved.exists():
        raise InvalidPathError(resolved, "Directory does not exist")

    if not resolved.is_dir():
        raise InvalidPathError(resolved, "Path is not a directory")

    if not os.access(resolved, os.R_OK):
        raise InvalidPathError(resolved, "Directory is not readable")

    return resolved


class FileScanner:
    """Enumerates the files under a root that match a glob pattern."""

    def __init__(
        self,
        follow_symlinks: bool = False,
        allow_hidden: bool = False,
        exclude_patterns: Iterable[str] = (),
        cancel_event: Optional[CancelSignal] = None,
    ):
        """
        Initialize scanner.

        Args:
            follow_symlinks: Descend into symlinked directories
            allow_hidden: Include entries whose name starts with "."
            exclude_patterns: Glob patterns (relative to the root) to prune
            cancel_event: Checked once per directory; when set the scan aborts
        """
        self.follow_symlinks = follow_symlinks
        self.allow_hidden = allow_hidden
        self.exclude_patterns = tuple(exclude_patterns)
        self.cancel_event = cancel_event
        self._excludes = [GlobMatcher(p) for p in self.exclude_patterns]

    def scan(self, root: Union[str, Path], pattern: str) -> list[Path]:
        """
        Resolve ``pattern`` against ``root``.

        Args:
            root: Project root directory
            pattern: Glob pattern relative to the root

        Returns:
            Sorted, deduplicated absolute file paths (empty if nothing matches)

        Raises:
            InvalidPathError: If root is missing or not a directory
            ValidationCancelledError: If the cancel signal is set mid-scan
        """
        root_dir = validate_root_directory(root)
        matcher = GlobMatcher(pattern)

        matched: dict[str, Path] = {}
        visited_dirs: set[tuple[int, int]] = set()

        for dirpath, dirnames, filenames in os.walk(root_dir, followlinks=self.follow_symlinks):
            self._check_cancelled()
            current = Path(dirpath)
            rel_dir = current.relative_to(root_dir).as_posix()
            rel_prefix = "" if rel_dir == "." else f"{rel_dir}/"

            if self.follow_symlinks:
                try:
                    st = current.stat()
                except OSError as e:
                    logger.warning(f"Cannot stat {current}: {e}")
                    dirnames[:] = []
                    continue
                key = (st.st_dev, st.st_ino)
                if key in visited_dirs:
                    logger.debug(f"Skipped (already visited): {current}")
                    dirnames[:] = []
                    continue
                visited_dirs.add(key)

            dirnames[:] = sorted(
                d
                for d in dirnames
                if self._keep_name(d) and not self._is_excluded_dir(f"{rel_prefix}{d}")
            )

            for name in filenames:
                if not self._keep_name(name):
                    continue
                rel_path = f"{rel_prefix}{name}"
                if not matcher.matches(rel_path) or self._is_excluded(rel_path):
                    continue
                full_path = current / name
                if not full_path.is_file():
                    continue
                matched.setdefault(rel_path, full_path)

        result = [matched[k] for k in sorted(matched)]
        logger.debug(f"Scan of {root_dir} for {pattern!r}: {len(result)} files")
        return result

    def _keep_name(self, name: str) -> bool:
        return self.allow_hidden or not name.startswith(".")

    def _is_excluded(self, rel_path: str) -> bool:
        return any(m.matches(rel_path) for m in self._excludes)

    def _is_excluded_dir(self, rel_dir: str) -> bool:
        # "**/dist" names the directory itself, "**/dist/**" everything below it
        return self._is_excluded(rel_dir) or self._is_excluded(f"{rel_dir}/")

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ValidationCancelledError("cancel signal received during scan")
