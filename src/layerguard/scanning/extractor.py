"""ImportExtractor: textual import extraction per source language.

Usage:
    extractor = ImportExtractor()
    imports = extractor.extract_file(Path("src/domain/User.ts"))

Extraction is a regex match over raw text, not parsing. Targets are returned
unresolved, in first-appearance order, with duplicates kept. Files whose
extension has no extractor yield an empty list; evaluation continues with
reduced signal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .languages import SourceLanguage, detect_language, get_language_config

logger = get_logger(__name__)


def extract_ts_imports(content: str) -> list[str]:
    """Extract ``import ... from '...'`` and ``require('...')`` targets."""
    return get_language_config(SourceLanguage.TYPESCRIPT).extract(content)


def extract_java_imports(content: str) -> list[str]:
    """Extract ``import a.b.C;`` targets."""
    return get_language_config(SourceLanguage.JAVA).extract(content)


def extract_csharp_imports(content: str) -> list[str]:
    """Extract ``using A.B;`` targets."""
    return get_language_config(SourceLanguage.CSHARP).extract(content)


def extract_imports(content: str, path: Union[str, Path]) -> list[str]:
    """Extract imports from ``content`` using the extractor for ``path``'s extension."""
    language = detect_language(path)
    if language is None:
        return []
    return get_language_config(language).extract(content)


class ImportExtractor:
    """Reads source files and extracts their import targets.

    Attributes:
        max_file_size_bytes: Files larger than this are not read and
            yield no imports (None = no limit)
    """

    def __init__(self, max_file_size_bytes: Optional[int] = None) -> None:
        self.max_file_size_bytes = max_file_size_bytes

    def extract(self, content: str, language: Optional[SourceLanguage]) -> list[str]:
        """Extract imports from already-loaded content.

        Never raises; malformed content yields zero or partial matches.
        """
        if language is None:
            return []
        return get_language_config(language).extract(content)

    def extract_file(self, path: Path) -> list[str]:
        """Read ``path`` and extract its imports.

        Returns:
            Import targets, or an empty list for unsupported extensions
            and oversized files

        Raises:
            FileAccessError: If the file cannot be read
        """
        language = detect_language(path)
        if language is None:
            logger.debug(f"No extractor for {path.suffix or '<no extension>'}: {path}")
            return []

        if self.max_file_size_bytes is not None:
            try:
                size = path.stat().st_size
            except OSError as e:
                raise FileAccessError(path, f"Cannot stat file: {e}")
            if size > self.max_file_size_bytes:
                logger.debug(f"Skipped (size): {path} ({size} bytes)")
                return []

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FileAccessError(path, f"Cannot read file: {e}")

        return self.extract(content, language)
