"""Source scanning: file enumeration and import extraction."""

from .extractor import (
    ImportExtractor,
    extract_csharp_imports,
    extract_imports,
    extract_java_imports,
    extract_ts_imports,
)
from .languages import (
    LANGUAGES,
    LanguageConfig,
    SourceLanguage,
    detect_language,
    get_all_known_extensions,
    get_language_config,
)
from .patterns import GlobMatcher, expand_braces, glob_to_regex
from .scanner import FileScanner, validate_root_directory

__all__ = [
    # Extraction
    "ImportExtractor",
    "extract_imports",
    "extract_ts_imports",
    "extract_java_imports",
    "extract_csharp_imports",
    # Language config
    "SourceLanguage",
    "LanguageConfig",
    "LANGUAGES",
    "detect_language",
    "get_language_config",
    "get_all_known_extensions",
    # File enumeration
    "FileScanner",
    "GlobMatcher",
    "expand_braces",
    "glob_to_regex",
    "validate_root_directory",
]
