"""Language configurations: the single source of truth for import patterns.

Adding a new language:
  1. Add a member to SourceLanguage.
  2. Add a LanguageConfig entry to LANGUAGES below.
  The ImportExtractor picks it up automatically.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class SourceLanguage(str, Enum):
    """Closed set of languages whose imports can be extracted."""

    TYPESCRIPT = "typescript"  # TS/JS family
    JAVA = "java"  # JVM family
    CSHARP = "csharp"  # CLR family


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the extractor needs to know about a language."""

    language: SourceLanguage
    extensions: tuple[str, ...]

    # Import detection. Matched with finditer over the whole file; the first
    # non-empty group of each match is the module reference.
    import_pattern: re.Pattern

    def extract(self, content: str) -> list[str]:
        imports: list[str] = []
        for match in self.import_pattern.finditer(content):
            target = next((g for g in match.groups() if g), None)
            if target:
                imports.append(target)
        return imports


# ── Patterns ───────────────────────────────────────────────────────
# Single-line, single-pass matches. Multi-line import lists, dynamic
# import() and aliases are not handled.

_TS_IMPORT = re.compile(
    r"(?:import\s+.*?\s+from\s+['\"]([^'\"]+)['\"])"
    r"|(?:require\s*\(\s*['\"]([^'\"]+)['\"]\s*\))"
)
_JAVA_IMPORT = re.compile(r"import\s+([\w.]+)\s*;")
_CSHARP_USING = re.compile(r"using\s+([\w.]+)\s*;")


# ── Language definitions ───────────────────────────────────────────

LANGUAGES: dict[SourceLanguage, LanguageConfig] = {
    SourceLanguage.TYPESCRIPT: LanguageConfig(
        language=SourceLanguage.TYPESCRIPT,
        extensions=(".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"),
        import_pattern=_TS_IMPORT,
    ),
    SourceLanguage.JAVA: LanguageConfig(
        language=SourceLanguage.JAVA,
        extensions=(".java",),
        import_pattern=_JAVA_IMPORT,
    ),
    SourceLanguage.CSHARP: LanguageConfig(
        language=SourceLanguage.CSHARP,
        extensions=(".cs",),
        import_pattern=_CSHARP_USING,
    ),
}

_EXTENSION_MAP: dict[str, SourceLanguage] = {
    ext: cfg.language for cfg in LANGUAGES.values() for ext in cfg.extensions
}


def detect_language(path: Union[str, Path]) -> Optional[SourceLanguage]:
    """Map a file path to its source language by extension (case-insensitive).

    Returns None for extensions without an extractor.
    """
    return _EXTENSION_MAP.get(Path(path).suffix.lower())


def get_language_config(language: SourceLanguage) -> LanguageConfig:
    return LANGUAGES[language]


def get_all_known_extensions() -> frozenset[str]:
    return frozenset(_EXTENSION_MAP)
