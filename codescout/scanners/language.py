"""Language detection for snippets and repository files."""

from pathlib import PurePosixPath

from ..models import Language

# Languages a free-text snippet may be analyzed as
SNIPPET_LANGUAGES = frozenset({Language.PY, Language.JS, Language.JSX})

# Languages the lint engine parses; TypeScript needs a parser it does not ship with
LINTABLE_LANGUAGES = frozenset({Language.JS, Language.JSX})

EXTENSION_LANGUAGES: dict[str, Language] = {
    ".js": Language.JS,
    ".jsx": Language.JSX,
    ".ts": Language.TS,
    ".tsx": Language.TSX,
    ".py": Language.PY,
}

LANGUAGE_EXTENSIONS: dict[Language, str] = {
    language: ext for ext, language in EXTENSION_LANGUAGES.items()
}


def classify(content: str) -> Language:
    """Guess the language of a snippet from its contents.

    The checks run in a fixed order and the first hit wins, so a Python
    snippet that happens to contain ``=>`` or the word ``const`` is
    classified as JavaScript. Always returns a value.
    """
    # Component frameworks
    if (
        "import React" in content
        or ("class" in content and "extends React.Component" in content)
        or "ReactDOM.render" in content
    ):
        return Language.TSX if "tsx" in content else Language.JSX

    # Plain script: functions, arrow functions, declarations
    if any(marker in content for marker in ("function", "=>", "const", "let", "var")):
        return Language.JS

    if "<!DOCTYPE html>" in content or "<html>" in content:
        return Language.HTML

    if "@import" in content or ("{}" in content and ";" in content):
        return Language.CSS

    if any(marker in content for marker in ("def ", "import ", "class ")):
        return Language.PY

    return Language.JS


def language_for_path(path: str) -> Language:
    """Map a file path to a language by its (case-insensitive) extension."""
    suffix = PurePosixPath(path).suffix.lower()
    return EXTENSION_LANGUAGES.get(suffix, Language.UNKNOWN)


def is_lintable(language: Language) -> bool:
    return language in LINTABLE_LANGUAGES
