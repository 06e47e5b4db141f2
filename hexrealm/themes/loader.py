"""Theme loading with validation."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..utils.errors import ThemeValidationError
from .schema import ThemePackage

logger = logging.getLogger(__name__)

MAX_REPORTED_ISSUES = 5


def _format_issues(error: ValidationError) -> str:
    issues = error.errors()[:MAX_REPORTED_ISSUES]
    return "; ".join(
        f"{'.'.join(str(part) for part in issue['loc'])}: {issue['msg']}" for issue in issues
    )


def load_theme(raw: Any) -> ThemePackage:
    """Validate raw theme data and return a typed ThemePackage.

    Args:
        raw: Parsed theme document (a dict with camelCase keys)

    Returns:
        Validated ThemePackage

    Raises:
        ThemeValidationError: If ``raw`` is not an object or fails validation.
            The message lists at most the first five issues.
    """
    if not isinstance(raw, dict):
        raise ThemeValidationError("Theme data must be a non-null object")

    try:
        theme = ThemePackage.model_validate(raw)
    except ValidationError as e:
        raise ThemeValidationError(f"Theme validation failed: {_format_issues(e)}") from e

    logger.debug(
        f"Loaded theme {theme.id}: {len(theme.civilizations)} civilizations, "
        f"{theme.map.cols}x{theme.map.rows} map"
    )
    return theme


def load_theme_from_json(text: str) -> ThemePackage:
    """Parse a theme JSON document and validate it.

    Raises:
        ThemeValidationError: If the text is not valid JSON or fails validation
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ThemeValidationError(f"Failed to parse theme JSON: {e}") from e
    return load_theme(parsed)


def load_theme_file(path: str | Path) -> ThemePackage:
    """Load a theme from a ``theme.json`` file on disk."""
    return load_theme_from_json(Path(path).read_text(encoding="utf-8"))
