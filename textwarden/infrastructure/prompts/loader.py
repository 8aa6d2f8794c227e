"""
Name: Prompt Loader

Responsibilities:
  - Load the issue detection prompt template from file
  - Support versioning via PROMPT_VERSION env var
  - Render enabled checks and English dialect from Preferences

Collaborators:
  - config: Get prompt_version setting
  - prompts/*.md: Template files
  - infrastructure.detectors.remote_detector: Main consumer

Notes:
  - Templates use {checks}, {kinds}, {dialect} and {text} placeholders
  - Literal braces in templates are doubled ({{ }})
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from ...domain.entities import IssueKind, Preferences
from ...logger import logger


# R: Directory containing prompt templates
PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"

# R: Check descriptions in prompt order
CHECK_LABELS: dict[IssueKind, str] = {
    IssueKind.GRAMMAR: "grammar errors",
    IssueKind.SPELLING: "spelling errors",
    IssueKind.STYLE: "style improvements",
    IssueKind.CLARITY: "clarity enhancements",
}

DIALECTS: dict[str, str] = {
    "en-us": "American",
    "en-gb": "British",
    "en-au": "Australian",
    "en-ca": "Canadian",
}


def dialect_for(locale: str) -> str:
    """R: English dialect name for a locale tag (the tag itself if unknown)."""
    return DIALECTS.get(locale.strip().lower(), locale)


class PromptLoader:
    """
    R: Load and cache the detection prompt template by version.
    """

    def __init__(self, version: str = "v1", prompts_dir: Path = PROMPTS_DIR):
        self.version = version
        self._prompts_dir = prompts_dir
        self._template: Optional[str] = None

    def get_template(self) -> str:
        """
        R: Get prompt template, loading from file if needed.

        Raises:
            FileNotFoundError: If template file doesn't exist
        """
        if self._template is None:
            self._template = self._load_template()
        return self._template

    def _load_template(self) -> str:
        filepath = self._prompts_dir / f"{self.version}_detect_issues.md"

        if not filepath.exists():
            logger.error(
                f"Prompt template not found: {filepath}",
                extra={"version": self.version},
            )
            raise FileNotFoundError(f"Prompt template not found: {filepath}")

        template = filepath.read_text(encoding="utf-8")
        logger.info(
            "Loaded prompt template",
            extra={"version": self.version, "chars": len(template)},
        )
        return template

    def format(self, text: str, preferences: Preferences) -> str:
        """
        R: Format template for one chunk.

        Args:
            text: Chunk text to analyze
            preferences: Locale and enabled kinds

        Returns:
            Prompt ready for the text generation service
        """
        enabled = [kind for kind in CHECK_LABELS if preferences.is_enabled(kind)]
        return self.get_template().format(
            checks=", ".join(CHECK_LABELS[kind] for kind in enabled),
            kinds=", ".join(f'"{kind.value}"' for kind in enabled),
            dialect=dialect_for(preferences.locale),
            text=text,
        )


@lru_cache
def get_prompt_loader() -> PromptLoader:
    """
    R: Get singleton PromptLoader with configured version.
    """
    from ...config import get_settings

    return PromptLoader(version=get_settings().prompt_version)
