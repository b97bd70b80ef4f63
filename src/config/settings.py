"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOCDOWN_ prefix (e.g., DOCDOWN_LINE_NUMBERS_DEFAULT=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOCDOWN_ prefix.

    Examples:
        DOCDOWN_RAW_PREFIX=DOCDOWNRAW
        DOCDOWN_LINE_NUMBERS_DEFAULT=true
        DOCDOWN_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Raw HTML stash configuration
    raw_prefix: str = Field(
        default="DOCDOWNRAWBLOCK",
        description="Prefix for stashed raw HTML tokens (alphanumeric so Markdown passes it through)",
    )

    raw_suffix: str = Field(
        default="ENDRAW",
        description="Suffix for stashed raw HTML tokens",
    )

    # Code block configuration
    line_numbers_default: bool = Field(
        default=False,
        description="Show line numbers on code blocks that do not declare a line-number option",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used for the generated code stylesheet",
    )

    # Site configuration
    docs_dir: str = Field(
        default="docs",
        description="Docs root used to resolve snippet imports when none is supplied",
    )

    site_title: str = Field(
        default="Documentation",
        description="Title shown in generated page shells",
    )

    def rawToken_make(self, index: int) -> str:
        """
        Generate the stash token for a raw HTML fragment at given index.

        Args:
            index: Zero-based index of the stashed fragment

        Returns:
            Token string (e.g., "DOCDOWNRAWBLOCK0ENDRAW")

        Example:
            >>> settings = AppSettings()
            >>> settings.rawToken_make(0)
            'DOCDOWNRAWBLOCK0ENDRAW'
        """
        return f"{self.raw_prefix}{index}{self.raw_suffix}"

    def rawIndex_extract(self, token: str) -> int | None:
        """
        Extract the stash index from a token string.

        Args:
            token: Token string to parse

        Returns:
            Stash index if valid token, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.rawIndex_extract('DOCDOWNRAWBLOCK3ENDRAW')
            3
        """
        if not token.startswith(self.raw_prefix):
            return None
        if not token.endswith(self.raw_suffix):
            return None

        content = token[len(self.raw_prefix) : -len(self.raw_suffix)]

        try:
            return int(content)
        except ValueError:
            return None


# Singleton instance - import this in your code
appsettings = AppSettings()
