"""Environment-driven configuration for the planner services."""
import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from .errors import MissingCredentialsError


DEFAULT_GEMINI_MODEL = "gemini-1.5-flash-latest"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


@dataclass(kw_only=True)
class Configuration:
    """Connection settings for the external collaborators.

    Every field defaults from the process environment, so a `.env` file
    loaded with python-dotenv before construction is picked up.
    """

    # CANVAS
    canvas_domain: Optional[str] = field(
        default_factory=lambda: os.getenv("CANVAS_DOMAIN"),
        metadata={"description": "Canvas host, e.g. school.instructure.com"}
    )
    canvas_token: Optional[str] = field(
        default_factory=lambda: os.getenv("CANVAS_TOKEN"),
        metadata={"description": "Canvas personal access token"}
    )
    canvas_timeout: float = field(
        default_factory=lambda: float(os.getenv("CANVAS_TIMEOUT", "30")),
        metadata={"description": "HTTP timeout (seconds) for Canvas calls"}
    )

    # GEMINI
    gemini_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY"),
        metadata={"description": "Gemini API key"}
    )
    gemini_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        metadata={"description": "Model used for generative plans"}
    )
    gemini_base_url: str = field(
        default_factory=lambda: os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
        metadata={"description": "OpenAI-compatible endpoint of the generative service"}
    )
    gemini_timeout: float = field(
        default_factory=lambda: float(os.getenv("GEMINI_TIMEOUT", "60")),
        metadata={"description": "HTTP timeout (seconds) for generative calls"}
    )

    log_level: str = field(
        default_factory=lambda: os.getenv("PLANNER_LOG_LEVEL", "INFO"),
        metadata={"description": "Root log level for the CLI and REST service"}
    )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "Configuration":
        """Create a Configuration, overriding environment defaults with known keys."""
        data = data or {}
        return cls(**{k: v for k, v in data.items() if k in {f.name for f in fields(cls)}})

    def validate_canvas(self) -> None:
        if not self.canvas_domain or not self.canvas_token:
            raise MissingCredentialsError(
                "Canvas domain or token missing. Set CANVAS_DOMAIN and CANVAS_TOKEN."
            )

    def validate_gemini(self) -> None:
        if not self.gemini_api_key:
            raise MissingCredentialsError(
                "Missing GEMINI_API_KEY. Add it to a local .env (not committed)."
            )
