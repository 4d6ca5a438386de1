"""QM Bot configuration settings."""

from typing import Any, Dict, Optional
import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class SlackSettings(BaseSettings):
    """Slack configuration settings."""

    APP_TOKEN: str = ""
    SLACK_TOKEN: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class GluonSettings(BaseSettings):
    """Gluon backend configuration settings."""

    GLUON_BASE_URL: str = Field(
        default="http://localhost:8080", alias="GLUON_BASE_URL"
    )
    GLUON_TIMEOUT_SECONDS: int = Field(default=30, alias="GLUON_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class ChatOpsSettings(BaseSettings):
    """ChatOps command configuration settings.

    OpenShift Clouds Configuration (OPENSHIFT_CLOUDS):
    -------------------------------------------------
    Mapping of OpenShift cloud name to its details. Only the keys are used by
    the command layer (cloud selection menus); the values are passed through
    untouched to whatever consumes them.

    Example Configuration:
        OPENSHIFT_CLOUDS = {
            "ab-cloud": {"sharedResourceNamespace": "subatomic"},
            "cd-cloud": {"sharedResourceNamespace": "subatomic"}
        }
    """

    COMMAND_PREFIX: str = Field(default="qm", alias="COMMAND_PREFIX")
    DOCS_BASE_URL: str = Field(
        default="https://subatomic.bison.absa.co.za/docs", alias="DOCS_BASE_URL"
    )

    openshift_clouds: dict[str, dict] = Field(
        default_factory=dict,
        alias="OPENSHIFT_CLOUDS",
        description="OpenShift clouds teams can be placed on",
    )

    @field_validator("openshift_clouds", mode="before")
    @classmethod
    def _parse_openshift_clouds(cls, v: Optional[Any]) -> Any:
        """Parse OPENSHIFT_CLOUDS from JSON string (environment variable) or dict.

        Handles JSON string input from environment variables, with or without
        surrounding quotes.
        """
        if v is None:
            return {}

        if isinstance(v, dict):
            return v

        if isinstance(v, str):
            s = v.strip()
            if (s.startswith("'") and s.endswith("'")) or (
                s.startswith('"') and s.endswith('"')
            ):
                s = s[1:-1]
            try:
                parsed = json.loads(s) if s else {}
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid OPENSHIFT_CLOUDS JSON: {e} (value: {s[:80]}...)"
                ) from e
            if not isinstance(parsed, dict):
                raise ValueError("OPENSHIFT_CLOUDS must decode to a mapping")
            return parsed

        raise ValueError("OPENSHIFT_CLOUDS must be a JSON string or a mapping")

    @field_validator("openshift_clouds", mode="after")
    @classmethod
    def _validate_openshift_clouds(cls, v: Dict[str, dict]) -> Dict[str, dict]:
        if not v:
            logger.warning("no_openshift_clouds_configured")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """QM Bot configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    slack: SlackSettings
    gluon: GluonSettings

    # Functionality settings
    chatops: ChatOpsSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "slack": SlackSettings,
            "gluon": GluonSettings,
            "chatops": ChatOpsSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
