"""
Application configuration management.
"""

from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # GitLab
    gitlab_host: str
    gitlab_token: str

    # JIRA (token, or username and password)
    jira_host: str
    jira_token: Optional[str] = None
    jira_username: Optional[str] = None
    jira_password: Optional[str] = None

    # Application
    log_level: str = "INFO"
    http_timeout_seconds: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000

    class Config:
        env_file = ".env"
        case_sensitive = False
        frozen = True

    @field_validator("gitlab_host", "jira_host")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("host must not be empty")
        return value

    @field_validator("jira_host")
    @classmethod
    def default_jira_scheme(cls, value: str) -> str:
        """A bare JIRA host name is reached over https."""
        if "://" not in value:
            return f"https://{value}"
        if not value.startswith(("http://", "https://")):
            raise ValueError("JIRA_HOST must use http or https")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return value

    @model_validator(mode="after")
    def check_jira_credentials(self) -> "Settings":
        """Require either a JIRA API token or a username/password pair."""
        if self.jira_token:
            return self
        if self.jira_username and self.jira_password:
            return self
        raise ValueError("JIRA_TOKEN or JIRA_USERNAME and JIRA_PASSWORD must be set")

    @property
    def jira_auth_scheme(self) -> str:
        """Authentication scheme used against JIRA: 'api_key' or 'basic'."""
        return "api_key" if self.jira_token else "basic"

    @property
    def gitlab_api_url(self) -> str:
        """Base URL of the GitLab REST API v4."""
        if "://" in self.gitlab_host:
            return f"{self.gitlab_host}/api/v4"
        return f"https://{self.gitlab_host}/api/v4"
