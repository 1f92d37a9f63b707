"""Server and application configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings


class ServerConfig(BaseSettings):
    """Server and application-level configuration.

    Attributes:
        app_name: The name of the application.
        app_version: The version of the application.
        debug: Serve the interactive API docs at /docs and /redoc.
    """

    app_name: str = Field(
        default="API Envelope Service",
        description="Application name",
        min_length=1,
        max_length=100,
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
    )
    debug: bool = Field(default=False, description="Debug mode")

    class Config:
        """Pydantic configuration."""

        env_prefix = "ENVELOPE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
