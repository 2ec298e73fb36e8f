"""
Adapter configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here: body limits, encoder options,
and the policy for exposing encoder errors to clients.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_BODY_BYTES = 2_097_152  # 2 MiB


class Settings(BaseSettings):
    """Adapter settings loaded from environment.

    Attributes:
        project_name: Display name for the demo API.
        version: Current package version string.
        debug: Enable debug mode for the demo app. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        max_body_bytes: Maximum request body buffered by the XML extractor.
        expose_encode_errors: Send the encoder's message as the 500 body.
            When False a fixed message is sent and the detail is only logged.
        xml_declaration: Prefix serialized bodies with an XML declaration.
        pretty_print: Indent serialized bodies.
    """

    model_config = SettingsConfigDict(
        env_prefix="FASTAPI_XML_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "fastapi-xml demo"
    version: str = "0.3.0"
    debug: bool = False
    log_level: str = "INFO"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    expose_encode_errors: bool = True
    xml_declaration: bool = False
    pretty_print: bool = False


settings = Settings()
