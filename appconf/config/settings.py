"""
Settings Model

Immutable pydantic settings populated from YAML, with an explicit table of
environment-variable overrides.
"""

from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field, field_validator


# Field name -> environment variable. Applied after YAML parsing.
ENV_OVERRIDES: dict[str, str] = {
    "environment": "ENV",
}

# Fields that must be non-empty once overrides have been applied.
REQUIRED_FIELDS: tuple[str, ...] = ("environment", "storage_path")


class HTTPServerSettings(BaseModel):
    """HTTP listener settings."""
    address: str = Field(default="", alias="addr")

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @field_validator("address", mode="before")
    @classmethod
    def null_is_unset(cls, value: Any) -> Any:
        return "" if value is None else value


class Settings(BaseModel):
    """
    Application settings.

    Built once at startup by ConfigLoader and never mutated afterwards.
    Field names are Pythonic; YAML keys are their aliases:

        env             -> environment
        storage_path    -> storage_path
        http_server.addr -> http_server.address

    Example:
        ```python
        settings = get_settings()
        print(settings.environment)
        print(settings.http_server.address)
        ```
    """

    environment: str = Field(default="", alias="env")
    storage_path: str = Field(default="", alias="storage_path")
    http_server: HTTPServerSettings = Field(
        default_factory=HTTPServerSettings,
        alias="http_server",
    )

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @field_validator("environment", "storage_path", mode="before")
    @classmethod
    def null_is_unset(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("http_server", mode="before")
    @classmethod
    def null_section_is_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a YAML-shaped mapping."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the YAML-shaped representation (``env``, ``http_server.addr``)."""
        return self.model_dump(by_alias=True)

    def with_overrides(
        self,
        environ: Any,
        overrides: Optional[dict[str, str]] = None,
    ) -> tuple["Settings", list[str]]:
        """
        Apply environment-variable overrides.

        Unset or empty variables are skipped.

        Returns:
            The (possibly new) settings and the names of overridden fields
        """
        if overrides is None:
            overrides = ENV_OVERRIDES

        update = {}
        for field_name, env_var in overrides.items():
            if field_name not in type(self).model_fields:
                raise KeyError(f"Unknown settings field in override table: {field_name}")
            value = environ.get(env_var)
            if value:
                update[field_name] = value

        if not update:
            return self, []
        return self.model_copy(update=update), list(update)

    def missing_required(self, required: tuple[str, ...] = REQUIRED_FIELDS) -> list[str]:
        """Return YAML keys of required fields that are empty."""
        fields = type(self).model_fields
        return [
            fields[name].alias or name
            for name in required
            if not getattr(self, name)
        ]


# Singleton settings instance
_settings: Optional[Settings] = None


def get_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """
    Get the settings singleton.

    The first call loads the configuration and terminates the process on
    failure; later calls return the cached instance and ignore ``argv``.
    """
    global _settings

    if _settings is None:
        from appconf.config.loader import must_load

        _settings = must_load(argv)

    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
