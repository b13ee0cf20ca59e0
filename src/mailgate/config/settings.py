"""Unified settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MAILGATE_*`` prefix, ``__`` for nested sections
  3. Code defaults — baked into the section models

No file source: mailgate never reads a config file.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mailgate.config.models import BatchConfig, RulesConfig


class MailgateSettings(BaseSettings):
    """Unified settings for the mailgate CLI.

    Frozen after construction and stored on the shared
    :class:`~mailgate.commands._context.AppContext`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MAILGATE_",
        "env_nested_delimiter": "__",
    }

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Sections ---
    rules: RulesConfig = Field(default_factory=RulesConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs and env vars only."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> MailgateSettings:
        """Construct settings from a CLI invocation.

        Flags left at ``None`` are dropped so env vars and defaults
        still apply to them.
        """
        return cls(**{k: v for k, v in cli_flags.items() if v is not None})
