# region Docstring
"""
copyholder.config.factory
Settings base class and the cached settings factory.
Overview:
- Every copyholder settings class reads, from strongest to weakest:
    environment variables, the `.env` file in the data root,
    `config.{env}.yaml`, `config.yaml`, then keyword arguments and defaults.
- COPYHOLDER_CONFIG may name one more YAML file; it is read after the
    overlay so it wins over both data-root YAML files.
- get_settings() builds each class once per process; reload_settings() drops
    the cache so the next call re-reads every source.
Contents:
- Functions:
    - yaml_files(root, env) -> list[Path]
    - get_settings(settings_cls) -> settings instance (cached)
    - reload_settings() -> None
- Classes:
    - FactoryBaseSettings
"""
# endregion
# region Imports
from functools import lru_cache
from typing import Type, TypeVar

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from copyholder.imports import os, Path

from .base import APP_ENV, APP_ROOT

# endregion
# region Sources
S = TypeVar("S", bound=BaseSettings)


def yaml_files(root: Path = APP_ROOT, env: str = APP_ENV) -> list[Path]:
    """YAML files to read, weakest first. Missing files are skipped by the source."""
    files = [root / "config.yaml", root / f"config.{env}.yaml"]
    extra = os.getenv("COPYHOLDER_CONFIG")
    if extra:
        files.append(Path(extra).expanduser())
    return files


class FactoryBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_files())
        return env_settings, dotenv_settings, yaml_settings, init_settings


# endregion
# region Factory


@lru_cache
def get_settings(settings_cls: Type[S]) -> S:
    return settings_cls()


def reload_settings() -> None:
    """Forget cached settings, e.g. after changing the environment."""
    get_settings.cache_clear()


# endregion
