# region Docstring
"""
copyholder.config.base
Where copyholder keeps its files and which configuration overlay it reads.
Overview:
- The data root holds `.env`, `config.yaml`, the `logs/` directory and the
    `.cache/` directory with the history database. COPYHOLDER_ROOT moves it;
    otherwise it is the directory copyholder was started from.
- The environment name selects the `config.{env}.yaml` overlay. ENVIRONMENT
    sets it explicitly; otherwise installs under /srv or /opt count as "prod"
    and everything else as "dev".
Contents:
- Classes:
    - AppEnv: environment() and app_root() lookups.
- Constants:
    - APP_ROOT, APP_ENV: values resolved once at import.
"""
# endregion
# region Imports
from copyholder.imports import os, Path, Literal

# endregion
# region AppEnv

EnvName = Literal["dev", "test", "prod"]

SERVICE_PREFIXES = ("/srv", "/opt")


class AppEnv:
    ROOT: Path = Path(os.getenv("COPYHOLDER_ROOT") or Path.cwd()).expanduser().resolve()
    NAMES: tuple[EnvName, ...] = ("dev", "test", "prod")

    @classmethod
    def environment(cls) -> EnvName:
        """ENVIRONMENT if it names a known overlay, else a guess from the working directory."""
        explicit = (os.getenv("ENVIRONMENT") or "").strip().lower()
        if explicit in cls.NAMES:
            return explicit  # type: ignore[return-value]
        if Path.cwd().as_posix().startswith(SERVICE_PREFIXES):
            return "prod"
        return "dev"

    @classmethod
    def app_root(cls) -> Path:
        return cls.ROOT


# endregion

APP_ROOT: Path = AppEnv.app_root()
APP_ENV: EnvName = AppEnv.environment()

__all__ = ["APP_ENV", "APP_ROOT", "AppEnv", "EnvName"]
