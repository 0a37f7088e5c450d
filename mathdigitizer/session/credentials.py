import os
from abc import ABC, abstractmethod
from pathlib import Path

from dotenv import dotenv_values, set_key

from mathdigitizer.config.settings import Settings
from mathdigitizer.logging.logger import Log


class BaseCredentialProvider(ABC):
    """Host capability for checking and provisioning the model access key."""

    @abstractmethod
    def has_selected_api_key(self) -> bool:
        """Return True when a usable key is available right now."""

    @abstractmethod
    def open_select_key(self, api_key: str) -> None:
        """Store a key so later checks and service calls pick it up."""


class EnvCredentialProvider(BaseCredentialProvider):
    """Reads the key from the process environment or the .env file.

    Both are re-read on every check, so a key added while the CLI runs is
    seen by the next poll.
    """

    def __init__(self, *, env_var: str, env_file: Path | None = Path(".env")) -> None:
        self._env_var = env_var
        self._env_file = env_file

    @property
    def env_var(self) -> str:
        return self._env_var

    def has_selected_api_key(self) -> bool:
        if os.environ.get(self._env_var, "").strip():
            return True
        if self._env_file is None or not self._env_file.is_file():
            return False
        value = dotenv_values(self._env_file).get(self._env_var) or ""
        return bool(value.strip())

    def open_select_key(self, api_key: str) -> None:
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        os.environ[self._env_var] = api_key
        if self._env_file is not None:
            self._env_file.touch(exist_ok=True)
            set_key(str(self._env_file), self._env_var, api_key)
            Log.info(f"Stored {self._env_var} in {self._env_file}")


class NoKeyRequiredProvider(BaseCredentialProvider):
    """Providers that run without a key (the offline example client) are always ready."""

    def has_selected_api_key(self) -> bool:
        return True

    def open_select_key(self, api_key: str) -> None:
        _ = api_key


class CredentialProviderFactory:
    """Creates the credential provider matching the transcription provider."""

    ENV_VARS: dict[str, str] = {
        "gemini": "GEMINI_API_KEY",
        "openai": "OPENAI_API_KEY",
        "openai_compatible": "OPENAI_COMPATIBLE_API_KEY",
    }

    @classmethod
    def create(cls, settings: Settings, env_file: Path | None = Path(".env")) -> BaseCredentialProvider:
        provider = settings.transcription_provider.lower()
        if provider == "example":
            return NoKeyRequiredProvider()
        env_var = cls.ENV_VARS.get(provider)
        if env_var is None:
            raise ValueError(
                f"Unknown transcription provider '{provider}'. "
                f"Choose from: {['example', *sorted(cls.ENV_VARS)]}"
            )
        return EnvCredentialProvider(env_var=env_var, env_file=env_file)
