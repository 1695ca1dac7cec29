from dataclasses import dataclass, field
from typing import Optional

from qualtrics_export.config import QUALTRICS_API_TOKEN
from qualtrics_export.errors import MissingCredentialError

NOT_REGISTERED = (
    "You need to register your Qualtrics API key first "
    "(CredentialStore.set() or register_api_key())."
)


@dataclass(frozen=True)
class Credential:
    api_key: str = field(repr=False)

    def __post_init__(self):
        if not self.api_key or not str(self.api_key).strip():
            raise MissingCredentialError(NOT_REGISTERED)

    @classmethod
    def from_env(cls) -> "Credential":
        return cls(QUALTRICS_API_TOKEN or "")

    def headers(self) -> dict:
        return {
            "X-API-TOKEN": self.api_key,
            "Content-Type": "application/json",
        }


class CredentialStore:
    """
    Houdt één API key vast voor wie 'registreer één keer' wil.
    Niet thread-safe: geef bij gelijktijdig gebruik liever een Credential mee.
    """

    def __init__(self):
        self._credential: Optional[Credential] = None

    def set(self, api_key: str) -> Credential:
        self._credential = Credential(api_key)
        return self._credential

    def get(self) -> Credential:
        if self._credential is None:
            raise MissingCredentialError(NOT_REGISTERED)
        return self._credential

    def clear(self):
        self._credential = None
