"""Credential model"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Credentials:
    """
    Immutable credential snapshot

    RequestClient swaps whole Credentials values instead of mutating fields,
    so each request reads one consistent snapshot.
    """
    bearer_token: str = ""
    username: str = ""
    password: str = ""

    @property
    def has_bearer(self) -> bool:
        return self.bearer_token != ""

    @property
    def has_basic_auth(self) -> bool:
        return self.username != "" or self.password != ""

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        if not self.has_basic_auth:
            return None
        return (self.username, self.password)

    def with_bearer_token(self, token: str) -> "Credentials":
        return replace(self, bearer_token=token or "")

    def with_basic_auth(self, username: str, password: str) -> "Credentials":
        return replace(self, username=username or "", password=password or "")
