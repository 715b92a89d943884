"""Session configuration, built once when an editing session starts."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_URL = "http://localhost:3000/api"


@dataclass(frozen=True)
class SessionConfig:
    """Credentials and endpoint for one editor session."""
    access_token: str = ""
    group_id: str = ""
    api_base_url: str = DEFAULT_API_URL
    timeout: float = 10.0  # seconds, per HTTP request

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_token and self.group_id)
