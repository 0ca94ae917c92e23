from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


SONAR_HOST_DEFAULT = "http://localhost:9000"


@dataclass(frozen=True)
class SonarConfig:
    """Connection settings for quality-profile server API calls."""
    host: str = SONAR_HOST_DEFAULT
    token: Optional[str] = None
    organization: Optional[str] = None
    timeout: float = 30.0
    page_size: int = 500

    @property
    def base_url(self) -> str:
        return self.host.rstrip("/")
