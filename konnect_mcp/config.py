"""
Configuration for the Konnect MCP server.

Built once at process start and handed to the API client; nothing else reads
the environment.
"""

import logging
import os
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger("konnect_mcp.config")

API_KEY_ENV = "KONNECT_ACCESS_TOKEN"
REGION_ENV = "KONNECT_REGION"
BASE_URL_ENV = "KONNECT_BASE_URL"


class Region(str, Enum):
    """Konnect API regions, each served from its own host."""

    US = "us"
    EU = "eu"
    AU = "au"
    ME = "me"
    IN = "in"

    @property
    def host(self) -> str:
        return f"{self.value}.api.konghq.com"


class KonnectConfig(BaseModel):
    """Connection settings for the Konnect API."""

    api_key: str = Field(default="", repr=False, description="Personal or system access token")
    region: Region = Field(default=Region.US, description="Konnect region hosting the organization")
    base_url_override: str | None = Field(default=None, description="Use this base URL instead of the regional one")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    @property
    def base_url(self) -> str:
        if self.base_url_override:
            return self.base_url_override.rstrip("/")
        return f"https://{self.region.host}/v2"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "KonnectConfig":
        """Create configuration from environment variables.

        Keyword overrides (e.g. from CLI flags) win over the environment when
        they are not None.
        """
        env = os.environ if environ is None else environ

        values = {
            "api_key": env.get(API_KEY_ENV, ""),
            "region": (env.get(REGION_ENV) or Region.US.value).lower(),
            "base_url_override": env.get(BASE_URL_ENV) or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        config = cls(**values)
        if not config.api_key:
            logger.warning(f"{API_KEY_ENV} is not set; Konnect API calls will fail")
        return config
