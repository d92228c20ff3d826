"""Library configuration using pydantic-settings.

Node endpoints for the inbound-addresses and mimir lookups can be overridden
with THORPLUGIN_* environment variables or a local .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="THORPLUGIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # THORChain nodes
    # ======================
    thornode_url: str = Field(
        default="https://thornode.ninerealms.com", description="THORNode mainnet URL"
    )
    thornode_stagenet_url: str = Field(
        default="https://stagenet-thornode.ninerealms.com",
        description="THORNode stagenet URL",
    )

    # ======================
    # Maya nodes
    # ======================
    mayanode_url: str = Field(
        default="https://mayanode.mayachain.info", description="Mayanode mainnet URL"
    )
    mayanode_stagenet_url: str = Field(
        default="https://stagenet.mayanode.mayachain.info",
        description="Mayanode stagenet URL",
    )

    # ======================
    # HTTP
    # ======================
    http_timeout: float = Field(default=30.0, description="Node API request timeout (seconds)")

    def get_node_url(self, protocol: str, stagenet: bool = False) -> str:
        """Get the node base URL for a protocol ("thorchain" or "mayachain")."""
        url_map = {
            ("thorchain", False): self.thornode_url,
            ("thorchain", True): self.thornode_stagenet_url,
            ("mayachain", False): self.mayanode_url,
            ("mayachain", True): self.mayanode_stagenet_url,
        }
        url = url_map.get((protocol.lower(), stagenet))
        if url is None:
            raise ValueError(f"Unknown protocol: {protocol}")
        return url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
