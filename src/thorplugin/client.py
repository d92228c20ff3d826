"""THORNode / Mayanode API client.

Only the two endpoints the adapter needs are wrapped:
- {node}/{protocol}/inbound_addresses  per-chain vault, router, gas rate, halt state
- {node}/{protocol}/mimir              protocol-wide parameters (halt flags)

API docs: https://dev.thorchain.org/
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from thorplugin.chains import ProtocolType
from thorplugin.config import Settings, get_settings
from thorplugin.errors import ProtocolApiError

logger = logging.getLogger(__name__)


class InboundAddress(BaseModel):
    """Inbound routing data for one chain."""

    model_config = ConfigDict(extra="ignore")

    chain: str
    address: str = ""
    router: Optional[str] = None
    gas_rate: str = "0"
    halted: bool = False


class MimirFlags(BaseModel):
    """Halt flags from mimir. Values >= 1 mean halted."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    halt_chain_global: int = Field(default=0, alias="HALTCHAINGLOBAL")
    halt_thorchain: int = Field(default=0, alias="HALTTHORCHAIN")
    halt_mayachain: int = Field(default=0, alias="HALTMAYACHAIN")

    def is_halted(self, protocol: ProtocolType) -> bool:
        """Check global halt and the protocol's own chain halt."""
        own_halt = (
            self.halt_mayachain if protocol == ProtocolType.MAYACHAIN else self.halt_thorchain
        )
        return self.halt_chain_global >= 1 or own_halt >= 1


class ProtocolApiClient:
    """Client for a THORChain or Maya node API."""

    def __init__(
        self,
        protocol: ProtocolType = ProtocolType.THORCHAIN,
        stagenet: bool = False,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize API client.

        Args:
            protocol: Protocol family to query
            stagenet: Use stagenet instead of mainnet
            settings: Settings override (defaults to get_settings())
            http_client: Shared client; a short-lived one is opened per request otherwise
        """
        settings = settings or get_settings()
        self.protocol = ProtocolType(protocol)
        self.stagenet = stagenet
        self.node_url = settings.get_node_url(self.protocol.value, stagenet)
        self.timeout = settings.http_timeout
        self._http_client = http_client

    @property
    def name(self) -> str:
        suffix = " (stagenet)" if self.stagenet else ""
        return f"{self.protocol.value}{suffix}"

    async def _get(self, path: str):
        url = f"{self.node_url}/{self.protocol.value}/{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.name} API error: {e.response.status_code} for {url}")
            raise ProtocolApiError(
                f"{self.name} API returned {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{self.name} API request failed: {type(e).__name__}: {e}")
            raise ProtocolApiError(f"{self.name} API request failed for {path}: {e}") from e
        except ValueError as e:
            # Proxies and gateways can answer 200 with an HTML page
            logger.error(f"{self.name} API returned non-JSON body for {url}: {e}")
            raise ProtocolApiError(f"{self.name} API returned invalid JSON for {path}") from e

    def _invalid_payload(self, path: str, error: ValidationError) -> ProtocolApiError:
        logger.error(f"{self.name} API returned unexpected {path} payload: {error}")
        return ProtocolApiError(f"{self.name} API returned unexpected {path} payload")

    async def get_inbound_addresses(self) -> list[InboundAddress]:
        """Get current inbound addresses for all chains."""
        data = await self._get("inbound_addresses")
        if not isinstance(data, list):
            logger.error(f"{self.name} API returned {type(data).__name__} for inbound_addresses: {data}")
            raise ProtocolApiError(f"{self.name} API returned unexpected inbound_addresses payload")
        try:
            return [InboundAddress.model_validate(item) for item in data]
        except ValidationError as e:
            raise self._invalid_payload("inbound_addresses", e) from e

    async def get_mimir(self) -> MimirFlags:
        """Get protocol halt flags."""
        data = await self._get("mimir")
        try:
            return MimirFlags.model_validate(data)
        except ValidationError as e:
            raise self._invalid_payload("mimir", e) from e
