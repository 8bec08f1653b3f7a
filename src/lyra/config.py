from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from lyra.constants import Deployment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # mainnet | kovan | local
    LYRA_DEPLOYMENT: str = "mainnet"
    # JSON-RPC endpoint; defaults to the public Optimism gateway for the deployment.
    LYRA_RPC_URL: str | None = None
    LYRA_SUBGRAPH_URL: str | None = None
    # Optional JSON file mapping contract ids to addresses, merged over the built-in book.
    LYRA_CONTRACT_ADDRESSES: str | None = None
    LYRA_GAS_LIMIT_BUFFER: float = 1.1
    LYRA_REQUEST_TIMEOUT: float = 30.0
    LYRA_MAX_WORKERS: int = 8

    # Snake_case accessors used across the codebase.
    @property
    def deployment(self) -> Deployment:
        return Deployment((self.LYRA_DEPLOYMENT or "mainnet").strip().lower())

    @property
    def rpc_url(self) -> str:
        if self.LYRA_RPC_URL:
            return self.LYRA_RPC_URL
        return DEFAULT_RPC_URLS[self.deployment]

    @property
    def subgraph_url(self) -> str:
        if self.LYRA_SUBGRAPH_URL:
            return self.LYRA_SUBGRAPH_URL
        return DEFAULT_SUBGRAPH_URLS[self.deployment]

    @property
    def contract_addresses_path(self) -> str | None:
        return self.LYRA_CONTRACT_ADDRESSES

    @property
    def gas_limit_buffer(self) -> float:
        return self.LYRA_GAS_LIMIT_BUFFER

    @property
    def request_timeout(self) -> float:
        return self.LYRA_REQUEST_TIMEOUT

    @property
    def max_workers(self) -> int:
        return max(1, int(self.LYRA_MAX_WORKERS))


DEFAULT_RPC_URLS = {
    Deployment.MAINNET: "https://mainnet.optimism.io",
    Deployment.KOVAN: "https://kovan.optimism.io",
    Deployment.LOCAL: "http://127.0.0.1:8545",
}

DEFAULT_SUBGRAPH_URLS = {
    Deployment.MAINNET: "https://api.thegraph.com/subgraphs/name/lyra-finance/mainnet",
    Deployment.KOVAN: "https://api.thegraph.com/subgraphs/name/lyra-finance/kovan",
    Deployment.LOCAL: "http://127.0.0.1:8000/subgraphs/name/lyra-finance/local",
}


def load_settings() -> Settings:
    return Settings()
