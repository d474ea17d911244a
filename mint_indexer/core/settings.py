"""Settings loader for the mint indexer."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .env_utils import env_float, env_int

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
ENV_FILE = os.getenv("ENV_FILE") or os.path.abspath(os.path.join(BASE_DIR, "..", ".env"))

DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration parsed from environment variables.

    :ivar database_url: Postgres connection string.
    :ivar rpc_url: JSON-RPC endpoint used for contract view calls (optional).
    :ivar chain_id: Chain the indexer runs against.
    :ivar ipfs_gateway: HTTP gateway prefix used to resolve ``ipfs://`` URLs.
    :ivar http_timeout_seconds: Timeout for off-chain metadata requests.
    :ivar rpc_timeout_seconds: Timeout for JSON-RPC requests.
    """

    database_url: str
    rpc_url: str | None
    chain_id: int
    ipfs_gateway: str
    http_timeout_seconds: float
    rpc_timeout_seconds: float


def load_settings() -> Settings:
    """Load settings from environment and .env defaults.

    :return: Parsed settings dataclass.
    :rtype: Settings
    :raises KeyError: If required environment variables are missing.
    """
    load_dotenv(dotenv_path=ENV_FILE)
    rpc_url = os.getenv("RPC_URL") or None
    gateway = os.getenv("IPFS_GATEWAY") or DEFAULT_IPFS_GATEWAY
    if not gateway.endswith("/"):
        gateway = f"{gateway}/"
    return Settings(
        database_url=os.path.expandvars(os.path.expanduser(os.environ["DATABASE_URL"])),
        rpc_url=rpc_url,
        chain_id=env_int("CHAIN_ID", 1, minimum=1),
        ipfs_gateway=gateway,
        http_timeout_seconds=env_float("HTTP_TIMEOUT_SECONDS", 10.0, minimum=1.0),
        rpc_timeout_seconds=env_float("RPC_TIMEOUT_SECONDS", 10.0, minimum=1.0),
    )
