"""On-chain and off-chain lookups used when detecting mints."""

from __future__ import annotations

import logging
from typing import Any

import requests
from web3 import Web3

from ..core.db_utils import normalize_address
from ..core.settings import DEFAULT_IPFS_GATEWAY

logger = logging.getLogger(__name__)

IPFS_PREFIX = "ipfs://"

_MAX_SUPPLY_FUNCTIONS = ("maxSupply", "MAX_SUPPLY")

MAX_SUPPLY_ABI = [
    {
        "inputs": [],
        "name": name,
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    }
    for name in _MAX_SUPPLY_FUNCTIONS
]


def make_web3(rpc_url: str, *, timeout: float = 10.0) -> Web3:
    """Build a web3 client over an HTTP JSON-RPC endpoint."""
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


def get_max_supply(w3: Web3, contract: str) -> str | None:
    """Read a max supply hint from the common view functions of a contract.

    The raw value is returned as-is; pass it through ``to_safe_number`` before
    using it as a supply cap.

    :param w3: Web3 client.
    :type w3: web3.Web3
    :param contract: Contract address.
    :type contract: str
    :return: Decimal string from the first view call that succeeds, or None.
    :rtype: str | None
    """
    address = Web3.to_checksum_address(normalize_address(contract))
    instance = w3.eth.contract(address=address, abi=MAX_SUPPLY_ABI)
    for name in _MAX_SUPPLY_FUNCTIONS:
        try:
            value = getattr(instance.functions, name)().call()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.debug("max supply call failed contract=%s fn=%s: %s", contract, name, exc)
            continue
        if value is not None:
            return str(value)
    return None


def resolve_metadata_url(url: str, gateway: str = DEFAULT_IPFS_GATEWAY) -> str:
    """Rewrite ``ipfs://`` URLs to go through an HTTP gateway."""
    if url.startswith(IPFS_PREFIX):
        return f"{gateway}{url[len(IPFS_PREFIX):]}"
    return url


def fetch_metadata(
    url: str,
    *,
    gateway: str = DEFAULT_IPFS_GATEWAY,
    timeout: float = 10.0,
    session: requests.Session | None = None,
) -> Any:
    """Fetch and decode a JSON metadata document."""
    http = session or requests
    response = http.get(resolve_metadata_url(url, gateway), timeout=timeout)
    response.raise_for_status()
    return response.json()
