"""Build parameters for LooksRare v2 orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import psycopg  # pylint: disable=import-error

from ..db.collections import get_collection_contract
from ..errors import CollectionNotFound, MalformedInput

logger = logging.getLogger(__name__)

WETH_ADDRESSES = {
    1: "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    5: "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
    10: "0x4200000000000000000000000000000000000006",
    137: "0x7ceb23fd6bc0add59e62ac25578270cff1b9f619",
    8453: "0x4200000000000000000000000000000000000006",
    42161: "0x82af49447d8a07e3bd95bd0d56f35241523fbab1",
    11155111: "0x7b79995e5f793a07bc00c21412e50ecae098e7f9",
}

SIDES = ("sell", "buy")


class QuoteType(IntEnum):
    """Order side as encoded by the exchange."""

    BID = 0
    ASK = 1


class CollectionType(IntEnum):
    """Token standard of the traded collection."""

    ERC721 = 0
    ERC1155 = 1


@dataclass(frozen=True)
class BaseOrderBuildOptions:
    """Caller supplied order options.

    :ivar maker: Address signing the order.
    :ivar wei_price: Price in wei as a decimal string.
    :ivar contract: Contract hint (unused by this builder).
    :ivar listing_time: Unix time the order becomes valid.
    :ivar expiration_time: Unix time the order expires.
    """

    maker: str
    wei_price: str
    contract: Optional[str] = None
    listing_time: Optional[int] = None
    expiration_time: Optional[int] = None


@dataclass(frozen=True)
class BuildParams:
    """Exchange order parameters before signing."""

    # pylint: disable=too-many-instance-attributes
    quote_type: QuoteType
    collection: str
    collection_type: CollectionType
    signer: str
    price: str
    item_id: str
    amount: int
    currency: str
    start_time: Optional[int]
    end_time: Optional[int]


@dataclass(frozen=True)
class OrderBuildInfo:
    """Build result wrapper."""

    params: BuildParams


def weth_address(chain_id: int) -> str:
    """Return the wrapped native token address for a chain."""
    try:
        return WETH_ADDRESSES[chain_id]
    except KeyError as exc:
        raise MalformedInput(f"No WETH address known for chain {chain_id}") from exc


def get_build_info(
    conn: psycopg.Connection,
    options: BaseOrderBuildOptions,
    collection: str,
    side: str,
    *,
    chain_id: int = 1,
) -> OrderBuildInfo:
    """Assemble order parameters for a collection-wide order.

    :raises MalformedInput: If the side or chain is unsupported.
    :raises CollectionNotFound: If the collection cannot be fetched.
    """
    if side not in SIDES:
        raise MalformedInput(f"Unknown order side: {side!r}")
    currency = weth_address(chain_id)
    contract = get_collection_contract(conn, collection)
    if contract is None:
        logger.warning("order build skipped; unknown collection=%s", collection)
        raise CollectionNotFound("Could not fetch token collection")

    params = BuildParams(
        quote_type=QuoteType.ASK if side == "sell" else QuoteType.BID,
        collection=contract.address,
        collection_type=(
            CollectionType.ERC721 if contract.kind == "erc721" else CollectionType.ERC1155
        ),
        signer=options.maker,
        price=options.wei_price,
        item_id="0",
        amount=1,
        currency=currency,
        start_time=options.listing_time,
        end_time=options.expiration_time,
    )
    return OrderBuildInfo(params=params)
