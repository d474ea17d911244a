"""Supply and minted-amount counters backed by the indexer tables."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import psycopg  # pylint: disable=import-error

from ..core.db_utils import ZERO_ADDRESS, to_buffer
from ..core.number_utils import to_big_int
from ..errors import DataUnavailable
from ..mints.models import CollectionMint, SingleTokenMint, WholeCollectionMint

logger = logging.getLogger(__name__)

_TOKEN_SUPPLY_SQL = """
    SELECT coalesce(sum(nft_balances.amount), 0) AS token_count
    FROM nft_balances
    WHERE nft_balances.contract = %s
      AND nft_balances.token_id = %s
      AND nft_balances.amount > 0
"""

_COLLECTION_SUPPLY_SQL = """
    SELECT collections.token_count
    FROM collections
    WHERE collections.id = %s
"""

_AMOUNT_MINTED_SQL = """
    SELECT coalesce(sum(nft_transfer_events.amount), 0) AS amount_minted
    FROM nft_transfer_events
    WHERE nft_transfer_events.address = %s
      {token_filter}
      AND nft_transfer_events.is_deleted = 0
      AND nft_transfer_events."from" = %s
      AND nft_transfer_events."to" = %s
"""


def _fetch_count(conn: psycopg.Connection, sql: str, params: Sequence[Any]) -> int:
    try:
        with conn.cursor() as cur:
            cur.execute(sql, params)
            row = cur.fetchone()
    except psycopg.Error as exc:
        raise DataUnavailable(f"Count query failed: {exc}") from exc
    if not row or row[0] is None:
        return 0
    return to_big_int(row[0])


def get_current_supply(conn: psycopg.Connection, mint: CollectionMint) -> int:
    """Return how many units of the mint are currently outstanding.

    Single-token mints sum the positive balances of that token; whole
    collection mints read the collection's cached token count.

    :param conn: Open database connection.
    :type conn: psycopg.Connection
    :param mint: Mint descriptor.
    :type mint: CollectionMint
    :return: Current supply, 0 when nothing is recorded.
    :rtype: int
    :raises DataUnavailable: If the query fails.
    """
    if isinstance(mint, SingleTokenMint):
        supply = _fetch_count(
            conn,
            _TOKEN_SUPPLY_SQL,
            (to_buffer(mint.contract), mint.token_id),
        )
    elif isinstance(mint, WholeCollectionMint):
        supply = _fetch_count(conn, _COLLECTION_SUPPLY_SQL, (mint.collection,))
    else:
        raise TypeError(f"Unsupported mint type: {type(mint).__name__}")
    logger.debug("current supply collection=%s supply=%d", mint.collection, supply)
    return supply


def get_amount_minted(conn: psycopg.Connection, mint: CollectionMint, user: str) -> int:
    """Return how many units ``user`` has minted, ignoring deleted transfers.

    Only transfers out of the zero address count, so secondary sales never
    add to a wallet's minted amount.
    """
    if isinstance(mint, SingleTokenMint):
        sql = _AMOUNT_MINTED_SQL.format(
            token_filter="AND nft_transfer_events.token_id = %s"
        )
        params: tuple[Any, ...] = (
            to_buffer(mint.contract),
            mint.token_id,
            to_buffer(ZERO_ADDRESS),
            to_buffer(user),
        )
    elif isinstance(mint, WholeCollectionMint):
        sql = _AMOUNT_MINTED_SQL.format(token_filter="")
        params = (
            to_buffer(mint.contract),
            to_buffer(ZERO_ADDRESS),
            to_buffer(user),
        )
    else:
        raise TypeError(f"Unsupported mint type: {type(mint).__name__}")
    return _fetch_count(conn, sql, params)
