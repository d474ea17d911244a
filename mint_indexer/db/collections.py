"""Collection lookups shared by order builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import psycopg  # pylint: disable=import-error

from ..core.db_utils import from_buffer
from ..errors import DataUnavailable


@dataclass(frozen=True)
class CollectionContract:
    """Contract backing a collection."""

    address: str
    kind: str


def get_collection_contract(
    conn: psycopg.Connection,
    collection: str,
) -> Optional[CollectionContract]:
    """Fetch the contract address and kind for a collection id.

    :param conn: Open database connection.
    :type conn: psycopg.Connection
    :param collection: Collection identifier.
    :type collection: str
    :return: Contract details or None when the collection is unknown.
    :rtype: CollectionContract | None
    :raises DataUnavailable: If the query fails.
    """
    try:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT contracts.address, contracts.kind
                FROM collections
                JOIN contracts
                  ON collections.contract = contracts.address
                WHERE collections.id = %s
                LIMIT 1
                """,
                (collection,),
            )
            row = cur.fetchone()
    except psycopg.Error as exc:
        raise DataUnavailable(f"Collection lookup failed: {exc}") from exc
    if not row:
        return None
    return CollectionContract(address=from_buffer(row[0]), kind=row[1])
