"""Open/closed status resolution for collection mints."""

from __future__ import annotations

import logging
from typing import Optional

import psycopg  # pylint: disable=import-error

from ..core import time_utils
from ..db.mint_counts import get_current_supply
from .models import (
    REASON_ENDED,
    REASON_MAX_SUPPLY_EXCEEDED,
    REASON_NOT_YET_STARTED,
    STATUS_CLOSED,
    STATUS_OPEN,
    CollectionMint,
    StatusVerdict,
)

logger = logging.getLogger(__name__)


def get_status(
    conn: psycopg.Connection,
    mint: CollectionMint,
    *,
    now: Optional[int] = None,
) -> StatusVerdict:
    """Resolve whether a mint is currently open.

    Checks run in a fixed order and the first closing condition wins: the
    explicit ``closed`` override, then the start time, then the end time, and
    finally the supply cap. Only the supply check touches the database.

    :param conn: Open database connection.
    :type conn: psycopg.Connection
    :param mint: Mint descriptor.
    :type mint: CollectionMint
    :param now: Evaluation time in Unix seconds (defaults to the current time).
    :type now: int | None
    :return: Status verdict.
    :rtype: StatusVerdict
    :raises DataUnavailable: If the current supply cannot be counted.
    """
    if mint.status == STATUS_CLOSED:
        return StatusVerdict(STATUS_CLOSED)

    current_time = time_utils.now() if now is None else now
    if mint.start_time is not None and current_time <= mint.start_time:
        logger.debug(
            "mint not started collection=%s start=%s",
            mint.collection,
            time_utils.epoch_to_datetime(mint.start_time),
        )
        return StatusVerdict(STATUS_CLOSED, REASON_NOT_YET_STARTED)
    if mint.end_time is not None and current_time >= mint.end_time:
        logger.debug(
            "mint ended collection=%s end=%s",
            mint.collection,
            time_utils.epoch_to_datetime(mint.end_time),
        )
        return StatusVerdict(STATUS_CLOSED, REASON_ENDED)

    if mint.max_supply is not None:
        current_supply = get_current_supply(conn, mint)
        if int(mint.max_supply) <= current_supply:
            logger.debug(
                "mint sold out collection=%s max_supply=%s supply=%d",
                mint.collection,
                mint.max_supply,
                current_supply,
            )
            return StatusVerdict(STATUS_CLOSED, REASON_MAX_SUPPLY_EXCEEDED)

    return StatusVerdict(STATUS_OPEN)
