"""Collection mint descriptors and status verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..core.db_utils import normalize_address
from ..core.number_utils import is_unsigned_integer_string, to_big_int
from ..errors import MalformedInput

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"
_STATUSES = {STATUS_OPEN, STATUS_CLOSED}

REASON_NOT_YET_STARTED = "not-yet-started"
REASON_ENDED = "ended"
REASON_MAX_SUPPLY_EXCEEDED = "max-supply-exceeded"


@dataclass(frozen=True)
class _MintTerms:
    """Fields shared by every mint variant.

    :ivar collection: Collection identifier.
    :ivar contract: Lowercase contract address.
    :ivar start_time: Unix start time, None when unbounded.
    :ivar end_time: Unix end time, None when unbounded.
    :ivar max_supply: Decimal supply cap, None when unlimited.
    :ivar status: Explicit status override, if any.
    """

    collection: str
    contract: str
    start_time: Optional[int]
    end_time: Optional[int]
    max_supply: Optional[str]
    status: Optional[str]


@dataclass(frozen=True)
class WholeCollectionMint(_MintTerms):
    """Mint covering every token of a collection."""


@dataclass(frozen=True)
class SingleTokenMint(_MintTerms):
    """Mint scoped to one token id (ERC-1155 style)."""

    token_id: str


CollectionMint = Union[WholeCollectionMint, SingleTokenMint]


@dataclass(frozen=True)
class StatusVerdict:
    """Open/closed decision with an optional closure reason."""

    status: str
    reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """Return True when the mint can currently be minted from."""
        return self.status == STATUS_OPEN


def _validate_timestamp(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInput(f"{name} must be an integer timestamp, got {value!r}")
    return value


def _validate_token_id(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return str(value)
    if not is_unsigned_integer_string(value):
        raise MalformedInput(f"Invalid token id: {value!r}")
    return str(to_big_int(value))


def _validate_max_supply(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not is_unsigned_integer_string(value):
        raise MalformedInput(f"Invalid max supply: {value!r}")
    return str(to_big_int(value))


def build_collection_mint(
    collection: str,
    contract: str,
    *,
    token_id: Any = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    max_supply: Optional[str] = None,
    status: Optional[str] = None,
) -> CollectionMint:
    """Validate raw fields and build the matching mint variant.

    Sentinel handling belongs to :func:`to_safe_timestamp` and
    :func:`to_safe_number`; anything invalid that reaches this point is
    rejected rather than dropped.

    :param collection: Collection identifier.
    :type collection: str
    :param contract: Contract address.
    :type contract: str
    :param token_id: Token id for single-token mints.
    :type token_id: str | int | None
    :return: ``SingleTokenMint`` when a token id is given, else ``WholeCollectionMint``.
    :rtype: CollectionMint
    :raises MalformedInput: If any field is invalid.
    """
    if not collection:
        raise MalformedInput("Collection id is required")
    if status is not None and status not in _STATUSES:
        raise MalformedInput(f"Unknown mint status: {status!r}")
    fields = {
        "collection": collection,
        "contract": normalize_address(contract),
        "start_time": _validate_timestamp("start_time", start_time),
        "end_time": _validate_timestamp("end_time", end_time),
        "max_supply": _validate_max_supply(max_supply),
        "status": status,
    }
    if token_id is None:
        return WholeCollectionMint(**fields)
    return SingleTokenMint(token_id=_validate_token_id(token_id), **fields)
