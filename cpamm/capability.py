"""Creation capability.

Holding a CreationCapability is the only proof that a caller may create
pools. It is issued exactly once per process to the deploying authority
and checked by reference on every creation call; it is never consumed.
"""

from __future__ import annotations

import threading

import structlog

from cpamm.errors import CapabilityAlreadyIssued, InvalidCapability

logger = structlog.get_logger()

_ISSUE_KEY = object()
_issue_lock = threading.Lock()
_issued = False


class CreationCapability:
    """Unforgeable authorization to create pools."""

    __slots__ = ()

    def __init__(self, _key: object = None) -> None:
        if _key is not _ISSUE_KEY:
            raise InvalidCapability(
                "CreationCapability can only be obtained from issue_creation_capability()"
            )

    def __repr__(self) -> str:
        return "CreationCapability()"

    def __copy__(self) -> CreationCapability:
        return self

    def __deepcopy__(self, memo: dict) -> CreationCapability:
        return self

    def __reduce__(self):  # type: ignore[no-untyped-def]
        raise InvalidCapability("CreationCapability cannot be serialized")


def issue_creation_capability() -> CreationCapability:
    """Issue the process-wide creation capability.

    Raises:
        CapabilityAlreadyIssued: On every call after the first
    """
    global _issued
    with _issue_lock:
        if _issued:
            raise CapabilityAlreadyIssued("Creation capability was already issued")
        _issued = True
    logger.info("creation_capability_issued")
    return CreationCapability(_ISSUE_KEY)


def require_capability(cap: object) -> CreationCapability:
    """Check a creation capability by reference.

    Raises:
        InvalidCapability: If cap is not a genuine CreationCapability
    """
    if not isinstance(cap, CreationCapability):
        raise InvalidCapability(f"Expected CreationCapability, got {type(cap).__name__}")
    return cap
