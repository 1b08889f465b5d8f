"""Test helpers module for shared test utilities.

- constants: Asset tags and reference pool amounts
- factories: Coin factories and collaborator stubs
"""

from tests.helpers.constants import (
    BASE,
    REF_FEE_BPS,
    REF_RESERVE_BASE,
    REF_RESERVE_TOKEN,
    REF_SHARES,
    USDC,
    WBTC,
)
from tests.helpers.factories import CallerStub, RecordingSettlement, make_coin, make_deposit

__all__ = [
    # Constants
    "BASE",
    "USDC",
    "WBTC",
    "REF_RESERVE_BASE",
    "REF_RESERVE_TOKEN",
    "REF_SHARES",
    "REF_FEE_BPS",
    # Factories
    "make_coin",
    "make_deposit",
    "CallerStub",
    "RecordingSettlement",
]
