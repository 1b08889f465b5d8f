"""Engine constants.

Centralizes integer widths and the fee scale used by every pool.
"""

# Fees are expressed in tenths of a percent: fee_bps=3 means 0.3%
FEE_SCALING = 1000

# Stored values (reserves, share supply, coin values) are unsigned 64-bit
U64_MAX = 2**64 - 1

# Intermediate products are computed in a 128-bit working width
U128_MAX = 2**128 - 1

# Asset tag for the numeraire side of every pool unless configured otherwise
DEFAULT_BASE_ASSET = "BASE"
