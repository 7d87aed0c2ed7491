"""Account state, binary layouts, address derivation and instruction encoding for a concentrated-liquidity pool program."""

__version__ = "0.1.0"