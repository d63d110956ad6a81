"""In-memory asset registry, constant-product market, price oracle and debt vaults of a stablecoin chain."""

__version__ = "0.1.0"

__all__ = [
    "primitives",
    "currency",
    "constants",
    "asset_registry",
    "market_math",
    "weights",
    "market",
    "oracle",
    "vault",
]