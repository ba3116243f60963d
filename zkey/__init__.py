"""ZKey multi-tenant authentication broker."""

__version__ = "0.1.0"
