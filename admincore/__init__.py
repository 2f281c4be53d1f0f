"""Building blocks for admin back ends: storage, servers, tools and RPC logging helpers."""

__version__ = "0.1.0"