"""JSON-RPC 2.0 message types, single-or-batch decoding and dispatch to handlers."""

__version__ = "0.1.0"