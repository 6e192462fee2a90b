"""
Chain - JSON-RPC interaction layer for Oblatio.

Provides the JSON-RPC client, ABI handling, transaction building and the
concrete contract handle used by the CLI.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
