"""
ABI Loader - Built-in contract ABIs plus Hardhat / Foundry artifacts.

The built-in ABIs cover exactly the functions the CLI calls.  A compiled
artifact can replace them when the deployed contract differs.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any


CHARITY_PLATFORM_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "createCampaign",
        "inputs": [
            {"name": "title", "type": "string"},
            {"name": "description", "type": "string"},
            {"name": "targetAmount", "type": "uint256"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "donateToCampaign",
        "inputs": [{"name": "campaignId", "type": "uint256"}],
        "outputs": [],
        "stateMutability": "payable",
    },
    {
        "type": "function",
        "name": "campaignCount",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "getCampaign",
        "inputs": [{"name": "campaignId", "type": "uint256"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "internalType": "struct CharityPlatform.Campaign",
                "components": [
                    {"name": "id", "type": "uint256"},
                    {"name": "title", "type": "string"},
                    {"name": "description", "type": "string"},
                    {"name": "targetAmount", "type": "uint256"},
                    {"name": "raisedAmount", "type": "uint256"},
                    {"name": "isCompleted", "type": "bool"},
                ],
            }
        ],
        "stateMutability": "view",
    },
]

BOOKSTORE_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "addBook",
        "inputs": [
            {"name": "bookId", "type": "uint256"},
            {"name": "title", "type": "string"},
            {"name": "author", "type": "string"},
            {"name": "price", "type": "uint256"},
            {"name": "stock", "type": "uint256"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "getBooks",
        "inputs": [{"name": "bookId", "type": "uint256"}],
        "outputs": [
            {"name": "title", "type": "string"},
            {"name": "author", "type": "string"},
            {"name": "price", "type": "uint256"},
            {"name": "stock", "type": "uint256"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "buyBook",
        "inputs": [
            {"name": "bookId", "type": "uint256"},
            {"name": "quantity", "type": "uint256"},
        ],
        "outputs": [],
        "stateMutability": "payable",
    },
]

BUILTIN_ABIS: dict[str, list[dict[str, Any]]] = {
    "CharityPlatform": CHARITY_PLATFORM_ABI,
    "AdvancedBookStore": BOOKSTORE_ABI,
}


@lru_cache(maxsize=16)
def _load_artifact_abi(path: str) -> tuple[dict[str, Any], ...]:
    artifact_path = Path(path)
    if not artifact_path.exists():
        raise FileNotFoundError(f"ABI artifact not found: {artifact_path}")

    with artifact_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    # Hardhat and Foundry both wrap the ABI in {"abi": [...]}; a bare list is
    # a plain ABI file.
    if isinstance(artifact, list):
        return tuple(artifact)
    if isinstance(artifact, dict) and isinstance(artifact.get("abi"), list):
        return tuple(artifact["abi"])
    raise ValueError(f"No ABI found in {artifact_path}")


def load_abi(contract_name: str, artifact: Path | str | None = None) -> list[dict[str, Any]]:
    """
    Resolve the ABI for a contract.

    Args:
        contract_name: Built-in contract name ("CharityPlatform",
            "AdvancedBookStore")
        artifact: Optional path to a compiled artifact that takes
            precedence over the built-in ABI

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If the artifact path does not exist
        ValueError: If no ABI is available
    """
    if artifact is not None:
        return list(_load_artifact_abi(str(Path(artifact).expanduser().resolve())))
    try:
        return BUILTIN_ABIS[contract_name]
    except KeyError:
        raise ValueError(
            f"No built-in ABI for {contract_name}; pass an artifact path"
        ) from None


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """Return the ABI entry for a function, or raise ValueError."""
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def abi_type(param: dict[str, Any]) -> str:
    """
    Canonical eth-abi type string for an ABI parameter.

    ``tuple`` parameters are expanded from their components, keeping any
    array suffix (``tuple[]`` -> ``(uint256,string)[]``).
    """
    typ = param["type"]
    if typ.startswith("tuple"):
        inner = ",".join(abi_type(c) for c in param.get("components", []))
        return f"({inner}){typ[len('tuple'):]}"
    return typ
