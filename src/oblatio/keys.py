"""
Wallet credential loading.

The signing key is read from ``PRIVATE_KEY``, optionally populated from
``~/.oblatio/.env``.  The key is process-wide: one wallet, one network
connection, one logical thread of control.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount


# Default config directory
OBLATIO_DIR = Path.home() / ".oblatio"
OBLATIO_ENV = OBLATIO_DIR / ".env"


def load_env(env_path: Optional[Path] = None) -> None:
    """Load ``~/.oblatio/.env`` into the environment if it exists.

    Values already set in the environment win.
    """
    env_path = env_path or OBLATIO_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load the private key from ``.env`` or the environment.

    Args:
        env_path: Path to .env file (default: ~/.oblatio/.env)

    Returns:
        0x-prefixed hex private key

    Raises:
        ValueError: If PRIVATE_KEY is not set
    """
    env_path = env_path or OBLATIO_ENV
    load_env(env_path)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        raise ValueError(f"PRIVATE_KEY not found. Set it in the environment or in {env_path}")

    # Ensure 0x prefix
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, loads from .env.

    Returns:
        LocalAccount instance for signing transactions
    """
    if private_key is None:
        private_key = load_private_key()
    return Account.from_key(private_key)
