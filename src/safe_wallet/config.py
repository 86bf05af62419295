"""Configuration management for Safe Wallet.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


# Wallet file location
WALLET_PATH = Path(get_env("SAFE_WALLET_PATH", "wallet.dat") or "wallet.dat")

# Audit log directory
AUDIT_LOG_DIR = Path(get_env("SAFE_WALLET_AUDIT_DIR", "./audit_logs") or "./audit_logs")

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure stdlib logging for console output."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (level or LOG_LEVEL or "INFO").upper(), logging.INFO),
    )
