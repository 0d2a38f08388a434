"""
Configuration settings - edit values directly here
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings - configure values below"""

    # ===================
    # Blockfrost
    # ===================
    blockfrost_url: str = "https://cardano-preprod.blockfrost.io/api/v0"
    blockfrost_project_id: Optional[str] = None

    # ===================
    # Requests
    # ===================
    max_concurrent_requests: int = 10  # in-flight requests per provider
    request_timeout: float = 30.0  # seconds

    # ===================
    # Confirmation wait
    # ===================
    await_tx_interval: float = 3.0  # seconds between status checks
    await_tx_timeout: Optional[float] = None  # None = wait until confirmed or cancelled


# Global settings instance - import this
settings = Settings()
