"""
Runtime configuration for the result proxy.

Downstream URLs come from environment variables with compiled-in defaults.
The referral table is a read-only constant built at import time.
"""

import os
from types import MappingProxyType
from typing import Optional

PAYMENT_DB_URL = os.environ.get("PAYMENT_DB_URL", "https://warisha.pw/payments")
BOARD_API_BASE_URL = os.environ.get(
    "BOARD_API_BASE_URL", "https://boardresultapi.abplive.com/wb/2025/12"
).rstrip("/")

# Referral key (lower case) -> payment button id
REFERRAL_BUTTON_MAP = MappingProxyType(
    {
        "subhra": "pl_QRCx74QvShiAil",
        "koyel": "pl_QMWdxwIPVZYTpi",
        "anwesha": "pl_QRfw57xno82GiV",
    }
)
DEFAULT_PAYMENT_BUTTON_ID = "pl_QMXOuva67vyoan"

CORS_HEADERS = MappingProxyType(
    {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
)


def get_http_timeout() -> Optional[float]:
    """
    Timeout for downstream calls, from HTTP_TIMEOUT_SECONDS.

    Returns None (no timeout) when the variable is unset or blank.

    Raises:
        ValueError: If the variable is set but not a positive number
    """
    raw = os.environ.get("HTTP_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return None

    timeout = float(raw)
    if timeout <= 0:
        raise ValueError("HTTP_TIMEOUT_SECONDS must be a positive number")
    return timeout
