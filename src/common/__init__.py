"""
Common modules package initialization.
"""

__all__ = [
    "base_handler",
    "config",
    "exceptions",
    "models",
    "outcome",
    "payment_client",
    "referrals",
    "result_client",
    "validators",
]
