"""Referral key to payment button resolution."""

from typing import Any, Mapping

from common.config import DEFAULT_PAYMENT_BUTTON_ID, REFERRAL_BUTTON_MAP


def resolve_payment_button(
    referral_key: Any,
    table: Mapping[str, str] = REFERRAL_BUTTON_MAP,
    default: str = DEFAULT_PAYMENT_BUTTON_ID,
) -> str:
    """Return the button id for a referral key, or the default on a miss."""
    if not isinstance(referral_key, str) or not referral_key:
        return default
    return table.get(referral_key.lower(), default)
