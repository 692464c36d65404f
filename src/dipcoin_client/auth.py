"""
Onboarding (JWT authorization) helpers for DipCoin API.

The venue issues a bearer token in exchange for a signature over a fixed
onboarding message. The token is then attached to every request.
"""

import json
from typing import Any, Dict, Optional

from .constants import ONBOARDING_URL
from .errors import ServerError
from .keys import SuiKeypair


def onboarding_message(onboarding_url: str = ONBOARDING_URL) -> str:
    """Message signed to obtain a token."""
    return json.dumps({"onboardingUrl": onboarding_url}, separators=(",", ":"))


def build_authorize_payload(
    keypair: SuiKeypair,
    onboarding_url: str = ONBOARDING_URL,
) -> Dict[str, Any]:
    """
    Build the JSON body of an authorize request.

    Args:
        keypair: Keypair whose address is being onboarded
        onboarding_url: URL embedded in the signed message

    Returns:
        Dictionary with signature, user address and terms acceptance
    """
    signature = keypair.sign_personal_message(onboarding_message(onboarding_url).encode("utf-8"))
    return {
        "signature": signature,
        "userAddress": keypair.address,
        "isTermAccepted": True,
    }


def extract_token(data: Any) -> str:
    """Pull the JWT out of an authorize response payload."""
    token: Optional[Any] = None
    if isinstance(data, str):
        token = data
    elif isinstance(data, dict):
        token = data.get("token") or data.get("accessToken") or data.get("jwt")

    if not token:
        raise ServerError("Authorization response did not contain a token", response_data=data)
    return str(token)
