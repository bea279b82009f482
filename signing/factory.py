from __future__ import annotations

from app.core.settings import Settings, SignerType

from .base import Signer
from .encrypted_keystore import EncryptedKeystoreSigner
from .policy import maybe_wrap_signer, policy_config_from_settings
from .private_key import PrivateKeySigner


def get_signer(settings: Settings) -> Signer:
    """
    Select signer based on SIGNER_TYPE, wrapped with the signer policy.

    Supported:
    - private_key (default): uses PRIVATE_KEY
    - keystore: uses KEYSTORE_PATH + KEYSTORE_PASSWORD
    """
    if settings.SIGNER_TYPE == SignerType.PRIVATE_KEY:
        signer: Signer = PrivateKeySigner(settings.PRIVATE_KEY)
    elif settings.SIGNER_TYPE == SignerType.KEYSTORE:
        signer = EncryptedKeystoreSigner(settings.KEYSTORE_PATH or "", settings.KEYSTORE_PASSWORD or "")
    else:
        raise ValueError(f"Unsupported SIGNER_TYPE: {settings.SIGNER_TYPE}")
    return maybe_wrap_signer(signer, policy_config_from_settings(settings))
