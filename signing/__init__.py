from .base import SignedTx, Signer
from .decode import DecodedTransaction, decode_signed_transaction
from .encrypted_keystore import EncryptedKeystoreSigner
from .factory import get_signer
from .policy import PolicyEnforcedSigner, SignerPolicyViolation, maybe_wrap_signer
from .private_key import PrivateKeySigner, normalize_private_key

__all__ = [
    "SignedTx",
    "Signer",
    "PrivateKeySigner",
    "EncryptedKeystoreSigner",
    "get_signer",
    "normalize_private_key",
    "DecodedTransaction",
    "decode_signed_transaction",
    "PolicyEnforcedSigner",
    "SignerPolicyViolation",
    "maybe_wrap_signer",
]
