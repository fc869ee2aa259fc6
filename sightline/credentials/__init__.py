from .store import CredentialStore
from .issuer import HttpCredentialIssuer

__all__ = ["CredentialStore", "HttpCredentialIssuer"]
