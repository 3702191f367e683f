from .signature_request import SignatureMethod, SignatureRequest
from .signature_entity import SignatureRequestEntity

__all__ = ['SignatureMethod', 'SignatureRequest', 'SignatureRequestEntity']
