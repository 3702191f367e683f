from .signature_repository import SignatureRepository

__all__ = ['SignatureRepository']
