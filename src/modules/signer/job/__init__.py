from .signature_job import SignatureJobScheduler

__all__ = ['SignatureJobScheduler']
