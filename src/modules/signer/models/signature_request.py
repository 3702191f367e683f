from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional


class SignatureMethod(PyEnum):
    SIGN = "ASSINAR"
    COUNTERSIGN = "CONTRAASSINAR"


@dataclass(frozen=True)
class SignatureRequest:
    """
    Una fila de la tabla de firmas pendientes.

    Inmutable: las transiciones devuelven un registro nuevo que se pasa
    después al repositorio.
    """

    id: int
    subject_id: int
    method: Optional[str]
    processed: bool = False
    portal_signed: bool = False
    payload: Optional[bytes] = None
    signer_name: Optional[str] = None
    signer_identifier: Optional[str] = None
    signer_email: Optional[str] = None
    upload_id: Optional[str] = None
    upload_at: Optional[datetime] = None
    document_id: Optional[str] = None
    document_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def signature_method(self) -> Optional[SignatureMethod]:
        try:
            return SignatureMethod(self.method)
        except ValueError:
            return None

    def is_sign(self) -> bool:
        return self.signature_method == SignatureMethod.SIGN

    def is_countersign(self) -> bool:
        return self.signature_method == SignatureMethod.COUNTERSIGN

    def has_payload(self) -> bool:
        return self.payload is not None

    def has_signer_data(self) -> bool:
        return bool(self.signer_name and self.signer_identifier and self.signer_email)

    def has_document(self) -> bool:
        return self.document_id is not None

    def log_context(self) -> dict:
        return {"record_id": self.id, "subject_id": self.subject_id, "method": self.method}


def mark_processed(record: SignatureRequest) -> SignatureRequest:
    return replace(record, processed=True)


def with_upload(record: SignatureRequest, upload_id: str, now: Optional[datetime] = None) -> SignatureRequest:
    return replace(record, upload_id=upload_id, upload_at=now or datetime.utcnow())


def with_document(record: SignatureRequest, document_id: str, now: Optional[datetime] = None) -> SignatureRequest:
    return replace(record, document_id=document_id, document_at=now or datetime.utcnow())
