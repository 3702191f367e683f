# src/modules/signer/models/signature_entity.py

from datetime import datetime

from sqlalchemy import CHAR, Column, DateTime, Integer, LargeBinary, String
from sqlalchemy.types import TypeDecorator

from database import Base
from modules.signer.models.signature_request import SignatureRequest


class YesNoFlag(TypeDecorator):
    """Columna CHAR(1) 'S'/'N' expuesta como bool."""

    impl = CHAR(1)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return "S" if value else "N"

    def process_result_value(self, value, dialect):
        if value is None:
            return False
        return value == "S"


class SignatureRequestEntity(Base):
    __tablename__ = "SLO_ASSINATURAS_DROPSIGNER"

    id                = Column("ID", Integer, primary_key=True, autoincrement=True)
    subject_id        = Column("SLO_CEROR_ID", Integer, nullable=False)
    created_at        = Column("DATA_INCLUSAO", DateTime, default=datetime.utcnow, nullable=False)
    payload           = Column("CEROR_ARQUIVO", LargeBinary, nullable=True)
    signer_name       = Column("NOME_ASSINANTE", String(150), nullable=True)
    signer_identifier = Column("IDENTIFICADOR", String(20), nullable=True)
    signer_email      = Column("EMAIL_ASSINANTE", String(150), nullable=True)
    method            = Column("METODO", String(20), nullable=True)
    processed         = Column("PROCESSADO", YesNoFlag, nullable=False, default=False)
    upload_id         = Column("UPLOAD_ID", String(50), nullable=True)
    document_id       = Column("DOCUMENT_ID", String(50), nullable=True)
    upload_at         = Column("UPLOAD_DATA", DateTime, nullable=True)
    document_at       = Column("DOCUMENT_DATA", DateTime, nullable=True)
    portal_signed     = Column("ASSINADO_PORTAL", YesNoFlag, nullable=True, default=False)

    def to_domain(self) -> SignatureRequest:
        return SignatureRequest(
            id=self.id,
            subject_id=self.subject_id,
            method=self.method,
            processed=bool(self.processed),
            portal_signed=bool(self.portal_signed),
            payload=self.payload,
            signer_name=self.signer_name,
            signer_identifier=self.signer_identifier,
            signer_email=self.signer_email,
            upload_id=self.upload_id,
            upload_at=self.upload_at,
            document_id=self.document_id,
            document_at=self.document_at,
            created_at=self.created_at,
        )

    def apply(self, record: SignatureRequest) -> None:
        """Copia los campos que el job puede modificar."""
        # processed nunca vuelve a False
        self.processed = bool(self.processed) or record.processed
        self.upload_id = record.upload_id
        self.upload_at = record.upload_at
        self.document_id = record.document_id
        self.document_at = record.document_at
