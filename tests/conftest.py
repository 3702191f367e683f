import io
from datetime import datetime

import pytest
from reportlab.pdfgen import canvas
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from create_tables import crear_tablas
from database import Base, Database
from modules.signer.exceptions import GatewayError
from modules.signer.models.dropsigner import CreateDocumentResponse, UploadBytesResponse
from modules.signer.models.signature_entity import SignatureRequestEntity
from modules.signer.repositories.signature_repository import SignatureRepository

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
database = Database(engine)


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    crear_tablas(engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    return database


@pytest.fixture
def repository():
    return SignatureRepository(database.SessionLocal)


def create_dummy_pdf_bytes(text="Certificado de origem (test)"):
    buf = io.BytesIO()
    c = canvas.Canvas(buf)
    c.drawString(50, 750, text)
    c.save()
    buf.seek(0)
    return buf.read()


@pytest.fixture(scope="session")
def example_pdf():
    return create_dummy_pdf_bytes()


@pytest.fixture
def add_request(example_pdf):
    """Inserta una fila y devuelve su id."""

    def _add(
        id=None,
        subject_id=100,
        method="ASSINAR",
        processed=False,
        portal_signed=False,
        payload=example_pdf,
        signer_name="Maria Silva",
        signer_identifier="12345678900",
        signer_email="maria@empresa.com",
        document_id=None,
        upload_id=None,
    ):
        with database.SessionLocal() as session:
            entity = SignatureRequestEntity(
                id=id,
                subject_id=subject_id,
                created_at=datetime.utcnow(),
                method=method,
                processed=processed,
                portal_signed=portal_signed,
                payload=payload,
                signer_name=signer_name,
                signer_identifier=signer_identifier,
                signer_email=signer_email,
                document_id=document_id,
                upload_id=upload_id,
            )
            session.add(entity)
            session.commit()
            return entity.id

    return _add


class FakeGateway:
    """Gateway en memoria que registra cada llamada en orden."""

    def __init__(self):
        self.calls = []
        self.fail_uploads_for = set()
        self.fail_documents = False
        self.fail_counter_signatures = False
        self._next = 0

    def _id(self, prefix):
        self._next += 1
        return f"{prefix}-{self._next}"

    def upload_bytes(self, content):
        self.calls.append(("upload_bytes", content))
        if content in self.fail_uploads_for:
            raise GatewayError("upload failed", status_code=503, detail="unavailable")
        return UploadBytesResponse(id=self._id("upload"), size=len(content), digest="sha256")

    def create_document(self, upload_id, subject_id, signer_name, signer_identifier, signer_email):
        self.calls.append(("create_document", upload_id, subject_id, signer_name, signer_identifier, signer_email))
        if self.fail_documents:
            raise GatewayError("create document returned no results")
        return CreateDocumentResponse(upload_id=upload_id, document_id=self._id("doc"), attachments=[])

    def add_counter_signature(self, document_id, signer_name, signer_identifier, signer_email):
        self.calls.append(("add_counter_signature", document_id, signer_name, signer_identifier, signer_email))
        if self.fail_counter_signatures:
            raise GatewayError("add counter signature failed", status_code=400, detail="bad request")
        return True


@pytest.fixture
def gateway():
    return FakeGateway()
