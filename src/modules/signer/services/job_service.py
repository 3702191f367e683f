import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol

from logger import ContextAdapter, bind_context, get_logger
from modules.signer.exceptions import GatewayError, PreconditionError, UnsupportedMethodError, ValidationError
from modules.signer.models.dropsigner import CreateDocumentResponse, UploadBytesResponse
from modules.signer.models.signature_request import (
    SignatureMethod,
    SignatureRequest,
    mark_processed,
    with_document,
    with_upload,
)
from modules.signer.repositories.signature_repository import SignatureRepository

logger = get_logger(__name__)


class SigningGateway(Protocol):
    def upload_bytes(self, content: bytes) -> UploadBytesResponse: ...

    def create_document(
        self,
        upload_id: str,
        subject_id: int,
        signer_name: str,
        signer_identifier: str,
        signer_email: str,
    ) -> CreateDocumentResponse: ...

    def add_counter_signature(
        self,
        document_id: str,
        signer_name: str,
        signer_identifier: str,
        signer_email: str,
    ) -> bool: ...


class ConnectionChecker(Protocol):
    def ensure_connection(self) -> None: ...


@dataclass
class RunSummary:
    run_id: str
    started_at: datetime
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    finished_at: Optional[datetime] = None
    failures: dict = field(default_factory=dict)


class JobService:
    """
    Procesa las firmas pendientes.

    Cada registro se procesa de forma aislada: cualquier error lo deja marcado
    como procesado y el run continúa con el siguiente. No hay reintento
    automático; para reprocesar hay que volver PROCESSADO a 'N' a mano.
    """

    def __init__(self, repository: SignatureRepository, gateway: SigningGateway, database: ConnectionChecker):
        self.repository = repository
        self.gateway = gateway
        self.database = database

    def execute_run(self) -> RunSummary:
        summary = RunSummary(run_id=uuid.uuid4().hex[:12], started_at=datetime.utcnow())
        run_logger = bind_context(logger, run_id=summary.run_id)
        run_logger.info("Iniciando ejecución del job de firmas")

        # ConnectivityError sube hasta el scheduler / controller
        self.database.ensure_connection()

        records = self.repository.fetch_pending()
        if not records:
            run_logger.info("No hay firmas pendientes")
            summary.finished_at = datetime.utcnow()
            return summary

        summary.total = len(records)
        run_logger.info("Firmas pendientes encontradas: %d", summary.total)

        # Secuencial, en orden de id
        for record in records:
            record_logger = bind_context(run_logger, **record.log_context())
            try:
                self.process_record(record, record_logger)
                summary.succeeded += 1
                record_logger.info("Firma procesada con éxito")
            except Exception as e:
                summary.failed += 1
                summary.failures[record.id] = str(e)
                record_logger.error("Error al procesar firma: %s", e)

        summary.finished_at = datetime.utcnow()
        run_logger.info(
            "Job de firmas terminado: total=%d exitos=%d errores=%d",
            summary.total, summary.succeeded, summary.failed,
        )
        return summary

    def process_record(self, record: SignatureRequest, record_logger: Optional[ContextAdapter] = None) -> SignatureRequest:
        """
        Procesa un registro y devuelve su estado final.

        Si algo falla, el registro se marca como procesado antes de relanzar
        el error.
        """
        record_logger = record_logger or bind_context(logger, **record.log_context())
        record_logger.info("Procesando firma")
        try:
            if not record.has_signer_data():
                raise ValidationError("incomplete signer data")

            method = record.signature_method
            if method == SignatureMethod.SIGN:
                return self._process_signature(record, record_logger)
            if method == SignatureMethod.COUNTERSIGN:
                return self._process_counter_signature(record, record_logger)
            raise UnsupportedMethodError(record.method)
        except Exception:
            record_logger.exception("Error al procesar firma, marcando como procesada")
            self._force_processed(record)
            raise

    def _process_signature(self, record: SignatureRequest, record_logger: ContextAdapter) -> SignatureRequest:
        if not record.has_payload():
            raise ValidationError("missing payload")

        # 1) Upload
        record_logger.info("Subiendo archivo a DropSigner")
        upload = self.gateway.upload_bytes(record.payload)
        record = with_upload(record, upload.id)
        self.repository.update(record)
        record_logger.info("Upload terminado: upload_id=%s", upload.id)

        # 2) Documento
        record_logger.info("Creando documento para firma")
        document = self.gateway.create_document(
            upload.id,
            record.subject_id,
            record.signer_name,
            record.signer_identifier,
            record.signer_email,
        )
        record = mark_processed(with_document(record, document.document_id))
        self.repository.update(record)
        record_logger.info("Documento creado: document_id=%s upload_id=%s", document.document_id, upload.id)
        return record

    def _process_counter_signature(self, record: SignatureRequest, record_logger: ContextAdapter) -> SignatureRequest:
        record_logger.info("Procesando contrafirma")

        original = self.repository.find_by_subject_and_method(record.subject_id, SignatureMethod.SIGN)
        if original is None:
            raise PreconditionError("original not found")
        if not original.has_document():
            raise PreconditionError("original has no document")

        record_logger.info("Firma original encontrada: id=%s document_id=%s", original.id, original.document_id)

        signed = self.gateway.add_counter_signature(
            original.document_id,
            record.signer_name,
            record.signer_identifier,
            record.signer_email,
        )
        if not signed:
            raise GatewayError("counter signature was not accepted")

        record = mark_processed(with_document(record, original.document_id))
        self.repository.update(record)
        record_logger.info("Contrafirma agregada al documento %s", original.document_id)
        return record

    def _force_processed(self, record: SignatureRequest) -> None:
        # Recarga para no pisar un upload_id ya guardado
        latest = self.repository.find_by_id(record.id) or record
        self.repository.update(mark_processed(latest))
