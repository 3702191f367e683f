import base64
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config import Settings
from logger import get_logger
from modules.signer.exceptions import GatewayError
from modules.signer.models.dropsigner import (
    AddFlowActionsRequest,
    CreateDocumentRequest,
    CreateDocumentResponse,
    DocumentFile,
    DocumentFlowAction,
    DocumentUser,
    UploadBytesRequest,
    UploadBytesResponse,
)

logger = get_logger(__name__)


class DropSignerClient:
    """
    Cliente HTTP de DropSigner.

    Sin reintentos: cualquier fallo de transporte o respuesta no-2xx se
    convierte en GatewayError y la política de reintento queda en el job.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.client = httpx.Client(
            base_url=base_url,
            headers={"X-Api-Key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [self._log_request], "response": [self._log_response]},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DropSignerClient":
        return cls(
            settings.dropsigner_base_url,
            settings.dropsigner_api_key,
            timeout=settings.dropsigner_timeout_seconds,
        )

    @staticmethod
    def _log_request(request: httpx.Request) -> None:
        logger.debug("%s %s", request.method, request.url)

    @staticmethod
    def _log_response(response: httpx.Response) -> None:
        request = response.request
        logger.debug("%s %s %s", response.status_code, request.method, request.url)

    def _post(self, path: str, body: dict, operation: str) -> httpx.Response:
        try:
            response = self.client.post(path, json=body)
        except httpx.HTTPError as e:
            raise GatewayError(f"{operation} failed", detail=str(e)) from e
        if not response.is_success:
            raise GatewayError(f"{operation} failed", status_code=response.status_code, detail=response.text)
        return response

    def upload_bytes(self, content: bytes) -> UploadBytesResponse:
        """Sube el archivo en base64 y devuelve el id del upload."""
        body = UploadBytesRequest(bytes=base64.b64encode(content).decode("ascii"))
        response = self._post("/uploads/bytes", body.model_dump(by_alias=True), "upload")
        try:
            return UploadBytesResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise GatewayError("upload returned an invalid body", detail=str(e)) from e

    def create_document(
        self,
        upload_id: str,
        subject_id: int,
        signer_name: str,
        signer_identifier: str,
        signer_email: str,
    ) -> CreateDocumentResponse:
        """
        Crea el documento con un único archivo y un único paso de firma.

        La API responde con una lista; se usa el primer elemento.
        """
        body = CreateDocumentRequest(
            files=[
                DocumentFile(
                    display_name=f"Certificado de Origem {subject_id}",
                    id=upload_id,
                    name=f"Certif_Origem_{subject_id}.pdf",
                    content_type="application/pdf",
                )
            ],
            flow_actions=[
                DocumentFlowAction(
                    step=1,
                    user=DocumentUser(name=signer_name, identifier=signer_identifier, email=signer_email),
                )
            ],
        )
        response = self._post("/documents", body.model_dump(by_alias=True), "create document")
        try:
            results = response.json()
        except ValueError as e:
            raise GatewayError("create document returned an invalid body", detail=str(e)) from e

        if not isinstance(results, list) or not results:
            raise GatewayError("create document returned no results")
        try:
            return CreateDocumentResponse.model_validate(results[0])
        except PydanticValidationError as e:
            raise GatewayError("create document returned an invalid body", detail=str(e)) from e

    def add_counter_signature(
        self,
        document_id: str,
        signer_name: str,
        signer_identifier: str,
        signer_email: str,
    ) -> bool:
        """Agrega un segundo paso (step=2) al flujo del documento existente."""
        body = AddFlowActionsRequest(
            added_flow_actions=[
                DocumentFlowAction(
                    step=2,
                    user=DocumentUser(name=signer_name, identifier=signer_identifier, email=signer_email),
                )
            ]
        )
        self._post(f"/documents/{document_id}/flow", body.model_dump(by_alias=True), "add counter signature")
        return True

    def close(self) -> None:
        self.client.close()
