"""Payloads de la API de DropSigner (camelCase en el JSON)."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DropSignerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UploadBytesRequest(DropSignerModel):
    bytes: str  # base64


class UploadBytesResponse(DropSignerModel):
    id: str
    size: int = 0
    digest: str = ""


class DocumentFile(DropSignerModel):
    display_name: str = Field(alias="displayName")
    id: str
    name: str
    content_type: str = Field(alias="contentType")


class DocumentUser(DropSignerModel):
    name: str
    identifier: str
    email: str


class DocumentFlowAction(DropSignerModel):
    type: str = "Signer"
    step: int
    user: DocumentUser


class CreateDocumentRequest(DropSignerModel):
    files: List[DocumentFile]
    flow_actions: List[DocumentFlowAction] = Field(alias="flowActions")


class DocumentAttachment(DropSignerModel):
    upload_id: str = Field(alias="uploadId")
    attachment_id: str = Field(alias="attachmentId")


class CreateDocumentResponse(DropSignerModel):
    upload_id: str = Field(alias="uploadId")
    document_id: str = Field(alias="documentId")
    attachments: List[DocumentAttachment] = []


class AddFlowActionsRequest(DropSignerModel):
    added_flow_actions: List[DocumentFlowAction] = Field(alias="addedFlowActions")
