"""
Pydantic DTOs and validators for outbound chat message requests.

Purpose
-------
Validate the context a message is sent with before any network call, and
serialise it with the camelCase field names the backend expects.

External dependencies: Pydantic only (no network calls). Validation either
succeeds or raises ``pydantic.ValidationError``.

Wire compatibility
------------------
The backend accepts two request shapes side by side: the current one
(``query`` + ``mode`` + ``referenceScope`` + ``options``) and a legacy one
(``content`` + full ``context``). ``SendMessageBody`` always carries both.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import DEFAULT_REFERENCE_SCOPE


ChatMode = Literal["PATIENT_ONLY", "REFERENCES_ONLY", "PATIENT_AND_REFERENCES"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MedChatContextPayload(_CamelModel):
    """Which documents the answer may draw on.

    Rules:
        - ``patient_id`` is required whenever ``mode`` includes the patient.
        - Document uuid lists are optional subset filters; omitted means
          "all documents" on that side.
    """

    mode: ChatMode
    patient_id: Optional[str] = Field(default=None, alias="patientId")
    patient_document_uuids: Optional[List[str]] = Field(default=None, alias="patientDocumentUuids")
    reference_scope: Optional[str] = Field(default=None, alias="referenceScope")
    reference_document_uuids: Optional[List[str]] = Field(default=None, alias="referenceDocumentUuids")

    @model_validator(mode="after")
    def _require_patient(self) -> "MedChatContextPayload":
        if self.mode != "REFERENCES_ONLY" and not (self.patient_id and self.patient_id.strip()):
            raise ValueError(f"patientId is required for mode {self.mode}")
        return self


class MessageMetadata(_CamelModel):
    """Document selection persisted with the message for context restore."""

    selected_reference_document_uuids: List[str] = Field(
        default_factory=list, alias="selectedReferenceDocumentUuids"
    )
    selected_patient_document_uuids: List[str] = Field(
        default_factory=list, alias="selectedPatientDocumentUuids"
    )


class SendMessageOptions(_CamelModel):
    stream: bool = True


class SendMessageBody(_CamelModel):
    """Request body for ``POST /chat/sessions/{id}/messages``."""

    query: str = Field(min_length=1)
    content: str
    mode: ChatMode
    reference_scope: str = Field(default=DEFAULT_REFERENCE_SCOPE, alias="referenceScope")
    context: MedChatContextPayload
    options: Optional[SendMessageOptions] = None
    metadata: Optional[MessageMetadata] = None

    @classmethod
    def build(
        cls,
        text: str,
        context: MedChatContextPayload,
        *,
        stream: bool,
        metadata: Optional[MessageMetadata] = None,
        default_reference_scope: str = DEFAULT_REFERENCE_SCOPE,
    ) -> "SendMessageBody":
        """Assemble a body carrying both the current and the legacy fields."""
        return cls(
            query=text,
            content=text,
            mode=context.mode,
            reference_scope=context.reference_scope or default_reference_scope,
            context=context,
            options=SendMessageOptions(stream=True) if stream else None,
            metadata=metadata,
        )


__all__ = [
    "ChatMode",
    "MedChatContextPayload",
    "MessageMetadata",
    "SendMessageOptions",
    "SendMessageBody",
]
