# src/infrastructure/metadata_store.py

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from src.domain.exceptions import MetadataNotFoundError
from src.domain.interfaces import MetadataStorePort
from src.domain.models import DocumentMetadata


logger = logging.getLogger(__name__)

ID_LENGTH = 9


class InMemoryMetadataStore(MetadataStorePort):
    """
    Upload records for the document list UI.
    Does not feed the search corpus; uploads are not searchable.
    """

    def __init__(self):
        self._records: List[DocumentMetadata] = []

    def add(self, filename: str, size: int, content_type: str) -> DocumentMetadata:
        record = DocumentMetadata(
            id=uuid.uuid4().hex[:ID_LENGTH],
            filename=filename,
            size=size,
            type=content_type,
            uploaded_at=datetime.now(timezone.utc).isoformat(),
            status="ready",
        )
        self._records.append(record)
        logger.info("Recorded upload '%s' (%d bytes) as %s", filename, size, record.id)
        return record

    def list_all(self) -> List[DocumentMetadata]:
        return list(self._records)

    def delete(self, document_id: str) -> None:
        for index, record in enumerate(self._records):
            if record.id == document_id:
                del self._records[index]
                logger.info("Deleted upload record %s", document_id)
                return
        raise MetadataNotFoundError(f"Document not found: {document_id}")

    def __len__(self) -> int:
        return len(self._records)
