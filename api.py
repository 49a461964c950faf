import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.datastructures import UploadFile

from src.application.factory import build_search_service
from src.application.search_service import DocumentSearchService
from src.config.logging import configure_logging
from src.config.settings import SearchSettings
from src.domain.exceptions import MetadataNotFoundError
from src.domain.interfaces import MetadataStorePort
from src.domain.models import DocumentMetadata, ScoredExcerpt, SearchErrorCode, SearchOutcome
from src.infrastructure.metadata_store import InMemoryMetadataStore


logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    SearchErrorCode.INVALID_QUERY: 400,
    SearchErrorCode.PROCESSING_FAILED: 500,
    SearchErrorCode.TIMEOUT: 504,
}


# ── API Models ───────────────────────────────────────────────────────────────
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(BaseModel):
    # Optional so a missing query reports "Query cannot be empty", not 422
    query: Optional[str] = None
    documents: Optional[List[str]] = None


class SearchResultSchema(CamelModel):
    document_id: str
    filename: str
    excerpt: str
    relevance_score: float
    page_number: int

    @classmethod
    def from_domain(cls, result: ScoredExcerpt) -> "SearchResultSchema":
        return cls(
            document_id=result.document_id,
            filename=result.filename,
            excerpt=result.excerpt,
            relevance_score=round(float(result.relevance_score), 4),
            page_number=result.page_number,
        )


class SearchResponse(CamelModel):
    success: bool
    query: str
    results: List[SearchResultSchema]
    summary: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> "SearchResponse":
        return cls(
            success=outcome.success,
            query=outcome.query,
            results=[SearchResultSchema.from_domain(r) for r in outcome.results],
            summary=outcome.summary,
            error=outcome.error,
        )


class DocumentMetadataSchema(CamelModel):
    id: str
    filename: str
    size: int
    type: str
    uploaded_at: str
    status: str

    @classmethod
    def from_domain(cls, record: DocumentMetadata) -> "DocumentMetadataSchema":
        return cls(
            id=record.id,
            filename=record.filename,
            size=record.size,
            type=record.type,
            uploaded_at=record.uploaded_at,
            status=record.status,
        )


def _json(model: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=model.model_dump(by_alias=True, exclude_none=True),
    )


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


# ── App Initialization ───────────────────────────────────────────────────────
def create_app(
    settings: Optional[SearchSettings] = None,
    service: Optional[DocumentSearchService] = None,
    metadata_store: Optional[MetadataStorePort] = None,
) -> FastAPI:
    """
    Build the API. Components are created once here and kept on app.state;
    pass them in to swap implementations (tests, persistent stores).
    """
    settings = settings or SearchSettings()

    app = FastAPI(
        title="Document Q&A API",
        description="Ask questions against uploaded documents.",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.search_service = service if service is not None else build_search_service(settings)
    app.state.metadata_store = metadata_store if metadata_store is not None else InMemoryMetadataStore()

    _register_routes(app)
    logger.info(
        "API ready: mode=%s, min_relevance=%.2f",
        app.state.search_service.ranker.mode.value,
        app.state.search_service.ranker.min_relevance,
    )
    return app


# ── Endpoints ────────────────────────────────────────────────────────────────
def _register_routes(app: FastAPI) -> None:

    @app.get("/")
    def read_root(request: Request):
        service: DocumentSearchService = request.app.state.search_service
        return {
            "message": "Document Q&A API is running.",
            "status": "ready",
            "documents_indexed": len(service.corpus_summary()),
        }

    @app.get("/status")
    def get_status(request: Request):
        """Readiness, corpus size and the active ranking policy."""
        service: DocumentSearchService = request.app.state.search_service
        corpus = service.corpus_summary()
        return {
            "is_ready": True,
            "documents_indexed": len(corpus),
            "excerpts_indexed": sum(d["excerpt_count"] for d in corpus),
            "result_mode": service.ranker.mode.value,
            "result_limit": service.ranker.limit,
            "min_relevance": service.ranker.min_relevance,
            "uploads_recorded": len(request.app.state.metadata_store.list_all()),
        }

    @app.post("/api/search")
    async def search(body: SearchRequest, request: Request):
        service: DocumentSearchService = request.app.state.search_service
        outcome = await service.handle_search(body.query, body.documents)
        status_code = STATUS_BY_ERROR.get(outcome.error_code, 200)
        return _json(SearchResponse.from_outcome(outcome), status_code)

    @app.get("/api/corpus")
    def get_corpus(request: Request):
        """Documents the search endpoint actually searches."""
        service: DocumentSearchService = request.app.state.search_service
        return {"success": True, "documents": service.corpus_summary()}

    @app.post("/api/upload")
    async def upload_document(request: Request):
        """Record upload metadata. Uploaded files are not added to the search corpus."""
        store: MetadataStorePort = request.app.state.metadata_store

        async with request.form() as form:
            file = form.get("file")
            # A part sent without a filename arrives as a plain string field
            if not isinstance(file, UploadFile) or not file.filename:
                return _error("Document file required", 400)

            try:
                content = await file.read()
                record = store.add(
                    filename=file.filename,
                    size=len(content),
                    content_type=file.content_type or "application/octet-stream",
                )
            except Exception:
                logger.exception("Document upload failed for '%s'", file.filename)
                return _error("Failed to process document", 500)

        return {
            "success": True,
            "document": DocumentMetadataSchema.from_domain(record).model_dump(by_alias=True),
        }

    @app.get("/api/documents")
    def get_documents(request: Request):
        store: MetadataStorePort = request.app.state.metadata_store
        return {
            "success": True,
            "documents": [
                DocumentMetadataSchema.from_domain(r).model_dump(by_alias=True)
                for r in store.list_all()
            ],
        }

    @app.delete("/api/documents/{document_id}")
    def delete_document(document_id: str, request: Request):
        store: MetadataStorePort = request.app.state.metadata_store
        try:
            store.delete(document_id)
        except MetadataNotFoundError:
            return _error("Document not found", 404)
        return {"success": True, "message": "Document deleted successfully"}


settings = SearchSettings()
configure_logging(settings.log_level)
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
