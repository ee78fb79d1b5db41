"""
Google Docs / Drive client.

Async wrapper around the Docs v1 and Drive v3 APIs used by the note sync
services. The API client library is blocking, so every call runs in a worker
thread via `asyncio.to_thread`. Each public method is wrapped in
`handle_http_errors`, so callers only ever see `core.errors` exceptions.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

from auth.google_auth import build_service
from core.utils import handle_http_errors, validate_document_id
from gdocs.models import (
    Document,
    DocumentContent,
    Paragraph,
    ParagraphElement,
    ParagraphStyle,
    StructuralElement,
    TextRun,
    TextStyle,
)
from gdocs.request_builder import build_requests

logger = logging.getLogger(__name__)

DOCS_MIME_TYPE = "application/vnd.google-apps.document"
DOCUMENT_URL_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"
DEFAULT_SECTION_TITLE = "New Section"
DRIVE_FILE_FIELDS = "files(id, name, webViewLink, createdTime, modifiedTime)"

# (service_name, version, user_id) -> googleapiclient Resource
ServiceFactory = Callable[[str, str, str], Any]


def _plain_paragraph(text: str, style: TextStyle | None = None) -> StructuralElement:
    return StructuralElement(
        paragraph=Paragraph(
            elements=[ParagraphElement(text_run=TextRun(content=text, text_style=style or TextStyle()))],
            paragraph_style=ParagraphStyle(),
        )
    )


def section_header(title: str) -> list[StructuralElement]:
    """Structural elements for a bold `--- title ---` separator surrounded by blank lines."""
    return [
        _plain_paragraph("\n"),
        _plain_paragraph(f"--- {title} ---", TextStyle(bold=True)),
        _plain_paragraph("\n"),
    ]


class GoogleDocsClient:
    """
    Reads and writes Google Docs on behalf of a user.

    Args:
        service_factory: Builds API service objects; defaults to
            `auth.google_auth.build_service`. Tests inject a factory returning mocks.
    """

    def __init__(self, service_factory: ServiceFactory | None = None):
        self._service_factory = service_factory or build_service

    async def _service(self, service_name: str, version: str, user_id: str) -> Any:
        # Building a service may refresh the user's token over the network
        return await asyncio.to_thread(self._service_factory, service_name, version, user_id)

    @staticmethod
    def document_url(document_id: str) -> str:
        """Browser URL for a document."""
        return DOCUMENT_URL_TEMPLATE.format(document_id=document_id)

    @handle_http_errors("get_document_json", is_read_only=True, service_type="docs")
    async def get_document_json(self, user_id: str, document_id: str) -> dict:
        """Fetch the raw `documents().get()` JSON."""
        document_id = validate_document_id(document_id)
        logger.info(f"[get_document_json] User={user_id}, Doc={document_id}")

        service = await self._service("docs", "v1", user_id)
        return await asyncio.to_thread(service.documents().get(documentId=document_id).execute)

    @handle_http_errors("fetch_document", is_read_only=True, service_type="docs")
    async def fetch_document(self, user_id: str, document_id: str) -> Document:
        """Fetch a document as a `Document` model."""
        data = await self.get_document_json(user_id, document_id)
        return Document.model_validate(data)

    @handle_http_errors("create_document", service_type="docs")
    async def create_document(self, user_id: str, title: str) -> str:
        """Create an empty document and return its id."""
        logger.info(f"[create_document] User={user_id}, Title='{title}'")

        service = await self._service("docs", "v1", user_id)
        doc = await asyncio.to_thread(service.documents().create(body={"title": title}).execute)
        document_id = doc.get("documentId", "")
        logger.info(f"Created Google Doc '{title}' (ID: {document_id}) for {user_id}")
        return document_id

    @handle_http_errors("write_content", service_type="docs")
    async def write_content(
        self,
        user_id: str,
        document_id: str,
        elements: DocumentContent | Iterable[StructuralElement],
        start_index: int | None = None,
    ) -> int:
        """
        Write structural elements into a document.

        Args:
            user_id: Owner of the Google account.
            document_id: Target document.
            elements: Parsed content, e.g. from `convert_markdown_to_document`.
            start_index: Insertion index; when omitted, content is appended at
                the end of the body.

        Returns:
            The number of batchUpdate requests sent (0 when there was nothing to write).
        """
        document_id = validate_document_id(document_id)

        if start_index is None:
            document = await self.fetch_document(user_id, document_id)
            start_index = max(document.end_index - 1, 1)

        requests = build_requests(elements, start_index)
        if not requests:
            logger.info(f"[write_content] Nothing to write to {document_id}")
            return 0

        logger.info(f"[write_content] User={user_id}, Doc={document_id}, {len(requests)} request(s) at {start_index}")
        service = await self._service("docs", "v1", user_id)
        await asyncio.to_thread(
            service.documents().batchUpdate(documentId=document_id, body={"requests": requests}).execute
        )
        return len(requests)

    @handle_http_errors("create_document_with_content", service_type="docs")
    async def create_document_with_content(
        self,
        user_id: str,
        title: str,
        elements: DocumentContent | Iterable[StructuralElement],
    ) -> str:
        """Create a document and fill it with `elements`; return its id."""
        document_id = await self.create_document(user_id, title)
        await self.write_content(user_id, document_id, elements, start_index=1)
        return document_id

    @handle_http_errors("append_section", service_type="docs")
    async def append_section(
        self,
        user_id: str,
        document_id: str,
        elements: DocumentContent | Iterable[StructuralElement],
        section_title: str | None = None,
    ) -> int:
        """Append a `--- title ---` separator and `elements` to the end of a document."""
        if isinstance(elements, DocumentContent):
            elements = elements.content
        content = section_header(section_title or DEFAULT_SECTION_TITLE) + list(elements)
        return await self.write_content(user_id, document_id, content)

    @handle_http_errors("list_documents", is_read_only=True, service_type="drive")
    async def list_documents(self, user_id: str, page_size: int = 100) -> list[dict]:
        """List the user's Google Docs, most recently modified by them first."""
        logger.info(f"[list_documents] User={user_id}, page_size={page_size}")

        service = await self._service("drive", "v3", user_id)
        response = await asyncio.to_thread(
            service.files()
            .list(
                q=f"mimeType='{DOCS_MIME_TYPE}' and trashed=false",
                fields=DRIVE_FILE_FIELDS,
                orderBy="modifiedByMeTime desc",
                pageSize=page_size,
            )
            .execute
        )
        return response.get("files", [])
