"""
Google Docs Package

Converts Google Docs documents to Markdown and back, and reads and writes
documents through the Docs and Drive APIs.
"""

from gdocs.markdown_parser import MarkdownToDocumentConverter, convert_markdown_to_document
from gdocs.markdown_renderer import DocumentToMarkdownConverter, convert_document_to_markdown
from gdocs.models import Document, DocumentContent
from gdocs.request_builder import DocsRequestBuilder, build_requests

__all__ = [
    "Document",
    "DocumentContent",
    "DocumentToMarkdownConverter",
    "convert_document_to_markdown",
    "MarkdownToDocumentConverter",
    "convert_markdown_to_document",
    "DocsRequestBuilder",
    "build_requests",
]
