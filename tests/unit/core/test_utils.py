"""Tests for input validators and the HTTP error decorator."""

import ssl
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from core.errors import APIError, PermissionDeniedError, RateLimitError, ResourceNotFoundError, ValidationError
from core.utils import TransientNetworkError, handle_http_errors, validate_document_id, validate_note_id


def http_error(status):
    return HttpError(MagicMock(status=status, reason="error"), b'{"error": {"message": "boom"}}')


class TestValidateIds:
    """Tests for id validators."""

    @pytest.mark.parametrize("validator", [validate_document_id, validate_note_id])
    def test_valid_id_is_stripped(self, validator):
        assert validator("  abc_DEF-123 ") == "abc_DEF-123"

    @pytest.mark.parametrize("validator", [validate_document_id, validate_note_id])
    def test_missing_id(self, validator):
        with pytest.raises(ValidationError, match="is required"):
            validator("")

    @pytest.mark.parametrize("validator", [validate_document_id, validate_note_id])
    def test_blank_id(self, validator):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validator("   ")

    @pytest.mark.parametrize("bad_id", ["a/b", "a b", "../etc", "id?x=1"])
    def test_invalid_characters(self, bad_id):
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_document_id(bad_id)

    def test_param_name_in_message(self):
        with pytest.raises(ValidationError, match="source_note"):
            validate_note_id("", param_name="source_note")


class TestHandleHttpErrors:
    """Tests for the handle_http_errors decorator."""

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        @handle_http_errors("op")
        async def ok():
            return 42

        assert await ok() == 42

    @pytest.mark.asyncio
    async def test_http_404(self):
        @handle_http_errors("fetch", service_type="docs")
        async def fails(user_id, document_id):
            raise http_error(404)

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await fails(user_id="user1", document_id="doc9")
        assert "doc9" in str(exc_info.value)
        assert "(service: docs)" in str(exc_info.value)
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_http_403_suggests_reconnect(self):
        @handle_http_errors("write")
        async def fails(user_id):
            raise http_error(403)

        with pytest.raises(PermissionDeniedError, match="reconnect the Google account for user 'user1'"):
            await fails(user_id="user1")

    @pytest.mark.asyncio
    async def test_positional_arguments_are_named_in_errors(self):
        class Client:
            @handle_http_errors("fetch")
            async def fetch(self, user_id, document_id):
                raise http_error(404)

            @handle_http_errors("write")
            async def write(self, user_id, document_id):
                raise http_error(403)

        with pytest.raises(ResourceNotFoundError, match="Document not found: doc9"):
            await Client().fetch("user1", "doc9")
        with pytest.raises(PermissionDeniedError, match="for user 'user1'"):
            await Client().write("user1", "doc9")

    @pytest.mark.asyncio
    async def test_http_429(self):
        @handle_http_errors("write")
        async def fails():
            raise http_error(429)

        with pytest.raises(RateLimitError):
            await fails()

    @pytest.mark.asyncio
    async def test_typed_errors_pass_unchanged(self):
        error = ValidationError("bad input")

        @handle_http_errors("op")
        async def fails():
            raise error

        with pytest.raises(ValidationError) as exc_info:
            await fails()
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_api_error(self):
        @handle_http_errors("op")
        async def fails():
            raise KeyError("x")

        with pytest.raises(APIError, match="unexpected error occurred in op"):
            await fails()

    @pytest.mark.asyncio
    async def test_read_only_retries_ssl_errors(self):
        calls = []

        @handle_http_errors("read", is_read_only=True)
        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise ssl.SSLError("handshake")
            return "ok"

        with patch("core.utils.asyncio.sleep", new=AsyncMock()) as sleep:
            assert await flaky() == "ok"
        assert len(calls) == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_read_only_gives_up_after_retries(self):
        @handle_http_errors("read", is_read_only=True)
        async def fails():
            raise ssl.SSLError("handshake")

        with patch("core.utils.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(TransientNetworkError, match="after 3 attempt"):
                await fails()

    @pytest.mark.asyncio
    async def test_writes_do_not_retry_ssl_errors(self):
        calls = []

        @handle_http_errors("write")
        async def fails():
            calls.append(1)
            raise ssl.SSLError("handshake")

        with pytest.raises(TransientNetworkError, match="after 1 attempt"):
            await fails()
        assert len(calls) == 1
