"""
Transport client for the notes REST API.

Every call performs exactly one HTTP request and returns an ApiResponse.
Nothing raises past this module: HTTP errors and transport failures are
both folded into the envelope's `error` string.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from notesync.config import get_api_settings
from notesync.models import ApiResponse, CreateNoteRequest, Note, UpdateNoteRequest

logger = logging.getLogger(__name__)

NOTE_LIST = TypeAdapter(list[Note])


class ApiError(Exception):
    """Non-2xx response from the server."""

    def __init__(self, message: str, status: int | None = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response


def _error_message(response: httpx.Response) -> str:
    """Server-provided message, or one built from the status line."""
    try:
        body = response.json()
    except ValueError:
        body = {}

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message

    return f"HTTP {response.status_code}: {response.reason_phrase}"


class NotesApi:
    """Async client for /notes. Returns ApiResponse envelopes, never raises."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        debug: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None or timeout is None or debug is None:
            settings = get_api_settings()
            base_url = base_url if base_url is not None else settings["base_url"]
            timeout = timeout if timeout is not None else settings["timeout"]
            debug = debug if debug is not None else settings["debug"]

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.debug = debug
        self.transport = transport  # Injected in tests (httpx.MockTransport)

    def _debug_log(self, method: str, url: str, data: Any = None, response: Any = None) -> None:
        """Trace requests and responses in development mode."""
        if not self.debug:
            return
        logger.debug("API %s: %s", method, url)
        if data is not None:
            logger.debug("Request data: %s", json.dumps(data))
        if response is not None:
            logger.debug("Response: %s", response)

    def _fail(self, message: str) -> ApiResponse:
        logger.error("API Error: %s", message)
        return ApiResponse.fail(message)

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: dict | None = None,
    ) -> ApiResponse:
        """Perform one request and wrap the parsed JSON body (or None)."""
        url = f"{self.base_url}{endpoint}"

        try:
            self._debug_log(method, url, data=payload)

            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self.transport,
            ) as client:
                response = await client.request(method, url, json=payload)

            if not response.is_success:
                raise ApiError(_error_message(response), response.status_code, response.text)

            # DELETE may answer 204 with no body
            data = response.json() if response.content.strip() else None
            self._debug_log(method, url, response=data)

            return ApiResponse.ok(data)

        except ApiError as e:
            return self._fail(e.message)
        except Exception as e:
            return self._fail(f"Network error: {str(e) or type(e).__name__}")

    async def _note_request(
        self,
        method: str,
        endpoint: str,
        payload: dict | None = None,
    ) -> ApiResponse[Note]:
        result = await self._request(method, endpoint, payload)
        if not result.success:
            return result
        try:
            return ApiResponse.ok(Note.model_validate(result.data))
        except ValueError as e:
            return self._fail(f"Network error: malformed note: {e}")

    # GET /notes
    async def get_all_notes(self) -> ApiResponse[list[Note]]:
        result = await self._request("GET", "/notes")
        if not result.success:
            return result
        try:
            return ApiResponse.ok(NOTE_LIST.validate_python(result.data))
        except ValueError as e:
            return self._fail(f"Network error: malformed note list: {e}")

    # GET /notes/{id}
    async def get_note_by_id(self, note_id: str) -> ApiResponse[Note]:
        return await self._note_request("GET", f"/notes/{note_id}")

    # POST /notes
    async def create_note(self, note_data: CreateNoteRequest | dict) -> ApiResponse[Note]:
        try:
            note_data = CreateNoteRequest.model_validate(note_data)
        except (TypeError, ValueError) as e:
            return self._fail(f"Invalid note data: {e}")
        return await self._note_request("POST", "/notes", note_data.to_payload())

    # PUT /notes/{id}
    async def update_note(self, note_id: str, note_data: UpdateNoteRequest | dict) -> ApiResponse[Note]:
        try:
            note_data = UpdateNoteRequest.model_validate(note_data)
        except (TypeError, ValueError) as e:
            return self._fail(f"Invalid note data: {e}")
        return await self._note_request("PUT", f"/notes/{note_id}", note_data.to_payload())

    # DELETE /notes/{id}
    async def delete_note(self, note_id: str) -> ApiResponse[None]:
        result = await self._request("DELETE", f"/notes/{note_id}")
        if not result.success:
            return result
        return ApiResponse.ok()
