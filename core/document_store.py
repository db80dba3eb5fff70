"""Remote document library backed by a Supabase (PostgREST) table"""
import logging
from typing import Dict, List, Optional

import requests

import config
from core.errors import DocumentStoreError
from core.models import DocumentRecord, SectionList, utc_now_iso

logger = logging.getLogger(__name__)


def build_record(form: Dict, sections: SectionList) -> DocumentRecord:
    """Snapshot the current form and sections into a record for insertion"""
    return DocumentRecord(
        title=str(form.get("title") or ""),
        topic=str(form.get("topic") or ""),
        type=str(form.get("type") or ""),
        level=str(form.get("level") or ""),
        content=sections.to_json(),
        created_at=utc_now_iso(),
    )


class DocumentStore:
    """Thin insert/select/delete client for the documents table

    No retry, conflict resolution or offline queue: any failure raises
    DocumentStoreError for the caller to report.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = None,
    ):
        """Initialize the store

        Args:
            url: Project URL (https://<ref>.supabase.co). If None, uses config.SUPABASE_URL
            api_key: Anon/service key. If None, uses config.SUPABASE_KEY
            table: Table name. If None, uses config.SUPABASE_TABLE
            session: requests session to reuse
            timeout: Request timeout in seconds
        """
        self.url = (url if url is not None else config.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.SUPABASE_KEY
        self.table = table or config.SUPABASE_TABLE
        self.session = session or requests.Session()
        self.timeout = timeout or config.SUPABASE_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(self, method: str, params: Dict = None, json=None, prefer: str = None):
        if not self.is_configured:
            raise DocumentStoreError("Document store is not configured (SUPABASE_URL / SUPABASE_KEY)")

        try:
            response = self.session.request(
                method,
                self.endpoint,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Document store {method} failed: {e}")
            raise DocumentStoreError(f"Network error: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(f"Document store {method} returned {response.status_code}: {message}")
            raise DocumentStoreError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DocumentStoreError(f"Invalid JSON from document store: {e}") from e

    def insert(self, record: DocumentRecord) -> DocumentRecord:
        """Insert a record and return it as stored (with its id)"""
        rows = self._request("POST", json=[record.to_row()], prefer="return=representation")
        logger.info(f"Saved document '{record.title[:50]}'")
        if rows:
            return DocumentRecord.from_row(rows[0])
        return record

    def list(self, limit: int = 100) -> List[DocumentRecord]:
        """List saved documents, newest first"""
        rows = self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc", "limit": str(limit)},
        )
        return [DocumentRecord.from_row(row) for row in rows or []]

    def get(self, document_id: int) -> Optional[DocumentRecord]:
        rows = self._request("GET", params={"select": "*", "id": f"eq.{document_id}"})
        if not rows:
            return None
        return DocumentRecord.from_row(rows[0])

    def delete(self, document_id: int):
        """Delete a document by id"""
        self._request("DELETE", params={"id": f"eq.{document_id}"})
        logger.info(f"Deleted document {document_id}")


def _error_message(response: requests.Response) -> str:
    """Extract PostgREST's error message, falling back to the raw body"""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return data.get("message") or data.get("error") or str(data)
    return str(data)
