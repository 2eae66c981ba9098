"""Read-side clients for the document store.

Two backends share one interface:

- ``JsonSnapshotStore`` reads exported collections from
  ``<snapshot_dir>/<collection>.json``.
- ``FirestoreRestStore`` reads live collections through the Firestore
  REST API.

Both only read. Records that cannot be parsed are skipped with a
warning; transport and decode failures raise ``StoreError``.
"""

import json
import logging
from pathlib import Path
from typing import Any

import requests

from .config import (
    DISPLAY_NAMES_COLLECTION,
    MODULE_ORDERS_COLLECTION,
    QUIZZES_COLLECTION,
    VIDEOS_COLLECTION,
    WATCH_EVENTS_COLLECTION,
    get_firestore_credentials,
    get_snapshot_dir,
)
from .models import ContentItem, QuizQuestion, WatchEvent
from .quiz import quiz_module_ids

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """A collection could not be read."""


# =============================================================================
# SHARED INTERFACE
# =============================================================================

class DocumentStore:
    """Typed queries over raw ``(doc_id, data)`` documents.

    Subclasses implement ``_documents`` and may override ``_where`` with
    a server-side filter.
    """

    def _documents(self, collection: str) -> list[tuple[str, dict]]:
        raise NotImplementedError

    def _where(self, collection: str, field: str, value: Any) -> list[tuple[str, dict]]:
        return [(doc_id, data) for doc_id, data in self._documents(collection) if data.get(field) == value]

    def fetch_content(self, category: str | None = None) -> list[ContentItem]:
        """Videos ordered by creation time ascending, optionally one category.

        Args:
            category: Exact category to keep, or None for every video.
        """
        docs = (
            self._where(VIDEOS_COLLECTION, "category", category)
            if category is not None
            else self._documents(VIDEOS_COLLECTION)
        )
        items = []
        for doc_id, data in docs:
            try:
                items.append(ContentItem.from_record(doc_id, data))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed video %s: %s", doc_id, e)
        items.sort(key=lambda item: item.created_at)
        return items

    def fetch_custom_orders(self) -> dict[str, list[str]]:
        """Saved custom orders keyed by category.

        One document per category; the category is taken from its
        ``category`` field, else the document id.
        """
        orders = {}
        for doc_id, data in self._documents(MODULE_ORDERS_COLLECTION):
            category = data.get("category") or doc_id
            video_ids = data.get("videoIds", data.get("order", []))
            if not isinstance(video_ids, list):
                logger.warning("Skipping custom order %s: videoIds is not a list", doc_id)
                continue
            orders[str(category)] = [str(v) for v in video_ids]
        return orders

    def fetch_watch_events(self, user_id: str) -> list[WatchEvent]:
        """Every watch event recorded for one user."""
        events = []
        for doc_id, data in self._where(WATCH_EVENTS_COLLECTION, "userId", user_id):
            try:
                events.append(WatchEvent.from_record(data))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed watch event %s: %s", doc_id, e)
        return events

    def fetch_display_names(self) -> dict[str, str]:
        """Module display-name overrides keyed by category."""
        names = {}
        for _, data in self._documents(DISPLAY_NAMES_COLLECTION):
            category = data.get("category")
            display_name = data.get("displayName")
            if category and display_name:
                names[str(category)] = str(display_name)
        return names

    def fetch_quiz_questions(self, module_id: str) -> list[QuizQuestion]:
        """Questions for a module, falling back to the legacy module id."""
        for candidate in quiz_module_ids(module_id):
            docs = self._where(QUIZZES_COLLECTION, "moduleId", candidate)
            if not docs:
                continue
            questions = []
            for doc_id, data in docs:
                try:
                    questions.append(QuizQuestion.from_record(doc_id, data))
                except (TypeError, ValueError) as e:
                    logger.warning("Skipping malformed quiz question %s: %s", doc_id, e)
            return questions
        return []


# =============================================================================
# JSON SNAPSHOTS
# =============================================================================

class JsonSnapshotStore(DocumentStore):
    """Reads collections exported as JSON files.

    Each file is either a list of documents carrying an ``id`` field or
    an object mapping document id to document.
    """

    def __init__(self, snapshot_dir: Path | None = None):
        """Initialize with the snapshot directory.

        Args:
            snapshot_dir: Directory of ``<collection>.json`` files.
        """
        self.snapshot_dir = Path(snapshot_dir) if snapshot_dir else get_snapshot_dir()
        self._cache: dict[str, list[tuple[str, dict]]] = {}

    def _documents(self, collection: str) -> list[tuple[str, dict]]:
        if collection not in self._cache:
            self._cache[collection] = self._load(collection)
        return self._cache[collection]

    def _load(self, collection: str) -> list[tuple[str, dict]]:
        path = self.snapshot_dir / f"{collection}.json"
        if not path.exists():
            logger.debug("No snapshot for %s at %s", collection, path)
            return []

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to fetch {collection}: {e}") from e

        if isinstance(data, dict):
            rows = [(str(doc_id), doc) for doc_id, doc in data.items()]
        elif isinstance(data, list):
            rows = [(str(doc.get("id", index)) if isinstance(doc, dict) else str(index), doc)
                    for index, doc in enumerate(data)]
        else:
            raise StoreError(f"Failed to fetch {collection}: expected a list or object")

        documents = []
        for doc_id, doc in rows:
            if not isinstance(doc, dict):
                logger.warning("Skipping non-object document %s in %s", doc_id, collection)
                continue
            documents.append((doc_id, doc))
        return documents


# =============================================================================
# FIRESTORE REST
# =============================================================================

def decode_value(value: dict) -> Any:
    """Convert a Firestore REST typed value to plain Python."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    for key in ("stringValue", "timestampValue", "referenceValue", "bytesValue"):
        if key in value:
            return value[key]
    if "geoPointValue" in value:
        return dict(value["geoPointValue"])
    return None


def decode_fields(fields: dict) -> dict:
    return {name: decode_value(v) for name, v in fields.items()}


def _encode_value(value: Any) -> dict:
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    return {"stringValue": str(value)}


class FirestoreRestStore(DocumentStore):
    """Reads collections through the Firestore REST API."""

    BASE_URL = "https://firestore.googleapis.com/v1"
    PAGE_SIZE = 300

    def __init__(
        self,
        project_id: str | None = None,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ):
        """Initialize with project credentials.

        Args:
            project_id: Firestore project; read from config if omitted.
            api_key: Web API key; read from config with the project.
            session: HTTP session to reuse.
            timeout: Per-request timeout in seconds.
        """
        if project_id is None:
            project_id, api_key = get_firestore_credentials()
        self.project_id = project_id
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def documents_url(self) -> str:
        return f"{self.BASE_URL}/projects/{self.project_id}/databases/(default)/documents"

    def _params(self, **extra) -> dict:
        params = {k: v for k, v in extra.items() if v is not None}
        if self.api_key:
            params["key"] = self.api_key
        return params

    @staticmethod
    def _parse_document(doc: dict) -> tuple[str, dict]:
        doc_id = doc.get("name", "").rsplit("/", 1)[-1]
        return doc_id, decode_fields(doc.get("fields", {}))

    def _documents(self, collection: str) -> list[tuple[str, dict]]:
        documents = []
        page_token = None
        try:
            while True:
                response = self.session.get(
                    f"{self.documents_url}/{collection}",
                    params=self._params(pageSize=self.PAGE_SIZE, pageToken=page_token),
                    timeout=self.timeout,
                )
                response.raise_for_status()
                payload = response.json()
                documents.extend(self._parse_document(d) for d in payload.get("documents", []))
                page_token = payload.get("nextPageToken")
                if not page_token:
                    break
        except (requests.RequestException, ValueError) as e:
            raise StoreError(f"Failed to fetch {collection}: {e}") from e
        return documents

    def _where(self, collection: str, field: str, value: Any) -> list[tuple[str, dict]]:
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field},
                        "op": "EQUAL",
                        "value": _encode_value(value),
                    }
                },
            }
        }
        try:
            response = self.session.post(
                f"{self.documents_url}:runQuery",
                params=self._params(),
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except (requests.RequestException, ValueError) as e:
            raise StoreError(f"Failed to fetch {collection}: {e}") from e

        # runQuery answers with one row per match plus bare readTime rows
        return [self._parse_document(row["document"]) for row in rows if "document" in row]
