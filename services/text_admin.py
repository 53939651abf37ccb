# services/text_admin.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import logging

from app.errors import DatabaseError, ValidationError
from app.validation import validate_text_fields
from utils.db_helper import TextStore

log = logging.getLogger(__name__)


@dataclass
class Response:
    status: int
    body: Any = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class TextAdmin:
    """
    Request/response front for the text store, one handler per route:

        GET    /texts         -> list of records
        POST   /add-text      -> {"success": true, "text": record}
        PUT    /update-text   -> body {"id": ..., <fields>}
        DELETE /delete-text   -> body {"id": ...}

    Failures come back as status codes, never as exceptions.
    """

    def __init__(self, store: TextStore):
        self.store = store
        self._routes = {
            "/texts": ("GET", self._list),
            "/add-text": ("POST", self._create),
            "/update-text": ("PUT", self._update),
            "/delete-text": ("DELETE", self._delete),
        }

    def handle(self, method: str, route: str, body: Optional[Mapping[str, Any]] = None) -> Response:
        entry = self._routes.get(route)
        if entry is None:
            return Response(404, {"success": False, "error": f"unknown route {route}"})
        expected, handler = entry
        if method.upper() != expected:
            return Response(405)
        if body is not None and not isinstance(body, Mapping):
            return Response(400, {"success": False, "error": "request body must be an object"})
        try:
            return handler(dict(body or {}))
        except ValidationError as e:
            return Response(400, {"success": False, "error": str(e), "field": e.field})
        except DatabaseError as e:
            log.error("%s %s failed: %s", method, route, e)
            return Response(500, {"success": False, "error": str(e)})

    # convenience wrappers used by the admin dialog
    def list(self) -> Response:
        return self.handle("GET", "/texts")

    def create(self, fields: Mapping[str, Any]) -> Response:
        return self.handle("POST", "/add-text", fields)

    def update(self, ident, fields: Mapping[str, Any]) -> Response:
        return self.handle("PUT", "/update-text", {**fields, "id": ident})

    def delete(self, ident) -> Response:
        return self.handle("DELETE", "/delete-text", {"id": ident})

    # ---------------- handlers ----------------
    def _list(self, body: Dict[str, Any]) -> Response:
        return Response(200, self.store.list_texts())

    def _create(self, body: Dict[str, Any]) -> Response:
        fields = validate_text_fields(body)
        if body.get("slug"):
            fields["slug"] = str(body["slug"])
        record = self.store.create_text(fields)
        return Response(200, {"success": True, "text": record})

    def _update(self, body: Dict[str, Any]) -> Response:
        ident = self._require_id(body)
        fields = validate_text_fields(body, partial=True)
        if not self.store.update_text(ident, fields):
            return Response(404, {"success": False, "error": "not found"})
        return Response(200, {"success": True})

    def _delete(self, body: Dict[str, Any]) -> Response:
        ident = self._require_id(body)
        if not self.store.delete_text(ident):
            return Response(404, {"success": False, "error": "not found"})
        return Response(200, {"success": True})

    @staticmethod
    def _require_id(body: Dict[str, Any]):
        ident = body.pop("id", None)
        if ident is None or (isinstance(ident, str) and not ident.strip()):
            raise ValidationError("id is required", field="id")
        return ident
