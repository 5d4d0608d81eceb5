# prixfinance/repository.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.cloud.firestore import FieldFilter

from errors import Conflict, NotFound
from resources import PROTECTED_FIELDS, ResourceConfig, is_missing


def now() -> datetime:
    return datetime.now(timezone.utc)


class Repository:
    """
    CRUD over one Firestore collection, keyed by the config's natural key.

    Every operation re-reads the store. Uniqueness is enforced by
    query-before-write, so two concurrent creates for the same key can
    both succeed.
    """

    def __init__(self, config: ResourceConfig, db):
        self.config = config
        self.db = db

    @property
    def collection(self):
        return self.db.collection(self.config.collection)

    def normalize(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Applies the config's coercion rules to every present field."""
        normalized = {}
        for name, value in values.items():
            coerce = self.config.coercions.get(name)
            if coerce is not None and not is_missing(value):
                value = coerce(name, value)
            normalized[name] = value
        return normalized

    def _query(self, filters: Dict[str, Any]):
        query = self.collection
        for name, value in filters.items():
            query = query.where(filter=FieldFilter(name, "==", value))
        return query

    def find(self, key: Dict[str, Any]):
        """Returns the snapshot owning `key` (already normalized), or None."""
        if self.config.document_key:
            snapshot = self.collection.document(key[self.config.document_key]).get()
            return snapshot if snapshot.exists else None

        for doc in self._query(key).limit(1).stream():
            return doc
        return None

    def _locate(self, key: Dict[str, Any]):
        snapshot = self.find(key)
        if snapshot is None:
            raise NotFound(self.config.describe(self.config.not_found, key))
        return snapshot

    def _check_available(self, key: Dict[str, Any]) -> None:
        if self.find(key) is not None:
            raise Conflict(self.config.describe(self.config.conflict, key))

    def _writable(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        blocked = PROTECTED_FIELDS | set(self.config.key_fields) | set(self.config.created_fields)
        allowed = self.config.fields
        return {
            name: value
            for name, value in payload.items()
            if name not in blocked and (allowed is None or name in allowed)
        }

    def create(self, key: Dict[str, Any], payload: Optional[Dict[str, Any]] = None) -> str:
        key = self.normalize(key)
        if self.config.unique:
            self._check_available(key)

        document = {**key, **self.normalize(self._writable(payload or {}))}
        for name, default in self.config.defaults.items():
            if is_missing(document.get(name)):
                document[name] = default(document) if callable(default) else default

        stamp = now()
        for name in self.config.created_fields:
            document[name] = stamp

        if self.config.document_key:
            doc_ref = self.collection.document(key[self.config.document_key])
            doc_ref.set(document, merge=True)
            return doc_ref.id

        _, doc_ref = self.collection.add(document)
        return doc_ref.id

    def get(self, key: Dict[str, Any]) -> Dict[str, Any]:
        snapshot = self._locate(self.normalize(key))
        return {"id": snapshot.id, **snapshot.to_dict()}

    def update(
        self,
        key: Dict[str, Any],
        changes: Dict[str, Any],
        new_key: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Partial update of the document owning `key`.

        `new_key` holds replacement values for key fields (a rename). The
        prospective key is checked for conflicts before anything is written;
        a rename to the current key is a no-op, not a conflict.
        """
        key = self.normalize(key)
        snapshot = self.find(key)
        if snapshot is None:
            if self.config.upsert:
                return self.create(key, changes)
            raise NotFound(self.config.describe(self.config.not_found, key))

        # null or "" means "not supplied": the stored value is left as it is
        supplied = {name: value for name, value in changes.items() if not is_missing(value)}
        updates = self.normalize(self._writable(supplied))

        renamed = {name: value for name, value in (new_key or {}).items() if not is_missing(value)}
        unknown = set(renamed) - set(self.config.key_fields)
        if unknown:
            raise ValueError(f"{sorted(unknown)} are not key fields of {self.config.name}")
        if renamed:
            prospective = {**key, **self.normalize(renamed)}
            if prospective != key:
                self._check_available(prospective)
                updates.update({name: value for name, value in prospective.items() if key[name] != value})

        updates["updatedAt"] = now()
        # update() reads keys as field paths; free-form keys must stay literal
        if self.config.document_key or self.config.fields is None:
            snapshot.reference.set(updates, merge=True)
        else:
            snapshot.reference.update(updates)
        return snapshot.id

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        docs = self._query(self.normalize(filters or {})).stream()
        return [{"id": doc.id, **doc.to_dict()} for doc in docs]

    def delete(self, key: Dict[str, Any]) -> str:
        snapshot = self._locate(self.normalize(key))
        snapshot.reference.delete()
        return snapshot.id
