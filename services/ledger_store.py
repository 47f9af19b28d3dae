# services/ledger_store.py
"""
Ledger Store - owner-scoped access to properties, tenants and activities.

All reads and writes of ledger data go through LedgerStore so that:
1. Every query is filtered by owner_id (no cross-owner access)
2. Database failures surface as StoreError instead of raw SQLAlchemy errors
3. Listeners registered with subscribe() are pushed fresh results once the
   writes are committed

The store flushes but never commits; the request session (database.get_session)
commits everything a request wrote in one transaction. Writes only mark their
(collection, owner) as changed; listeners are refreshed from the committed data
in the session's after_commit event, and a rollback discards the marks.
"""
import logging
import threading
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import Activity, Property, Tenant
from .errors import DuplicateRecordError, NotFoundError, StoreError

logger = logging.getLogger(__name__)

COLLECTIONS = {
     "properties": Property,
     "tenants": Tenant,
     "activities": Activity,
}

Listener = Callable[[List[Any], Optional[Exception]], None]


class Subscription:
     """Handle returned by LedgerStore.subscribe(); call unsubscribe() to stop."""

     def __init__(self, hub: "SubscriptionHub", collection: str, owner_id: int,
                  callback: Listener, query: Dict[str, Any]):
          self.hub = hub
          self.collection = collection
          self.owner_id = owner_id
          self.callback = callback
          self.query = query
          self.active = True

     def unsubscribe(self) -> None:
          if self.active:
               self.hub.remove(self)
               self.active = False


class SubscriptionHub:
     """Process-wide registry of live query listeners, keyed by (collection, owner)."""

     def __init__(self):
          self._lock = threading.Lock()
          self._subscriptions = defaultdict(list)

     def add(self, subscription: Subscription) -> None:
          with self._lock:
               self._subscriptions[(subscription.collection, subscription.owner_id)].append(subscription)

     def remove(self, subscription: Subscription) -> None:
          key = (subscription.collection, subscription.owner_id)
          with self._lock:
               if subscription in self._subscriptions[key]:
                    self._subscriptions[key].remove(subscription)

     def listeners(self, collection: str, owner_id: int) -> List[Subscription]:
          with self._lock:
               return list(self._subscriptions.get((collection, owner_id), []))


hub = SubscriptionHub()


class LedgerStore:
     """Owner-scoped record store over a SQLAlchemy session."""

     def __init__(self, db: Session, subscriptions: SubscriptionHub = hub, track_commits: bool = True):
          self.db = db
          self.subscriptions = subscriptions
          # (collection, owner_id) pairs written since the last commit
          self._pending = set()
          if track_commits:
               event.listen(db, "after_commit", self._after_commit)
               event.listen(db, "after_rollback", self._after_rollback)

     # ------------------------------------------------------------------
     # Helpers
     # ------------------------------------------------------------------

     @staticmethod
     def _model(collection: str):
          try:
               return COLLECTIONS[collection]
          except KeyError:
               raise ValueError(f"Unknown collection '{collection}'")

     def _flush(self, action: str, collection: str) -> None:
          try:
               self.db.flush()
          except IntegrityError as e:
               self.db.rollback()
               logger.warning("Duplicate %s in %s: %s", action, collection, e.orig)
               raise DuplicateRecordError(f"Duplicate record in {collection}") from e
          except SQLAlchemyError as e:
               self.db.rollback()
               logger.error("Store %s failed on %s: %s", action, collection, e)
               raise StoreError(f"Failed to {action} {collection}") from e

     # ------------------------------------------------------------------
     # Writes
     # ------------------------------------------------------------------

     def insert(self, collection: str, record) -> int:
          """
          Add a record (model instance or dict of columns) and return its id.

          The record gets its identity and server-side created_at here.
          """
          model = self._model(collection)
          if isinstance(record, dict):
               record = model(**record)
          if record.owner_id is None:
               raise ValueError("owner_id is required")
          self.db.add(record)
          self._flush("insert", collection)
          try:
               self.db.refresh(record)
          except SQLAlchemyError as e:
               raise StoreError(f"Failed to reload {collection} record") from e
          self._pending.add((collection, record.owner_id))
          return record.id

     def update(self, collection: str, record_id: int, owner_id: int, partial: Dict[str, Any]) -> None:
          """Merge-style update: only the given attributes change."""
          record = self.get_by_id(collection, record_id, owner_id)
          if record is None:
               raise NotFoundError(f"{collection} record {record_id} not found")
          model = self._model(collection)
          for key, value in partial.items():
               if key in ("id", "owner_id") or not hasattr(model, key):
                    raise ValueError(f"Cannot update '{key}' on {collection}")
               setattr(record, key, value)
          self._flush("update", collection)
          self._pending.add((collection, owner_id))

     def delete(self, collection: str, record_id: int, owner_id: int) -> None:
          record = self.get_by_id(collection, record_id, owner_id)
          if record is None:
               raise NotFoundError(f"{collection} record {record_id} not found")
          self.db.delete(record)
          self._flush("delete", collection)
          self._pending.add((collection, owner_id))

     def delete_where(self, collection: str, owner_id: int, filters: Dict[str, Any]) -> int:
          """Delete every owner record matching the equality filters; returns the count."""
          records = self.query_by_owner(collection, owner_id, filters=filters)
          for record in records:
               self.db.delete(record)
          if records:
               self._flush("delete", collection)
               self._pending.add((collection, owner_id))
          return len(records)

     # ------------------------------------------------------------------
     # Reads
     # ------------------------------------------------------------------

     def get_by_id(self, collection: str, record_id: int, owner_id: int):
          """Return the record, or None if missing or owned by someone else."""
          model = self._model(collection)
          try:
               return (
                    self.db.query(model)
                    .filter(model.id == record_id, model.owner_id == owner_id)
                    .first()
               )
          except SQLAlchemyError as e:
               logger.error("Store read failed on %s: %s", collection, e)
               raise StoreError(f"Failed to load {collection} record") from e

     def query_by_owner(
          self,
          collection: str,
          owner_id: int,
          filters: Optional[Dict[str, Any]] = None,
          order_by: Optional[str] = None,
          limit: Optional[int] = None,
          date_from: Optional[date] = None,
          date_to: Optional[date] = None,
     ) -> List[Any]:
          """
          List an owner's records.

          filters: equality filters, e.g. {"tenant_id": 3}
          order_by: column name, prefixed with "-" for descending
          date_from / date_to: inclusive range over the "date" column
          """
          model = self._model(collection)
          query = self.db.query(model).filter(model.owner_id == owner_id)

          for key, value in (filters or {}).items():
               if not hasattr(model, key):
                    raise ValueError(f"Unknown filter '{key}' on {collection}")
               query = query.filter(getattr(model, key) == value)

          if date_from is not None or date_to is not None:
               if not hasattr(model, "date"):
                    raise ValueError(f"{collection} has no date column")
               if date_from is not None:
                    query = query.filter(model.date >= date_from)
               if date_to is not None:
                    query = query.filter(model.date <= date_to)

          if order_by:
               descending = order_by.startswith("-")
               column = getattr(model, order_by.lstrip("-"))
               query = query.order_by(column.desc() if descending else column.asc())
               # Deterministic order for equal sort keys
               query = query.order_by(model.id.desc() if descending else model.id.asc())
          else:
               query = query.order_by(model.id.asc())

          if limit is not None:
               query = query.limit(limit)

          try:
               return query.all()
          except SQLAlchemyError as e:
               logger.error("Store query failed on %s: %s", collection, e)
               raise StoreError(f"Failed to load {collection}") from e

     # ------------------------------------------------------------------
     # Live queries
     # ------------------------------------------------------------------

     def subscribe(
          self,
          collection: str,
          owner_id: int,
          callback: Listener,
          filters: Optional[Dict[str, Any]] = None,
          order_by: Optional[str] = None,
          limit: Optional[int] = None,
     ) -> Subscription:
          """
          Register a live query.

          callback(records, error) is called right away with the current
          result and again after each committed write to the collection for
          this owner.
          A failed query delivers ([], error) so the listener still learns
          that loading finished.
          """
          self._model(collection)
          query = {"filters": filters, "order_by": order_by, "limit": limit}
          subscription = Subscription(self.subscriptions, collection, owner_id, callback, query)
          self.subscriptions.add(subscription)
          self._deliver(subscription)
          return subscription

     def _deliver(self, subscription: Subscription) -> None:
          try:
               records = self.query_by_owner(
                    subscription.collection, subscription.owner_id, **subscription.query
               )
          except StoreError as e:
               subscription.callback([], e)
               return
          subscription.callback(records, None)

     def _after_commit(self, session: Session) -> None:
          pending, self._pending = self._pending, set()
          for collection, owner_id in sorted(pending):
               self._notify(collection, owner_id)

     def _after_rollback(self, session: Session) -> None:
          self._pending.clear()

     def _notify(self, collection: str, owner_id: int) -> None:
          listeners = self.subscriptions.listeners(collection, owner_id)
          if not listeners:
               return
          # The writer's session cannot emit SQL inside after_commit; read the
          # committed rows through a short-lived session of our own
          with Session(bind=self.db.get_bind(), expire_on_commit=False) as reader:
               reader_store = LedgerStore(reader, self.subscriptions, track_commits=False)
               for subscription in listeners:
                    try:
                         reader_store._deliver(subscription)
                    except Exception:
                         logger.exception("Listener on %s raised; continuing", collection)
