# services/property_service.py
import logging
from typing import Any, Dict, List

from models import Property
from .errors import NotFoundError
from .ledger_store import LedgerStore

logger = logging.getLogger(__name__)


class PropertyService:
     """Service class for property CRUD."""

     @staticmethod
     def get_property(store: LedgerStore, owner_id: int, property_id: int) -> Property:
          prop = store.get_by_id("properties", property_id, owner_id)
          if prop is None:
               raise NotFoundError(f"Property with ID {property_id} not found")
          return prop

     @staticmethod
     def list_properties(store: LedgerStore, owner_id: int) -> List[Property]:
          return store.query_by_owner("properties", owner_id, order_by="name")

     @staticmethod
     def create_property(store: LedgerStore, owner_id: int, data: Dict[str, Any]) -> Property:
          prop = Property(owner_id=owner_id, **data)
          store.insert("properties", prop)
          logger.info("Created property %s for owner %s", prop.id, owner_id)
          return prop

     @staticmethod
     def update_property(store: LedgerStore, owner_id: int, property_id: int, data: Dict[str, Any]) -> Property:
          prop = PropertyService.get_property(store, owner_id, property_id)
          # name, units and status cannot be cleared
          changes = {k: v for k, v in data.items() if v is not None or k == "address"}
          store.update("properties", property_id, owner_id, changes)
          return prop

     @staticmethod
     def delete_property(store: LedgerStore, owner_id: int, property_id: int) -> int:
          """
          Delete a property. Its tenants stay, detached from it but keeping
          the cached property name.

          Returns:
               Number of tenants detached
          """
          PropertyService.get_property(store, owner_id, property_id)
          tenants = store.query_by_owner("tenants", owner_id, filters={"property_id": property_id})
          for tenant in tenants:
               store.update("tenants", tenant.id, owner_id, {"property_id": None})
          store.delete("properties", property_id, owner_id)
          logger.info("Deleted property %s (%s tenants detached)", property_id, len(tenants))
          return len(tenants)
