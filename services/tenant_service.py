# services/tenant_service.py
"""
Tenant Service - tenant lifecycle and the per-tenant ledger operations.

Status (Active / Inactive / Pending) changes only through update_tenant.
last_meter_reading is never set here directly; it moves when an Electricity
Bill is recorded (services.activity_service.record_activity) or when
reconcile_tenant repairs it from the latest bill.
"""
import logging
import re
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from models import Activity, ActivityType, Tenant, TenantStatus
from .balance_service import tenant_balance, tenant_balances
from .errors import DuplicateRecordError, NotFoundError, ValidationError
from .ledger_store import LedgerStore
from .rent_service import ensure_monthly_rent

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = "91"
UNASSIGNED_PROPERTY = "Unassigned"
SORT_FIELDS = ("name", "balance", "status")
REQUIRED_FIELDS = ("name", "rent_amount", "status")


def format_phone(phone: Optional[str], country_code: Optional[str] = None) -> Optional[str]:
     """
     Store phones as '+<country code> <digits>'.

     An already-prefixed number ('+44 7700900123') is kept as is.
     """
     if not phone:
          return None
     phone = phone.strip()
     if phone.startswith("+"):
          return phone
     digits = re.sub(r"[^0-9]", "", phone)
     code = re.sub(r"[^0-9]", "", country_code or "") or DEFAULT_COUNTRY_CODE
     return f"+{code} {digits}"


class TenantService:
     """Service class for tenant-related business logic."""

     @staticmethod
     def get_tenant(store: LedgerStore, owner_id: int, tenant_id: int) -> Tenant:
          tenant = store.get_by_id("tenants", tenant_id, owner_id)
          if tenant is None:
               raise NotFoundError(f"Tenant with ID {tenant_id} not found")
          return tenant

     @staticmethod
     def _property_name(store: LedgerStore, owner_id: int, property_id: Optional[int]) -> Optional[str]:
          if property_id is None:
               return None
          prop = store.get_by_id("properties", property_id, owner_id)
          if prop is None:
               raise NotFoundError(f"Property with ID {property_id} not found")
          return prop.name

     @staticmethod
     def create_tenant(store: LedgerStore, owner_id: int, data: Dict[str, Any]) -> Tenant:
          """
          Create a tenant.

          Args:
               store: LedgerStore for the current request
               owner_id: ID of the landlord
               data: tenant fields (see schemas.tenant.TenantCreate)

          Returns:
               Created Tenant object

          Raises:
               NotFoundError: If property_id is not one of the owner's properties
          """
          data = dict(data)
          country_code = data.pop("country_code", None)
          data["phone"] = format_phone(data.get("phone"), country_code)
          data["property_name"] = TenantService._property_name(store, owner_id, data.get("property_id"))
          if data.get("base_electricity_multiplier") is None:
               data.pop("base_electricity_multiplier", None)

          tenant = Tenant(owner_id=owner_id, **data)
          store.insert("tenants", tenant)
          logger.info("Created tenant %s for owner %s", tenant.id, owner_id)
          return tenant

     @staticmethod
     def update_tenant(store: LedgerStore, owner_id: int, tenant_id: int, data: Dict[str, Any]) -> Tenant:
          """
          Apply an explicit edit to a tenant (only the fields present in data).

          Raises:
               ValidationError: If the edit tries to set last_meter_reading
               NotFoundError: If the tenant or the new property doesn't exist
          """
          tenant = TenantService.get_tenant(store, owner_id, tenant_id)
          changes = {k: v for k, v in data.items() if v is not None or k not in REQUIRED_FIELDS}
          if "last_meter_reading" in changes:
               raise ValidationError(
                    "last_meter_reading is set by recording an Electricity Bill",
                    field="last_meter_reading",
               )

          country_code = changes.pop("country_code", None)
          if "phone" in changes:
               changes["phone"] = format_phone(changes["phone"], country_code)
          if "property_id" in changes:
               changes["property_name"] = TenantService._property_name(store, owner_id, changes["property_id"])

          old_status = tenant.status
          store.update("tenants", tenant_id, owner_id, changes)
          if "status" in changes and changes["status"] != old_status:
               logger.info("Tenant %s status %s -> %s", tenant_id, old_status, changes["status"])
          return tenant

     @staticmethod
     def delete_tenant(store: LedgerStore, owner_id: int, tenant_id: int) -> int:
          """
          Delete a tenant and their whole ledger.

          Activities go first, then the tenant: an interruption in between
          leaves orphaned activities rather than activities pointing at a
          half-deleted tenant.

          Returns:
               Number of activities deleted
          """
          TenantService.get_tenant(store, owner_id, tenant_id)
          removed = store.delete_where("activities", owner_id, {"tenant_id": tenant_id})
          store.delete("tenants", tenant_id, owner_id)
          logger.info("Deleted tenant %s and %s activities", tenant_id, removed)
          return removed

     @staticmethod
     def tenant_activities(store: LedgerStore, owner_id: int, tenant_id: int) -> List[Activity]:
          """The tenant's ledger, newest date first."""
          return store.query_by_owner(
               "activities", owner_id, filters={"tenant_id": tenant_id}, order_by="-date"
          )

     @staticmethod
     def tenant_balance(store: LedgerStore, owner_id: int, tenant_id: int) -> Decimal:
          return tenant_balance(TenantService.tenant_activities(store, owner_id, tenant_id))

     @staticmethod
     def reconcile_tenant(
          store: LedgerStore,
          owner_id: int,
          tenant: Tenant,
          as_of: Optional[date] = None,
     ) -> Dict[str, Any]:
          """
          Bring a tenant's derived state up to date.

          1. Record this month's rent charge if it is missing (Active tenants)
          2. Move last_meter_reading up to the latest Electricity Bill's
             reading if an earlier write left it behind

          Safe to call repeatedly; a second call in the same month does nothing.

          Returns:
               {"rent_activity": Activity | None, "meter_reading_repaired": bool}
          """
          tenant_id = tenant.id
          activities = TenantService.tenant_activities(store, owner_id, tenant_id)

          rent_activity = ensure_monthly_rent(tenant, activities, as_of=as_of)
          if rent_activity is not None:
               try:
                    store.insert("activities", rent_activity)
                    logger.info("Recorded '%s' for tenant %s", rent_activity.description, tenant_id)
               except DuplicateRecordError:
                    # Another request recorded it first
                    logger.info("Monthly rent for tenant %s already recorded", tenant_id)
                    rent_activity = None
                    tenant = TenantService.get_tenant(store, owner_id, tenant_id)
                    activities = TenantService.tenant_activities(store, owner_id, tenant_id)

          repaired = False
          bills = [a for a in activities if a.type == ActivityType.ELECTRICITY_BILL]
          if bills:
               latest = max(bills, key=lambda a: a.id)
               reading = latest.current_meter_reading
               if reading is not None and (
                    tenant.last_meter_reading is None or reading > tenant.last_meter_reading
               ):
                    store.update("tenants", tenant_id, owner_id, {"last_meter_reading": reading})
                    logger.warning(
                         "Repaired last_meter_reading for tenant %s to %s from activity %s",
                         tenant_id, reading, latest.id,
                    )
                    repaired = True

          return {"rent_activity": rent_activity, "meter_reading_repaired": repaired}

     @staticmethod
     def list_tenants(
          store: LedgerStore,
          owner_id: int,
          sort_by: str = "name",
          order: str = "asc",
     ) -> List[Tuple[Tenant, Decimal]]:
          """
          All of the owner's tenants with their running balance.

          sort_by: "name", "balance" or "status"; order: "asc" or "desc"
          """
          if sort_by not in SORT_FIELDS:
               raise ValidationError(f"Cannot sort by '{sort_by}'", field="sort_by")
          if order not in ("asc", "desc"):
               raise ValidationError(f"Unknown sort order '{order}'", field="order")

          tenants = store.query_by_owner("tenants", owner_id)
          balances = tenant_balances(store.query_by_owner("activities", owner_id))
          rows = [(t, balances.get(t.id, Decimal("0"))) for t in tenants]

          if sort_by == "name":
               key = lambda row: (row[0].name or "").lower()
          elif sort_by == "balance":
               key = lambda row: row[1]
          else:
               key = lambda row: TenantStatus(row[0].status).value
          rows.sort(key=key, reverse=(order == "desc"))
          return rows

     @staticmethod
     def group_by_property(rows: List[Tuple[Tenant, Decimal]]) -> Dict[str, List[Tuple[Tenant, Decimal]]]:
          """Group list_tenants() rows by cached property name."""
          groups: Dict[str, List[Tuple[Tenant, Decimal]]] = {}
          for tenant, balance in rows:
               groups.setdefault(tenant.property_name or UNASSIGNED_PROPERTY, []).append((tenant, balance))
          return groups
