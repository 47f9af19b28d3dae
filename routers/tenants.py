# routers/tenants.py
"""
Tenant routes: CRUD, the tenant ledger, recording activities and reconcile.

Reading a tenant never writes. The client calls POST /{tenant_id}/reconcile
when it opens a tenant, which records a missing monthly rent charge and
repairs the stored meter reading if needed.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dependencies import get_owner_id, get_store
from models import Tenant
from schemas.activity import ActivityCreate, ActivityResponse, ReconcileResponse, TenantLedgerResponse
from schemas.tenant import TenantCreate, TenantUpdate, TenantResponse, TenantListResponse
from services.activity_service import record_activity
from services.balance_service import tenant_balance
from services.errors import NotFoundError, ValidationError
from services.ledger_store import LedgerStore
from services.tenant_service import TenantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


def _not_found(e: NotFoundError) -> HTTPException:
     return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _invalid(e: ValidationError) -> HTTPException:
     return HTTPException(
          status_code=422,
          detail={"field": e.field, "message": e.message},
     )


def _tenant_response(tenant: Tenant, balance=None) -> TenantResponse:
     response = TenantResponse.model_validate(tenant)
     response.balance = balance
     return response


def _load_tenant(store: LedgerStore, owner_id: int, tenant_id: int) -> Tenant:
     try:
          return TenantService.get_tenant(store, owner_id, tenant_id)
     except NotFoundError as e:
          raise _not_found(e)


@router.get("", response_model=TenantListResponse, summary="List tenants with balances")
def list_tenants(
     sort_by: str = Query("name", description="name, balance or status"),
     order: str = Query("asc", description="asc or desc"),
     group: bool = Query(False, description="Also group tenants by property name"),
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     try:
          rows = TenantService.list_tenants(store, owner_id, sort_by=sort_by, order=order)
     except ValidationError as e:
          raise _invalid(e)

     tenants = [_tenant_response(t, b) for t, b in rows]
     groups = None
     if group:
          groups = {
               name: [_tenant_response(t, b) for t, b in members]
               for name, members in TenantService.group_by_property(rows).items()
          }
     return TenantListResponse(tenants=tenants, total=len(tenants), groups=groups)


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new tenant"
)
def create_tenant(
     body: TenantCreate,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     try:
          tenant = TenantService.create_tenant(store, owner_id, body.model_dump())
     except NotFoundError as e:
          raise _not_found(e)
     return _tenant_response(tenant, tenant_balance([]))


@router.get("/{tenant_id}", response_model=TenantResponse, summary="Get tenant by ID")
def get_tenant(
     tenant_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     tenant = _load_tenant(store, owner_id, tenant_id)
     return _tenant_response(tenant, TenantService.tenant_balance(store, owner_id, tenant_id))


@router.put("/{tenant_id}", response_model=TenantResponse, summary="Update tenant")
def update_tenant(
     tenant_id: int,
     body: TenantUpdate,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Edit a tenant. Only provided fields will be updated; this is the only
     way a tenant's status changes.
     """
     try:
          tenant = TenantService.update_tenant(
               store, owner_id, tenant_id, body.model_dump(exclude_unset=True)
          )
     except NotFoundError as e:
          raise _not_found(e)
     except ValidationError as e:
          raise _invalid(e)
     return _tenant_response(tenant, TenantService.tenant_balance(store, owner_id, tenant_id))


@router.delete("/{tenant_id}", summary="Delete tenant and their ledger")
def delete_tenant(
     tenant_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     try:
          removed = TenantService.delete_tenant(store, owner_id, tenant_id)
     except NotFoundError as e:
          raise _not_found(e)
     return {"deleted": True, "tenant_id": tenant_id, "activities_deleted": removed}


@router.get(
     "/{tenant_id}/activities",
     response_model=TenantLedgerResponse,
     summary="Tenant ledger"
)
def get_tenant_ledger(
     tenant_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     tenant = _load_tenant(store, owner_id, tenant_id)
     activities = TenantService.tenant_activities(store, owner_id, tenant_id)
     responses = []
     for activity in activities:
          response = ActivityResponse.model_validate(activity)
          response.tenant_name = tenant.name
          responses.append(response)
     return TenantLedgerResponse(
          tenant_id=tenant_id,
          balance=tenant_balance(activities),
          activities=responses,
     )


@router.post(
     "/{tenant_id}/activities",
     response_model=ActivityResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record an activity"
)
def create_tenant_activity(
     tenant_id: int,
     body: ActivityCreate,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Record a ledger entry for a tenant.

     - **Payment**: amount required, stored positive
     - **Expense**: amount required, stored negative
     - **Electricity Bill**: current_meter_reading required; the charge is
       (reading - last reading) x multiplier, stored negative, and the
       tenant's last meter reading moves to the new reading
     """
     tenant = _load_tenant(store, owner_id, tenant_id)
     try:
          activity = record_activity(
               store,
               owner_id,
               tenant,
               body.type,
               description=body.description,
               activity_date=body.date,
               amount=body.amount,
               current_meter_reading=body.current_meter_reading,
          )
     except ValidationError as e:
          logger.info("Rejected %s for tenant %s: %s", body.type.value, tenant_id, e.message)
          raise _invalid(e)

     response = ActivityResponse.model_validate(activity)
     response.tenant_name = tenant.name
     return response


@router.post(
     "/{tenant_id}/reconcile",
     response_model=ReconcileResponse,
     summary="Record missing monthly rent and repair meter reading"
)
def reconcile_tenant(
     tenant_id: int,
     as_of: Optional[date] = Query(None, description="Reconcile as of this date (defaults to today)"),
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     tenant = _load_tenant(store, owner_id, tenant_id)
     result = TenantService.reconcile_tenant(store, owner_id, tenant, as_of=as_of)
     tenant = _load_tenant(store, owner_id, tenant_id)

     rent = result["rent_activity"]
     return ReconcileResponse(
          tenant_id=tenant_id,
          rent_activity=ActivityResponse.model_validate(rent) if rent is not None else None,
          meter_reading_repaired=result["meter_reading_repaired"],
          last_meter_reading=tenant.last_meter_reading,
          balance=TenantService.tenant_balance(store, owner_id, tenant_id),
     )
