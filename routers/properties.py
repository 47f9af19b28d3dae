# routers/properties.py
"""
Property CRUD routes. Every route is scoped to the signed-in landlord.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_owner_id, get_store
from schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse, PropertyListResponse
from services.errors import NotFoundError
from services.ledger_store import LedgerStore
from services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _not_found(e: NotFoundError) -> HTTPException:
     return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=PropertyListResponse, summary="List properties")
def list_properties(
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     properties = PropertyService.list_properties(store, owner_id)
     return PropertyListResponse(
          properties=[PropertyResponse.model_validate(p) for p in properties],
          total=len(properties),
     )


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(
     body: PropertyCreate,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     prop = PropertyService.create_property(store, owner_id, body.model_dump())
     return PropertyResponse.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyResponse, summary="Get property by ID")
def get_property(
     property_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     try:
          prop = PropertyService.get_property(store, owner_id, property_id)
     except NotFoundError as e:
          raise _not_found(e)
     return PropertyResponse.model_validate(prop)


@router.put("/{property_id}", response_model=PropertyResponse, summary="Update property")
def update_property(
     property_id: int,
     body: PropertyUpdate,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Update an existing property. Only provided fields will be updated.
     """
     try:
          prop = PropertyService.update_property(
               store, owner_id, property_id, body.model_dump(exclude_unset=True)
          )
     except NotFoundError as e:
          raise _not_found(e)
     return PropertyResponse.model_validate(prop)


@router.delete("/{property_id}", summary="Delete property")
def delete_property(
     property_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Delete a property. Its tenants are kept and detached from it.
     """
     try:
          detached = PropertyService.delete_property(store, owner_id, property_id)
     except NotFoundError as e:
          raise _not_found(e)
     return {"deleted": True, "property_id": property_id, "tenants_detached": detached}
