# routers/activities.py
"""
Activity routes across all of a landlord's tenants: the recent-activity feed,
activity details and share links.

Activities are immutable; there is no update or delete route.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

import config
from dependencies import get_owner_id, get_store
from models import Activity
from schemas.activity import (
     ActivityDetailResponse,
     ActivityFeedResponse,
     ActivityResponse,
     ElectricityBreakdown,
     ShareResponse,
)
from services.balance_service import recent_activity_feed, window_start
from services.ledger_store import LedgerStore
from utils.sharing import build_share_message, electricity_breakdown, sms_link, whatsapp_link

router = APIRouter(prefix="/api/activities", tags=["activities"])


def _load_activity(store: LedgerStore, owner_id: int, activity_id: int) -> Activity:
     activity = store.get_by_id("activities", activity_id, owner_id)
     if activity is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Activity with ID {activity_id} not found"
          )
     return activity


@router.get("", response_model=ActivityFeedResponse, summary="Recent activity feed")
def list_recent_activities(
     limit: int = Query(config.RECENT_FEED_LIMIT, ge=1, le=100, description="Maximum entries"),
     months: int = Query(config.OWED_WINDOW_MONTHS, ge=1, le=120, description="Window in months"),
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Newest activities first (by creation time, else by date), limited to the
     last `months` months.
     """
     activities = store.query_by_owner(
          "activities", owner_id, date_from=window_start(months=months)
     )
     tenant_names = {t.id: t.name for t in store.query_by_owner("tenants", owner_id)}

     feed = []
     for activity in recent_activity_feed(activities, limit=limit, window_months=months):
          response = ActivityResponse.model_validate(activity)
          response.tenant_name = tenant_names.get(activity.tenant_id)
          feed.append(response)
     return ActivityFeedResponse(activities=feed, window_months=months, limit=limit)


@router.get("/{activity_id}", response_model=ActivityDetailResponse, summary="Get activity by ID")
def get_activity(
     activity_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     activity = _load_activity(store, owner_id, activity_id)
     response = ActivityDetailResponse.model_validate(activity)
     response.tenant_name = activity.tenant.name if activity.tenant else None
     breakdown = electricity_breakdown(activity)
     if breakdown is not None:
          response.electricity_breakdown = ElectricityBreakdown(**breakdown)
     return response


@router.get("/{activity_id}/share", response_model=ShareResponse, summary="Share message and links")
def share_activity(
     activity_id: int,
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Plain-text message for the activity plus WhatsApp and SMS links to the
     tenant's phone number.
     """
     activity = _load_activity(store, owner_id, activity_id)
     phone = activity.tenant.phone if activity.tenant else None
     message = build_share_message(activity)
     return ShareResponse(
          message=message,
          whatsapp_url=whatsapp_link(phone, message),
          sms_url=sms_link(phone, message),
     )
