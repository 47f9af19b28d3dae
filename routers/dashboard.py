# routers/dashboard.py
from fastapi import APIRouter, Depends

import config
from dependencies import get_owner_id, get_store
from models import TenantStatus
from schemas.activity import ActivityResponse
from schemas.dashboard import DashboardResponse
from services.balance_service import portfolio_amount_owed, recent_activity_feed, window_start
from services.ledger_store import LedgerStore

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse, summary="Portfolio summary")
def get_dashboard(
     store: LedgerStore = Depends(get_store),
     owner_id: int = Depends(get_owner_id)
):
     """
     Counts, the amount owed by Active tenants over the last
     OWED_WINDOW_MONTHS months, and the most recent activities.
     """
     months = config.OWED_WINDOW_MONTHS
     properties = store.query_by_owner("properties", owner_id)
     tenants = store.query_by_owner("tenants", owner_id)
     activities = store.query_by_owner(
          "activities", owner_id, date_from=window_start(months=months)
     )
     tenant_names = {t.id: t.name for t in tenants}

     recent = []
     for activity in recent_activity_feed(activities, limit=config.RECENT_FEED_LIMIT, window_months=months):
          response = ActivityResponse.model_validate(activity)
          response.tenant_name = tenant_names.get(activity.tenant_id)
          recent.append(response)

     return DashboardResponse(
          property_count=len(properties),
          tenant_count=len(tenants),
          active_tenant_count=sum(1 for t in tenants if t.status == TenantStatus.ACTIVE),
          total_amount_owed=portfolio_amount_owed(tenants, activities, window_months=months),
          window_months=months,
          recent_activities=recent,
     )
