from typing import List

from django.http import HttpRequest
from ninja import Router

from apps.identity.dtos import MessageOut
from apps.identity.security import require_auth
from .dtos import NotificationOut
from . import services

router = Router(tags=["Notifications"])


@router.get("", response=List[NotificationOut], by_alias=True)
def get_notifications(request: HttpRequest):
    """
    List the current user's notifications, newest first.

    Listing marks them read; the response still shows the previous state.
    """
    user = require_auth(request)
    return services.list_notifications(user)


@router.delete("", response=MessageOut)
def delete_notifications(request: HttpRequest):
    user = require_auth(request)
    services.clear_notifications(user)
    return {"message": "All notifications deleted"}
