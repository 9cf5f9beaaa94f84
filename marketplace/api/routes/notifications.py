"""Notification inbox API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from marketplace.api.auth import CurrentPrincipal
from marketplace.api.dependencies import NotificationInboxDep
from marketplace.api.schemas.notification import (
    NotificationBulkResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from marketplace.domain.entities.notification import NotificationType

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationListResponse)
async def list_notifications(
    principal: CurrentPrincipal,
    inbox: NotificationInboxDep,
    unread: bool = Query(False),
    type_filter: Optional[NotificationType] = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """Page through the caller's unexpired notifications, newest first."""
    result = await inbox.list_notifications(
        principal.id,
        unread_only=unread,
        notification_type=type_filter,
        page=page,
        limit=limit,
    )
    return NotificationListResponse(
        items=[NotificationResponse.from_entity(n) for n in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
        unread_count=result.unread_count,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(principal: CurrentPrincipal, inbox: NotificationInboxDep):
    return UnreadCountResponse(unread_count=await inbox.unread_count(principal.id))


@router.put("/mark-all-read", response_model=NotificationBulkResponse)
async def mark_all_read(principal: CurrentPrincipal, inbox: NotificationInboxDep):
    return NotificationBulkResponse(count=await inbox.mark_all_read(principal.id))


@router.delete("/clear-read", response_model=NotificationBulkResponse)
async def clear_read(principal: CurrentPrincipal, inbox: NotificationInboxDep):
    """Delete every notification the caller has already read."""
    return NotificationBulkResponse(count=await inbox.clear_read(principal.id))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID, principal: CurrentPrincipal, inbox: NotificationInboxDep
):
    notification = await inbox.mark_read(notification_id, principal.id)
    return NotificationResponse.from_entity(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID, principal: CurrentPrincipal, inbox: NotificationInboxDep
):
    await inbox.delete(notification_id, principal.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
