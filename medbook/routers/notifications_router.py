from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from ..application.ports.notifications_repo import NotificationDto
from ..application.services.notifications_service import NotificationsService
from ..dependencies import get_notifications_service
from ..exceptions import InternalError
from ..schemas.common.common import MessageResponse
from ..schemas.notifications.notification import MarkAllReadResponse, NotificationResponse, UnreadCountResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _to_response(n: NotificationDto) -> NotificationResponse:
    return NotificationResponse(
        id=n.id,
        type=n.type.value,
        title=n.title,
        message=n.message,
        doctorId=n.doctor_id,
        patientId=n.patient_id,
        appointmentId=n.appointment_id,
        isRead=n.is_read,
        createdAt=n.created_at,
    )


@router.get("/doctor/{doctor_id}", response_model=List[NotificationResponse])
def get_notifications(
    doctor_id: str,
    unread: bool = Query(False),
    notifications: NotificationsService = Depends(get_notifications_service),
):
    try:
        return [_to_response(n) for n in notifications.list_for_doctor(doctor_id, unread_only=unread)]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving notifications: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve notifications")


@router.get("/doctor/{doctor_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(doctor_id: str, notifications: NotificationsService = Depends(get_notifications_service)):
    try:
        return UnreadCountResponse(count=notifications.unread_count(doctor_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error counting notifications: {str(e)}", exc_info=True)
        raise InternalError("Failed to count notifications")


@router.post("/doctor/{doctor_id}/read-all", response_model=MarkAllReadResponse)
def mark_all_as_read(doctor_id: str, notifications: NotificationsService = Depends(get_notifications_service)):
    try:
        return MarkAllReadResponse(updated=notifications.mark_all_read(doctor_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error marking notifications as read: {str(e)}", exc_info=True)
        raise InternalError("Failed to mark notifications as read")


@router.post("/{notification_id}/read", response_model=MessageResponse)
def mark_as_read(notification_id: str, notifications: NotificationsService = Depends(get_notifications_service)):
    try:
        notifications.mark_read(notification_id)
        return MessageResponse(message="Notification marked as read")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error marking notification {notification_id} as read: {str(e)}", exc_info=True)
        raise InternalError("Failed to mark notification as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(notification_id: str, notifications: NotificationsService = Depends(get_notifications_service)):
    try:
        notifications.delete(notification_id)
        return MessageResponse(message="Notification deleted")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting notification {notification_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to delete notification")
