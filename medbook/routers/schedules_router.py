from typing import List
from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.ports.schedule_repo import ScheduleDto
from ..application.services.schedule_service import ScheduleService
from ..dependencies import get_schedule_service
from ..exceptions import InternalError
from ..schemas.common.common import MessageResponse
from ..schemas.schedules.schedule import ScheduleActiveUpdate, ScheduleCreate, ScheduleResponse, ScheduleUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["Schedules"])


def _to_response(s: ScheduleDto) -> ScheduleResponse:
    return ScheduleResponse(
        id=s.id,
        doctorId=s.doctor_id,
        dayOfWeek=s.day_of_week,
        startTime=s.start_time,
        endTime=s.end_time,
        isActive=s.is_active,
    )


@router.get("/doctor/{doctor_id}", response_model=List[ScheduleResponse])
def list_schedules(doctor_id: str, schedule_service: ScheduleService = Depends(get_schedule_service)):
    try:
        return [_to_response(s) for s in schedule_service.list_for_doctor(doctor_id)]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving schedules for doctor {doctor_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to retrieve schedules")


@router.post("", response_model=ScheduleResponse, status_code=201)
def create_schedule(body: ScheduleCreate, schedule_service: ScheduleService = Depends(get_schedule_service)):
    try:
        entry = schedule_service.create(body.doctorId, body.dayOfWeek, body.startTime, body.endTime)
        logger.info(f"Created schedule {entry.id} for doctor {entry.doctor_id} day {entry.day_of_week}")
        return _to_response(entry)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating schedule: {str(e)}", exc_info=True)
        raise InternalError("Failed to create schedule")


@router.put("/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(schedule_id: str, body: ScheduleUpdate, schedule_service: ScheduleService = Depends(get_schedule_service)):
    try:
        return _to_response(schedule_service.update_times(schedule_id, body.startTime, body.endTime))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating schedule {schedule_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to update schedule")


@router.patch("/{schedule_id}/active", response_model=ScheduleResponse)
def set_schedule_active(schedule_id: str, body: ScheduleActiveUpdate, schedule_service: ScheduleService = Depends(get_schedule_service)):
    try:
        return _to_response(schedule_service.set_active(schedule_id, body.isActive))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating schedule {schedule_id} state: {str(e)}", exc_info=True)
        raise InternalError("Failed to update schedule state")


@router.delete("/{schedule_id}", response_model=MessageResponse)
def delete_schedule(schedule_id: str, schedule_service: ScheduleService = Depends(get_schedule_service)):
    try:
        schedule_service.delete(schedule_id)
        return MessageResponse(message="Schedule deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting schedule {schedule_id}: {str(e)}", exc_info=True)
        raise InternalError("Failed to delete schedule")
