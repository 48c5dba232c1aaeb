"""GET /v1/calendar - Current billing month"""

from fastapi import APIRouter, Depends

from solar_gateway.api.dependencies import get_calendar
from solar_gateway.api.v1.schemas import CalendarResponse
from solar_gateway.domain.calendar import Calendar

router = APIRouter()


@router.get("/calendar", response_model=CalendarResponse)
def get_calendar_state(calendar: Calendar = Depends(get_calendar)):
    return CalendarResponse(month=calendar.current_month, current_date=calendar.current_date)
