"""
Holiday calendar schemas
"""
from datetime import date as date_type

from pydantic import BaseModel, ConfigDict

from leavedesk.models.holiday import HolidayType, OfficeStatus


class HolidayOut(BaseModel):
    """A stored holiday. Only office_status=closed removes the day from leave counts."""
    id: int
    date: date_type
    name: str
    type: HolidayType
    office_status: OfficeStatus

    model_config = ConfigDict(from_attributes=True)
