# app/modules/couriers/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List
from uuid import UUID
from datetime import date

from app.modules.assignment.policy import VehicleType
from app.shared.schemas.assignments import validate_time_ranges
from app.shared.schemas.common import BaseResponse


class CreateCourierRequest(BaseModel):
    courier_type: VehicleType = Field(..., description="Tipo de vehículo: FOOT, BIKE o AUTO")
    regions: List[int] = Field(..., min_length=1, description="Regiones que atiende el courier")
    working_hours: List[str] = Field(..., description="Horario laboral, formato HH:MM-HH:MM")

    @field_validator('regions')
    @classmethod
    def validate_regions(cls, v: List[int]) -> List[int]:
        for region in v:
            if region < 0:
                raise ValueError('Las regiones no pueden ser negativas')
        return v

    @field_validator('working_hours')
    @classmethod
    def validate_working_hours(cls, v: List[str]) -> List[str]:
        return validate_time_ranges(v, "Horario laboral")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "courier_type": "AUTO",
            "regions": [1, 2],
            "working_hours": ["10:00-14:00", "16:00-20:00"]
        }
    })


class CreateCouriersRequest(BaseModel):
    couriers: List[CreateCourierRequest]


class CourierResponse(BaseModel):
    courier_id: UUID
    courier_type: VehicleType
    regions: List[int]
    working_hours: List[str]

    model_config = ConfigDict(from_attributes=True)


class CouriersResponse(BaseResponse):
    couriers: List[CourierResponse]
    count: int


class CourierListResponse(CouriersResponse):
    limit: int
    offset: int


class CourierMetaInfoResponse(BaseResponse):
    courier: CourierResponse
    start_date: date
    end_date: date
    rating: int
    earnings: int
