from typing import Optional

from pydantic import BaseModel


class RouteCreateRequest(BaseModel):
    start_point: str
    end_point: str
    distance: float
    estimated_time: str
    fare: int

    class Config:
        json_schema_extra = {
            'example': {
                'start_point': 'Taipei Main Station',
                'end_point': 'Hsinchu',
                'distance': 72.5,
                'estimated_time': '01:20',
                'fare': 150,
            }
        }


class RouteResponse(BaseModel):
    id: int
    start_point: str
    end_point: str
    distance: float
    estimated_time: str
    fare: int


class BusCreateRequest(BaseModel):
    bus_number: str
    capacity: int
    route_id: int
    operator_id: Optional[int] = None  # defaults to the caller

    class Config:
        json_schema_extra = {
            'example': {'bus_number': 'KLB-1234', 'capacity': 40, 'route_id': 1}
        }


class BusCapacityUpdateRequest(BaseModel):
    capacity: int

    class Config:
        json_schema_extra = {'example': {'capacity': 36}}


class BusResponse(BaseModel):
    id: int
    bus_number: str
    capacity: int
    operator_id: int
    route_id: int


class DefaultTripCreateRequest(BaseModel):
    route_id: int
    bus_id: int
    start_time: str  # HH:MM
    arrival_time: str  # HH:MM

    class Config:
        json_schema_extra = {
            'example': {'route_id': 1, 'bus_id': 1, 'start_time': '08:30', 'arrival_time': '09:50'}
        }


class DefaultTripResponse(BaseModel):
    id: int
    route_id: int
    bus_id: int
    start_time: str
    arrival_time: str
