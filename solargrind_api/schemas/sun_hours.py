from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class SunHoursRequest(BaseModel):
    model_config = CAMEL

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class SunHoursResponse(BaseModel):
    model_config = CAMEL

    sun_hours: float
    source: str = Field(description="nrel_api | estimation | estimation_fallback")
    latitude: float
    longitude: float
