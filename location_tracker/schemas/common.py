from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    # JSON en camelCase (como el cliente móvil); acepta snake_case también
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Telemetry(CamelModel):
    accuracy: float | None = None
    altitude: float | None = None
    speed: float | None = None
    heading: float | None = None
    battery_level: int | None = None
    activity_type: str | None = None
