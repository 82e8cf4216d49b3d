from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictInt


class Trip(BaseModel):
    """The fixture's trip object. Unknown fields are kept as passthrough."""
    model_config = ConfigDict(extra="allow", frozen=True)

    estimated_arrival: str
    estimated_fare_min: StrictInt
    estimated_fare_max: Optional[StrictInt] = None
