from abc import ABC, abstractmethod
from typing import Any


class NearbySearchPort(ABC):
    @abstractmethod
    async def nearby(self, lat: float, lon: float, radius_meters: int, category: str) -> list[dict[str, Any]]:
        """
        Points of interest around a coordinate, as raw tag mappings in service order.
        Raises ServiceUnavailable on upstream failures.
        """
        raise NotImplementedError
