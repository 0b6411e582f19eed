from abc import ABC, abstractmethod

from farmacia_bot.domain.entities.coordinates import Coordinates


class GeocodingPort(ABC):
    @abstractmethod
    async def geocode(self, address: str) -> Coordinates:
        """
        Resolve free text to coordinates.

        Raises:
            AddressNotFound: the service returned an empty result set
            ServiceUnavailable: network, HTTP or parsing errors
        """
        raise NotImplementedError
