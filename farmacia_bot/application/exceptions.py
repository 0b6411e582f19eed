class AddressNotFound(RuntimeError):
    """Raised when the geocoding service returns no result for an address."""
    pass


class Unintelligible(RuntimeError):
    """Raised when a voice message transcribes to nothing usable."""
    pass


class InvalidPhoneNumber(ValueError):
    """Raised when a phone number cannot be normalized to a channel address."""
    pass


class NotRegistered(RuntimeError):
    """Raised when a normalized number has no account on the messaging channel."""
    pass


class TransportFailure(RuntimeError):
    """Raised when the messaging channel fails to deliver or answer (network, HTTP errors)."""
    pass


class ServiceUnavailable(RuntimeError):
    """Raised when geocoding, search, enrichment or transcription upstreams fail or time out."""
    pass
