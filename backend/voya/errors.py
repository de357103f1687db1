"""Error taxonomy for the VOYA API. Every error maps to an HTTP status."""


class VoyaError(Exception):
    """Base error; rendered as ``{"error": message}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VoyaError):
    status_code = 400


class MalformedRequestError(VoyaError):
    status_code = 400


class NotFoundError(VoyaError):
    status_code = 404


class StoreUnavailableError(VoyaError):
    status_code = 503


class ProviderCallError(VoyaError):
    """A single provider attempt failed. Absorbed by the provider chain."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider

    def __str__(self) -> str:
        return f"{self.provider}: {self.message}"


class AllProvidersFailedError(VoyaError):
    def __init__(self, message: str, failures: list[ProviderCallError] | None = None):
        super().__init__(message)
        self.failures = failures or []


class UpstreamConfigError(VoyaError):
    pass


class UpstreamRequestError(VoyaError):
    pass


class PersistenceError(VoyaError):
    pass
