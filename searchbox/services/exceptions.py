"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class SearchValidationError(ServiceError):
    """Submit was attempted without a search term."""


class SuggestionSourceError(ServiceError):
    """A suggestion source failed to produce a usable payload."""
