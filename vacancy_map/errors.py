class VacancyMapError(Exception):
    pass


# ------------------------------------------------------------------------------
# Per-record identifier failures (recoverable: skip the record)
# ------------------------------------------------------------------------------

class IdentifierError(VacancyMapError):
    def __init__(self, message, level=None):
        super().__init__(message)
        self.level = level


class MissingIdentifierField(IdentifierError):
    pass


class MalformedRow(IdentifierError):
    pass


# ------------------------------------------------------------------------------
# Navigation misuse (rejected, no state change)
# ------------------------------------------------------------------------------

class InvalidTransition(VacancyMapError):
    pass


# ------------------------------------------------------------------------------
# Data source boundary (not retried, surfaced to the caller)
# ------------------------------------------------------------------------------

class DataSourceError(VacancyMapError):
    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class NetworkError(DataSourceError):
    pass


class DecodeError(DataSourceError):
    pass
