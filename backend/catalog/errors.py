"""Exceptions raised by the catalog query layer."""


class CatalogError(Exception):
    """Base class for catalog failures."""


class StorageUnavailableError(CatalogError):
    """The database could not be reached or rejected the read."""


class InvalidFilterError(CatalogError, ValueError):
    """A filter, sort or limit parameter is malformed or out of range."""
