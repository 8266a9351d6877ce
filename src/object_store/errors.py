"""Exceptions raised by Store backends."""


class StoreError(Exception):
    """Base class for all store failures."""


class PersistenceError(StoreError):
    """The durability layer failed (connection, disk, driver error).

    The original driver exception is always chained as ``__cause__``.
    """
