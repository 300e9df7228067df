from __future__ import annotations


class DomainError(Exception):
    """Base for errors raised by daytasks itself."""


class ValidationError(DomainError):
    pass


class StorageError(DomainError):
    """A key-value backend failed to read or write."""


class ConfigError(RuntimeError):
    pass
