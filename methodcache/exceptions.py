"""Errors raised by the method cache."""


class MethodCacheError(Exception):
    """Base class for method cache errors."""
    pass


class NotConfiguredError(MethodCacheError, RuntimeError):
    """Raised when a cache operation runs without a bound store."""

    def __init__(self, message: str = "No key-value store bound to the method cache."):
        super().__init__(message)


class NoSuchMethodError(MethodCacheError, AttributeError):
    """Raised when an action name does not resolve to a cacheable method."""

    def __init__(self, class_name: str, method: str):
        self.class_name = class_name
        self.method = method
        super().__init__(f"Method {class_name}.{method} does not exist")
