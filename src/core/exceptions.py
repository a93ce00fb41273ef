"""
Service Config - Custom Exceptions

Anti-Patterns Avoided:
- Exception Shadowing: namespaced exceptions rooted at ServiceError instead of
  reusing builtins like ValueError for domain failures
- Exception chaining for aggregation: ConfigLoadError holds its failures as
  plain records
"""

from collections.abc import Iterable


class ServiceError(Exception):
    """Base exception for the service.

    All custom exceptions inherit from this base class.
    """
    pass


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""
    pass


class InvalidFieldError(ConfigurationError, ValueError):
    """A single environment variable carried an invalid value.

    Also a ValueError so pydantic validators collect it as a field error
    rather than aborting validation.

    Attributes:
        env: Name of the offending environment variable
        value: Raw value received (untrimmed, original case)
        description: Human-readable field name, e.g. "log level"
    """

    def __init__(self, env: str, value: str, description: str) -> None:
        self.env = env
        self.value = value
        self.description = description
        super().__init__(f"invalid {description} ({env}) got={value!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidFieldError):
            return NotImplemented
        return (self.env, self.value, self.description) == (
            other.env,
            other.value,
            other.description,
        )

    def __hash__(self) -> int:
        return hash((self.env, self.value, self.description))

    def __reduce__(self):
        return (type(self), (self.env, self.value, self.description))


class ConfigLoadError(ConfigurationError):
    """One or more fields failed validation during a load pass.

    Attributes:
        errors: Ordered, non-empty tuple of InvalidFieldError records
    """

    def __init__(self, errors: Iterable[InvalidFieldError]) -> None:
        self.errors = tuple(errors)
        if not self.errors:
            raise ValueError("ConfigLoadError requires at least one field error")
        lines = "\n".join(f"  - {err}" for err in self.errors)
        super().__init__(f"failed to load config:\n{lines}")

    @property
    def env_names(self) -> list[str]:
        """Names of the offending environment variables, in load order."""
        return [err.env for err in self.errors]

    def __reduce__(self):
        return (type(self), (self.errors,))


class ServerAddressError(ConfigurationError):
    """Raised when a server address cannot be split into host and port."""
    pass
