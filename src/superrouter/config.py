"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from superrouter.errors import ConfigurationError

ERROR_POLICIES = frozenset({"reject", "recover"})
DUPLICATE_POLICIES = frozenset({"overwrite", "reject"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Dispatch configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(error_policy="recover", duplicate_routes="reject")
    """

    # Outcome of a call that entered error mode.
    # "reject": always raise the final current error.
    # "recover": return the response if the last error route that ran succeeded.
    error_policy: str = "reject"

    # RouteTree re-registration of an identical method + path.
    duplicate_routes: str = "overwrite"

    # Freeze summary and error-mode transitions
    lifecycle_logging: bool = True

    def __post_init__(self) -> None:
        if self.error_policy not in ERROR_POLICIES:
            msg = (
                f"error_policy must be one of {sorted(ERROR_POLICIES)}, "
                f"got {self.error_policy!r}"
            )
            raise ConfigurationError(msg)
        if self.duplicate_routes not in DUPLICATE_POLICIES:
            msg = (
                f"duplicate_routes must be one of {sorted(DUPLICATE_POLICIES)}, "
                f"got {self.duplicate_routes!r}"
            )
            raise ConfigurationError(msg)
