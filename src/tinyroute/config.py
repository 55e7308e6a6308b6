"""Router and application configuration.

Both are frozen dataclasses — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Compile options shared by every route registered through one router.

    ``sensitive`` makes pattern matching case-sensitive (default: off).
    ``trailing`` lets ``/path`` also match ``/path/`` (default: on).
    """

    sensitive: bool = False
    trailing: bool = True


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(debug=True, router=RouterConfig(trailing=False))
    """

    # Show exception text in 500 responses
    debug: bool = False

    # Options for routes registered through app.get(), app.post(), ...
    router: RouterConfig = field(default_factory=RouterConfig)
