from __future__ import annotations

"""singleton.py
Base class for services that hold one process-wide instance
(see :class:`~selo_project.src.services.settings_service.SettingsService`).

Each subclass gets its own instance.  Subclasses **must** keep their
``__init__`` idempotent, since it runs on every ``Cls()`` call.
"""

from typing import Any, ClassVar


class Singleton:  # noqa: D101
    _instances: ClassVar[dict[type, Any]] = {}

    def __new__(cls, *args: Any, **kwargs: Any):
        if cls not in Singleton._instances:
            Singleton._instances[cls] = super().__new__(cls)
        return Singleton._instances[cls]

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the cached instance so the next call builds a fresh one (tests)."""
        Singleton._instances.pop(cls, None)
