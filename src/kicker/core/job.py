from typing import Any, Callable, Generic, Mapping, TypeVar

from kicker.core.common_types import Notification
from kicker.core.settings import Settings

T = TypeVar("T")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
"""Marks an attribute_with_default that hasn't been assigned."""


class attribute_with_default(Generic[T]):
    """
    Descriptor for an attribute whose default is computed from the instance on every
    read, until a value is assigned. Assigned values stick, None included. Deleting the
    attribute makes it fall back to the default again.

    Use it as a decorator on the method that computes the default:

        class Job:
            __slots__ = ("command", "_print_before")

            @attribute_with_default
            def print_before(self) -> str | None:
                return f"Executing: {self.command}"

    The value is stored in an attribute with the same name and a leading underscore, so
    classes with __slots__ need to declare that.
    """

    name: str
    storage_name: str

    def __init__(self, default: Callable[[Any], T]):
        self.default = default
        self.__doc__ = default.__doc__

    def __set_name__(self, owner: type, name: str):
        self.name = name
        self.storage_name = f"_{name}"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        value = getattr(instance, self.storage_name, UNSET)
        if value is UNSET:
            return self.default(instance)
        return value

    def __set__(self, instance, value: T):
        setattr(instance, self.storage_name, value)

    def __delete__(self, instance):
        setattr(instance, self.storage_name, UNSET)

    def is_assigned(self, instance) -> bool:
        return getattr(instance, self.storage_name, UNSET) is not UNSET


class Job:
    """
    One command execution request and, once it has run, its outcome.

    Parameters
    ----------
    settings : Settings, optional
        Flags that the computed defaults depend on. Default is Settings().
    **attributes
        Initial values for any of the names in Job.ATTRIBUTES. Other names raise
        TypeError.

    The print_before, print_after, notify_before and notify_after attributes are
    computed from the current command, output, exit code and settings every time they
    are read, unless they have been assigned.
    """

    ATTRIBUTES = (
        "command",
        "exit_code",
        "output",
        "print_before",
        "print_after",
        "notify_before",
        "notify_after",
    )

    __slots__ = (
        "settings",
        "command",
        "exit_code",
        "output",
        "_print_before",
        "_print_after",
        "_notify_before",
        "_notify_after",
    )

    settings: Settings
    command: str | None
    exit_code: int
    output: str

    def __init__(self, settings: Settings | None = None, /, **attributes):
        self.settings = settings if settings is not None else Settings()
        self.command = None
        self.exit_code = 0
        self.output = ""
        for name, value in attributes.items():
            if name not in self.ATTRIBUTES:
                raise TypeError(f"Job has no attribute '{name}'")
            setattr(self, name, value)

    @classmethod
    def from_mapping(
        cls, attributes: Mapping[str, Any], settings: Settings | None = None
    ) -> "Job":
        return cls(settings, **attributes)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @attribute_with_default
    def print_before(self) -> str | None:
        return f"Executing: {self.command}"

    @attribute_with_default
    def print_after(self) -> str | None:
        # Silent runs didn't echo anything, so show the output of failed commands
        if self.settings.silent and not self.success:
            return f"\n{self.output}\n\n"
        return None

    @attribute_with_default
    def notify_before(self) -> Notification | None:
        if self.settings.silent:
            return None
        return ("Kicker: Executing", self.command or "")

    @attribute_with_default
    def notify_after(self) -> Notification | None:
        message = "" if self.settings.silent else self.output
        if self.success:
            return ("Kicker: Success", message)
        return (f"Kicker: Failed ({self.exit_code})", message)

    def __repr__(self) -> str:
        return f'"{self.command}, exit code: {self.exit_code}"'

    def __str__(self) -> str:
        return self.command or ""
