"""
Building blocks for fixture builders.

A builder declares its overridable fields with ``Changeable``. Reading such
an attribute from a builder instance gives a fluent setter:

    user = MockUser().first_name("Alice").username(None).build()

Values live either on the builder itself or on one of its embedded layers
(see ``mock_server.dataset.message``).
"""
from collections.abc import Callable, Iterator
from typing import Any


class Changeable:
    """Declares one overridable builder field."""

    def __init__(
        self,
        default: Any = None,
        *,
        factory: Callable[[], Any] | None = None,
        layer: str | None = None,
    ) -> None:
        self.default = default
        self.factory = factory
        self.layer = layer
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def initial(self) -> Any:
        if self.factory is not None:
            return self.factory()
        return self.default

    def holder(self, builder: "MockBuilder") -> tuple[Any, str]:
        """Object and attribute name that store this field's value."""
        if self.layer is None:
            return builder, f"_{self.name}"
        return getattr(builder, self.layer), self.name

    def __get__(self, builder: "MockBuilder | None", owner: type | None = None) -> Any:
        if builder is None:
            return self

        def setter(value: Any) -> "MockBuilder":
            target, attr = self.holder(builder)
            setattr(target, attr, value)
            return builder

        setter.__name__ = self.name
        return setter


class MockBuilder:
    """Base for all fixture builders."""

    def __init__(self, **overrides: Any) -> None:
        fields = dict(self.changeables())
        for name, field in fields.items():
            if field.layer is None:
                setattr(self, f"_{name}", field.initial())

        for name, value in overrides.items():
            if name not in fields:
                raise TypeError(f"{type(self).__name__} has no field {name!r}")
            getattr(self, name)(value)

    @classmethod
    def changeables(cls) -> Iterator[tuple[str, Changeable]]:
        seen: set[str] = set()
        for klass in cls.__mro__:
            for name, value in vars(klass).items():
                if isinstance(value, Changeable) and name not in seen:
                    seen.add(name)
                    yield name, value

    def build(self) -> Any:
        raise NotImplementedError
