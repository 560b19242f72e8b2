"""A small class/object model with constants, methods and singleton classes."""

from __future__ import annotations

from typing import Any, Callable, Optional


class SlashError(Exception):
    """Base error of the object model."""


class ConstantError(SlashError):
    """Raised for invalid, missing or duplicate constants."""


class ArityError(SlashError):
    """Raised when an object is constructed with the wrong number of arguments."""


def validate_constant_name(name: str) -> None:
    """Raise ConstantError unless *name* begins with an ASCII capital letter."""
    if not isinstance(name, str):
        raise TypeError(f"Expected str, got {type(name).__name__}")
    if not name or not ("A" <= name[0] <= "Z"):
        raise ConstantError("Constant names must begin with a capital letter")


def camel_case_to_underscore(name: str) -> str:
    """Convert CamelCase to snake_case; runs of capitals get no separators."""
    out = []
    saw_capital = True
    for ch in name:
        if "A" <= ch <= "Z":
            if not saw_capital:
                out.append("_")
                saw_capital = True
            out.append(ch.lower())
        else:
            saw_capital = False
            out.append(ch)
    return "".join(out)


class SlObject:
    """A plain object: a reference to its class plus instance variables."""

    def __init__(self, klass: Optional["SlClass"]) -> None:
        self.klass = klass
        self.ivars: dict[str, Any] = {}

    def __repr__(self) -> str:
        name = self.klass.full_name() if self.klass is not None else "?"
        return f"#<{name}>"


class SlClass(SlObject):
    """A class: named, nested in a container, with methods and constants."""

    def __init__(
        self,
        name: str,
        superclass: Optional["SlClass"] = None,
        container: Optional["SlClass"] = None,
        allocator: Optional[Callable[["SlClass"], SlObject]] = None,
    ) -> None:
        self._setup(name, superclass, container, allocator, singleton=False)
        if superclass is not None and superclass.klass is not None:
            meta = object.__new__(SlClass)
            meta._setup("", superclass.klass, None, None, singleton=True)
            self.klass = meta

    def _setup(self, name, superclass, container, allocator, singleton):
        SlObject.__init__(self, None)
        if superclass is not None and not isinstance(superclass, SlClass):
            raise TypeError("superclass must be a class")
        if container is not None and not isinstance(container, SlClass):
            raise TypeError("container must be a class")
        self.name = name
        self.superclass = superclass
        self.container = container
        if allocator is None and superclass is not None and not singleton:
            allocator = superclass.allocator
        self.allocator = allocator
        self.singleton = singleton
        self.doc = None
        self._methods: dict[str, Callable[..., Any]] = {}
        self._constants: dict[str, Any] = {}

    def _ancestors(self):
        klass: Optional[SlClass] = self
        while klass is not None:
            yield klass
            klass = klass.superclass

    def _is_root(self) -> bool:
        return self.superclass is None and not self.singleton

    def full_name(self) -> str:
        """Return the name qualified by its containers, e.g. ``A::B``."""
        if self._is_root() or self.container is None or self.container._is_root():
            return self.name
        return f"{self.container.full_name()}::{self.name}"

    def __repr__(self) -> str:
        return self.full_name()

    def instance_method(self, name: str):
        """Look up a method along the superclass chain, or return None."""
        for klass in self._ancestors():
            if name in klass._methods:
                return klass._methods[name]
        return None

    def own_instance_method(self, name: str):
        """Return a method defined directly on this class, or None."""
        return self._methods.get(name)

    def own_instance_methods(self) -> list[str]:
        """Names of methods defined directly on this class."""
        return list(self._methods)

    def instance_methods(self) -> list[str]:
        """Names of methods of this class followed by those of every superclass."""
        return [name for klass in self._ancestors() for name in klass._methods]

    def define_method(self, name: str, method: Callable[..., Any]):
        """Define (or replace) an instance method; returns the method."""
        if not callable(method):
            raise TypeError("method must be callable")
        self._methods[name] = method
        return method

    def constants(self) -> list[str]:
        """Names of constants defined directly on this class."""
        return list(self._constants)

    def has_constant(self, name: str) -> bool:
        """True if the constant is defined here or on a superclass."""
        return any(name in klass._constants for klass in self._ancestors())

    def get_constant(self, name: str):
        """Return a constant, searching superclasses; raise ConstantError if absent."""
        validate_constant_name(name)
        for klass in self._ancestors():
            if name in klass._constants:
                return klass._constants[name]
        raise ConstantError(f"Undefined constant '{name}' in {self.full_name()}")

    def set_constant(self, name: str, value: Any) -> "SlClass":
        """Define a constant; raise ConstantError if already defined here."""
        validate_constant_name(name)
        if name in self._constants:
            raise ConstantError(
                f"Constant '{name}' in {self.full_name()} already defined"
            )
        self._constants[name] = value
        return self

    def remove_constant(self, name: str) -> "SlClass":
        """Remove a constant defined on this class, if present."""
        validate_constant_name(name)
        self._constants.pop(name, None)
        return self

    def is_subclass_of(self, other: "SlClass") -> bool:
        """True if *other* is this class or one of its superclasses."""
        return any(klass is other for klass in self._ancestors())

    def has_full_path(self) -> bool:
        """True if the class is reachable by name from the root class."""
        if self._is_root():
            return True
        if not self.name:
            return False
        if self.container is None:
            return True
        return self.container.has_full_path()

    def _file_path_rec(self) -> str:
        seg = camel_case_to_underscore(self.name)
        if self.container is None or self.container._is_root():
            return seg
        return f"{self.container._file_path_rec()}/{seg}"

    def file_path(self) -> Optional[str]:
        """Conventional relative file path for the class, or None if unnamed."""
        if not self.has_full_path():
            return None
        if self._is_root():
            return "Object"
        return self._file_path_rec()

    def new(self, *args: Any) -> SlObject:
        """Allocate an instance and call its ``init`` method with *args*."""
        obj = self.allocator(self) if self.allocator is not None else SlObject(self)
        init = self.instance_method("init")
        if init is not None:
            init(obj, *args)
        elif args:
            raise ArityError(
                f"Too many arguments. Expected 0, received {len(args)}."
            )
        return obj


class ClassRegistry:
    """Holds the root ``Object`` and ``Class`` classes and defines new ones."""

    def __init__(self) -> None:
        self.object_class = SlClass("Object", None, None, None)
        self.class_class = SlClass("Class", self.object_class, self.object_class, None)
        self.object_class.klass = self.class_class
        self.class_class.klass = self.class_class
        self.object_class._constants["Object"] = self.object_class
        self.object_class._constants["Class"] = self.class_class

    def define_class(
        self,
        name: str,
        superclass: Optional[SlClass] = None,
        container: Optional[SlClass] = None,
    ) -> SlClass:
        """Create a class and register it as a constant of its container."""
        if superclass is None:
            superclass = self.object_class
        if container is None:
            container = self.object_class
        klass = SlClass(name, superclass, container, None)
        container._constants[name] = klass
        return klass


def class_of(obj: SlObject) -> SlClass:
    """Return the class of *obj*, skipping any singleton classes."""
    if not isinstance(obj, SlObject) or obj.klass is None:
        raise TypeError("object has no class")
    klass = obj.klass
    while klass.singleton:
        klass = klass.superclass
    return klass


def is_a(obj: SlObject, klass: SlClass) -> bool:
    """True if *obj* is an instance of *klass* or of one of its subclasses."""
    if not isinstance(obj, SlObject) or obj.klass is None:
        return False
    return obj.klass.is_subclass_of(klass)