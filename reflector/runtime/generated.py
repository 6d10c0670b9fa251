# reflector/runtime/generated.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Fast-path reflectors backed by a fixed descriptor table and direct dispatch.

A code generator targets this module by emitting, for each reflected class, a
``GeneratedReflector`` subclass with its ``PROPERTIES``, ``GETTERS`` and
``SETTERS`` tables filled in, and installing a ``ReflectorAccessor`` on the
class. The ``reflectable`` decorator does the same thing in-process.
"""

from __future__ import annotations

import inspect
import operator
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar, overload

from reflector.core.descriptors import AttributeDescriptor, PropertyDescriptor, canonical_key
from reflector.core.errors import ReadOnlyPropertyError, TypeMismatchError, UnknownPropertyError
from reflector.core.validations import coerce_value, default_value, is_instance_of, type_name
from reflector.interfaces.types import Getter, Setter
from reflector.runtime.cache import DescriptorCache
from reflector.runtime.introspection import ACCESSOR_NAME, build_index, type_attributes, type_metadata

MEMO_SLOT = "__reflector__"

C = TypeVar("C", bound=type)


class GeneratedReflector:
    """
    Reflector whose metadata is fixed per class rather than discovered per call.

    Subclasses provide:
        PROPERTIES: descriptors in declaration order.
        GETTERS: canonical key -> callable(obj) returning the value.
        SETTERS: canonical key -> callable(obj, value) for writable properties.
        ATTRIBUTES: optional prebuilt attribute descriptors; when left as None
            they are reconstructed from the reflected type on first access.
    """

    __slots__ = ("_obj",)

    PROPERTIES: ClassVar[Tuple[PropertyDescriptor, ...]] = ()
    GETTERS: ClassVar[Mapping[str, Getter]] = {}
    SETTERS: ClassVar[Mapping[str, Setter]] = {}
    ATTRIBUTES: ClassVar[Optional[Tuple[AttributeDescriptor, ...]]] = None
    _INDEX: ClassVar[Mapping[str, PropertyDescriptor]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._INDEX = build_index(cls.PROPERTIES)

    def __init__(self, obj: Any) -> None:
        self._obj = obj

    @property
    def reflected_object(self) -> Any:
        return self._obj

    @property
    def properties(self) -> Tuple[PropertyDescriptor, ...]:
        return self.PROPERTIES

    @property
    def attributes(self) -> Tuple[AttributeDescriptor, ...]:
        if self.ATTRIBUTES is not None:
            return self.ATTRIBUTES
        return type_attributes(type(self._obj))

    def _owner(self) -> str:
        return type(self._obj).__name__

    def get_value(self, key: str) -> Any:
        getter = self.GETTERS.get(canonical_key(key)) if isinstance(key, str) else None
        if getter is None:
            raise UnknownPropertyError(key, self._owner())
        return getter(self._obj)

    def set_value(self, key: str, value: Any) -> None:
        descriptor = self._INDEX.get(canonical_key(key)) if isinstance(key, str) else None
        if descriptor is None:
            raise UnknownPropertyError(key, self._owner())
        setter = self.SETTERS.get(descriptor.key) if descriptor.has_setter else None
        if setter is None:
            raise ReadOnlyPropertyError(descriptor.name, self._owner())
        if value is not None and not is_instance_of(value, descriptor.type):
            raise TypeMismatchError(descriptor.name, type_name(descriptor.type), type(value).__name__, self._owner())
        setter(self._obj, coerce_value(value, descriptor.type))

    def get_value_as(self, key: str, type_: Any) -> Any:
        value = self.get_value(key)
        if value is not None and is_instance_of(value, type_):
            return coerce_value(value, type_)
        return default_value(type_)

    def set_value_as(self, key: str, value: Any, type_: Any) -> None:
        if value is not None and not is_instance_of(value, type_):
            raise TypeMismatchError(key, type_name(type_), type(value).__name__, self._owner())
        self.set_value(key, value)

    def __getitem__(self, key: str) -> Any:
        return self.get_value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_value(key, value)

    def __reduce__(self) -> Tuple[Any, ...]:
        # reflector types are built at runtime and cannot be looked up by name
        return getattr, (self._obj, ACCESSOR_NAME)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._owner()})"


def _attribute_setter(name: str) -> Setter:
    def setter(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return setter


def build_reflector_type(cls: type) -> Type[GeneratedReflector]:
    """Bake the descriptor table and dispatch of ``cls`` into a GeneratedReflector subclass.

    :raises TypeError: If ``cls`` declares no public members. Attributes that
        only appear in ``__init__`` must be annotated on the class to be part
        of a fixed table.
    """
    metadata = type_metadata(cls)
    if not metadata.properties:
        raise TypeError(f"{cls.__name__} declares no public members to build a reflector table from")
    getters: Dict[str, Getter] = {key: operator.attrgetter(p.name) for key, p in metadata.index.items()}
    setters: Dict[str, Setter] = {
        key: _attribute_setter(p.name) for key, p in metadata.index.items() if p.has_setter
    }
    return type(
        f"{cls.__name__}Reflector",
        (GeneratedReflector,),
        {
            "__slots__": (),
            "__module__": cls.__module__,
            "__qualname__": f"{cls.__qualname__}Reflector",
            "PROPERTIES": metadata.properties,
            "GETTERS": getters,
            "SETTERS": setters,
        },
    )


generated_types: DescriptorCache[Type[GeneratedReflector]] = DescriptorCache("generated reflector")


class ReflectorAccessor:
    """
    The well-known ``reflector`` accessor installed on reflectable classes.

    The reflector is created on first access and memoized on the instance.
    Instances without a ``__dict__`` get a fresh reflector per access. A memo
    belonging to another object (left behind by ``copy.copy``) is replaced.
    """

    def __init__(self, factory: Optional[Callable[[type], Type[GeneratedReflector]]] = None) -> None:
        self._factory = factory or (lambda cls: generated_types.get_or_add(cls, build_reflector_type))

    def reflector_type(self, cls: type) -> Type[GeneratedReflector]:
        return self._factory(cls)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        state = getattr(instance, "__dict__", None)
        memo = state.get(MEMO_SLOT) if state is not None else None
        if memo is not None and memo.reflected_object is instance:
            return memo
        reflector = self.reflector_type(type(instance))(instance)
        if state is not None:
            state[MEMO_SLOT] = reflector
        return reflector


@overload
def reflectable(cls: C) -> C: ...


@overload
def reflectable(cls: None = None) -> Callable[[C], C]: ...


def reflectable(cls=None):
    """
    Class decorator giving a class the fast-path ``reflector`` accessor.

    Apply it outermost (above ``@dataclass``). The descriptor table is built
    once per class, on first access, so forward references in annotations can
    resolve by then.

    :raises TypeError: If the class already defines a ``reflector`` member.
        Building the table on first access raises TypeError as well when the
        class declares no public members.
    """

    def wrap(klass: C) -> C:
        for base in klass.__mro__:
            defined = ACCESSOR_NAME in base.__dict__ and not isinstance(base.__dict__[ACCESSOR_NAME], ReflectorAccessor)
            if defined or ACCESSOR_NAME in inspect.get_annotations(base):
                raise TypeError(f"{klass.__name__} already defines '{ACCESSOR_NAME}'")
        setattr(klass, ACCESSOR_NAME, ReflectorAccessor())
        return klass

    if cls is None:
        return wrap
    return wrap(cls)
