# seedgraph/models/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import UnionType
from typing import Annotated, Any, Dict, Iterator, List, Optional, Tuple, Type, Union, get_args, get_origin

from bson import ObjectId
from pydantic import BaseModel

from seedgraph.errors import UnknownModelError
from seedgraph.models.types import Ref

log = logging.getLogger("seedgraph.registry")

OBJECT_ID = "ObjectId"
ARRAY = "Array"
OTHER = "Other"

_ARRAY_ORIGINS = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    What the graph builder needs to know about one stored field.

    `instance`/`ref` describe the field itself; `item_instance`/`item_ref`
    describe the element type when the field is an array.
    """

    path: str
    instance: str = OTHER
    ref: Optional[str] = None
    item_instance: Optional[str] = None
    item_ref: Optional[str] = None


@dataclass(frozen=True)
class ModelDescriptor:
    name: str
    collection: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    def paths(self) -> List[str]:
        return [f.path for f in self.fields]


# ─────────────────────────────────────────────────────────────
# Annotation introspection
# ─────────────────────────────────────────────────────────────

def _strip_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _unwrap(tp: Any) -> Tuple[Any, List[Any]]:
    """Peel Optional[...] and Annotated[...] layers, collecting Annotated metadata."""
    metadata: List[Any] = []
    while True:
        if get_origin(tp) is Annotated:
            tp, *extra = get_args(tp)
            metadata.extend(extra)
            continue
        stripped = _strip_optional(tp)
        if stripped is tp:
            return tp, metadata
        tp = stripped


def _ref_of(metadata: List[Any]) -> Optional[str]:
    refs = [m.model for m in metadata if isinstance(m, Ref)]
    return refs[-1] if refs else None


def _instance_of(tp: Any) -> str:
    if isinstance(tp, type) and issubclass(tp, ObjectId):
        return OBJECT_ID
    if tp in _ARRAY_ORIGINS or get_origin(tp) in _ARRAY_ORIGINS:
        return ARRAY
    return OTHER


def describe_field(path: str, annotation: Any, metadata: Optional[List[Any]] = None) -> FieldDescriptor:
    tp, extra = _unwrap(annotation)
    meta = list(metadata or []) + extra
    instance = _instance_of(tp)

    item_instance: Optional[str] = None
    item_ref: Optional[str] = None
    if instance == ARRAY:
        args = get_args(tp)
        item_tp, item_meta = _unwrap(args[0]) if args else (Any, [])
        item_instance = _instance_of(item_tp)
        item_ref = _ref_of(item_meta)

    return FieldDescriptor(
        path=path,
        instance=instance,
        ref=_ref_of(meta),
        item_instance=item_instance,
        item_ref=item_ref,
    )


def describe_model(model_cls: Type[BaseModel], name: Optional[str] = None, collection: Optional[str] = None) -> ModelDescriptor:
    model_name = name or model_cls.__name__
    fields = tuple(
        describe_field(info.alias or field_name, info.annotation, list(info.metadata))
        for field_name, info in model_cls.model_fields.items()
    )
    return ModelDescriptor(
        name=model_name,
        collection=collection or default_collection(model_name),
        fields=fields,
    )


def default_collection(model_name: str) -> str:
    return f"{model_name.lower()}s"


# ─────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────

class ModelRegistry:
    """
    Explicit registry of seedable record types. Both the graph builder and the
    seeding engine are handed one of these; there is no global lookup.
    """

    def __init__(self) -> None:
        self._descriptors: Dict[str, ModelDescriptor] = {}
        self._models: Dict[str, Type[BaseModel]] = {}

    def register(
        self,
        model_cls: Optional[Type[BaseModel]] = None,
        *,
        name: Optional[str] = None,
        collection: Optional[str] = None,
    ):
        """Register a pydantic model. Works as `registry.register(User)` or as `@registry.register(...)`."""

        def _do(cls: Type[BaseModel]) -> Type[BaseModel]:
            descriptor = describe_model(cls, name=name, collection=collection)
            self.register_descriptor(descriptor)
            self._models[descriptor.name] = cls
            return cls

        if model_cls is None:
            return _do
        return _do(model_cls)

    def register_descriptor(self, descriptor: ModelDescriptor) -> ModelDescriptor:
        if descriptor.name in self._descriptors:
            log.debug("re-registering model %s", descriptor.name)
        self._descriptors[descriptor.name] = descriptor
        return descriptor

    def unregister(self, name: str) -> None:
        self._descriptors.pop(name, None)
        self._models.pop(name, None)

    def descriptor(self, name: str) -> ModelDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownModelError(name) from None

    def model(self, name: str) -> Optional[Type[BaseModel]]:
        return self._models.get(name)

    def collection(self, name: str) -> str:
        return self.descriptor(name).collection

    def model_names(self) -> List[str]:
        return list(self._descriptors)

    def descriptors(self) -> List[ModelDescriptor]:
        return list(self._descriptors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[ModelDescriptor]:
        return iter(self.descriptors())

    def __len__(self) -> int:
        return len(self._descriptors)
