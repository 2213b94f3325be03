# seedgraph/models/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bson import ObjectId
from pydantic_core import core_schema


class PyObjectId(ObjectId):
    """ObjectId usable as a pydantic field type (accepts ObjectId or its 24-hex string)."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError(f"invalid ObjectId: {value!r}")


@dataclass(frozen=True)
class Ref:
    """
    Reference annotation, the analogue of a mongoose `ref` option:

        parent: Annotated[Optional[PyObjectId], Ref("User")] = None
        kids: List[Annotated[PyObjectId, Ref("User")]] = []
    """

    model: str
