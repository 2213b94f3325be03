from .types import PyObjectId, Ref
from .registry import (
    ARRAY,
    OBJECT_ID,
    OTHER,
    FieldDescriptor,
    ModelDescriptor,
    ModelRegistry,
    describe_field,
    describe_model,
)
from .graph import BASE_SCORE, GraphNode, ReferenceEdge
