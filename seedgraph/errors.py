# seedgraph/errors.py
from __future__ import annotations


class SeedGraphError(RuntimeError):
    """Base class for errors raised by seedgraph itself (store errors pass through untouched)."""


class UnknownModelError(SeedGraphError, KeyError):
    def __init__(self, model_name: str) -> None:
        super().__init__(f"model '{model_name}' is not registered")
        self.model_name = model_name

    def __str__(self) -> str:
        return self.args[0]


class SeedRunError(SeedGraphError):
    def __init__(self, model_name: str, cause: BaseException) -> None:
        super().__init__(f"seeding '{model_name}' failed: {cause}")
        self.model_name = model_name
        self.cause = cause
