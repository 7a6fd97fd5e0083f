from .abstract import AbstractResolver
from .exceptions import PromptError, ResolverException, StoreError
from .resolution import (
    OVERWRITE_MESSAGE,
    Resolution,
    Resolver,
    apply_build_behaviour,
    decide,
    is_effective_force,
)

__all__ = [
    "AbstractResolver",
    "OVERWRITE_MESSAGE",
    "PromptError",
    "Resolution",
    "Resolver",
    "ResolverException",
    "StoreError",
    "apply_build_behaviour",
    "decide",
    "is_effective_force",
]
