__all__ = [
    "AbstractConfirm",
    "AbstractLockfile",
    "AbstractResolver",
    "AbstractTree",
    "BaseReporter",
    "BuildBehaviour",
    "ClickConfirm",
    "EntryType",
    "FixedAnswer",
    "InstallAction",
    "InvalidPackageReq",
    "Lockfile",
    "OptState",
    "PackageInstallSpec",
    "PackageReq",
    "PinnedState",
    "PromptConfig",
    "PromptError",
    "ResolverException",
    "Resolver",
    "StoreError",
    "Tree",
    "apply_build_behaviour",
    "__version__",
]

__version__ = "0.1.0.dev0"


from .lockfile import Lockfile, Tree
from .prompts import ClickConfirm, FixedAnswer, PromptConfig
from .providers import AbstractConfirm, AbstractLockfile, AbstractTree
from .reporters import BaseReporter
from .resolvers import (
    AbstractResolver,
    PromptError,
    Resolver,
    ResolverException,
    StoreError,
    apply_build_behaviour,
)
from .structs import (
    BuildBehaviour,
    EntryType,
    InstallAction,
    InvalidPackageReq,
    OptState,
    PackageInstallSpec,
    PackageReq,
    PinnedState,
)
