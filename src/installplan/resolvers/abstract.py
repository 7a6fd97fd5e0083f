from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

from .exceptions import ResolverException

if TYPE_CHECKING:
    from ..providers import AbstractConfirm, AbstractTree
    from ..reporters import BaseReporter
    from ..structs import PackageInstallSpec, PackageReq, PinnedState


class AbstractResolver:
    """The thing that turns requested packages into an install plan."""

    base_exception = ResolverException

    def __init__(
        self,
        tree: AbstractTree,
        confirm: AbstractConfirm,
        reporter: BaseReporter,
    ) -> None:
        self.tree = tree
        self.confirm = confirm
        self.reporter = reporter

    def resolve(
        self,
        requirements: Iterable[PackageReq],
        pin: PinnedState,
        force: bool = False,
    ) -> List[PackageInstallSpec]:
        """Take a collection of requirements, spit out the install plan."""
        raise NotImplementedError
