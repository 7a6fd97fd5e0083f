from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .structs import LocalPackage, LocalPackageId, PackageReq, RockMatches


class AbstractLockfile:
    """Delegate class to answer questions about the installation record."""

    def is_entrypoint(self, package_id: LocalPackageId) -> bool:
        """Whether the identified package was installed at the user's request.

        A package that is only present as a dependency of another package
        is not an entrypoint.
        """
        raise NotImplementedError


class AbstractTree:
    """Delegate class to provide the installation tree for the resolver."""

    def lockfile(self) -> AbstractLockfile:
        """Load the lockfile describing this tree.

        Implementations should raise ``StoreError`` if the record cannot be
        read.
        """
        raise NotImplementedError

    def match_rocks_and(
        self,
        requirement: PackageReq,
        predicate: Callable[[LocalPackage], bool],
    ) -> RockMatches:
        """Find the installed packages satisfying a requirement.

        :param requirement: The requirement to match installed packages
            against.
        :param predicate: An additional filter. Only packages for which it
            returns true are matched.

        The return value is one of the ``NotFound``, ``Single`` or ``Many``
        variants from ``installplan.structs``. All matching packages must
        be returned, not just the best one.
        """
        raise NotImplementedError

    def match_rocks(self, requirement: PackageReq) -> RockMatches:
        return self.match_rocks_and(requirement, lambda _: True)


class AbstractConfirm:
    """Delegate class to ask the user a yes/no question."""

    def confirm(self, message: str, default: bool) -> bool:
        """Ask ``message`` and return the answer.

        ``default`` is the answer assumed when the user just hits enter.
        Implementations should raise ``PromptError`` when no answer can be
        obtained.
        """
        raise NotImplementedError
