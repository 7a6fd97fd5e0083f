from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

from .. import prompts
from ..reporters import BaseReporter
from ..structs import (
    EntryType,
    InstallAction,
    NotFound,
    OptState,
    PackageInstallSpec,
)
from .abstract import AbstractResolver
from .exceptions import PromptError, StoreError

if TYPE_CHECKING:
    from ..providers import AbstractConfirm, AbstractLockfile, AbstractTree
    from ..structs import PackageReq, PinnedState, RockMatches

logger = logging.getLogger(__name__)

OVERWRITE_MESSAGE = "Package {requirement} already exists. Overwrite?"


def is_effective_force(
    force: bool, matches: RockMatches, lockfile: AbstractLockfile
) -> bool:
    """Whether a reinstall must be forced without asking.

    A package that is installed, but only ever as a dependency, may have a
    different on-disk layout than an entrypoint install would produce, so
    requesting it directly always forces a rebuild.
    """
    if force:
        return True
    if isinstance(matches, NotFound):
        return False
    return not any(lockfile.is_entrypoint(package_id) for package_id in matches.ids)


def decide(
    force: bool,
    matches: RockMatches,
    lockfile: AbstractLockfile,
    ask_overwrite: Callable[[], bool],
) -> InstallAction:
    """Decide what to do with a requirement, given what is installed.

    ``ask_overwrite`` is called with no arguments, and only when an
    entrypoint install already exists and nothing forces a reinstall.
    """
    if is_effective_force(force, matches, lockfile):
        return InstallAction.FORCE
    if isinstance(matches, NotFound):
        return InstallAction.FRESH
    if ask_overwrite():
        return InstallAction.FORCE
    return InstallAction.SKIP


class Resolution(object):
    """Stateful resolution object.

    This is designed as a one-off object that holds the lockfile for the
    duration of the resolution, and holds the plan afterwards.
    """

    def __init__(
        self,
        tree: AbstractTree,
        confirm: AbstractConfirm,
        reporter: BaseReporter,
    ) -> None:
        self._t = tree
        self._c = confirm
        self._r = reporter
        self._started = False
        self._plan: Optional[List[PackageInstallSpec]] = None

    @property
    def plan(self) -> List[PackageInstallSpec]:
        if self._plan is None:
            raise AttributeError("plan")
        return self._plan

    def _load_lockfile(self) -> AbstractLockfile:
        try:
            return self._t.lockfile()
        except OSError as e:
            raise StoreError(f"unable to read lockfile: {e}") from e

    def _match(self, requirement: PackageReq, pin: PinnedState) -> RockMatches:
        try:
            return self._t.match_rocks_and(
                requirement, lambda rock: rock.pinned == pin
            )
        except OSError as e:
            raise StoreError(f"unable to get tree data for {requirement}: {e}") from e

    def _ask_overwrite(self, requirement: PackageReq) -> bool:
        message = OVERWRITE_MESSAGE.format(requirement=requirement)
        self._r.prompting(requirement, message)
        try:
            return bool(self._c.confirm(message, default=False))
        except EOFError as e:
            raise PromptError(message, "input ended") from e

    def resolve(
        self,
        requirements: Iterable[PackageReq],
        pin: PinnedState,
        force: bool,
    ) -> List[PackageInstallSpec]:
        if self._started:
            raise RuntimeError("already resolved")
        self._started = True

        requirements = list(requirements)
        self._r.starting(requirements)

        lockfile = self._load_lockfile()
        plan = []
        for requirement in requirements:
            matches = self._match(requirement, pin)
            self._r.matching(requirement, matches)
            logger.debug("%s matched %r", requirement, matches)

            action = decide(
                force,
                matches,
                lockfile,
                functools.partial(self._ask_overwrite, requirement),
            )
            logger.debug("%s resolved to %s", requirement, action.name)
            if action is InstallAction.SKIP:
                logger.info("Skipping %s, already installed", requirement)
                self._r.declining(requirement)
                continue

            spec = PackageInstallSpec(
                package=requirement,
                build_behaviour=action.build_behaviour,
                pin=pin,
                entry_type=EntryType.ENTRYPOINT,
                opt=OptState.REQUIRED,
                replaces=matches.ids,
            )
            self._r.adding_spec(spec)
            plan.append(spec)

        self._plan = plan
        self._r.ending(plan)
        return plan


class Resolver(AbstractResolver):
    """The thing that performs the actual resolution work."""

    def __init__(
        self,
        tree: AbstractTree,
        confirm: Optional[AbstractConfirm] = None,
        reporter: Optional[BaseReporter] = None,
    ) -> None:
        super(Resolver, self).__init__(
            tree,
            prompts.ClickConfirm() if confirm is None else confirm,
            BaseReporter() if reporter is None else reporter,
        )

    def resolve(
        self,
        requirements: Iterable[PackageReq],
        pin: PinnedState,
        force: bool = False,
    ) -> List[PackageInstallSpec]:
        """Take a collection of requested packages, spit out the install plan.

        The return value is a list of ``PackageInstallSpec``, one for each
        requirement that should be installed, in the order requested. For
        each requirement:

        * If nothing matching it is installed under the target pin state, it
          is installed fresh.
        * If ``force`` is set, or everything matching it was only installed
          as a dependency, it is force-reinstalled.
        * Otherwise the user is asked whether to overwrite the existing
          install. If they decline, the requirement is left out.

        The following exceptions may be raised, in which case no plan is
        produced:

        * `StoreError`: The installation tree or its lockfile is unreadable.
        * `PromptError`: The user could not be asked for confirmation, e.g.
            because standard input is not a terminal.
        """
        resolution = Resolution(self.tree, self.confirm, self.reporter)
        return resolution.resolve(requirements, pin=pin, force=force)


def apply_build_behaviour(
    package_reqs: Iterable[PackageReq],
    pin: PinnedState,
    force: bool,
    tree: AbstractTree,
    confirm: Optional[AbstractConfirm] = None,
    reporter: Optional[BaseReporter] = None,
) -> List[PackageInstallSpec]:
    """Convert requested packages into install specs with a build behaviour."""
    return Resolver(tree, confirm, reporter).resolve(package_reqs, pin, force)
