from __future__ import annotations

import enum
import re
from collections import namedtuple
from typing import Iterable, NewType, Tuple, Union

from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import Specifier
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

LocalPackageId = NewType("LocalPackageId", str)

_SHORTHAND_RE = re.compile(r"^\s*([^\s@<>=!~]+)\s*@\s*(\S+)\s*$")


class InvalidPackageReq(ValueError):
    """Raised when a requirement string cannot be parsed."""


class PinnedState(enum.Enum):
    UNPINNED = "unpinned"
    PINNED = "pinned"

    @classmethod
    def from_bool(cls, pinned: bool) -> PinnedState:
        return cls.PINNED if pinned else cls.UNPINNED

    def as_bool(self) -> bool:
        return self is PinnedState.PINNED


class BuildBehaviour(enum.Enum):
    FRESH = "fresh"
    FORCE = "force"

    @classmethod
    def from_force(cls, force: bool) -> BuildBehaviour:
        return cls.FORCE if force else cls.FRESH


class InstallAction(enum.Enum):
    """Outcome of deciding what to do with one requirement.

    ``SKIP`` means the requirement is left out of the plan entirely.
    """

    FRESH = "fresh"
    FORCE = "force"
    SKIP = "skip"

    @property
    def build_behaviour(self) -> BuildBehaviour | None:
        if self is InstallAction.SKIP:
            return None
        return BuildBehaviour(self.value)


class EntryType(enum.Enum):
    ENTRYPOINT = "entrypoint"
    DEPENDENCY = "dependency"


class OptState(enum.Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


DEV_VERSIONS = frozenset(["scm", "dev"])


class RockVersion(namedtuple("RockVersion", "base revision")):
    """A rock's version, split into the version proper and the rockspec
    revision (``1.14.0-1`` is base ``1.14.0``, revision ``1``).

    ``base`` is a ``packaging`` ``Version``, or one of the strings in
    `DEV_VERSIONS` for development rocks. ``revision`` is ``None`` when the
    version text carries none.
    """

    @classmethod
    def parse(cls, text: str) -> RockVersion:
        """Parse version text. Raises ``InvalidVersion`` if it is neither a
        release version nor a development version.
        """
        text = text.strip()
        base, sep, revision = text.rpartition("-")
        if not (sep and revision.isdigit()):
            base, revision = text, ""
        rev = int(revision) if revision else None
        if base.lower() in DEV_VERSIONS:
            return cls(base.lower(), rev)
        return cls(Version(base), rev)

    @property
    def is_dev(self) -> bool:
        return isinstance(self.base, str)

    def full(self) -> Version:
        """The version including the revision, as a post-release."""
        if self.revision is None:
            return self.base
        try:
            return Version(f"{self.base}-{self.revision}")
        except InvalidVersion:
            return self.base

    def sort_key(self):
        # Development rocks sort above every release, as in LuaRocks.
        if self.is_dev:
            return (1, Version("0"), self.base, self.revision or 0)
        return (0, self.base, "", self.revision or 0)

    def __str__(self) -> str:
        if self.revision is None:
            return str(self.base)
        return f"{self.base}-{self.revision}"


def _states_revision(version_text: str) -> bool:
    try:
        return Version(version_text).post is not None
    except InvalidVersion:
        return False


def _spec_contains(spec: Specifier, version: RockVersion) -> bool:
    if spec.operator == "===":
        wanted = spec.version.lower()
        return wanted in (str(version.base).lower(), str(version).lower())
    if version.is_dev:
        return False
    if _states_revision(spec.version):
        return spec.contains(version.full(), prereleases=True)
    return spec.contains(version.base, prereleases=True)


def _is_dev_text(version_text: str) -> bool:
    try:
        return RockVersion.parse(version_text).is_dev
    except InvalidVersion:
        return False


class PackageReq(namedtuple("PackageReq", "name specifier")):
    """A package name plus a version constraint.

    The name is canonicalized on parse, so ``Foo_Bar`` and ``foo-bar``
    compare equal.
    """

    @classmethod
    def parse(cls, text: str) -> PackageReq:
        """Build a requirement from ``name``, ``name >= 1.0`` or ``name@1.0``.

        The shorthand also takes development versions (``name@scm``), which
        become arbitrary equality (``===``) constraints.
        """
        match = _SHORTHAND_RE.match(text)
        if match:
            name, version = match.groups()
            operator = "===" if _is_dev_text(version) else "=="
            text = f"{name}{operator}{version}"
        try:
            req = Requirement(text)
        except InvalidRequirement as e:
            raise InvalidPackageReq(f"invalid package requirement {text!r}") from e
        if req.url or req.extras or req.marker:
            raise InvalidPackageReq(
                f"invalid package requirement {text!r}: "
                f"only a name and a version constraint are allowed"
            )
        return cls(canonicalize_name(req.name), req.specifier)

    def matches(self, version: RockVersion | Version | str) -> bool:
        """Whether ``version`` satisfies this requirement's constraint.

        Constraints are checked against the version without its rockspec
        revision, unless the constraint states a revision itself
        (``==1.14.0-1``). Development versions only satisfy unconstrained
        requirements and ``===`` constraints naming them.
        """
        if isinstance(version, Version):
            version = RockVersion(version, None)
        elif not isinstance(version, RockVersion):
            try:
                version = RockVersion.parse(version)
            except InvalidVersion:
                return False
        return all(_spec_contains(spec, version) for spec in self.specifier)

    def __str__(self) -> str:
        if not self.specifier:
            return self.name
        return f"{self.name} {self.specifier}"

    def __repr__(self) -> str:
        return f"<PackageReq({self})>"


class LocalPackage(
    namedtuple("LocalPackage", "id name version pinned dependencies")
):
    """A package instance as recorded in the lockfile."""

    def __repr__(self) -> str:
        return f"<{self.name}@{self.version} ({self.id})>"


class NotFound(namedtuple("NotFound", [])):
    """No installed package matches the requirement."""

    @property
    def ids(self) -> Tuple[LocalPackageId, ...]:
        return ()


class Single(namedtuple("Single", "id")):
    """Exactly one installed package matches the requirement."""

    @property
    def ids(self) -> Tuple[LocalPackageId, ...]:
        return (self.id,)


class Many(namedtuple("Many", "package_ids")):
    """Several installed packages match an underspecified requirement."""

    @property
    def ids(self) -> Tuple[LocalPackageId, ...]:
        return tuple(self.package_ids)


RockMatches = Union[NotFound, Single, Many]


def build_matches(ids: Iterable[LocalPackageId]) -> RockMatches:
    """Wrap matched identities in the variant that fits their count."""
    ids = tuple(ids)
    if not ids:
        return NotFound()
    if len(ids) == 1:
        return Single(ids[0])
    return Many(ids)


class PackageInstallSpec(
    namedtuple(
        "PackageInstallSpec",
        "package build_behaviour pin entry_type opt replaces",
        defaults=(
            BuildBehaviour.FRESH,
            PinnedState.UNPINNED,
            EntryType.ENTRYPOINT,
            OptState.REQUIRED,
            (),
        ),
    )
):
    """Instruction for the install executor regarding one requirement.

    ``replaces`` lists the installed identities that matched the
    requirement and are superseded by this install. It is empty for a
    fresh install.
    """

    def __repr__(self) -> str:
        return "<PackageInstallSpec({}, {}, {})>".format(
            self.package,
            self.build_behaviour.value,
            self.pin.value,
        )
