"""Installation tree backed by a JSON lockfile.

The lockfile lives at the root of the tree and looks like this::

    {
        "version": "1.0.0",
        "rocks": {
            "<id>": {
                "name": "foo",
                "version": "1.0.0-1",
                "pinned": false,
                "dependencies": ["<id>"]
            }
        },
        "entrypoints": ["<id>"]
    }

Rock versions are ``<version>-<revision>``, where the version may also be
``scm`` or ``dev`` for development rocks. A tree without a lockfile is an
empty tree.
"""

from __future__ import annotations

import json
import logging
import os
import pathlib
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional

from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion

from .providers import AbstractLockfile, AbstractTree
from .resolvers.exceptions import StoreError
from .structs import (
    LocalPackage,
    LocalPackageId,
    PackageReq,
    PinnedState,
    RockMatches,
    RockVersion,
    build_matches,
)

logger = logging.getLogger(__name__)

LOCKFILE_NAME = "lux.lock"


def _read_rock(
    package_id: str, data: Any, path: Optional[os.PathLike]
) -> LocalPackage:
    if not isinstance(data, dict):
        raise StoreError(f"rock {package_id!r} is not an object", path)
    try:
        name = data["name"]
        raw_version = data["version"]
    except KeyError as e:
        raise StoreError(f"rock {package_id!r} has no {e.args[0]!r}", path) from e
    if not isinstance(name, str) or not isinstance(raw_version, str):
        raise StoreError(f"rock {package_id!r} has a non-string name or version", path)
    try:
        version = RockVersion.parse(raw_version)
    except InvalidVersion as e:
        raise StoreError(
            f"rock {package_id!r} has invalid version {raw_version!r}", path
        ) from e

    pinned = data.get("pinned", False)
    if not isinstance(pinned, bool):
        raise StoreError(f"rock {package_id!r} has non-boolean 'pinned'", path)
    dependencies = data.get("dependencies", [])
    if not isinstance(dependencies, list) or not all(
        isinstance(dep, str) for dep in dependencies
    ):
        raise StoreError(
            f"rock {package_id!r} has 'dependencies' that are not a list of ids",
            path,
        )
    return LocalPackage(
        id=LocalPackageId(package_id),
        name=canonicalize_name(name),
        version=version,
        pinned=PinnedState.from_bool(pinned),
        dependencies=tuple(LocalPackageId(dep) for dep in dependencies),
    )


class Lockfile(AbstractLockfile):
    """The record of what is installed in a tree."""

    def __init__(
        self,
        rocks: Optional[Mapping[LocalPackageId, LocalPackage]] = None,
        entrypoints: Iterable[LocalPackageId] = (),
        path: Optional[os.PathLike] = None,
    ) -> None:
        self._rocks: Dict[LocalPackageId, LocalPackage] = dict(rocks or {})
        self._entrypoints = frozenset(entrypoints)
        self.path = path

    def __repr__(self) -> str:
        return "Lockfile({!r}, rocks={}, entrypoints={})".format(
            self.path,
            len(self._rocks),
            len(self._entrypoints),
        )

    @classmethod
    def from_dict(cls, data: Any, path: Optional[os.PathLike] = None) -> Lockfile:
        """Build a lockfile from its decoded JSON form.

        Raises `StoreError` if the data does not describe a valid lockfile.
        """
        if not isinstance(data, dict):
            raise StoreError("lockfile is not an object", path)
        raw_rocks = data.get("rocks", {})
        raw_entrypoints = data.get("entrypoints", [])
        if not isinstance(raw_rocks, dict):
            raise StoreError("'rocks' is not an object", path)
        if not isinstance(raw_entrypoints, list):
            raise StoreError("'entrypoints' is not a list", path)

        rocks = {
            LocalPackageId(package_id): _read_rock(package_id, rock, path)
            for package_id, rock in raw_rocks.items()
        }
        for package_id in raw_entrypoints:
            if not isinstance(package_id, str):
                raise StoreError(f"entrypoint {package_id!r} is not an id", path)
            if package_id not in rocks:
                raise StoreError(f"unknown entrypoint {package_id!r}", path)
        return cls(rocks, raw_entrypoints, path=path)

    @classmethod
    def load(cls, path: os.PathLike) -> Lockfile:
        path = pathlib.Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("No lockfile at %s, using an empty one", path)
            return cls(path=path)
        except OSError as e:
            raise StoreError(f"unable to read lockfile: {e.strerror}", path) from e
        except ValueError as e:
            raise StoreError(f"invalid lockfile: {e}", path) from e
        return cls.from_dict(data, path=path)

    def is_entrypoint(self, package_id: LocalPackageId) -> bool:
        return package_id in self._entrypoints

    def get(self, package_id: LocalPackageId) -> Optional[LocalPackage]:
        return self._rocks.get(package_id)

    def rocks(self) -> Dict[LocalPackageId, LocalPackage]:
        return dict(self._rocks)

    def entrypoints(self) -> FrozenSet[LocalPackageId]:
        return self._entrypoints


class Tree(AbstractTree):
    """An installation tree rooted at a directory.

    The lockfile is read on first use and kept, so every query made through
    one tree sees the same snapshot. Call `reload()` to pick up changes made
    to the lockfile since.
    """

    def __init__(self, root: os.PathLike) -> None:
        self.root = pathlib.Path(root)
        self._lockfile: Optional[Lockfile] = None

    def __repr__(self) -> str:
        return f"Tree({os.fspath(self.root)!r})"

    @property
    def lockfile_path(self) -> pathlib.Path:
        return self.root.joinpath(LOCKFILE_NAME)

    def lockfile(self) -> Lockfile:
        if self._lockfile is None:
            self._lockfile = Lockfile.load(self.lockfile_path)
        return self._lockfile

    def reload(self) -> None:
        """Drop the lockfile snapshot. The next query reads it again."""
        self._lockfile = None

    def match_rocks_and(
        self,
        requirement: PackageReq,
        predicate: Callable[[LocalPackage], bool],
    ) -> RockMatches:
        found = [
            rock
            for rock in self.lockfile().rocks().values()
            if rock.name == requirement.name
            and requirement.matches(rock.version)
            and predicate(rock)
        ]
        found.sort(key=lambda rock: rock.version.sort_key(), reverse=True)
        return build_matches(rock.id for rock in found)
