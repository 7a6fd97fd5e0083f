import pytest
from packaging.specifiers import SpecifierSet
from packaging.version import Version

from installplan import (
    BuildBehaviour,
    InstallAction,
    InvalidPackageReq,
    PackageInstallSpec,
    PackageReq,
    PinnedState,
)
from installplan.structs import Many, NotFound, RockVersion, Single, build_matches


@pytest.mark.parametrize(
    "text, name, specifier",
    [
        ("busted", "busted", ""),
        ("lua-cjson >= 2.1", "lua-cjson", ">=2.1"),
        ("lua-cjson>=2.1,<3", "lua-cjson", ">=2.1,<3"),
        ("Lua_CJSON==2.1.0", "lua-cjson", "==2.1.0"),
        ("penlight@1.14.0", "penlight", "==1.14.0"),
        ("penlight @ 1.14.0-1", "penlight", "==1.14.0-1"),
        ("foo@scm", "foo", "===scm"),
        ("foo@dev-1", "foo", "===dev-1"),
    ],
)
def test_parse_requirement(text, name, specifier):
    req = PackageReq.parse(text)
    assert req.name == name
    assert req.specifier == SpecifierSet(specifier)


@pytest.mark.parametrize(
    "text",
    ["", ">= 1.0", "foo ==", "foo[extra]", "foo; os_name == 'nt'"],
)
def test_parse_invalid_requirement(text):
    with pytest.raises(InvalidPackageReq):
        PackageReq.parse(text)


def test_invalid_requirement_is_value_error():
    assert issubclass(InvalidPackageReq, ValueError)


def test_requirement_str():
    assert str(PackageReq.parse("busted")) == "busted"
    assert str(PackageReq.parse("busted>=2")) == "busted >=2"


def test_requirement_matches():
    req = PackageReq.parse("foo >= 1.0, < 2")
    assert req.matches("1.0.0-1")
    assert req.matches(Version("1.5"))
    assert req.matches("1.9.0a1")
    assert not req.matches("2.0.0")
    assert not req.matches("scm-1")


def test_unconstrained_requirement_matches_anything():
    req = PackageReq.parse("foo")
    assert req.matches("0.0.1")
    assert req.matches("99.0.0-3")
    assert req.matches("scm-1")
    assert req.matches("dev")


def test_build_matches_picks_variant():
    assert build_matches([]) == NotFound()
    assert isinstance(build_matches([]), NotFound)
    assert build_matches(["a"]) == Single("a")
    assert isinstance(build_matches(iter(["a", "b"])), Many)
    assert build_matches(["a", "b"]).ids == ("a", "b")


def test_matches_ids():
    assert NotFound().ids == ()
    assert Single("a").ids == ("a",)
    assert Many(["a", "b"]).ids == ("a", "b")


def test_build_behaviour_from_force():
    assert BuildBehaviour.from_force(True) is BuildBehaviour.FORCE
    assert BuildBehaviour.from_force(False) is BuildBehaviour.FRESH


def test_install_action_build_behaviour():
    assert InstallAction.FRESH.build_behaviour is BuildBehaviour.FRESH
    assert InstallAction.FORCE.build_behaviour is BuildBehaviour.FORCE
    assert InstallAction.SKIP.build_behaviour is None


def test_pinned_state_bool():
    assert PinnedState.from_bool(True) is PinnedState.PINNED
    assert PinnedState.from_bool(False) is PinnedState.UNPINNED
    assert PinnedState.PINNED.as_bool()


def test_install_spec_defaults():
    spec = PackageInstallSpec(PackageReq.parse("foo"))
    assert spec.build_behaviour is BuildBehaviour.FRESH
    assert spec.pin is PinnedState.UNPINNED
    assert spec.replaces == ()
    assert repr(spec) == "<PackageInstallSpec(foo, fresh, unpinned)>"


@pytest.mark.parametrize(
    "text, base, revision",
    [
        ("1.14.0-1", Version("1.14.0"), 1),
        ("1.14.0", Version("1.14.0"), None),
        ("2.1.0.10-12", Version("2.1.0.10"), 12),
        ("1.0.0-rc1", Version("1.0.0rc1"), None),
        ("scm-1", "scm", 1),
        ("DEV", "dev", None),
    ],
)
def test_parse_rock_version(text, base, revision):
    version = RockVersion.parse(text)
    assert version.base == base
    assert version.revision == revision


def test_rock_version_str():
    assert str(RockVersion.parse("1.14.0-1")) == "1.14.0-1"
    assert str(RockVersion.parse("scm-1")) == "scm-1"
    assert str(RockVersion.parse("1.14.0")) == "1.14.0"


def test_rock_version_sort_key():
    texts = ["1.0.0-2", "scm-1", "1.0.0-1", "2.0.0-1", "0.9-1"]
    ordered = sorted(texts, key=lambda t: RockVersion.parse(t).sort_key())
    assert ordered == ["0.9-1", "1.0.0-1", "1.0.0-2", "2.0.0-1", "scm-1"]


@pytest.mark.parametrize(
    "requirement, version, expected",
    [
        ("penlight@1.14.0", "1.14.0-1", True),
        ("penlight <= 1.14.0", "1.14.0-1", True),
        ("penlight > 1.14.0", "1.14.0-1", False),
        ("penlight == 1.14.*", "1.14.0-3", True),
        ("penlight@1.14.0-1", "1.14.0-1", True),
        ("penlight@1.14.0-1", "1.14.0-2", False),
        ("penlight >= 1.14.0-2", "1.14.0-3", True),
        ("penlight >= 1.14.0-2", "1.14.0-1", False),
    ],
)
def test_requirement_matches_ignores_unstated_revision(requirement, version, expected):
    assert PackageReq.parse(requirement).matches(version) is expected


@pytest.mark.parametrize(
    "requirement, version, expected",
    [
        ("foo@scm", "scm-1", True),
        ("foo@scm-1", "scm-1", True),
        ("foo@scm-2", "scm-1", False),
        ("foo@dev", "scm-1", False),
        ("foo >= 0", "scm-1", False),
        ("foo@scm", "1.0.0-1", False),
    ],
)
def test_requirement_matches_dev_versions(requirement, version, expected):
    assert PackageReq.parse(requirement).matches(version) is expected
