"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from sonicpkg.core.base import BaseRunner, CommandResult
from sonicpkg.core.config import BuildEnvironment, get_environment
from sonicpkg.core.exceptions import CommandError
from sonicpkg.recipes import libyang3, libyang3_py3, psample


class FakeRunner(BaseRunner):
    """
    Stands in for git, dget, patch, quilt, lsb_release and dpkg-buildpackage.

    Fetch commands create the checkout directory (with any seeded files),
    dpkg-buildpackage drops the configured artifacts next to the checkout,
    and `fail_on` makes the first command with that program name fail.
    """

    def __init__(
        self,
        produces: list[str] | None = None,
        release: str = "Release:\t12",
        seed: dict[str, str] | None = None,
        fail_on: str | None = None,
    ):
        super().__init__()
        self.produces = produces or []
        self.release = release
        self.seed = seed or {}
        self.fail_on = fail_on

    async def run(self, argv, cwd, env=None, capture=False) -> CommandResult:
        self._record(argv, cwd, env)
        cwd = Path(cwd)
        program = argv[0]

        if program == self.fail_on:
            raise CommandError(argv, 2, f"{program}: simulated failure")

        if program == "lsb_release":
            return CommandResult(argv=list(argv), cwd=str(cwd), stdout=self.release + "\n")

        if program == "git" and argv[1] == "clone":
            self._populate(cwd / argv[-1])
        elif program == "dget":
            # dget unpacks <package>-<upstream version>
            dsc = argv[-1].rsplit("/", 1)[-1].removesuffix(".dsc")
            package, full_version = dsc.split("_", 1)
            upstream = full_version.rsplit("-", 1)[0]
            self._populate(cwd / f"{package}-{upstream}")
        elif program == "dpkg-buildpackage":
            for name in self.produces:
                (cwd.parent / name).write_text("deb")

        return CommandResult(argv=list(argv), cwd=str(cwd))

    def _populate(self, checkout: Path) -> None:
        checkout.mkdir(parents=True)
        for relative, content in self.seed.items():
            path = checkout / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

    def programs(self) -> list[str]:
        return [record.argv[0] for record in self.history]

    def find(self, program: str) -> list[str]:
        for record in self.history:
            if record.argv[0] == program:
                return record.argv
        raise AssertionError(f"{program} was not run")


@pytest.fixture
def recipe_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    (root / "libyang3" / "patch").mkdir(parents=True)
    (root / "libyang3" / "patch" / "0001-pr2362-lyd_validate_noextdeps.patch").write_text("")
    (root / "libyang3-py3" / "patch").mkdir(parents=True)
    (root / "libyang3-py3" / "patch" / "series").write_text("")
    (root / "sflow" / "psample" / "debian").mkdir(parents=True)
    (root / "sflow" / "psample" / "debian" / "control").write_text("Source: libpsample\n")
    return root


@pytest.fixture
def native_env(tmp_path: Path, recipe_root: Path) -> BuildEnvironment:
    """Native amd64 build environment rooted in tmp_path."""
    return BuildEnvironment(
        cross_build_environ="n",
        configured_arch="amd64",
        sonic_dpkg_admindir="/sonic/dpkg",
        sonic_config_make_jobs=4,
        dest=tmp_path / "debs",
        recipe_root=recipe_root,
    )


@pytest.fixture
def cross_env(native_env: BuildEnvironment) -> BuildEnvironment:
    """Cross arm64 build environment."""
    return native_env.model_copy(update={"cross_build_environ": "y", "configured_arch": "arm64"})


@pytest.fixture
def libyang_seed() -> dict[str, str]:
    """Files the upstream libyang source package ships."""
    return {
        "CMakeLists.txt": "project(libyang C)\nfind_package(XXHash)\n",
        "debian/control": "Source: libyang\nBuild-Depends: cmake,\n libxxhash-dev,\n libpcre2-dev\n",
    }


@pytest.fixture
def libyang3_recipe():
    return libyang3.RECIPE


@pytest.fixture
def libyang3_py3_recipe():
    return libyang3_py3.RECIPE


@pytest.fixture
def psample_recipe():
    return psample.RECIPE


@pytest.fixture
def cli_env(monkeypatch, tmp_path: Path, recipe_root: Path):
    """Point the process environment at tmp_path for CLI and API tests."""
    monkeypatch.setenv("CROSS_BUILD_ENVIRON", "n")
    monkeypatch.setenv("CONFIGURED_ARCH", "amd64")
    monkeypatch.setenv("SONIC_DPKG_ADMINDIR", "/sonic/dpkg")
    monkeypatch.setenv("SONIC_CONFIG_MAKE_JOBS", "2")
    monkeypatch.setenv("DEST", str(tmp_path / "debs"))
    monkeypatch.setenv("SONICPKG_RECIPE_ROOT", str(recipe_root))
    get_environment.cache_clear()
    yield
    get_environment.cache_clear()


@pytest.fixture
def valid_dns_instance() -> dict:
    return {
        "DNS_NAMESERVER": {"8.8.8.8": {}, "1.1.1.1": {}},
        "DNS_OPTIONS": {"ndots": 2, "timeout": 5, "attempts": 3},
    }


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner
