"""libyang3, taken from the Debian archive and patched for SONiC."""

from sonicpkg.core.models import (
    AppendLine,
    ApplyPatch,
    DebianReleaseCondition,
    DeleteLines,
    DpkgOptions,
    DscSource,
    Recipe,
    Substitute,
)

LIBYANG_URL = "http://debian-archive.trafficmanager.net/debian/pool/main/liby/libyang"

LIBYANG3_VERSION = "3.12.2"
LIBYANG3_SUBVERSION = "1"
LIBYANG3_FULLVERSION = f"{LIBYANG3_VERSION}-{LIBYANG3_SUBVERSION}"

# xxhash is an optimization, not a real dependency; buster and older
# do not ship a new enough version.
_OLD_RELEASE = DebianReleaseCondition(max_release=10)

RECIPE = Recipe(
    name="libyang3",
    description="YANG data modeling library (Debian trixie package)",
    version=LIBYANG3_FULLVERSION,
    source=DscSource(
        url=LIBYANG_URL,
        package="libyang",
        full_version=LIBYANG3_FULLVERSION,
        checkout_dir=f"libyang-{LIBYANG3_VERSION}",
    ),
    edits=[
        # Large file support for 32-bit arch
        AppendLine(path="CMakeLists.txt", line="add_definitions(-D_FILE_OFFSET_BITS=64)"),
        ApplyPatch(patch="patch/0001-pr2362-lyd_validate_noextdeps.patch"),
        DeleteLines(path="debian/control", pattern=r".*libxxhash.*", when=_OLD_RELEASE),
        Substitute(
            path="CMakeLists.txt",
            pattern=r"^find_package\(XXHash\)",
            replacement="#find_package(XXHash)",
            when=_OLD_RELEASE,
        ),
    ],
    main_target=f"libyang3_{LIBYANG3_FULLVERSION}_{{arch}}.deb",
    derived_targets=[
        f"libyang-dev_{LIBYANG3_FULLVERSION}_{{arch}}.deb",
        f"libyang3-dbgsym_{LIBYANG3_FULLVERSION}_{{arch}}.deb",
        f"libyang-tools_{LIBYANG3_FULLVERSION}_{{arch}}.deb",
        f"libyang-tools-dbgsym_{LIBYANG3_FULLVERSION}_{{arch}}.deb",
    ],
    dpkg=DpkgOptions(skip_build_deps_on_cross=True, admindir_on_cross=False),
)
