"""libpsample, the netlink psample client library used by sflow."""

from sonicpkg.core.models import CopyTree, DpkgOptions, GitCheckout, GitSource, Recipe

PSAMPLE_VERSION = "1.1-1"
PSAMPLE_COMMIT = "e48fad2"

RECIPE = Recipe(
    name="psample",
    description="Library for the Linux psample netlink channel",
    version=PSAMPLE_VERSION,
    directory="sflow/psample",
    source=GitSource(
        url="https://github.com/Mellanox/libpsample.git",
        checkout_dir="libpsample",
    ),
    edits=[
        # Packaging lives here, upstream has none
        CopyTree(source="debian"),
        GitCheckout(branch="libpsample", commit=PSAMPLE_COMMIT, force=True),
    ],
    main_target=f"libpsample_{PSAMPLE_VERSION}_{{arch}}.deb",
    derived_targets=[f"libpsample-dbgsym_{PSAMPLE_VERSION}_{{arch}}.deb"],
    dpkg=DpkgOptions(skip_build_deps_on_cross=False, admindir_on_cross=True),
)
