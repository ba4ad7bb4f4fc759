"""Python 3 bindings for libyang3."""

from sonicpkg.core.models import DpkgOptions, GitSource, QuiltPush, Recipe

LIBYANG3_PY3_TAG = "v3.1.0"
LIBYANG3_PY3_VERSION = "3.1.0-1"

RECIPE = Recipe(
    name="libyang3-py3",
    description="CFFI bindings to libyang3 for Python 3",
    version=LIBYANG3_PY3_VERSION,
    source=GitSource(
        url="https://github.com/CESNET/libyang-python.git",
        checkout_dir="libyang-python",
        branch=LIBYANG3_PY3_TAG,
        depth=1,
    ),
    edits=[QuiltPush(patches_dir="patch")],
    main_target=f"python3-libyang_{LIBYANG3_PY3_VERSION}_{{arch}}.deb",
    dpkg=DpkgOptions(skip_build_deps_on_cross=True, admindir_on_cross=False),
)
