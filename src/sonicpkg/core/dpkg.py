"""dpkg-buildpackage command line construction."""

from sonicpkg.core.config import BuildEnvironment
from sonicpkg.core.models import Recipe

DPKG_BUILDPACKAGE = "dpkg-buildpackage"


def buildpackage_command(recipe: Recipe, env: BuildEnvironment) -> list[str]:
    """
    Build the dpkg-buildpackage argv for a recipe.

    Native builds always use the SONiC dpkg admindir. Cross builds select the
    target architecture and build profiles; whether build-dependency checks
    are skipped and whether the admindir is passed depends on the recipe.
    """
    opts = recipe.dpkg
    cmd = [DPKG_BUILDPACKAGE, "-rfakeroot"]

    if env.is_cross_build:
        if opts.skip_build_deps_on_cross:
            cmd.append("-d")
        cmd += ["-b", "-us", "-uc", f"-a{env.configured_arch}"]
        if opts.profiles_on_cross:
            cmd.append(f"-P{','.join(opts.profiles_on_cross)}")
        cmd.append(f"-j{env.sonic_config_make_jobs}")
        if opts.admindir_on_cross:
            cmd += _admindir_args(env)
    else:
        cmd += ["-b", "-us", "-uc", f"-j{env.sonic_config_make_jobs}"]
        cmd += _admindir_args(env)

    return cmd


def _admindir_args(env: BuildEnvironment) -> list[str]:
    if not env.sonic_dpkg_admindir:
        return []
    return ["--admindir", env.sonic_dpkg_admindir]
