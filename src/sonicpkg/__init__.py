"""sonicpkg - SONiC packaging recipes and DNS settings schema."""

__version__ = "0.1.0"
