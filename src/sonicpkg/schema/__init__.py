"""Configuration schemas shipped with sonicpkg."""

from sonicpkg.schema.dns import DNSConfig, DNSOptions, render_resolv_conf, validate_dns_config
from sonicpkg.schema.yang import load_schema_text, schema_limits

__all__ = [
    "DNSConfig",
    "DNSOptions",
    "render_resolv_conf",
    "validate_dns_config",
    "load_schema_text",
    "schema_limits",
]
