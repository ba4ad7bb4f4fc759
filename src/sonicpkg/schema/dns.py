"""DNS resolver settings, validated the way the sonic-dns YANG model constrains them."""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    IPvAnyAddress,
    ValidationError,
    field_validator,
    model_validator,
)

from sonicpkg.core.models import ValidationIssue, ValidationResult

MAX_NAMESERVERS = 3

# Module-qualified top-level container of a YANG JSON instance
YANG_INSTANCE_KEYS = ("sonic-dns:sonic-dns", "sonic-dns")
NAMESERVER_LIST = "DNS_NAMESERVER_LIST"


def _address_string(value: Any) -> Any:
    # inet:ip-address is a string leaf
    if not isinstance(value, str):
        raise ValueError("Nameserver should be an IP address string")
    return value


class DNSOptions(BaseModel):
    """DNS_OPTIONS container: resolver search list and tuning knobs."""

    model_config = ConfigDict(extra="forbid")

    search: list[str] = Field(default_factory=list, description="Search suffixes")
    ndots: int = Field(default=1, ge=0, le=15, description="Dots before absolute lookup")
    timeout: int = Field(default=5, ge=1, le=30, description="Per-query timeout in seconds")
    attempts: int = Field(default=2, ge=1, le=5, description="Query attempts")

    @field_validator("search")
    @classmethod
    def _unique_search(cls, value: list[str]) -> list[str]:
        seen = set()
        for domain in value:
            if domain in seen:
                raise ValueError(f"Duplicate search domain {domain}")
            seen.add(domain)
        return value

    @field_validator("ndots", "timeout", "attempts", mode="before")
    @classmethod
    def _integer_or_decimal_string(cls, value: Any) -> Any:
        if isinstance(value, (bool, float)):
            raise ValueError("Input should be an integer")
        return value


class DNSConfig(BaseModel):
    """
    DNS_NAMESERVER and DNS_OPTIONS tables.

    Nameservers may be given as a config DB table keyed by IP
    (``{"8.8.8.8": {}}``), as the YANG list
    (``{"DNS_NAMESERVER_LIST": [{"ip": "8.8.8.8"}]}``) or as a plain list of
    addresses. DNS_OPTIONS is only allowed once a nameserver exists.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    nameservers: list[Annotated[IPvAnyAddress, BeforeValidator(_address_string)]] = Field(
        default_factory=list, alias="DNS_NAMESERVER", max_length=MAX_NAMESERVERS
    )
    options: DNSOptions | None = Field(default=None, alias="DNS_OPTIONS")

    @field_validator("nameservers", mode="before")
    @classmethod
    def _flatten_nameserver_table(cls, value: Any) -> Any:
        if isinstance(value, dict):
            if NAMESERVER_LIST in value:
                entries = value[NAMESERVER_LIST]
                if not isinstance(entries, list):
                    raise ValueError(f"{NAMESERVER_LIST} should be a list")
                return [e.get("ip") if isinstance(e, dict) else e for e in entries]
            return list(value.keys())
        return value

    @field_validator("nameservers")
    @classmethod
    def _unique_nameservers(cls, value: list) -> list:
        seen = set()
        for ip in value:
            if ip in seen:
                raise ValueError(f"Duplicate nameserver {ip}")
            seen.add(ip)
        return value

    @model_validator(mode="after")
    def _options_need_nameserver(self) -> "DNSConfig":
        if self.options is not None and not self.nameservers:
            raise ValueError("DNS_OPTIONS requires at least one DNS_NAMESERVER entry")
        return self

    @classmethod
    def from_instance(cls, data: Any) -> "DNSConfig":
        """Validate a config DB fragment or a sonic-dns YANG JSON instance."""
        if isinstance(data, dict):
            for key in YANG_INSTANCE_KEYS:
                if key in data:
                    data = data[key]
                    break
        return cls.model_validate(data)

    def to_config_db(self) -> dict[str, Any]:
        """Config DB tables with defaults filled in."""
        tables: dict[str, Any] = {
            "DNS_NAMESERVER": {str(ip): {} for ip in self.nameservers},
        }
        if self.options is not None:
            tables["DNS_OPTIONS"] = self.options.model_dump()
        return tables


def validate_dns_config(data: Any) -> ValidationResult:
    """Validate an instance, reporting every violation instead of raising."""
    try:
        DNSConfig.from_instance(data)
    except ValidationError as e:
        issues = [
            ValidationIssue(
                path="/" + "/".join(str(part) for part in err["loc"]),
                message=err["msg"].removeprefix("Value error, "),
            )
            for err in e.errors()
        ]
        return ValidationResult(valid=False, errors=issues)

    return ValidationResult(valid=True)


def render_resolv_conf(config: DNSConfig) -> str:
    """Render resolv.conf contents for a validated configuration."""
    lines = [f"nameserver {ip}" for ip in config.nameservers]

    opts = config.options
    if opts is not None:
        if opts.search:
            lines.append(f"search {' '.join(opts.search)}")
        lines.append(f"options ndots:{opts.ndots} timeout:{opts.timeout} attempts:{opts.attempts}")

    return "\n".join(lines) + "\n" if lines else ""
