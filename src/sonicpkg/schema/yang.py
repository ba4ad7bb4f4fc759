"""Access to the bundled YANG modules."""

import re
from dataclasses import dataclass, field
from importlib import resources

DNS_MODULE = "sonic-dns"


@dataclass
class LeafRange:
    """Numeric range and default of an integer leaf."""

    minimum: int
    maximum: int
    default: int | None = None


@dataclass
class SchemaLimits:
    """Constraints extracted from a YANG module."""

    max_elements: dict[str, int] = field(default_factory=dict)
    leaves: dict[str, LeafRange] = field(default_factory=dict)


def load_schema_text(module: str = DNS_MODULE) -> str:
    """Return a bundled YANG module verbatim."""
    data_dir = resources.files("sonicpkg.schema").joinpath("data")
    return data_dir.joinpath(f"{module}.yang").read_text()


def schema_limits(text: str) -> SchemaLimits:
    """Extract list sizes and ranged integer leaves from YANG text."""
    limits = SchemaLimits()

    for match in re.finditer(r"\blist\s+([\w-]+)\s*\{", text):
        body = _block_body(text, match.end())
        max_match = re.search(r"\bmax-elements\s+(\d+)\s*;", body)
        if max_match:
            limits.max_elements[match.group(1)] = int(max_match.group(1))

    for match in re.finditer(r"\bleaf\s+([\w-]+)\s*\{", text):
        body = _block_body(text, match.end())
        range_match = re.search(r'\brange\s+"(\d+)\.\.(\d+)"', body)
        if not range_match:
            continue
        default_match = re.search(r"\bdefault\s+\"?(\d+)\"?\s*;", body)
        limits.leaves[match.group(1)] = LeafRange(
            minimum=int(range_match.group(1)),
            maximum=int(range_match.group(2)),
            default=int(default_match.group(1)) if default_match else None,
        )

    return limits


def _block_body(text: str, start: int) -> str:
    """Text between an opening brace (just before start) and its match."""
    depth = 1
    i = start
    while i < len(text) and depth:
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
        i += 1
    return text[start : i - 1]
