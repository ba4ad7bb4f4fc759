"""DNS settings API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import PlainTextResponse

from sonicpkg.core.models import ValidationResult
from sonicpkg.schema.dns import DNSConfig, render_resolv_conf, validate_dns_config
from sonicpkg.schema.yang import load_schema_text

router = APIRouter()


@router.get("/schema", response_class=PlainTextResponse)
async def get_schema():
    """Return the sonic-dns YANG module."""
    return load_schema_text()


@router.post("/validate", response_model=ValidationResult)
async def validate(instance: Any = Body(...)):
    """Validate a configuration instance against the DNS schema."""
    return validate_dns_config(instance)


@router.post("/resolv-conf", response_class=PlainTextResponse)
async def resolv_conf(instance: Any = Body(...)):
    """Render resolv.conf for a configuration instance."""
    result = validate_dns_config(instance)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail=[issue.model_dump() for issue in result.errors],
        )
    return render_resolv_conf(DNSConfig.from_instance(instance))
