"""Validation gate: evaluate rule sets against a request and reject on any violation."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

from storefront.core.errors import RequestValidationFailed
from storefront.schemas.error import ValidationErrorEntry
from storefront.validation.checks import is_blank
from storefront.validation.rules import RuleSet

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass(frozen=True)
class RequestSources:
    """Read-only view over the parts of a request that constraints inspect."""

    body: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    path: Mapping[str, Any] = field(default_factory=dict)


def lookup(source: Mapping[str, Any], field_path: str) -> Any:
    """Resolve a dotted field path; missing segments resolve to ``None``."""
    current: Any = source
    for part in field_path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return None
    return current


def evaluate(rules: RuleSet, sources: RequestSources) -> list[ValidationErrorEntry]:
    """Check every constraint and collect one entry per violation."""
    errors: list[ValidationErrorEntry] = []
    for constraint in rules:
        value = lookup(getattr(sources, constraint.location), constraint.field)
        if constraint.optional and is_blank(value):
            continue
        if not constraint.check(value):
            errors.append(ValidationErrorEntry(field=constraint.field, message=constraint.message))
    return errors


def enforce(rules: RuleSet, sources: RequestSources) -> None:
    """Raise ``RequestValidationFailed`` if ``rules`` reject ``sources``."""
    errors = evaluate(rules, sources)
    if errors:
        raise RequestValidationFailed(errors)


async def read_body(request: Request) -> dict[str, Any]:
    """Return the request body fields from JSON or form payloads.

    File parts are left out; they are handled by the upload filter.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: dict[str, Any] = {}
        for key in form.keys():
            values = [value for value in form.getlist(key) if not isinstance(value, UploadFile)]
            if values:
                fields[key] = values[0] if len(values) == 1 else values
        return fields

    raw = await request.body()
    if not raw:
        return {}
    try:
        decoded = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequestValidationFailed(
            [ValidationErrorEntry(field="body", message="Malformed JSON body")]
        ) from exc
    return decoded if isinstance(decoded, dict) else {}


async def read_sources(request: Request) -> RequestSources:
    return RequestSources(
        body=await read_body(request),
        query=dict(request.query_params),
        path=dict(request.path_params),
    )


def validate_request(*rule_sets: RuleSet) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency that gates a route on the given rule sets."""
    rules: RuleSet = tuple(constraint for rule_set in rule_sets for constraint in rule_set)

    async def gate(request: Request) -> None:
        enforce(rules, await read_sources(request))

    return gate
