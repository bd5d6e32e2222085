"""
Request resolver - turns a stored template plus caller args into one
outbound HTTP request.

Steps:
    1. parse the caller's args (a JSON object string)
    2. substitute {placeholders} in api.url, consuming those keys
    3. merge api.params defaults with the remaining args (args win)
    4. encode: query string for GET-style methods, JSON body for POST/PUT/PATCH

The template is never modified.
"""
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

from request_mcp.errors import ArgumentFormatError, MissingParameterError, ValidationError

PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

# Methods whose params travel as a JSON body. Everything else is GET-style.
BODY_METHODS = ("POST", "PUT", "PATCH")

# Same unreserved set as JavaScript's encodeURIComponent
PATH_SAFE_CHARS = "!~*'()"


@dataclass
class ResolvedRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


def parse_args(raw_args) -> Dict[str, Any]:
    """Parse the caller's args string into a dict."""
    if isinstance(raw_args, dict):
        return dict(raw_args)

    try:
        parsed = json.loads(raw_args, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except (TypeError, ValueError) as e:
        raise ArgumentFormatError(str(e)) from e

    if not isinstance(parsed, dict):
        raise ArgumentFormatError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _reject_constant(name):
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_finite_float(text):
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def is_missing(value) -> bool:
    """JSON-falsy values count as missing: null, false, 0, ""."""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return value == ""


def stringify(value) -> str:
    """Strings pass through, whole floats drop ".0", the rest is compact JSON (true, 3, ["a"])."""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def substitute_placeholders(url: str, args: Dict[str, Any]) -> str:
    """Fill {name} placeholders from args and pop the consumed keys.

    Raises MissingParameterError for the first placeholder (left to right)
    with no usable value; args is left untouched in that case.
    """
    tokens = PLACEHOLDER_RE.findall(url)
    for token in tokens:
        if is_missing(args.get(token)):
            raise MissingParameterError(token)

    resolved = PLACEHOLDER_RE.sub(
        lambda m: quote(stringify(args[m.group(1)]), safe=PATH_SAFE_CHARS), url
    )
    for token in set(tokens):
        args.pop(token, None)
    return resolved


def merge_params(defaults, args: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge; caller args override defaults."""
    merged = dict(defaults or {})
    merged.update(args)
    return merged


def build_query_string(params: Dict[str, Any]) -> str:
    return urlencode([(key, stringify(value)) for key, value in params.items()])


def append_query(url: str, query: str) -> str:
    if not query:
        return url
    return f"{url}{'&' if '?' in url else '?'}{query}"


def build_headers(template_headers, json_body: bool) -> Dict[str, str]:
    headers = {str(k): stringify(v) for k, v in (template_headers or {}).items()}
    if json_body:
        for name in [k for k in headers if k.lower() == "content-type"]:
            del headers[name]
        headers["Content-Type"] = "application/json"
    return headers


def resolve_request(template: dict, raw_args) -> ResolvedRequest:
    """Resolve a template + caller args into a ResolvedRequest."""
    api = template.get("api") or {}
    if not isinstance(api, dict):
        raise ValidationError(f"API {template.get('id')} has an invalid api section: expected an object")
    url = api.get("url")
    if not url or not isinstance(url, str):
        raise ValidationError(f"API {template.get('id')} has no api.url")
    method = api.get("method") or "GET"

    args = parse_args(raw_args)
    url = substitute_placeholders(url, args)
    params = merge_params(api.get("params"), args)

    if method in BODY_METHODS:
        return ResolvedRequest(
            method=method,
            url=url,
            headers=build_headers(api.get("headers"), json_body=True),
            body=_encode_body(params),
        )

    return ResolvedRequest(
        method=method,
        url=append_query(url, build_query_string(params)),
        headers=build_headers(api.get("headers"), json_body=False),
    )


def _encode_body(params: Dict[str, Any]) -> str:
    try:
        return json.dumps(params, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise ArgumentFormatError(f"Cannot encode request body as JSON: {e}") from e
