"""Part Match MCP Server - classify part numbers and score replacement candidates."""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .calculators import get_calculators, legacy_similarity
from .classify import classify, extract_series, matching_types, normalize, possible_manufacturers
from .config import (
    RATE_LIMIT_REQUESTS, HTTP_PORT, MAX_MPN_LENGTH, MAX_CANDIDATES, MAX_SPECS, DEFAULT_PROFILE,
)
from .errors import UnknownProfileError
from .extractors import extract_specs
from .matching import rank_candidates, resolve_calculator, resolve_profile, similarity
from .metadata import get_registry, lookup_type_metadata
from .profiles import SimilarityProfile
from .scoring import score
from .values import coerce_specs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Build registries and calculators on startup (not on first request)."""
    registry = get_registry()
    calculators = get_calculators()
    logger.info(f"Metadata registry ready: {len(registry)} component types")
    logger.info(f"Loaded {len(calculators)} similarity calculators")
    yield


# Create MCP server
mcp = FastMCP(
    name="partmatch",
    instructions="Electronic part number matching. No auth required. Use classify_part to identify an MPN's manufacturer and component type, compare_parts to score two MPNs, and rank_replacements to order candidate substitutes for a reference part. score_specs compares explicit spec values (e.g. from datasheets) for a component type.",
    lifespan=lifespan,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware - 100 requests/minute per IP.

    Includes protections against memory exhaustion from IP spoofing:
    - Maximum tracked IPs limit (10,000)
    - Periodic cleanup of stale IPs
    """

    MAX_TRACKED_IPS = 10_000  # Prevent memory exhaustion from spoofed IPs

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.request_counts: dict[str, list[float]] = {}
        self._last_cleanup = time.time()

    def _get_client_ip(self, request) -> str:
        """Extract client IP, preferring the rightmost X-Forwarded-For entry.

        The rightmost entry is appended by the last trusted proxy, so a client
        batch-scoring candidates cannot dodge the limit by forging the header.
        """
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            # Rightmost IP is the one our reverse proxy saw
            ips = [ip.strip() for ip in forwarded.split(",")]
            return ips[-1] if ips else "unknown"
        return request.client.host if request.client else "unknown"

    def _cleanup_stale_ips(self, now: float) -> None:
        """Drop IPs with no request inside the last minute. Called periodically."""
        window_start = now - 60
        stale_ips = [
            ip for ip, timestamps in self.request_counts.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in stale_ips:
            del self.request_counts[ip]

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True when client_ip is over its per-minute budget."""
        now = time.time()
        window_start = now - 60

        # Sweep stale IPs once a minute
        if now - self._last_cleanup > 60:
            self._cleanup_stale_ips(now)
            self._last_cleanup = now

        # Tracking table full: sweep now instead of waiting for the next minute
        if len(self.request_counts) >= self.MAX_TRACKED_IPS:
            self._cleanup_stale_ips(now)
            # Still full after cleanup: reject rather than grow without bound
            if len(self.request_counts) >= self.MAX_TRACKED_IPS:
                return True

        # First request from this IP
        if client_ip not in self.request_counts:
            self.request_counts[client_ip] = [now]
            return False

        # Keep only timestamps inside the sliding window
        self.request_counts[client_ip] = [
            t for t in self.request_counts[client_ip] if t > window_start
        ]

        # Over budget: reject without recording this request
        if len(self.request_counts[client_ip]) >= self.requests_per_minute:
            return True

        # Within budget: record it
        self.request_counts[client_ip].append(now)
        return False

    async def dispatch(self, request, call_next):
        # Container healthchecks never count against the limit
        if request.url.path == "/health":
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        if self._check_rate_limit(client_ip):
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded", "retry_after": 60},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)


# Helpers to handle JSON-encoded parameters from MCP clients
def _parse_list_param(value: list[str] | str | None) -> list[str] | None:
    """Parse a list parameter that may arrive as a JSON string like '["a", "b"]'."""
    if value is None:
        return None
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, list):
                return parsed
        except json.JSONDecodeError:
            logger.debug(f"Failed to parse list parameter as JSON: {value[:100]!r}")
    return None


def _parse_dict_param(value: dict[str, Any] | str | None) -> dict[str, Any] | None:
    """Parse an object parameter that may arrive as a JSON string."""
    if value is None:
        return None
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            logger.debug(f"Failed to parse object parameter as JSON: {value[:100]!r}")
    return None


def _validate_mpn(mpn: str | None, label: str = "mpn") -> str | None:
    """Return an error message for an unusable part number, None if it is fine."""
    if not mpn or not mpn.strip():
        return f"{label} is required"
    if len(mpn) > MAX_MPN_LENGTH:
        return f"{label} too long (max {MAX_MPN_LENGTH} characters)"
    return None


def _profile_or_error(profile: str | None) -> tuple[SimilarityProfile | None, dict | None]:
    try:
        return resolve_profile(profile or DEFAULT_PROFILE), None
    except UnknownProfileError as e:
        return None, {"error": str(e), "valid_profiles": [p.name for p in SimilarityProfile]}


# Tools

@mcp.tool(
    annotations=ToolAnnotations(
        title="Classify Part Number",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def classify_part(mpn: str) -> dict:
    """Identify the manufacturer and component type of a part number.

    Args:
        mpn: Manufacturer part number (e.g., "RC0603FR-0710KL", "STM32F103C8T6", "LM358DR")

    Returns:
        Normalized identifier, manufacturer, most specific type tag, every matching type,
        other manufacturers whose prefixes also match, and the part series.
    """
    error = _validate_mpn(mpn)
    if error:
        return {"error": error}

    result = classify(mpn)
    response = result.to_dict()
    response["matching_types"] = [tag.name for tag in matching_types(result.identifier, result.manufacturer)]
    response["possible_manufacturers"] = [m.display_name for m in possible_manufacturers(result.identifier)]
    response["series"] = extract_series(result.identifier)
    return response


@mcp.tool(
    annotations=ToolAnnotations(
        title="Compare Two Parts",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def compare_parts(mpn_a: str, mpn_b: str, profile: str | None = None) -> dict:
    """Score how well mpn_b can replace mpn_a (0.0 - 1.0).

    Scoring is direction-sensitive for types with minimum/maximum ratings: a 50V part
    replacing a 16V part scores higher than the reverse.

    Args:
        mpn_a: Reference part number (the part being replaced)
        mpn_b: Candidate part number
        profile: DESIGN_PHASE, REPLACEMENT (default), COST_OPTIMIZATION,
            PERFORMANCE_UPGRADE or EMERGENCY_SOURCING

    Returns:
        similarity, whether it passes the profile threshold, the calculator used,
        both classifications and the specs decoded from each part number.
    """
    for value, label in ((mpn_a, "mpn_a"), (mpn_b, "mpn_b")):
        error = _validate_mpn(value, label)
        if error:
            return {"error": error}
    resolved, error_response = _profile_or_error(profile)
    if error_response:
        return error_response

    result = similarity(mpn_a, mpn_b, resolved)
    # Same normalized identifier short-circuits to 1.0 without consulting a calculator
    identifier = normalize(mpn_a)
    if identifier and identifier == normalize(mpn_b):
        calculator_name = "identical"
    else:
        calculator_name = resolve_calculator(mpn_a, mpn_b).name
    return {
        "similarity": round(result, 4),
        "acceptable": resolved.is_acceptable(result),
        "threshold": resolved.threshold,
        "profile": resolved.name,
        "calculator": calculator_name,
        "heuristic_score": round(legacy_similarity(mpn_a, mpn_b), 4),
        "part_a": {**classify(mpn_a).to_dict(), "specs": extract_specs(mpn_a)},
        "part_b": {**classify(mpn_b).to_dict(), "specs": extract_specs(mpn_b)},
    }


@mcp.tool(
    annotations=ToolAnnotations(
        title="Rank Replacement Candidates",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def rank_replacements(
    reference: str,
    candidates: list[str] | str,
    profile: str | None = None,
    limit: int = 20,
) -> dict:
    """Rank candidate part numbers as replacements for a reference part, best first.

    Args:
        reference: Part number being replaced
        candidates: Candidate part numbers (max 200)
        profile: Similarity profile name (default REPLACEMENT)
        limit: Max results to return (default 20)

    Returns:
        Ranked results with score and acceptability under the profile threshold.
    """
    error = _validate_mpn(reference, "reference")
    if error:
        return {"error": error}
    parsed = _parse_list_param(candidates)
    if not parsed:
        return {"error": "candidates must be a non-empty list of part numbers"}
    if len(parsed) > MAX_CANDIDATES:
        return {"error": f"Too many candidates (max {MAX_CANDIDATES})"}
    valid = [c for c in parsed if isinstance(c, str) and _validate_mpn(c) is None]
    skipped = len(parsed) - len(valid)
    resolved, error_response = _profile_or_error(profile)
    if error_response:
        return error_response

    ranked = rank_candidates(reference, valid, resolved)
    effective_limit = max(1, min(limit, MAX_CANDIDATES))
    response: dict[str, Any] = {
        "reference": reference,
        "profile": resolved.name,
        "threshold": resolved.threshold,
        "results": [
            {"mpn": c.mpn, "score": round(c.score, 4), "acceptable": c.acceptable}
            for c in ranked[:effective_limit]
        ],
        "acceptable_count": sum(1 for c in ranked if c.acceptable),
        "total": len(ranked),
    }
    if skipped:
        response["skipped"] = skipped
    return response


@mcp.tool(
    annotations=ToolAnnotations(
        title="Score Spec Values",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def score_specs(
    component_type: str,
    reference: dict[str, Any] | str,
    candidate: dict[str, Any] | str,
    profile: str | None = None,
) -> dict:
    """Score candidate spec values against reference spec values for a component type.

    Values may carry units ("25V", "100nF", "10k", "1%") or be plain numbers.

    Args:
        component_type: Type tag (e.g., "CAPACITOR", "MOSFET", "RESISTOR_CHIP_YAGEO")
        reference: Reference specs (e.g., {"capacitance": "100nF", "voltage": "16V", "dielectric": "X7R"})
        candidate: Candidate specs with the same keys
        profile: Similarity profile name (default: the type's default profile)

    Returns:
        Weighted score, whether it passes the profile threshold, and the type's spec declarations.
    """
    if not component_type or not component_type.strip():
        return {"error": "component_type is required"}
    parsed_reference = _parse_dict_param(reference)
    parsed_candidate = _parse_dict_param(candidate)
    if parsed_reference is None or parsed_candidate is None:
        return {"error": "reference and candidate must be objects of spec name -> value"}
    if len(parsed_reference) > MAX_SPECS or len(parsed_candidate) > MAX_SPECS:
        return {"error": f"Too many specs (max {MAX_SPECS})"}
    try:
        resolved = resolve_profile(profile)
    except UnknownProfileError as e:
        return {"error": str(e), "valid_profiles": [p.name for p in SimilarityProfile]}

    try:
        metadata = lookup_type_metadata(component_type)
        effective_profile = resolved or (metadata.default_profile if metadata else SimilarityProfile.from_name(DEFAULT_PROFILE))
        result = score(component_type, coerce_specs(parsed_reference), coerce_specs(parsed_candidate), effective_profile)
    except ValueError as e:
        return {"error": str(e)}
    response: dict[str, Any] = {
        "component_type": component_type.strip().upper(),
        "score": round(result, 4),
        "acceptable": effective_profile.is_acceptable(result),
        "profile": effective_profile.name,
    }
    if metadata:
        response["metadata"] = metadata.to_dict()
    else:
        response["note"] = "No metadata for this type; scored with the generic spec comparison"
    return response


@mcp.tool(
    annotations=ToolAnnotations(
        title="List Similarity Profiles",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def list_profiles() -> dict:
    """List similarity profiles with their importance multipliers and acceptance thresholds."""
    return {
        "profiles": [profile.to_dict() for profile in SimilarityProfile],
        "default": DEFAULT_PROFILE,
    }


@mcp.tool(
    annotations=ToolAnnotations(
        title="Decode Part Specs",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def part_specs(mpn: str) -> dict:
    """Decode the specs encoded in a part number (value, tolerance, voltage, package...).

    Args:
        mpn: Manufacturer part number (e.g., "GRM188R71H104KA93D")

    Returns:
        Classification plus decoded specs in base units (ohms, farads, volts, amps, bits).
    """
    error = _validate_mpn(mpn)
    if error:
        return {"error": error}
    result = classify(mpn)
    specs = extract_specs(mpn)
    response = {**result.to_dict(), "specs": specs}
    if not specs:
        response["note"] = "No specs could be decoded from this part number"
    return response


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "partmatch-mcp",
        "version": __version__,
    })


# Create ASGI app
def create_app():
    """Create the ASGI application."""
    # Middleware list: rate limiting only (FastMCP handles CORS for MCP endpoints)
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]

    # stateless_http=True: MCP clients do not forward session cookies, and every tool
    # here is a pure function of its arguments, so no per-session state is needed
    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )

    # Health check route, served outside the /mcp transport
    app.routes.append(Route("/health", health))

    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Suppress noisy /health access logs from container healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return "/health" not in msg


def main():
    """Run the server."""
    import uvicorn

    # Suppress /health access log spam (container healthchecks every 10-30s)
    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "partmatch.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
