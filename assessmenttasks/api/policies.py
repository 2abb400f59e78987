"""Per-route access requirements.

Which routes are gated is configuration here rather than an accident of
which handlers happen to declare an auth dependency.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteAccess:
    requires_auth: bool = False
    requires_ownership: bool = False

    def __post_init__(self) -> None:
        if self.requires_ownership and not self.requires_auth:
            raise ValueError("Ownership checks need an authenticated caller")


PUBLIC = RouteAccess()
OWNER_ONLY = RouteAccess(requires_auth=True, requires_ownership=True)

# Keyed by (method, path template). Create and delete are open and update is
# owner-scoped, matching the behaviour existing clients rely on.
ROUTE_POLICIES: dict[tuple[str, str], RouteAccess] = {
    ("GET", "/"): PUBLIC,
    ("GET", "/health"): PUBLIC,
    ("POST", "/register"): PUBLIC,
    ("POST", "/login"): PUBLIC,
    ("POST", "/assessments"): PUBLIC,
    ("GET", "/assessments"): PUBLIC,
    ("PUT", "/assessments/{assessment_id}"): OWNER_ONLY,
    ("DELETE", "/assessments/{assessment_id}"): PUBLIC,
}


def policy_for(method: str, path: str) -> RouteAccess:
    try:
        return ROUTE_POLICIES[(method.upper(), path)]
    except KeyError as exc:
        raise LookupError(f"No access policy declared for {method.upper()} {path}") from exc
