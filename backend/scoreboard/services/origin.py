import re
from typing import Iterable, Optional
from urllib.parse import urlparse

from flask import current_app, request

from scoreboard.errors import ConfigurationError, Forbidden

POLICY_OPEN = 'open'
POLICY_ALLOWLIST = 'allowlist'
POLICY_DOMAIN = 'domain'
POLICIES = (POLICY_OPEN, POLICY_ALLOWLIST, POLICY_DOMAIN)


def _host_of(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        host = urlparse(value).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def _is_same_or_subdomain(host: str, domain: str) -> bool:
    domain = domain.strip().lstrip('.').lower()
    if not domain:
        return False
    return host == domain or host.endswith('.' + domain)


def allowlist_admits(origin: Optional[str], allowed_origins: Iterable[str], suffix: str = '') -> bool:
    """Exact-origin allow-list with an optional wildcard host suffix.

    Requests without an Origin header (native apps, curl) are admitted.
    """
    if not origin:
        return True
    if origin in set(allowed_origins):
        return True
    host = _host_of(origin)
    suffix = (suffix or '').strip().lstrip('.').lower()
    return bool(host and suffix and host.endswith('.' + suffix))


def domain_admits(origin: Optional[str], referer: Optional[str], domain: str) -> bool:
    host = _host_of(origin) if origin else _host_of(referer)
    if not host:
        return False
    return _is_same_or_subdomain(host, domain)


def is_request_admitted(config, origin: Optional[str], referer: Optional[str]) -> bool:
    policy = config.get('ORIGIN_POLICY', POLICY_ALLOWLIST)
    if policy == POLICY_OPEN:
        return True
    if policy == POLICY_ALLOWLIST:
        return allowlist_admits(
            origin,
            config.get('ALLOWED_ORIGINS') or [],
            config.get('ALLOWED_ORIGIN_SUFFIX', ''),
        )
    if policy == POLICY_DOMAIN:
        return domain_admits(origin, referer, config.get('ALLOWED_DOMAIN', ''))
    raise ConfigurationError(f"Unknown ORIGIN_POLICY {policy!r}")


def enforce_origin_policy() -> None:
    """before_request hook: reject disallowed origins before any business logic."""
    origin = request.headers.get('Origin')
    referer = request.headers.get('Referer')
    if not is_request_admitted(current_app.config, origin, referer):
        current_app.logger.warning(
            f"[origin-reject] policy={current_app.config.get('ORIGIN_POLICY')} "
            f"origin={origin!r} referer={referer!r} path={request.path}"
        )
        raise Forbidden()


def cors_origins(config):
    """Origins handed to flask-cors so response headers follow the active policy."""
    policy = config.get('ORIGIN_POLICY', POLICY_ALLOWLIST)
    if policy == POLICY_OPEN:
        return '*'
    if policy == POLICY_ALLOWLIST:
        origins = list(config.get('ALLOWED_ORIGINS') or [])
        suffix = (config.get('ALLOWED_ORIGIN_SUFFIX') or '').strip().lstrip('.')
        if suffix:
            origins.append(r'^https?://([a-z0-9-]+\.)+' + re.escape(suffix.lower()) + r'$')
        return origins
    domain = (config.get('ALLOWED_DOMAIN') or '').strip().lstrip('.')
    if not domain:
        return []
    return [r'^https?://([a-z0-9-]+\.)*' + re.escape(domain.lower()) + r'(:\d+)?$']
