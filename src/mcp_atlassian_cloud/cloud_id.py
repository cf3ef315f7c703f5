"""Cloud ID resolution for Atlassian Cloud sites.

Every REST call goes through the ``api.atlassian.com`` gateway, which
addresses a tenant by its cloud ID rather than by its site URL. The cloud ID
is looked up once per (site, email, token) from the site's public
``/_edge/tenant_info`` endpoint and memoized in a :class:`CloudIdCache`.
"""

import hashlib
import logging
import threading

import requests

from .exceptions import ResolutionError
from .utils.urls import normalize_site_url

logger = logging.getLogger("mcp-atlassian-cloud.cloud_id")

TENANT_INFO_PATH = "/_edge/tenant_info"
TOKEN_DIGEST_LENGTH = 12


def token_fingerprint(api_token: str) -> str:
    """Return a short, non-reversible fingerprint of an API token.

    The fingerprint is the first 12 hex characters (upper case) of the
    SHA-256 digest, which is enough to tell tokens apart in a cache key
    without ever storing the token itself.
    """
    digest = hashlib.sha256(api_token.encode("utf-8")).hexdigest()
    return digest[:TOKEN_DIGEST_LENGTH].upper()


def make_cache_key(site_base_url: str, email: str, api_token: str) -> str:
    """Build the cache key ``<site>|<email>|<token fingerprint>``."""
    return f"{normalize_site_url(site_base_url)}|{email}|{token_fingerprint(api_token)}"


class CloudIdCache:
    """Thread-safe in-memory map of cache key -> cloud ID.

    Entries are never evicted: a site's cloud ID does not change for a given
    set of credentials, so the cache lives as long as its owner (normally the
    server lifespan). Two callers missing on the same key at the same time
    both resolve it and the last write wins, which is harmless because both
    get the same value.

    A plain locked dict is used rather than a ``cachetools`` cache because
    entries have neither a TTL nor a size bound to enforce.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, cloud_id: str) -> None:
        with self._lock:
            self._entries[key] = cloud_id

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CloudIdResolver:
    """Resolves and caches the cloud ID of an Atlassian Cloud site."""

    def __init__(
        self,
        cache: CloudIdCache | None = None,
        session: requests.Session | None = None,
        *,
        ssl_verify: bool = True,
        timeout: int | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Cache shared with other resolvers; a private one is created
                when omitted.
            session: HTTP session used for the tenant_info lookup.
            ssl_verify: Whether to verify TLS certificates.
            timeout: Request timeout in seconds.
        """
        self.cache = cache if cache is not None else CloudIdCache()
        self.session = session or requests.Session()
        self.ssl_verify = ssl_verify
        self.timeout = timeout

    def resolve(self, site_base_url: str, email: str, api_token: str) -> str:
        """Return the cloud ID for a site, fetching it on the first call.

        Args:
            site_base_url: Site URL, e.g. ``https://acme.atlassian.net``
            email: Account email used for basic auth
            api_token: API token used for basic auth

        Returns:
            The tenant's cloud ID

        Raises:
            ResolutionError: If tenant_info answers with a non-success status
                or without a usable ``cloudId``
        """
        site = normalize_site_url(site_base_url)
        cache_key = make_cache_key(site, email, api_token)

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        url = site + TENANT_INFO_PATH
        logger.debug(f"Resolving cloud ID: GET {url}")
        response = self.session.get(
            url,
            auth=(email, api_token),
            headers={"Accept": "application/json"},
            verify=self.ssl_verify,
            timeout=self.timeout,
        )
        if not response.ok:
            raise ResolutionError(
                f"cloudId resolve failed HTTP {response.status_code}: {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ResolutionError(
                f"tenant_info response is not valid JSON: {response.text}"
            ) from e

        if not isinstance(payload, dict) or "cloudId" not in payload:
            raise ResolutionError(
                f"cloudId not found in tenant_info response: {response.text}"
            )

        cloud_id = payload["cloudId"]
        if not isinstance(cloud_id, str) or not cloud_id.strip():
            raise ResolutionError("cloudId is null/empty")

        self.cache.set(cache_key, cloud_id)
        logger.info(f"Resolved cloud ID for {site}: {cloud_id}")
        return cloud_id
