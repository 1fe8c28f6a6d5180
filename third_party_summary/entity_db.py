"""Third-party entity identification.

Maps URLs to the provider (entity) that owns them. Combines a built-in
entity list with an optional third-party-web style ``entities.json`` file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import Entity
from .utils import extract_hostname, extract_registered_domain, parent_domains

logger = logging.getLogger(__name__)

# Built-in entities: name, homepage, category, domains
BUILTIN_ENTITIES: list[dict] = [
    # Google
    {"name": "Google Analytics", "homepage": "https://www.google.com/analytics/analytics/",
     "category": "analytics",
     "domains": ["google-analytics.com", "ssl.google-analytics.com", "www.google-analytics.com"]},
    {"name": "Google Tag Manager", "homepage": "https://marketingplatform.google.com/about/tag-manager/",
     "category": "tag-manager",
     "domains": ["googletagmanager.com", "www.googletagmanager.com"]},
    {"name": "Google/Doubleclick Ads", "homepage": "https://www.doubleclickbygoogle.com/",
     "category": "ad",
     "domains": ["doubleclick.net", "googleadservices.com", "googlesyndication.com",
                 "googletagservices.com", "2mdn.net"]},
    {"name": "Google CDN", "homepage": "https://developers.google.com/speed/libraries/",
     "category": "cdn",
     "domains": ["ajax.googleapis.com"]},
    {"name": "Google Fonts", "homepage": "https://fonts.google.com/",
     "category": "cdn",
     "domains": ["fonts.googleapis.com", "fonts.gstatic.com"]},
    {"name": "Google Maps", "homepage": "https://developers.google.com/maps",
     "category": "utility",
     "domains": ["maps.google.com", "maps.googleapis.com", "maps.gstatic.com"]},
    {"name": "YouTube", "homepage": "https://youtube.com",
     "category": "video",
     "domains": ["youtube.com", "youtube-nocookie.com", "ytimg.com", "googlevideo.com"]},
    # Meta / Facebook
    {"name": "Facebook", "homepage": "https://www.facebook.com",
     "category": "social",
     "domains": ["facebook.com", "facebook.net", "fbcdn.net", "fbsbx.com", "atlassbx.com"]},
    {"name": "Instagram", "homepage": "https://www.instagram.com",
     "category": "social",
     "domains": ["instagram.com", "cdninstagram.com"]},
    # Microsoft
    {"name": "Bing Ads", "homepage": "https://bingads.microsoft.com",
     "category": "ad",
     "domains": ["bat.bing.com", "bing.com"]},
    {"name": "Microsoft Clarity", "homepage": "https://clarity.microsoft.com/",
     "category": "analytics",
     "domains": ["clarity.ms"]},
    # Amazon
    {"name": "Amazon Ads", "homepage": "https://ad.amazon.com/",
     "category": "ad",
     "domains": ["amazon-adsystem.com"]},
    {"name": "Amazon Web Services", "homepage": "https://aws.amazon.com/",
     "category": "other",
     "domains": ["amazonaws.com", "cloudfront.net"]},
    # Twitter / X
    {"name": "Twitter", "homepage": "https://twitter.com",
     "category": "social",
     "domains": ["twitter.com", "twimg.com", "t.co", "ads-twitter.com"]},
    # Adobe
    {"name": "Adobe Tag Manager", "homepage": "https://www.adobe.com/experience-platform/",
     "category": "tag-manager",
     "domains": ["adobedtm.com"]},
    {"name": "Adobe Analytics", "homepage": "https://www.adobe.com/analytics-cloud.html",
     "category": "analytics",
     "domains": ["omtrdc.net", "2o7.net", "demdex.net"]},
    {"name": "Adobe TypeKit", "homepage": "https://fonts.adobe.com/",
     "category": "cdn",
     "domains": ["typekit.net", "use.typekit.net", "p.typekit.net"]},
    # Ad networks
    {"name": "Criteo", "homepage": "https://www.criteo.com/",
     "category": "ad",
     "domains": ["criteo.com", "criteo.net"]},
    {"name": "Taboola", "homepage": "https://www.taboola.com/",
     "category": "ad",
     "domains": ["taboola.com", "taboolasyndication.com"]},
    {"name": "Outbrain", "homepage": "https://www.outbrain.com",
     "category": "ad",
     "domains": ["outbrain.com", "outbrainimg.com"]},
    {"name": "AppNexus", "homepage": "https://www.appnexus.com/",
     "category": "ad",
     "domains": ["adnxs.com"]},
    {"name": "The Trade Desk", "homepage": "https://www.thetradedesk.com/",
     "category": "ad",
     "domains": ["adsrvr.org"]},
    # Analytics
    {"name": "Hotjar", "homepage": "https://www.hotjar.com/",
     "category": "analytics",
     "domains": ["hotjar.com", "hotjar.io"]},
    {"name": "Hubspot", "homepage": "https://hubspot.com/",
     "category": "marketing",
     "domains": ["hubspot.com", "hs-analytics.net", "hsforms.com", "hs-scripts.com"]},
    {"name": "Quantcast", "homepage": "https://www.quantcast.com",
     "category": "ad",
     "domains": ["quantserve.com", "quantcount.com"]},
    {"name": "New Relic", "homepage": "https://newrelic.com/",
     "category": "utility",
     "domains": ["newrelic.com", "nr-data.net"]},
    {"name": "Sentry", "homepage": "https://sentry.io/",
     "category": "utility",
     "domains": ["sentry.io", "sentry-cdn.com"]},
    {"name": "Segment", "homepage": "https://segment.com/",
     "category": "analytics",
     "domains": ["segment.com", "segment.io"]},
    # CDNs and libraries
    {"name": "Cloudflare CDN", "homepage": "https://cdnjs.com/",
     "category": "cdn",
     "domains": ["cdnjs.cloudflare.com", "amp.cloudflare.com"]},
    {"name": "Cloudflare", "homepage": "https://www.cloudflare.com/",
     "category": "utility",
     "domains": ["cloudflare.com", "cloudflareinsights.com"]},
    {"name": "JSDelivr CDN", "homepage": "https://www.jsdelivr.com/",
     "category": "cdn",
     "domains": ["cdn.jsdelivr.net"]},
    {"name": "Unpkg", "homepage": "https://unpkg.com",
     "category": "cdn",
     "domains": ["unpkg.com"]},
    {"name": "jQuery CDN", "homepage": "https://code.jquery.com/",
     "category": "cdn",
     "domains": ["code.jquery.com"]},
    {"name": "Bootstrap CDN", "homepage": "https://www.bootstrapcdn.com/",
     "category": "cdn",
     "domains": ["maxcdn.bootstrapcdn.com", "stackpath.bootstrapcdn.com"]},
    # Social / other
    {"name": "Pinterest", "homepage": "https://pinterest.com/",
     "category": "social",
     "domains": ["pinterest.com", "pinimg.com"]},
    {"name": "LinkedIn", "homepage": "https://www.linkedin.com/",
     "category": "social",
     "domains": ["linkedin.com", "licdn.com"]},
    {"name": "TikTok", "homepage": "https://www.tiktok.com/en/",
     "category": "social",
     "domains": ["tiktok.com", "analytics.tiktok.com"]},
    {"name": "Yandex Metrica", "homepage": "https://metrica.yandex.com/about?",
     "category": "analytics",
     "domains": ["mc.yandex.ru", "mc.yandex.com"]},
    {"name": "Stripe", "homepage": "https://stripe.com",
     "category": "utility",
     "domains": ["stripe.com", "stripe.network", "js.stripe.com"]},
    {"name": "PayPal", "homepage": "https://paypal.com",
     "category": "utility",
     "domains": ["paypal.com", "paypalobjects.com"]},
    {"name": "reCAPTCHA", "homepage": "https://developers.google.com/recaptcha/",
     "category": "utility",
     "domains": ["recaptcha.net"]},
]


def _strip_wildcard(domain: str) -> str:
    return domain[2:] if domain.startswith("*.") else domain


class EntityResolver:
    """Third-party entity knowledge base.

    Combines built-in entity knowledge with an optional third-party-web
    ``entities.json`` file. Entries from the file take precedence over
    built-ins for the same domain.
    """

    def __init__(
        self,
        entities_path: str | Path | None = None,
        include_builtins: bool = True,
    ):
        # domain -> Entity
        self._lookup: dict[str, Entity] = {}

        if include_builtins:
            self._register_all(BUILTIN_ENTITIES)

        if entities_path:
            self._load_entities_file(Path(entities_path))

        logger.info("EntityResolver loaded with %d domain entries", len(self._lookup))

    def _register(self, name: str, homepage: str | None, category: str | None,
                  domains: list[str]) -> int:
        cleaned = tuple(_strip_wildcard(d).lower() for d in domains if isinstance(d, str) and "." in d)
        entity = Entity(name=name, homepage=homepage or None, category=category, domains=cleaned)
        for domain in cleaned:
            self._lookup[domain] = entity
        return len(cleaned)

    def _register_all(self, entries: list[dict]) -> int:
        count = 0
        for entry in entries:
            count += self._register(
                entry["name"], entry.get("homepage"), entry.get("category"), entry["domains"]
            )
        return count

    def _load_entities_file(self, path: Path) -> None:
        """Load a third-party-web entities.json file."""
        if not path.exists():
            logger.warning("Entities file not found: %s", path)
            return
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            count = 0
            for entry in data:
                if not isinstance(entry, dict) or "name" not in entry:
                    continue
                categories = entry.get("categories") or []
                category = entry.get("category") or (categories[0] if categories else None)
                count += self._register(
                    entry["name"], entry.get("homepage"), category, entry.get("domains", [])
                )
            logger.info("Loaded %d domains from %s", count, path)
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            logger.error("Failed to parse entities file %s: %s", path, e)

    def get_entity(self, url: str) -> Entity | None:
        """Return the entity owning a URL, or None if the domain is unknown.

        Walks up the domain hierarchy: ads.doubleclick.net -> doubleclick.net.
        Raises NoDomainError (a ValueError) if ``url`` has no domain at all.
        """
        hostname = extract_hostname(url)

        if hostname in self._lookup:
            return self._lookup[hostname]

        reg_domain = extract_registered_domain(hostname)
        if reg_domain in self._lookup:
            return self._lookup[reg_domain]

        for parent in parent_domains(hostname):
            if parent in self._lookup:
                return self._lookup[parent]

        return None

    def get_entity_safe(self, url: str | None) -> Entity | None:
        """Like get_entity, but any lookup failure yields None.

        Attribution inputs include labels that are not URLs at all
        (e.g. 'Other'), and one bad string must not abort the pass.
        """
        if url is None:
            return None
        try:
            return self.get_entity(url)
        except Exception as e:
            logger.debug("No entity for %r: %s", url, e)
            return None

    @property
    def domain_count(self) -> int:
        return len(self._lookup)

    @property
    def entities(self) -> list[Entity]:
        """Distinct entities known to the resolver."""
        seen: dict[int, Entity] = {}
        for entity in self._lookup.values():
            seen.setdefault(id(entity), entity)
        return list(seen.values())


_default_resolver: EntityResolver | None = None


def default_resolver() -> EntityResolver:
    """Process-wide resolver built from the built-in entity list."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = EntityResolver()
    return _default_resolver
