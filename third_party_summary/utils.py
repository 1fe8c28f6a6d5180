"""Utility functions for hostname and registered-domain extraction."""

from __future__ import annotations

from urllib.parse import urlparse

import tldextract

# Offline extractor: uses the public suffix snapshot bundled with tldextract.
_extract = tldextract.TLDExtract(suffix_list_urls=())


class NoDomainError(ValueError):
    """Raised when a string does not contain anything that looks like a domain."""


def extract_hostname(url: str) -> str:
    """Extract the lowercase hostname from a URL or bare domain.

    Examples:
        'https://ads.google.com/page' -> 'ads.google.com'
        'cdn.example.com/lib.js' -> 'cdn.example.com'

    Raises NoDomainError when no plausible hostname is present.
    """
    if not url or any(ch.isspace() for ch in url.strip()):
        raise NoDomainError(f"Unable to find domain in {url!r}")

    candidate = url.strip()
    parsed = urlparse(candidate if "://" in candidate else f"https://{candidate}")
    hostname = parsed.hostname or ""
    if "." not in hostname:
        raise NoDomainError(f"Unable to find domain in {url!r}")
    return hostname


def extract_registered_domain(hostname: str) -> str:
    """Extract the registered domain from a hostname.

    Examples:
        'tracker.cdn.example.co.uk' -> 'example.co.uk'
        '192.168.0.1' -> '192.168.0.1'
    """
    ext = _extract(hostname)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    # IPs or unusual domains
    return hostname


def parent_domains(hostname: str) -> list[str]:
    """Return the parent domains of a hostname, nearest first.

    'a.b.example.com' -> ['b.example.com', 'example.com', 'com']
    """
    parts = hostname.split(".")
    return [".".join(parts[i:]) for i in range(1, len(parts))]
