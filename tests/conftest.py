import pytest

from third_party_summary.entity_db import EntityResolver
from third_party_summary.models import Entity


GA_URL = "https://www.google-analytics.com/analytics.js"
GA_COLLECT_URL = "https://ssl.google-analytics.com/collect?v=1"
FB_URL = "https://connect.facebook.net/en_US/fbevents.js"


@pytest.fixture(scope="session")
def resolver():
    return EntityResolver()


class FakeResolver:
    """Resolver keyed on URL prefixes; raises for anything without '://'."""

    def __init__(self, entities: dict[str, Entity]):
        self._entities = entities
        self.calls: list[str | None] = []

    def get_entity(self, url):
        if "://" not in url:
            raise ValueError(f"Unable to find domain in {url!r}")
        for prefix, entity in self._entities.items():
            if url.startswith(prefix):
                return entity
        return None

    def get_entity_safe(self, url):
        self.calls.append(url)
        try:
            return self.get_entity(url)
        except Exception:
            return None


@pytest.fixture
def fake_resolver():
    return FakeResolver({
        "https://a.example/": Entity(name="Alpha", homepage="https://alpha.example"),
        "https://b.example/": Entity(name="Beta"),
        "https://c.example/": Entity(name="Gamma", homepage="https://gamma.example"),
    })
