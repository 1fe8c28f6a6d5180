import pytest

from third_party_summary.utils import (
    NoDomainError,
    extract_hostname,
    extract_registered_domain,
    parent_domains,
)


def test_hostname_from_url():
    assert extract_hostname("https://Ads.Google.com/page?x=1") == "ads.google.com"


def test_hostname_from_bare_domain():
    assert extract_hostname("cdn.example.com/lib.js") == "cdn.example.com"


@pytest.mark.parametrize("value", ["", "Other", "not a url", "about:blank", "localhost"])
def test_hostname_rejects_non_domains(value):
    with pytest.raises(NoDomainError):
        extract_hostname(value)


def test_registered_domain_multi_part_suffix():
    assert extract_registered_domain("tracker.cdn.example.co.uk") == "example.co.uk"


def test_registered_domain_ip_falls_back():
    assert extract_registered_domain("192.168.0.1") == "192.168.0.1"


def test_parent_domains():
    assert parent_domains("a.b.example.com") == ["b.example.com", "example.com", "com"]
