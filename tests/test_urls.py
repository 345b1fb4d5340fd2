import pytest

from site_mapper.crawler.urls import hostname_of, identity_key, resolve, strip_trailing_slash

BASE = "http://example.com/docs/index.html"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("logo.png", "http://example.com/docs/logo.png"),
        ("/about", "http://example.com/about"),
        ("../up", "http://example.com/up"),
        ("//cdn.example.org/app.js", "http://cdn.example.org/app.js"),
        ("https://other.org/x/", "https://other.org/x"),
        ("/search?q=1", "http://example.com/search?q=1"),
        ("/a#part", "http://example.com/a"),
        ("", "http://example.com/docs/index.html"),
    ],
)
def test_resolve_reference_forms(raw, expected):
    assert resolve(BASE, raw) == expected


def test_trailing_slash_equivalence():
    with_slash = resolve("http://example.com", "/a/")
    without = resolve("http://example.com", "/a")
    assert with_slash == without == "http://example.com/a"
    assert identity_key(with_slash) == identity_key(without)


def test_fragment_only_reference_is_empty():
    errors = []
    assert resolve(BASE, "#section", errors) == ""
    assert resolve(BASE, "#", errors) == ""
    assert errors == []


def test_empty_base_takes_reference_as_absolute():
    assert resolve("", "http://example.com/") == "http://example.com"
    assert resolve("", "https://example.com/a//") == "https://example.com/a"


def test_empty_base_drops_fragment():
    assert resolve("", "http://example.com/#top") == "http://example.com"
    assert resolve("", "http://example.com/a?x=1#part") == "http://example.com/a?x=1"
    assert resolve("", "http://example.com/") == resolve("http://example.com/#top", "/")

    errors = []
    assert resolve("", "http://[::1#top", errors) == ""
    assert errors[0].startswith("URL: http://[::1#top parsing failed")


def test_malformed_reference_is_logged():
    errors = []
    assert resolve("http://example.com", "http://[::1", errors) == ""
    assert len(errors) == 1
    assert errors[0].startswith("Relative URL: http://[::1 parsing failed")


def test_malformed_base_is_logged():
    errors = []
    assert resolve("http://[broken", "/x", errors) == ""
    assert len(errors) == 1
    assert errors[0].startswith("Base URL: http://[broken")


def test_identity_key_ignores_scheme():
    assert identity_key("http://example.com/y") == "//example.com/y"
    assert identity_key("https://example.com/y") == "//example.com/y"
    assert identity_key("HTTPS://example.com/y") == "//example.com/y"


def test_identity_key_malformed():
    errors = []
    assert identity_key("http://[::1", errors) == ""
    assert errors and "parsing failed" in errors[0]


def test_strip_trailing_slash():
    assert strip_trailing_slash("http://example.com/") == "http://example.com"
    assert strip_trailing_slash("http://example.com/a///") == "http://example.com/a"
    assert strip_trailing_slash("http://example.com/a") == "http://example.com/a"


def test_hostname_of():
    assert hostname_of("http://Example.COM:8080/x") == "example.com"
    assert hostname_of("mailto:someone@example.com") is None
    assert hostname_of("http://[::1") is None
