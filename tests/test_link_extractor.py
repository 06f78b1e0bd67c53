import pytest

from site_mapper.crawler.link_extractor import extract_links, normalize_url

BASE = "https://x.com"
HOST = "x.com"


def test_extract_links_returns_raw_hrefs_in_order():
    html = '<a href="/a">A</a><p><a href="  b.html ">B</a></p><a href="https://y.com/">Y</a>'
    assert extract_links(html) == ["/a", "b.html", "https://y.com/"]


def test_extract_links_drops_empty_and_missing_href():
    html = '<a href="">empty</a><a href="   ">blank</a><a name="top">anchor</a><a href="/ok">ok</a>'
    assert extract_links(html) == ["/ok"]


def test_extract_links_survives_malformed_markup():
    html = '<html><body><div><a href="/one">one<a href="/two">two</div></span><a href="/three"'
    found = extract_links(html)
    assert "/one" in found
    assert "/two" in found


def test_extract_links_keeps_duplicates_and_foreign_links():
    html = '<a href="/a">1</a><a href="/a">2</a><a href="mailto:a@b.com">m</a>'
    assert extract_links(html) == ["/a", "/a", "mailto:a@b.com"]


@pytest.mark.parametrize(
    "href",
    ["mailto:a@b.com", "MAILTO:a@b.com", "tel:+15551234", "javascript:void(0)", "JavaScript:alert(1)"],
)
def test_normalize_rejects_non_crawlable_schemes(href):
    assert normalize_url(href, BASE, HOST) is None


@pytest.mark.parametrize(
    "href,expected",
    [
        ("/about", "https://x.com/about"),
        ("about", "https://x.com/about"),
        ("  /about  ", "https://x.com/about"),
        ("//x.com/contact", "https://x.com/contact"),
        ("https://x.com/a?b=1", "https://x.com/a?b=1"),
        ("HTTPS://x.com/upper", "https://x.com/upper"),
        ("https://X.COM/Caps?Q=A", "https://x.com/Caps?Q=A"),
        ("/a\x1fb", "https://x.com/a%1Fb"),
        ("/del\x7f", "https://x.com/del%7F"),
    ],
)
def test_normalize_builds_absolute_urls(href, expected):
    assert normalize_url(href, BASE, HOST) == expected


def test_protocol_relative_uses_base_scheme():
    assert normalize_url("//x.com/p", "http://x.com", HOST) == "http://x.com/p"


def test_relative_join_is_against_base_not_current_page():
    # simplified join: base + "/" + href, whatever page the link was found on
    assert normalize_url("sub/page", "https://x.com/", HOST) == "https://x.com/sub/page"
    assert normalize_url("../up", BASE, HOST) == "https://x.com/../up"


@pytest.mark.parametrize(
    "href",
    ["https://other-host.com/page", "//cdn.x.com/lib.js", "http://sub.x.com/"],
)
def test_normalize_rejects_other_hosts(href):
    assert normalize_url(href, BASE, HOST) is None


def test_fragment_is_stripped():
    assert normalize_url("https://x.com/a#frag", BASE, HOST) == "https://x.com/a"
    assert normalize_url("/a#frag", BASE, HOST) == normalize_url("https://x.com/a", BASE, HOST)
    assert normalize_url("#top", BASE, HOST) == "https://x.com/"


def test_trailing_slash_variants_stay_distinct():
    assert normalize_url("/a/", BASE, HOST) != normalize_url("/a", BASE, HOST)


def test_host_case_variants_collapse():
    assert normalize_url("http://LOCALHOST:8080/a", "http://localhost:8080", "localhost") == "http://localhost:8080/a"
    assert normalize_url("/a", "http://LocalHost:8080", "localhost") == "http://localhost:8080/a"


def test_userinfo_case_is_kept():
    assert normalize_url("https://User:PW@X.com/p", BASE, HOST) == "https://User:PW@x.com/p"


def test_control_characters_never_survive():
    url = normalize_url("/a\x00b\x1fc", BASE, HOST)
    assert url == "https://x.com/a%00b%1Fc"
    assert not any(ord(c) < 0x20 for c in url)
