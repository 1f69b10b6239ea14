from gateway_blocklist.utils.normalize import normalize_domain, normalize_entries, redact_token, sanitize_headers


def test_hosts_file_prefixes_are_stripped():
    assert normalize_domain("0.0.0.0 example.com") == "example.com"
    assert normalize_domain("127.0.0.1\texample.com") == "example.com"
    assert normalize_domain("::1 example.com") == "example.com"
    assert normalize_domain(":: example.com") == "example.com"


def test_adblock_markers_are_stripped():
    assert normalize_domain("||example.com^") == "example.com"
    assert normalize_domain("||example.com^$important") == "example.com"
    assert normalize_domain("*.example.com") == "example.com"


def test_allowlist_marker_only_stripped_when_allowlisting():
    assert normalize_domain("@@||example.com", True) == "example.com"
    assert normalize_domain("@@||example.com", False) == "@@example.com"


def test_rules_apply_once():
    assert normalize_domain("*.*.example.com") == "*.example.com"
    assert normalize_domain("a^b^") == "ab^"


def test_unmatched_input_passes_through():
    assert normalize_domain("example.com") == "example.com"
    assert normalize_domain("not a domain") == "not a domain"
    assert normalize_domain("") == ""


def test_normalize_entries_skips_comments_and_dedupes():
    lines = [
        "# hosts file",
        "",
        "0.0.0.0 ads.example.com",
        "||ads.example.com^",
        "! adblock comment",
        "  tracker.example.net  ",
        "*.tracker.example.net",
    ]
    assert normalize_entries(lines) == ["ads.example.com", "tracker.example.net"]


def test_normalize_entries_allowlist():
    assert normalize_entries(["@@||good.example.com^", "good.example.com"], is_allowlisting=True) == [
        "good.example.com"
    ]


def test_redaction_helpers():
    assert redact_token("abcdefghijkl") == "abcde..."
    headers = sanitize_headers({"Authorization": "Bearer secret", "Accept": "application/json"})
    assert headers == {"Authorization": "[redacted]", "Accept": "application/json"}
