"""Tests for field and page identifier derivation."""

import pytest

from src.browser.pom.naming import (
    FieldNameResolver,
    derive_file_naming,
    derive_host_naming,
    sanitize_identifier,
    split_tokens,
    to_snake_case,
)
from src.models.page_models import CandidateElement, ElementKind


def make_candidate(scan_index=1, **kwargs):
    """Build a candidate with sensible defaults."""
    defaults = {
        "tag": "input",
        "kind": ElementKind.TEXT_INPUT,
        "node_path": f"/html/body/input[{scan_index}]",
    }
    defaults.update(kwargs)
    return CandidateElement(scan_index=scan_index, **defaults)


@pytest.fixture
def resolver():
    """Create a FieldNameResolver for testing."""
    return FieldNameResolver()


class TestSanitizeIdentifier:
    """Tests for identifier sanitization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("email", "Email"),
            ("first-name", "FirstName"),
            ("user_emailAddress", "UserEmailAddress"),
            ("HTMLParser", "HtmlParser"),
            ("Sign in!", "SignIn"),
            ("q", "Q"),
            ("search[query]", "SearchQuery"),
            ("address2", "Address2"),
            ("2fa-code", "FaCode"),
        ],
    )
    def test_sanitize(self, raw, expected):
        """Test raw strings become TitleCase identifiers."""
        assert sanitize_identifier(raw) == expected

    def test_empty_results(self):
        """Test inputs without usable characters yield an empty string."""
        assert sanitize_identifier("") == ""
        assert sanitize_identifier(None) == ""
        assert sanitize_identifier("!!!") == ""
        assert sanitize_identifier("123") == ""

    def test_non_ascii_is_stripped(self):
        """Test non-ASCII letters do not survive sanitization."""
        assert sanitize_identifier("Поиск") == ""
        assert sanitize_identifier("café menu") == "CafMenu"

    def test_keywords_get_suffix(self):
        """Test Python keywords are not emitted as identifiers."""
        assert sanitize_identifier("none") == "NoneField"
        assert sanitize_identifier("true") == "TrueField"

    def test_split_tokens(self):
        """Test splitting on separators and casing boundaries."""
        assert split_tokens("firstName") == ["first", "Name"]
        assert split_tokens("a.b-c_d") == ["a", "b", "c", "d"]

    def test_to_snake_case(self):
        """Test method name conversion."""
        assert to_snake_case("Email") == "email"
        assert to_snake_case("FirstName") == "first_name"
        assert to_snake_case("Q2") == "q2"
        assert to_snake_case("Field12") == "field12"


class TestFieldNameResolver:
    """Tests for FieldNameResolver."""

    def test_priority_id_over_name(self, resolver):
        """Test the id attribute wins over every other source."""
        candidate = make_candidate(id="email", name="user_email", placeholder="Email")
        assert resolver.assign(candidate) == "Email"

    def test_priority_name_over_text(self, resolver):
        """Test the name attribute wins over visible text."""
        candidate = make_candidate(
            tag="button", kind=ElementKind.SUBMIT, name="go", text="Search now"
        )
        assert resolver.assign(candidate) == "Go"

    def test_text_then_label_then_placeholder(self, resolver):
        """Test fallbacks after id and name."""
        assert resolver.assign(make_candidate(1, text="Sign in")) == "SignIn"
        assert resolver.assign(make_candidate(2, label="Last name")) == "LastName"
        assert resolver.assign(make_candidate(3, placeholder="Your city")) == "YourCity"

    def test_long_text_is_skipped(self):
        """Test visible text above the length limit is not used."""
        resolver = FieldNameResolver(max_text_length=10)
        candidate = make_candidate(
            text="Read more about our privacy policy", placeholder="Privacy"
        )
        assert resolver.assign(candidate) == "Privacy"

    def test_synthetic_fallback(self, resolver):
        """Test candidates without name sources get Field<index>."""
        assert resolver.assign(make_candidate(7)) == "Field7"

    def test_unusable_source_uses_synthetic_fallback(self, resolver):
        """Test a source that sanitizes to nothing falls back to Field<index>."""
        assert resolver.assign(make_candidate(4, id="__", name="real")) == "Field4"

    def test_collision_suffixes(self, resolver):
        """Test repeated names get the smallest unused suffix from 2."""
        names = [resolver.assign(make_candidate(i, name="q")) for i in range(1, 4)]
        assert names == ["Q", "Q2", "Q3"]

    def test_collision_is_case_insensitive(self, resolver):
        """Test names differing only by case collide."""
        assert resolver.assign(make_candidate(1, id="userName")) == "UserName"
        assert resolver.assign(make_candidate(2, id="username")) == "Username2"

    def test_collision_skips_taken_suffix(self, resolver):
        """Test a suffixed name already in use is skipped."""
        assert resolver.assign(make_candidate(1, id="q2")) == "Q2"
        assert resolver.assign(make_candidate(2, name="q")) == "Q"
        assert resolver.assign(make_candidate(3, name="q")) == "Q3"

    def test_propose_does_not_reserve(self, resolver):
        """Test propose leaves the name available."""
        candidate = make_candidate(name="q")
        assert resolver.propose(candidate) == "Q"
        assert resolver.propose(candidate) == "Q"
        assert resolver.assign(candidate) == "Q"
        assert resolver.propose(candidate) == "Q2"

    def test_resolvers_are_independent(self):
        """Test two resolvers never share assigned names."""
        first = FieldNameResolver()
        second = FieldNameResolver()
        first.assign(make_candidate(name="q"))
        assert second.assign(make_candidate(name="q")) == "Q"


class TestPageNaming:
    """Tests for page name and package path derivation."""

    @pytest.mark.parametrize(
        "host,expected_name,expected_package",
        [
            ("example.com", "Example", ["example"]),
            ("www.example.com", "Example", ["example"]),
            ("mail.google.com", "Google", ["google", "mail"]),
            ("mail.google.co.uk", "Google", ["google", "mail"]),
            ("shop.example.com.au", "Example", ["example", "shop"]),
            ("my-shop.de", "MyShop", ["myshop"]),
            ("localhost", "Localhost", ["localhost"]),
            ("example.com:8080", "Example", ["example"]),
        ],
    )
    def test_host_naming(self, host, expected_name, expected_package):
        """Test the host decomposition rule."""
        assert derive_host_naming(host) == (expected_name, expected_package)

    def test_country_code_without_generic_label(self):
        """Test a registrable label directly under a ccTLD is kept."""
        assert derive_host_naming("bbc.co")[0] == "Bbc"

    def test_ip_host(self):
        """Test IP hosts produce Host<digits> names."""
        assert derive_host_naming("127.0.0.1") == ("Host127001", ["host127001"])

    def test_file_naming(self):
        """Test file stems become page names."""
        assert derive_file_naming("login_form") == ("LoginForm", ["loginform"])
        assert derive_file_naming("404") == ("Document", ["document"])
