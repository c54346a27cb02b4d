#!/usr/bin/env python
# -*- encoding: utf-8 -*-
"""
Tests for the digest challenge parser and response calculator.
Reference values are from the example in RFC 2617, section 3.5.
"""
import pytest

from autoauth.lib import error
from autoauth.lib.digest import build_digest_context
from autoauth.lib.digest import compute_ha1
from autoauth.lib.digest import compute_ha2
from autoauth.lib.digest import compute_response
from autoauth.lib.digest import digest_authorization
from autoauth.lib.digest import make_cnonce
from autoauth.lib.digest import parse_challenge
from autoauth.lib.url import request_uri

from fixture_helpers import DIGEST_CHALLENGE

RFC_NONCE = "dcd98b7102dd2f0e8b11d0f600bfb0c093"


class TestParseChallenge:
    def test_rfc_challenge(self):
        challenge = parse_challenge(DIGEST_CHALLENGE)
        assert challenge == {
            "realm": "testrealm@host.com",
            "qop": "auth",
            "nonce": RFC_NONCE,
            "opaque": "5ccc069c403ebaf9f0171e9517f40e41",
        }

    def test_unquoted_values_and_whitespace(self):
        challenge = parse_challenge("Digest  realm = x ,nonce=abc,   qop=auth")
        assert challenge == {"realm": "x", "nonce": "abc", "qop": "auth"}

    def test_without_prefix(self):
        assert parse_challenge('realm="r", nonce="n"') == {"realm": "r", "nonce": "n"}

    def test_segments_without_equal_sign_are_skipped(self):
        assert parse_challenge('Digest realm="r", stale, nonce="n"') == {
            "realm": "r",
            "nonce": "n",
        }

    def test_split_on_first_equal_sign(self):
        assert parse_challenge('Digest nonce="abc==", realm="r"')["nonce"] == "abc=="

    def test_empty_and_garbage(self):
        assert parse_challenge("") == {}
        assert parse_challenge("Digest") == {}
        assert parse_challenge("Digest ,,,") == {}

    def test_unknown_directives_are_kept_but_harmless(self):
        challenge = parse_challenge('Digest realm="r", algorithm=MD5, nonce="n"')
        assert challenge["algorithm"] == "MD5"


class TestDigestComputation:
    def test_rfc2617_example(self):
        ha1 = compute_ha1("Mufasa", "testrealm@host.com", "Circle Of Life")
        ha2 = compute_ha2("GET", "/dir/index.html")
        assert ha1 == "939e7578ed9e3c518a452acee763bce9"
        assert ha2 == "39aff3a2bab6126f332b942af96d3366"
        assert (
            compute_response(ha1, RFC_NONCE, ha2, "auth", "00000001", "0a4f113b")
            == "6629fae49393a05397450978507c4ef1"
        )

    def test_context(self):
        context = build_digest_context(
            "Mufasa",
            "Circle Of Life",
            "GET",
            "/dir/index.html",
            parse_challenge(DIGEST_CHALLENGE),
            cnonce="0a4f113b",
        )
        assert context.nc == "00000001"
        assert context.cnonce == "0a4f113b"
        assert context.response == "6629fae49393a05397450978507c4ef1"

    def test_without_qop(self):
        ha1 = compute_ha1("Mufasa", "testrealm@host.com", "Circle Of Life")
        ha2 = compute_ha2("GET", "/dir/index.html")
        ## RFC 2069 style, nc and cnonce are not part of the hash
        assert compute_response(ha1, RFC_NONCE, ha2) == compute_response(
            ha1, RFC_NONCE, ha2, "", "00000001", "0a4f113b"
        )
        assert compute_response(ha1, RFC_NONCE, ha2) != compute_response(
            ha1, RFC_NONCE, ha2, "auth", "00000001", "0a4f113b"
        )

    def test_method_case_is_not_changed(self):
        assert compute_ha2("get", "/") != compute_ha2("GET", "/")

    def test_cnonce(self):
        cnonces = {make_cnonce() for _ in range(50)}
        assert len(cnonces) == 50
        for cnonce in cnonces:
            assert cnonce == cnonce.lower()
            assert len(cnonce) <= 16
            int(cnonce, 16)


class TestAuthorizationHeader:
    def test_rfc_example_header(self):
        header = digest_authorization(
            "Mufasa",
            "Circle Of Life",
            "GET",
            "http://www.nowhere.org/dir/index.html",
            DIGEST_CHALLENGE,
            cnonce="0a4f113b",
        )
        assert header == (
            'Digest username="Mufasa", realm="testrealm@host.com", '
            f'nonce="{RFC_NONCE}", uri="/dir/index.html", '
            'response="6629fae49393a05397450978507c4ef1", '
            'qop=auth, nc=00000001, cnonce="0a4f113b", '
            'opaque="5ccc069c403ebaf9f0171e9517f40e41"'
        )

    def test_no_qop_no_opaque(self):
        header = digest_authorization(
            "u", "p", "POST", "http://h/x", 'Digest realm="r", nonce="n"'
        )
        assert header.startswith('Digest username="u", realm="r", nonce="n", uri="/x"')
        assert "qop" not in header
        assert "cnonce" not in header
        assert "opaque" not in header

    def test_missing_directives_default_to_empty(self):
        header = digest_authorization("u", "p", "GET", "http://h/", "Digest")
        assert 'realm=""' in header
        assert 'nonce=""' in header
        ha1 = compute_ha1("u", "", "p")
        expected = compute_response(ha1, "", compute_ha2("GET", "/"))
        assert f'response="{expected}"' in header

    def test_query_string_is_part_of_uri(self):
        header = digest_authorization(
            "u", "p", "GET", "http://h/v1/eval?database=Documents&x=1", DIGEST_CHALLENGE
        )
        assert 'uri="/v1/eval?database=Documents&x=1"' in header

    def test_fresh_cnonce_per_call(self):
        args = ("u", "p", "GET", "http://h/", DIGEST_CHALLENGE)
        assert digest_authorization(*args) != digest_authorization(*args)

    def test_invalid_url(self):
        with pytest.raises(error.InvalidUrlError):
            digest_authorization("u", "p", "GET", "not a url", DIGEST_CHALLENGE)


class TestRequestUri:
    def test_path(self):
        assert request_uri("https://example.com:8000/a/b") == "/a/b"

    def test_path_and_query(self):
        assert request_uri("https://example.com/a?b=c%20d") == "/a?b=c%20d"

    def test_empty_path(self):
        assert request_uri("http://example.com") == "/"

    def test_fragment_is_dropped(self):
        assert request_uri("http://example.com/a#frag") == "/a"

    def test_encoded_like_the_request_line(self):
        assert request_uri("http://example.com/a b?q=é") == "/a%20b?q=%C3%A9"

    def test_encoded_sequences_are_kept(self):
        assert request_uri("http://example.com/a%20b/%C3%A9") == "/a%20b/%C3%A9"

    def test_digest_uri_is_encoded(self):
        header = digest_authorization(
            "u", "p", "GET", "http://example.com/a b?q=é", DIGEST_CHALLENGE
        )
        assert 'uri="/a%20b?q=%C3%A9"' in header

    @pytest.mark.parametrize(
        "url", ["", "/relative/path", "example.com/a", "http://[::1/a", "http://h:port/"]
    )
    def test_invalid(self, url):
        with pytest.raises(error.InvalidUrlError):
            request_uri(url)
