"""Tests for biscuit.http.signed: value.signature cookies."""

import pytest

from biscuit.http.cookies import CookieOptions
from biscuit.http.signed import (
    SEPARATOR,
    compose_signed,
    extract_signed,
    split_signed,
    stringify_signed_cookie,
)
from biscuit.security.audit import SecurityEvent, set_security_event_sink
from biscuit.security.signing import compute_signature

_SIGNED_BBB = "bbb.WMi69G3kT+oC9YzBibG40w2CjPA0JXk2SlP1futbf1s="


@pytest.fixture
def events():
    captured: list[SecurityEvent] = []
    set_security_event_sink(captured.append)
    yield captured
    set_security_event_sink(None)


class TestComposeSigned:
    async def test_value_then_signature(self) -> None:
        assert await compose_signed("bbb", "xxx") == _SIGNED_BBB

    async def test_reserved_characters_not_escaped(self) -> None:
        signed = await compose_signed("a;b", "k")
        assert signed.startswith("a;b" + SEPARATOR)


class TestSplitSigned:
    def test_splits_at_last_separator(self) -> None:
        assert split_signed("a.b.c.sig") == ("a.b.c", "sig")

    def test_no_separator(self) -> None:
        assert split_signed("plain") is None

    def test_empty_parts(self) -> None:
        assert split_signed(".") == ("", "")


class TestExtractSigned:
    async def test_valid(self) -> None:
        assert await extract_signed(f"aaa={_SIGNED_BBB}", "aaa", "xxx") == "bbb"

    async def test_wrong_secret(self) -> None:
        assert await extract_signed(f"aaa={_SIGNED_BBB}", "aaa", "yyy") is None

    async def test_tampered_signature(self) -> None:
        cookie = "aaa=bbb.XXXXXG3kT+oC9YzBibG40w2CjPA0JXk2SlP1futbf1s="
        assert await extract_signed(cookie, "aaa", "xxx") is None

    async def test_tampered_value(self) -> None:
        cookie = "aaa=bbc.WMi69G3kT+oC9YzBibG40w2CjPA0JXk2SlP1futbf1s="
        assert await extract_signed(cookie, "aaa", "xxx") is None

    async def test_missing_cookie(self) -> None:
        assert await extract_signed("other=1", "aaa", "xxx") is None
        assert await extract_signed(None, "aaa", "xxx") is None

    async def test_unsigned_cookie(self) -> None:
        assert await extract_signed("aaa=bbb", "aaa", "xxx") is None

    async def test_garbled_signature_does_not_raise(self) -> None:
        assert await extract_signed("a=v.not-valid-base64!!!", "a", "any-key") is None

    async def test_value_containing_separator(self) -> None:
        signed = await compose_signed("1.2.3", "k")
        assert await extract_signed(f"v={signed}", "v", "k") == "1.2.3"

    async def test_other_cookies_ignored(self) -> None:
        signature = compute_signature("abc", "secret")
        text = f"user_id=42; session=abc.{signature}"
        assert await extract_signed(text, "session", "secret") == "abc"
        assert await extract_signed("user_id=42; session=abc.dGVzdA==", "session", "secret") is None

    async def test_header_lines(self) -> None:
        assert await extract_signed(["x=1", f"aaa={_SIGNED_BBB}"], "aaa", "xxx") == "bbb"


class TestSignedRoundTrip:
    @pytest.mark.parametrize("value", ["", "42", "a;b", "100%", "x.y", "{\"id\":1}", "ünïcødé"])
    async def test_roundtrip(self, value: str) -> None:
        cookie = await stringify_signed_cookie("n", value, "secret")
        assert await extract_signed(cookie, "n", "secret") == value
        assert await extract_signed(cookie, "n", "wrong") is None

    async def test_bytes_secret(self) -> None:
        cookie = await stringify_signed_cookie("n", "v", b"\x00\xffkey")
        assert await extract_signed(cookie, "n", b"\x00\xffkey") == "v"

    async def test_with_options(self) -> None:
        cookie = await stringify_signed_cookie("aaa", "bbb", "xxx", CookieOptions(http_only=True))
        assert cookie == f"aaa={_SIGNED_BBB}; HttpOnly"


class TestSignatureAuditEvents:
    async def test_rejection_emits_event(self, events: list[SecurityEvent]) -> None:
        await extract_signed(f"aaa={_SIGNED_BBB}", "aaa", "wrong")

        assert [e.name for e in events] == ["cookie.signature_rejected"]
        assert events[0].cookie == "aaa"
        assert events[0].details == {}

    async def test_success_emits_nothing(self, events: list[SecurityEvent]) -> None:
        await extract_signed(f"aaa={_SIGNED_BBB}", "aaa", "xxx")
        assert events == []

    async def test_absent_cookie_emits_nothing(self, events: list[SecurityEvent]) -> None:
        await extract_signed("aaa=bbb", "aaa", "xxx")
        await extract_signed("", "aaa", "xxx")
        assert events == []

    async def test_failing_sink_does_not_break_extraction(self) -> None:
        def sink(event: SecurityEvent) -> None:
            raise RuntimeError("sink down")

        set_security_event_sink(sink)
        try:
            assert await extract_signed(f"aaa={_SIGNED_BBB}", "aaa", "wrong") is None
        finally:
            set_security_event_sink(None)
