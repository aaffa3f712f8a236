"""Tests for rule value translation."""

import socket

import pytest

from fwutil.errors import PortLookupError
from fwutil.models import IcmpFamily, Transport
from fwutil.translate import (
    ICMP_TYPES,
    icmp_name_to_number,
    log_level_name_to_number,
    string_to_port,
    to_hex32,
)


class TestIcmpNameToNumber:

    @pytest.mark.parametrize("family", ["inet", "inet6", "bogus"])
    @pytest.mark.parametrize("value", ["0", "8", "13", "99"])
    def test_numeric_passthrough(self, value, family):
        assert icmp_name_to_number(value, family) == value

    def test_echo_request_per_family(self):
        assert icmp_name_to_number("echo-request", "inet") == "8"
        assert icmp_name_to_number("echo-request", "inet6") == "128"

    def test_accepts_enum_family(self):
        assert icmp_name_to_number("too-big", IcmpFamily.INET6) == "2"

    def test_family_specific_names(self):
        assert icmp_name_to_number("source-quench", "inet") == "4"
        assert icmp_name_to_number("source-quench", "inet6") is None
        assert icmp_name_to_number("neighbour-solicitation", "inet6") == "135"
        assert icmp_name_to_number("neighbour-solicitation", "inet") is None

    def test_table_sizes(self):
        assert len(ICMP_TYPES["inet"]) == 13
        assert len(ICMP_TYPES["inet6"]) == 11

    def test_unknown_name(self):
        assert icmp_name_to_number("no-such-type", "inet") is None

    def test_unsupported_family(self):
        with pytest.raises(ValueError, match="unsupported protocol family 'ipx'"):
            icmp_name_to_number("echo-request", "ipx")


class TestLogLevelNameToNumber:

    @pytest.mark.parametrize("value", [str(n) for n in range(8)])
    def test_digit_passthrough(self, value):
        assert log_level_name_to_number(value) == value

    @pytest.mark.parametrize("name,expected", [
        ("panic", "0"),
        ("alert", "1"),
        ("crit", "2"),
        ("err", "3"),
        ("warning", "4"),
        ("warn", "4"),
        ("not", "5"),
        ("notice", "5"),
        ("info", "6"),
        ("debug", "7"),
    ])
    def test_names(self, name, expected):
        assert log_level_name_to_number(name) == expected

    def test_aliases_agree(self):
        assert log_level_name_to_number("err") == log_level_name_to_number("error")

    @pytest.mark.parametrize("value", ["8", "10", "verbose", ""])
    def test_unknown(self, value):
        assert log_level_name_to_number(value) is None


class TestStringToPort:

    def test_numeric(self):
        assert string_to_port("22", "tcp") == "22"

    def test_range(self):
        assert string_to_port("22-1000", "tcp") == "22-1000"

    def test_negated_numeric(self):
        assert string_to_port("! 443", "tcp") == "! 443"

    def test_negated_service(self, monkeypatch):
        calls = []

        def fake_getservbyname(name, proto):
            calls.append((name, proto))
            return 80

        monkeypatch.setattr(socket, "getservbyname", fake_getservbyname)
        assert string_to_port("! http", "tcp") == "! 80"
        assert calls == [("http", "tcp")]

    def test_udp_service(self, monkeypatch):
        monkeypatch.setattr(socket, "getservbyname", lambda name, proto: 53 if proto == "udp" else 0)
        assert string_to_port("domain", Transport.UDP) == "53"

    @pytest.mark.parametrize("proto", ["icmp", "", None, "TCP"])
    def test_other_protocols_use_tcp(self, monkeypatch, proto):
        seen = []
        monkeypatch.setattr(socket, "getservbyname", lambda name, p: seen.append(p) or 22)
        assert string_to_port("ssh", proto) == "22"
        assert seen == ["tcp"]

    def test_unknown_service(self, monkeypatch):
        def fake_getservbyname(name, proto):
            raise OSError("service/proto not found")

        monkeypatch.setattr(socket, "getservbyname", fake_getservbyname)
        with pytest.raises(PortLookupError, match="no-such-service") as excinfo:
            string_to_port("no-such-service", "tcp")
        assert isinstance(excinfo.value, LookupError)

    def test_empty_value(self):
        with pytest.raises(ValueError):
            string_to_port("", "tcp")


class TestToHex32:

    @pytest.mark.parametrize("value,expected", [
        ("0xFF", "0xff"),
        ("255", "0xff"),
        (255, "0xff"),
        (0, "0x0"),
        ("0b1010", "0xa"),
        (" 16 ", "0x10"),
        (0xFFFFFFFF, "0xffffffff"),
        ("0xdeadbeef", "0xdeadbeef"),
        ("010", "0x8"),
        ("0377", "0xff"),
        ("0o17", "0xf"),
        ("00", "0x0"),
    ])
    def test_valid(self, value, expected):
        assert to_hex32(value) == expected

    @pytest.mark.parametrize("value", [4294967296, -1, "0x100000000", "-0x1", "-010", "040000000000"])
    def test_out_of_range(self, value):
        assert to_hex32(value) is None

    @pytest.mark.parametrize("value", ["mark", "", None, "12abc", float("inf"), "08", "0129"])
    def test_not_an_integer(self, value):
        assert to_hex32(value) is None
