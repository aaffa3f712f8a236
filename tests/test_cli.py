"""Tests for the command line interface."""

import json
import socket

import pytest
from click.testing import CliRunner

from fwutil.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestTranslateCommands:

    def test_icmp(self, runner):
        result = runner.invoke(main, ["translate", "icmp", "echo-request", "-f", "inet6"])
        assert result.exit_code == 0
        assert result.output.strip() == "128"

    def test_icmp_unknown(self, runner):
        result = runner.invoke(main, ["translate", "icmp", "bogus"])
        assert result.exit_code == 1
        assert "No ICMP type mapping" in result.output

    def test_log_level(self, runner):
        result = runner.invoke(main, ["translate", "log-level", "warning"])
        assert result.exit_code == 0
        assert result.output.strip() == "4"

    def test_port(self, runner, monkeypatch):
        monkeypatch.setattr(socket, "getservbyname", lambda name, proto: 443)
        result = runner.invoke(main, ["translate", "port", "! https"])
        assert result.exit_code == 0
        assert result.output.strip() == "! 443"

    def test_port_unknown(self, runner, monkeypatch):
        def fail(name, proto):
            raise OSError("service/proto not found")

        monkeypatch.setattr(socket, "getservbyname", fail)
        result = runner.invoke(main, ["translate", "port", "nope"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_hex(self, runner):
        result = runner.invoke(main, ["translate", "hex", "0xFF"])
        assert result.exit_code == 0
        assert result.output.strip() == "0xff"

    def test_hex_out_of_range(self, runner):
        result = runner.invoke(main, ["translate", "hex", "4294967296"])
        assert result.exit_code == 1


class TestAddressCommands:

    def test_ip(self, runner):
        result = runner.invoke(main, ["address", "ip", "10.0.0.1"])
        assert result.exit_code == 0
        assert result.output.strip() == "10.0.0.1/32"

    def test_ip_any(self, runner):
        result = runner.invoke(main, ["address", "ip", "0.0.0.0/0"])
        assert result.exit_code == 1
        assert "matches any address" in result.output

    def test_hostname_needs_family(self, runner):
        result = runner.invoke(main, ["address", "ip", "example.com"])
        assert result.exit_code == 1
        assert "Proto must be specified" in result.output

    def test_mask(self, runner):
        result = runner.invoke(main, ["address", "mask", "! 10.0.0.0/255.0.0.0"])
        assert result.exit_code == 0
        assert result.output.strip() == "! 10.0.0.0/8"

    def test_resolve(self, runner, monkeypatch):
        results = [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.1", 0))]
        monkeypatch.setattr(socket, "getaddrinfo", lambda *args: results)
        result = runner.invoke(main, ["address", "resolve", "example.com"])
        assert result.exit_code == 0
        assert "192.0.2.1/32" in result.output


class TestPersistCommands:

    def show(self, runner, *args):
        result = runner.invoke(main, ["persist", "show", "--json", *args])
        assert result.exit_code == 0, result.output
        return json.loads(result.output)

    def test_show_fedora(self, runner):
        data = self.show(runner, "--os-name", "Fedora", "--os-release", "20")
        assert data["os_key"] == "Fedora"
        assert data["commands"]["IPv4"] == ["/usr/libexec/iptables/iptables.init", "save"]

    def test_show_debian_manual(self, runner):
        data = self.show(runner, "--os-family", "Debian", "--package-version", "0.4.0")
        assert data["os_key"] == "Debian_manual"
        assert data["commands"]["IPv6"] is None

    def test_show_single_family(self, runner):
        data = self.show(runner, "--os-family", "Suse", "-f", "IPv4")
        assert list(data["commands"]) == ["IPv4"]

    def test_show_table(self, runner):
        result = runner.invoke(main, ["persist", "show", "--os-family", "Suse"])
        assert result.exit_code == 0
        assert "not supported" in result.output

    def test_save(self, runner, monkeypatch):
        calls = []

        class Facts:
            def __init__(self, *args, **kwargs):
                pass

            def value(self, name):
                return {"os_family": "Archlinux"}.get(getattr(name, "value", name))

            def flush(self, name):
                pass

        def fake_run_command(command, timeout=None):
            calls.append(tuple(command))
            return ""

        monkeypatch.setattr("fwutil.persist.cli.SystemFacts", Facts)
        monkeypatch.setattr("fwutil.persist.core.run_command", fake_run_command)
        result = runner.invoke(main, ["persist", "save", "-f", "IPv4"])

        assert result.exit_code == 0
        assert calls == [("/bin/sh", "-c", "/usr/sbin/iptables-save > /etc/iptables/iptables.rules")]
        assert "saved" in result.output
