"""Tests for the status file stanza reader."""

import io

import pytest

from dpkg_deps.dependencies import MalformedDependencyError
from dpkg_deps.models import DependencySpec, Operator
from dpkg_deps.stanza import LineKind, PackageStanza, classify_line


def _read(text):
    return PackageStanza.read(iter(io.StringIO(text)))


@pytest.mark.parametrize("line, expected", [
    ("", (LineKind.BLANK, None, None)),
    ("   ", (LineKind.BLANK, None, None)),
    ("Package: apache2-bin", (LineKind.FIELD, "Package", "apache2-bin")),
    ("Conffiles:", (LineKind.FIELD, "Conffiles", "")),
    ("Description: a: b", (LineKind.FIELD, "Description", "a: b")),
    (" continued text", (LineKind.CONTINUATION, None, "continued text")),
    ("\t.", (LineKind.CONTINUATION, None, ".")),
    ("no colon here", (LineKind.OTHER, None, "no colon here")),
    ("Homepage:\thttps://example.org", (LineKind.FIELD, "Homepage", "https://example.org")),
    ("Description: ", (LineKind.FIELD, "Description", "")),
    ("http://example.org/stray", (LineKind.OTHER, None, "http://example.org/stray")),
    ("Key:value", (LineKind.OTHER, None, "Key:value")),
])
def test_classify_line(line, expected):
    assert classify_line(line) == expected


def test_read_simple_stanza():
    stanza = _read(
        "Package: libc6\n"
        "Status: install ok installed\n"
        "Version: 2.36-9\n"
        "Architecture: amd64\n"
    )

    assert stanza.name == "libc6"
    assert stanza.version == "2.36-9"
    assert stanza.installed
    # Unknown fields pass through untouched.
    assert stanza.get("Architecture") == "amd64"
    assert dict(stanza.fields) == {
        "Package": "libc6",
        "Status": "install ok installed",
        "Version": "2.36-9",
        "Architecture": "amd64",
    }


def test_continuation_lines_are_folded():
    stanza = _read(
        "Package: demo\n"
        "Description: short summary\n"
        " first line\n"
        "   second line\n"
    )

    assert stanza.get("Description") == "short summary\nfirst line\nsecond line"


def test_dot_continuation_is_an_empty_line():
    stanza = _read("Package: demo\nDescription: foo\n .\n bar\n")

    assert stanza.get("Description") == "foo\n\nbar"


def test_field_with_empty_first_line():
    stanza = _read(
        "Package: demo\n"
        "Conffiles:\n"
        " /etc/demo.conf 0123456789abcdef\n"
    )

    assert stanza.get("Conffiles") == "\n/etc/demo.conf 0123456789abcdef"


def test_read_stops_at_blank_line():
    lines = iter(io.StringIO(
        "Package: a\n"
        "Status: install ok installed\n"
        "\n"
        "Package: b\n"
        "Status: install ok installed\n"
    ))

    first = PackageStanza.read(lines)
    second = PackageStanza.read(lines)

    assert first.name == "a"
    assert second.name == "b"
    assert PackageStanza.read(lines) is None


def test_read_at_blank_line_gives_degenerate_stanza():
    lines = iter(io.StringIO("\nPackage: a\n"))

    stanza = PackageStanza.read(lines)

    assert stanza is not None
    assert stanza.name is None
    assert not stanza.fields
    assert PackageStanza.read(lines).name == "a"


def test_read_exhausted_input_returns_none():
    assert _read("") is None


def test_unrecognized_lines_are_ignored():
    # Permissive: junk lines neither end the stanza nor become fields.
    stanza = _read(
        "garbage without separator\n"
        " orphan continuation\n"
        "Package: demo\n"
        "???\n"
        "Version: 1.0\n"
    )

    assert dict(stanza.fields) == {"Package": "demo", "Version": "1.0"}


def test_crlf_line_endings():
    stanza = _read("Package: demo\r\nVersion: 1.0\r\n\r\nPackage: other\r\n")

    assert dict(stanza.fields) == {"Package": "demo", "Version": "1.0"}


@pytest.mark.parametrize("status, installed", [
    ("install ok installed", True),
    ("hold ok installed", True),
    ("install ok not-installed", False),
    ("deinstall ok config-files", False),
    ("install ok unpacked", False),
    ("", False),
])
def test_installed_uses_last_status_word(status, installed):
    stanza = PackageStanza({"Package": "demo", "Status": status})

    assert stanza.installed is installed


def test_missing_status_is_not_installed():
    assert PackageStanza({"Package": "demo"}).installed is False


def test_requires_without_depends_is_empty():
    assert PackageStanza({"Package": "demo"}).requires == []


def test_requires_parses_depends_once(monkeypatch):
    from dpkg_deps import stanza as stanza_module

    calls = []
    real_parse = stanza_module.parse_relationship_field

    def counting_parse(value):
        calls.append(value)
        return real_parse(value)

    monkeypatch.setattr(stanza_module, "parse_relationship_field", counting_parse)
    stanza = PackageStanza({"Package": "a", "Depends": "b (>= 1.0) | c, d"})

    first = stanza.requires
    second = stanza.requires

    assert first == second
    assert len(calls) == 1
    assert first[0].specs == (
        DependencySpec("b", Operator.LATER_OR_EQUAL, "1.0"),
        DependencySpec("c"),
    )
    # Callers get their own list.
    first.clear()
    assert len(stanza.requires) == 2


def test_requires_propagates_malformed_dependency():
    stanza = PackageStanza({"Package": "a", "Depends": "(>= 1.0)"})

    with pytest.raises(MalformedDependencyError):
        stanza.requires
    # Failures are not cached.
    with pytest.raises(MalformedDependencyError):
        stanza.requires


def test_relationship_reads_other_fields():
    stanza = PackageStanza({
        "Package": "a",
        "Pre-Depends": "dpkg (>= 1.15.6~)",
        "Recommends": "ca-certificates",
    })

    assert stanza.relationship("Pre-Depends")[0].specs == (
        DependencySpec("dpkg", Operator.LATER_OR_EQUAL, "1.15.6~"),
    )
    assert stanza.relationship("Recommends")[0].names == ("ca-certificates",)
    assert stanza.relationship("Suggests") == []


def test_fields_are_read_only():
    stanza = PackageStanza({"Package": "demo"})

    with pytest.raises(TypeError):
        stanza.fields["Package"] = "other"


def test_equality_and_repr():
    a = PackageStanza({"Package": "demo", "Version": "1.0"})
    b = PackageStanza({"Package": "demo", "Version": "1.0"})

    assert a == b
    assert a != PackageStanza({"Package": "demo", "Version": "2.0"})
    assert repr(a) == "<Package name=demo version=1.0>"


def test_stray_url_line_does_not_become_a_field():
    stanza = _read(
        "Package: demo\n"
        "Homepage: https://example.org\n"
        "http://example.org/stray\n"
        "Version: 1.0\n"
    )

    assert dict(stanza.fields) == {
        "Package": "demo",
        "Homepage": "https://example.org",
        "Version": "1.0",
    }
