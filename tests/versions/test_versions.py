import pytest

from sqlengines import ConfigurationError, Version, VersionRange


def test_numeric_component_ordering():
    assert Version.parse("2.10") > Version.parse("2.9")
    assert Version.parse("10.0") > Version.parse("9.9.9")


def test_trailing_zeros_are_not_significant():
    assert Version.parse("2.5") == Version.parse("2.5.0")
    assert Version.parse("2.5") < Version.parse("2.5.1")


def test_suffix_after_numbers_is_ignored():
    assert Version.parse("8.0.33-log") == Version.parse("8.0.33")
    assert str(Version.parse(" 8.0.33-log ")) == "8.0.33-log"


@pytest.mark.parametrize("value", ["", "abc", "v1.2"])
def test_invalid_versions(value):
    with pytest.raises(ConfigurationError):
        Version.parse(value)


def test_range_bounds_are_inclusive():
    versions = VersionRange.between("2.0", "3.0")
    assert versions.contains("2.0")
    assert versions.contains("2.5")
    assert versions.contains("3.0")
    assert not versions.contains("3.0.1")
    assert not versions.contains("1.9")


def test_open_bounds():
    assert "99" in VersionRange.between(min_version="3.0")
    assert "2.5" not in VersionRange.between(min_version="3.0")
    assert "0.1" in VersionRange.between(max_version="1.0")


def test_missing_version_is_wildcard():
    assert VersionRange.between("3.0", "4.0").contains(None)


def test_blank_bounds_are_unbounded():
    versions = VersionRange.between("  ", "")
    assert versions.unbounded
    assert str(versions) == "[*, *]"
