from dataclasses import dataclass
from pathlib import Path

import pytest

from mesospkg.exceptions import DetectionError, InvalidVersionError
from mesospkg.models import Ordering
from mesospkg.utils.parsers.version import (
    compare_versions,
    parse_version,
    read_configure_version,
    version_at_least,
)


@dataclass
class Case:
    """Test case data."""

    name: str
    left: str
    right: str
    want: Ordering


CASES = [
    Case(name="Equal", left="1.7.3", right="1.7.3", want=Ordering.EQUAL),
    Case(name="Numeric not lexicographic", left="1.10.0", right="1.9.0", want=Ordering.GREATER),
    Case(name="Patch smaller", left="1.7.2", right="1.7.3", want=Ordering.LESS),
    Case(name="Major wins", left="2.0.0", right="1.99.99", want=Ordering.GREATER),
    Case(name="Leading zeros", left="1.07.3", right="1.7.3", want=Ordering.EQUAL),
    Case(name="Short left padded", left="0.19", right="0.19.0", want=Ordering.EQUAL),
    Case(name="Short right padded", left="1.2.1", right="1.2", want=Ordering.GREATER),
    Case(name="Pre-release suffix ignored", left="0.18.0-rc4", right="0.18.0", want=Ordering.EQUAL),
    Case(name="Build metadata ignored", left="1.7.3+dfsg1", right="1.7.3", want=Ordering.EQUAL),
]


@pytest.mark.parametrize("case", CASES, ids=lambda case: case.name)
def test_compare_versions(case):
    assert compare_versions(case.left, case.right) is case.want


@pytest.mark.parametrize("case", CASES, ids=lambda case: case.name)
def test_compare_versions_is_antisymmetric(case):
    reverse = {
        Ordering.LESS: Ordering.GREATER,
        Ordering.GREATER: Ordering.LESS,
        Ordering.EQUAL: Ordering.EQUAL,
    }
    assert compare_versions(case.right, case.left) is reverse[case.want]


@pytest.mark.parametrize("version", ["1.7.3", "0.19", "10"])
def test_compare_versions_is_reflexive(version):
    assert compare_versions(version, version) is Ordering.EQUAL


def test_ordering_symbols():
    assert [ordering.value for ordering in Ordering] == ["<", "=", ">"]


def test_parse_version():
    assert parse_version("1.7.3") == (1, 7, 3)
    assert parse_version("1.7.3+dfsg1") == (1, 7, 3)
    assert parse_version("0.18.0-rc4") == (0, 18, 0)


@pytest.mark.parametrize("version", ["1.x.3", "", "1..2", "v1.2"])
def test_parse_version_rejects_non_numeric(version):
    with pytest.raises(InvalidVersionError):
        parse_version(version)


def test_version_at_least():
    assert version_at_least("0.19.0", "0.19.0")
    assert version_at_least("1.7.3", "0.19")
    assert not version_at_least("0.18.1", "0.19.0")


def test_read_configure_version(src_dir: Path):
    assert read_configure_version(src_dir) == "1.7.3"


def test_read_configure_version_without_brackets(tmp_path: Path):
    (tmp_path / "configure.ac").write_text("AC_INIT(mesos, 0.19.0)\n")
    assert read_configure_version(tmp_path) == "0.19.0"


def test_read_configure_version_missing_file(tmp_path: Path):
    with pytest.raises(DetectionError, match="not found"):
        read_configure_version(tmp_path)


def test_read_configure_version_no_ac_init(tmp_path: Path):
    (tmp_path / "configure.ac").write_text("AC_PREREQ([2.61])\n")
    with pytest.raises(DetectionError, match="no AC_INIT"):
        read_configure_version(tmp_path)
