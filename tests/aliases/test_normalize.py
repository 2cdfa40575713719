import pytest

from neogrove.aliases.normalize import PathNormalizer, filesystem_is_case_insensitive


@pytest.mark.parametrize(
    "platform,expected",
    [("darwin", True), ("win32", True), ("linux", False), ("freebsd13", False)],
)
def test_filesystem_is_case_insensitive(platform, expected):
    assert filesystem_is_case_insensitive(platform) is expected


def test_case_sensitive_normalizer_is_identity():
    normalizer = PathNormalizer(case_insensitive=False)
    assert normalizer.normalize("/Users/Me/Proj") == "/Users/Me/Proj"


def test_case_insensitive_normalizer_folds_case():
    normalizer = PathNormalizer(case_insensitive=True)
    assert normalizer.normalize("/Users/Me/Proj") == "/users/me/proj"


def test_normalize_failure_falls_back_to_input():
    normalizer = PathNormalizer(case_insensitive=True)
    raw = object()
    assert normalizer.normalize(raw) is raw
