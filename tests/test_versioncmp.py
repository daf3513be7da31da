import pytest

from corekit.versioncmp import alphasort, strverscmp, versionsort


def _sign(value):
    return (value > 0) - (value < 0)


def test_equal_strings_compare_zero():
    assert strverscmp("release-1.2", "release-1.2") == 0
    assert strverscmp("", "") == 0


def test_more_digits_is_bigger():
    assert strverscmp("999", "1000") < 0
    assert strverscmp("1000", "999") > 0


def test_leading_zeros_more_digits_is_smaller():
    assert strverscmp("002", "01") < 0
    assert strverscmp("01", "002") > 0


def test_numbers_inside_names():
    assert strverscmp("file2", "file10") < 0
    assert strverscmp("file10", "file9") > 0


def test_plain_alphabetical_difference():
    assert strverscmp("abc", "abd") < 0
    assert strverscmp("b", "a") > 0


def test_prefix_sorts_first():
    assert strverscmp("file", "file1") < 0


@pytest.mark.parametrize(
    "a, b",
    [("file2", "file10"), ("002", "01"), ("abc", "abd"), ("x1y", "x1z"), ("v0.9", "v0.10")],
)
def test_antisymmetric(a, b):
    assert _sign(strverscmp(a, b)) == -_sign(strverscmp(b, a))


def test_versionsort_orders_numbers_by_value():
    names = ["file10", "file2", "file1", "file20"]
    assert versionsort(names) == ["file1", "file2", "file10", "file20"]


def test_versionsort_keeps_all_items():
    names = ["b", "a10", "a9", "a009", "c"]
    result = versionsort(names)
    assert sorted(result) == sorted(names)
    for left, right in zip(result, result[1:]):
        assert strverscmp(left, right) <= 0


def test_alphasort_is_permutation_and_ascii_order():
    names = ["delta", "alpha", "charlie", "bravo"]
    assert alphasort(names) == ["alpha", "bravo", "charlie", "delta"]