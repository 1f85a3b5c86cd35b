import pytest

from apkbuild._casting import as_bool


@pytest.mark.parametrize(
    "value, default, expected",
    [
        ("true", False, True),
        ("TRUE", False, True),
        (" yes ", False, True),
        ("false", True, False),
        ("off", True, False),
        (True, False, True),
        (None, True, True),
        ("", True, True),
        ("", False, False),
        ("maybe", True, False),
        ("1", False, False),
        ("[unclosed", True, False),
    ],
)
def test_as_bool(value, default, expected):
    assert as_bool(value, default=default) is expected
