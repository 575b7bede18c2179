import pytest

from webforms.forms.core.data import RequestData


@pytest.fixture
def basic_fields():
    return [
        ("name", "Bob"),
        ("age", "25"),
        ("favoriteNumber", "99.99"),
        ("leftHanded", "true"),
    ]


@pytest.fixture
def data():
    data = RequestData()
    data.values = {
        "name": ["bob", "bill"],
        "profession": ["plumber"],
    }
    return data
