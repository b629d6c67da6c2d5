"""
Unit tests for query string helpers
"""
from uuid import uuid4

import pytest

from schoolhub.core.exceptions import ValidationError
from schoolhub.utils.pagination import parse_id_list


def test_parse_id_list():
    first, second = uuid4(), uuid4()
    assert parse_id_list(f"{first}, {second},") == [first, second]


@pytest.mark.parametrize("value", [None, "", ","])
def test_parse_id_list_empty(value):
    assert parse_id_list(value) == []


def test_parse_id_list_rejects_garbage():
    with pytest.raises(ValidationError) as exc_info:
        parse_id_list(f"{uuid4()},not-an-id")
    assert exc_info.value.status_code == 422
    assert "not-an-id" in exc_info.value.detail
