"""Pytest configuration and fixtures for cronchik tests."""

import pytest

from cronchik.parser import FIELDS


@pytest.fixture(params=FIELDS, ids=lambda domain: domain.name)
def domain(request):
    """Each of the five field domains."""
    return request.param
