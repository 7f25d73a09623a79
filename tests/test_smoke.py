"""
Live smoke test against the real Dilovod API.

Run with: python -m pytest tests/test_smoke.py -v
Requires: DILOVOD_API_KEY environment variable (or .env in the project root)
"""

import os

import pytest

from dilovod_cli import DilovodClient

API_KEY = os.environ.get("DILOVOD_API_KEY")


@pytest.fixture(scope="module")
def live_client():
    """Skip if credentials not available."""
    if not API_KEY:
        pytest.skip("DILOVOD_API_KEY required")
    return DilovodClient(api_key=API_KEY)


def test_list_goods(live_client):
    goods = live_client.get_objects("catalogs.goods", fields=["id"], limit=1)
    assert isinstance(goods, list)
    assert len(goods) <= 1

