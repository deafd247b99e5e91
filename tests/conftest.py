from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rolebot.roles import RoleCatalog
from rolebot.infra import reset_config

ROLE_GROUPS = {
    "groups": [
        {
            "name": "color",
            "limit": 1,
            "roles": [
                {"name": "red", "primary_id": 1},
                {"name": "blue", "primary_id": 2},
            ],
        },
        {
            "name": "metals",
            "limit": 2,
            "roles": [
                {"name": "Gold", "primary_id": 10, "secondary_id": 11},
                {"name": "silver", "primary_id": 20, "secondary_id": 21},
                {"name": "bronze", "primary_id": 30, "secondary_id": 31},
            ],
        },
        {
            "name": "pets",
            "roles": [
                {"name": "cat", "primary_id": 40},
                {"name": "dog", "primary_id": 41},
            ],
        },
    ]
}


@pytest.fixture()
def role_groups() -> dict:
    return ROLE_GROUPS


@pytest.fixture()
def role_catalog() -> RoleCatalog:
    return RoleCatalog.from_config(ROLE_GROUPS)


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()
