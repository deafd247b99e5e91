import pytest

from rolebot.roles import CatalogError, RoleCatalog


def _group(name, *roles, limit=None):
    group = {"name": name, "roles": list(roles)}
    if limit is not None:
        group["limit"] = limit
    return group


def test_lookup_is_case_insensitive(role_catalog):
    role, group = role_catalog.lookup("  GOLD ")
    assert group == "metals"
    assert role.name == "gold"
    assert role.display_name == "Gold"
    assert role.primary_id == 10
    assert role.secondary_id == 11
    assert role_catalog.lookup("banana") is None


def test_groups_keep_configured_order(role_catalog):
    assert [g.name for g in role_catalog.groups()] == ["color", "metals", "pets"]
    assert role_catalog.group("pets").limit is None
    assert not role_catalog.group("pets").limited
    assert len(role_catalog) == 7


def test_role_id_sets(role_catalog):
    assert role_catalog.group("metals").role_ids == {10, 11, 20, 21, 30, 31}
    assert role_catalog.tracked_role_ids() == {1, 2, 10, 11, 20, 21, 30, 31, 40, 41}


def test_accepts_plain_group_list():
    catalog = RoleCatalog.from_config([_group("color", {"name": "red", "primary_id": 1})])
    assert catalog.lookup("red")[1] == "color"


def test_empty_config():
    catalog = RoleCatalog.from_config(None)
    assert len(catalog) == 0
    assert not catalog
    assert RoleCatalog.from_config({"groups": []}).tracked_role_ids() == frozenset()


def test_name_in_two_groups_rejected():
    config = [
        _group("color", {"name": "Red", "primary_id": 1}),
        _group("team", {"name": "red ", "primary_id": 2}),
    ]
    with pytest.raises(CatalogError, match="'red' appears in both 'color' and 'team'"):
        RoleCatalog.from_config(config)


def test_name_twice_in_one_group_rejected():
    config = [_group("color", {"name": "red", "primary_id": 1}, {"name": "RED", "primary_id": 2})]
    with pytest.raises(CatalogError):
        RoleCatalog.from_config(config)


def test_duplicate_group_rejected():
    config = [
        _group("color", {"name": "red", "primary_id": 1}),
        _group("color", {"name": "blue", "primary_id": 2}),
    ]
    with pytest.raises(CatalogError, match="Duplicate role group"):
        RoleCatalog.from_config(config)


@pytest.mark.parametrize(
    "config",
    [
        "not a list",
        [42],
        [{"limit": 1, "roles": []}],
        [_group("color", {"primary_id": 1})],
        [_group("color", {"name": "red", "primary_id": "abc"})],
        [_group("color", {"name": "red", "primary_id": True})],
        [_group("color", {"name": "red", "primary_id": -5})],
        [_group("color", {"name": "red", "primary_id": 1.9})],
        [_group("color", {"name": "red", "primary_id": 1.0})],
        [_group("color", {"name": "red", "primary_id": 1, "secondary_id": 2.5})],
        [_group("color", {"name": "red", "primary_id": 1, "secondary_id": 1})],
        [_group("color", {"name": "red", "primary_id": 1}, limit=-1)],
        [_group("color", {"name": "red", "primary_id": 1}, limit="2")],
        [{"name": "color", "roles": "red"}],
    ],
)
def test_malformed_config_rejected(config):
    with pytest.raises(CatalogError):
        RoleCatalog.from_config(config)


def test_numeric_string_ids_accepted():
    catalog = RoleCatalog.from_config([_group("color", {"name": "red", "primary_id": "123"})])
    assert catalog.lookup("red")[0].primary_id == 123


def test_to_config_keeps_display_names(role_catalog, role_groups):
    config = role_catalog.to_config()
    assert config["groups"][1]["roles"][0] == {"name": "Gold", "primary_id": 10, "secondary_id": 11}
    assert config["groups"][0]["roles"][0] == {"name": "red", "primary_id": 1}
    assert config["groups"][0]["limit"] == 1
    assert "limit" not in config["groups"][2]


def test_zero_limit_is_kept_as_a_limit():
    catalog = RoleCatalog.from_config([_group("color", {"name": "red", "primary_id": 1}, limit=0)])
    group = catalog.group("color")
    assert group.limit == 0
    assert group.limited
    assert catalog.to_config()["groups"][0]["limit"] == 0


def test_null_limit_means_no_limit():
    catalog = RoleCatalog.from_config([{"name": "pets", "limit": None, "roles": []}])
    assert not catalog.group("pets").limited


def test_large_integer_ids_kept_exactly():
    snowflake = 1234567890123456789
    catalog = RoleCatalog.from_config([_group("color", {"name": "red", "primary_id": snowflake})])
    assert catalog.lookup("red")[0].primary_id == snowflake
