import json

import yaml

from common.storefront_rules.catalog import build_catalog, main


def test_catalog_lists_builtin_rules_sorted():
    entries = build_catalog()
    names = [e.name for e in entries]
    assert names == sorted(names)
    assert {"CustomerRole", "CartTotal", "RuleSet", "Weekday"}.issubset(names)


def test_catalog_operators_follow_rule_type():
    by_name = {e.name: e for e in build_catalog()}

    role = by_name["CustomerRole"]
    assert role.rule_type == "IntArray"
    assert role.is_comparing_sequences
    assert role.operators == ["=", "!=", "Contains", "NotContains", "In", "NotIn", "AllIn", "NotAllIn"]

    assert by_name["CartBillingCountry"].operators == ["In", "NotIn"]
    assert by_name["RuleSet"].operators == ["=", "!="]
    assert ">=" in by_name["CartTotal"].operators
    assert by_name["CartOrderCount"].group_key == "Admin.Orders"
    assert by_name["Store"].class_name == "STORE"


def test_catalog_cli_json(capsys):
    main(["--format", "json"])
    catalog = json.loads(capsys.readouterr().out)
    assert any(entry["name"] == "ProductInCart" for entry in catalog)


def test_catalog_cli_yaml(capsys):
    main([])
    catalog = yaml.safe_load(capsys.readouterr().out)
    assert any(entry["name"] == "CartPaidBy" for entry in catalog)
