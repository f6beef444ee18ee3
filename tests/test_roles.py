from speedgraph.records import parse_csv
from speedgraph.roles import (
    NO_GROUP,
    ColumnRoles,
    filter_values,
    filterable_headers,
    infer_column_roles,
    nice_label,
    numeric_headers,
)


def _roles(text: str) -> ColumnRoles:
    table = parse_csv(text)
    return infer_column_roles(table.headers, table.records)


def test_scenario_roles():
    roles = _roles("name,speed,diet\nCheetah,120,Carnivore\nRabbit,56,Herbivore\n,,")
    assert roles == ColumnRoles(name_column="name", value_column="speed", group_column="diet")


def test_candidates_match_case_insensitively_in_header_order():
    roles = _roles("ID,Common_Name,Animal,Top Speed (km/h),Feeding,Diet\n1,Lion,lion,80,carn,carn\n")
    assert roles.name_column == "Common_Name"
    assert roles.value_column == "Top Speed (km/h)"
    assert roles.group_column == "Feeding"


def test_fallbacks_first_header_and_first_numeric_column():
    roles = _roles("label,notes,weight,height\nA,x,abc,\nB,y,,3 m/s\nC,z,12,\n")
    assert roles.name_column == "label"
    assert roles.value_column == "weight"
    assert roles.group_column == NO_GROUP


def test_speed_keyword_wins_even_without_numeric_values():
    roles = _roles("name,mass,speed_class\nA,10,fast\n")
    assert roles.value_column == "speed_class"


def test_no_headers():
    roles = infer_column_roles([], [])
    assert roles == ColumnRoles(name_column="", value_column="", group_column=NO_GROUP)
    assert not roles.grouped


def test_no_numeric_column():
    roles = _roles("name,habitat\nA,forest\n")
    assert roles.value_column == ""


def test_overrides_replace_only_given_columns():
    roles = ColumnRoles(name_column="name", value_column="speed", group_column="diet")
    assert roles.with_overrides(value_column="weight") == ColumnRoles("name", "weight", "diet")
    assert roles.with_overrides(name_column="", group_column=None) == roles
    assert not roles.with_overrides(group_column=NO_GROUP).grouped


def test_selector_options():
    table = parse_csv("name,speed,diet,empty\nA,10 mph,herb,\nB,fast,,\n")
    assert numeric_headers(table.headers, table.records) == ["speed"]
    assert filterable_headers(table.headers, table.records) == ["name", "speed", "diet"]


def test_filter_values_distinct_sorted_non_blank():
    table = parse_csv("name,diet\nA,Omnivore\nB, Carnivore \nC,\nD,Omnivore\nE,herbivore\n")
    assert filter_values(table.records, "diet") == ["Carnivore", "herbivore", "Omnivore"]
    assert filter_values(table.records, None) == []
    assert filter_values(table.records, NO_GROUP) == []
    assert filter_values(table.records, "missing") == []


def test_filter_values_stop_past_limit():
    records = [{"v": f"value-{i:03d}"} for i in range(300)]
    assert len(filter_values(records, "v", limit=250)) == 251
    assert len(filter_values(records[:10], "v", limit=250)) == 10


def test_nice_label():
    assert nice_label("top_speed") == "top speed"
    assert nice_label("topSpeed") == "top Speed"
    assert nice_label("_diet_") == "diet"
