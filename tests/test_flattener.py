import pytest

from orgchart.config.policies import HierarchyPolicy
from orgchart.entities.core import EmployeeNode, EmployeeRecord
from orgchart.hierarchy import (
    DuplicateEmployeeError,
    EmployeeTable,
    HierarchyCycleError,
    HierarchyFlattener,
    flatten,
)


def make_tree() -> dict:
    return {
        "id": 1,
        "firstName": "John",
        "lastName": "Doe",
        "subordinates": [
            {
                "id": 2,
                "firstName": "Jane",
                "lastName": "Smith",
                "subordinates": [
                    {"id": 3, "firstName": "Bob", "lastName": "Johnson"},
                ],
            }
        ],
    }


def make_wide_tree() -> dict:
    return {
        "id": "ceo",
        "firstName": "Ada",
        "lastName": "Root",
        "subordinates": [
            {
                "id": "cto",
                "firstName": "Ben",
                "lastName": "Tech",
                "subordinates": [
                    {"id": "dev1", "firstName": "Cy", "lastName": "One"},
                    {"id": "dev2", "firstName": "Di", "lastName": "Two", "subordinates": []},
                ],
            },
            {
                "id": "cfo",
                "firstName": "Ed",
                "lastName": "Money",
                "subordinates": [
                    {"id": "acct", "firstName": "Flo", "lastName": "Ledger"},
                ],
            },
        ],
    }


def iter_nodes(payload: dict):
    stack = [(payload, None)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        for child in node.get("subordinates") or []:
            stack.append((child, node))


def test_flatten_nested_tree_matches_expected_records():
    table = flatten(make_tree())

    assert table[1] == EmployeeRecord(
        id=1, first_name="John", last_name="Doe", supervisors=(), subordinates=(2,)
    )
    assert table[2] == EmployeeRecord(
        id=2, first_name="Jane", last_name="Smith", supervisors=(1,), subordinates=(3,)
    )
    assert table[3] == EmployeeRecord(
        id=3, first_name="Bob", last_name="Johnson", supervisors=(1, 2), subordinates=()
    )


def test_flatten_single_node_without_subordinates_field():
    table = flatten({"id": 1, "firstName": "John", "lastName": "Doe"})

    assert len(table) == 1
    assert table[1].supervisors == ()
    assert table[1].subordinates == ()
    assert table[1].is_root
    assert table[1].is_leaf


def test_flatten_accepts_employee_node_instances():
    node = EmployeeNode(id="a", first_name="Ann", last_name="Lee")

    table = HierarchyFlattener().flatten(node)

    assert list(table) == ["a"]


def test_every_node_produces_exactly_one_record():
    payload = make_wide_tree()
    table = flatten(payload)

    ids = [node["id"] for node, _ in iter_nodes(payload)]
    assert len(table) == len(set(ids))
    assert set(table) == set(ids)


def test_supervisors_extend_parent_chain():
    payload = make_wide_tree()
    table = flatten(payload)

    for node, parent in iter_nodes(payload):
        record = table[node["id"]]
        if parent is None:
            assert record.supervisors == ()
        else:
            assert record.supervisors == table[parent["id"]].supervisors + (parent["id"],)
        assert list(record.subordinates) == [child["id"] for child in node.get("subordinates") or []]


def test_table_iterates_in_depth_first_input_order():
    table = flatten(make_wide_tree())

    assert list(table) == ["ceo", "cto", "dev1", "dev2", "cfo", "acct"]
    assert table.root is not None and table.root.id == "ceo"


def test_duplicate_ids_overwrite_by_default():
    payload = {
        "id": 1,
        "firstName": "Root",
        "lastName": "Person",
        "subordinates": [
            {"id": 2, "firstName": "First", "lastName": "Copy"},
            {"id": 3, "firstName": "Mid", "lastName": "Manager", "subordinates": [
                {"id": 2, "firstName": "Second", "lastName": "Copy"},
            ]},
        ],
    }

    table = flatten(payload)

    assert len(table) == 3
    assert table[2].first_name == "Second"
    assert table[2].supervisors == (1, 3)
    assert list(table) == [1, 2, 3]


def test_duplicate_ids_keep_first_skips_later_subtree():
    payload = {
        "id": 1,
        "firstName": "Root",
        "lastName": "Person",
        "subordinates": [
            {"id": 2, "firstName": "First", "lastName": "Copy"},
            {"id": 2, "firstName": "Second", "lastName": "Copy", "subordinates": [
                {"id": 4, "firstName": "Hidden", "lastName": "Report"},
            ]},
        ],
    }

    table = flatten(payload, HierarchyPolicy(duplicate_ids="keep_first"))

    assert table[2].first_name == "First"
    assert 4 not in table
    assert table[1].subordinates == (2, 2)


def test_duplicate_ids_reject_raises():
    payload = {
        "id": 1,
        "firstName": "Root",
        "lastName": "Person",
        "subordinates": [
            {"id": 2, "firstName": "A", "lastName": "B"},
            {"id": 2, "firstName": "C", "lastName": "D"},
        ],
    }

    with pytest.raises(DuplicateEmployeeError) as excinfo:
        flatten(payload, HierarchyPolicy(duplicate_ids="reject"))
    assert excinfo.value.employee_id == 2


def test_employee_beneath_own_chain_raises_cycle_error():
    payload = {
        "id": 1,
        "firstName": "Root",
        "lastName": "Person",
        "subordinates": [
            {"id": 2, "firstName": "A", "lastName": "B", "subordinates": [
                {"id": 1, "firstName": "Root", "lastName": "Again"},
            ]},
        ],
    }

    with pytest.raises(HierarchyCycleError):
        flatten(payload)


def test_cyclic_object_graph_terminates_with_cycle_error():
    child = EmployeeNode(id="b", first_name="B", last_name="Child", subordinates=[])
    root = EmployeeNode(id="a", first_name="A", last_name="Root", subordinates=[child])
    child.subordinates.append(root)

    with pytest.raises(HierarchyCycleError):
        flatten(root)


def test_deep_chain_does_not_hit_recursion_limit():
    depth = 1500
    node = EmployeeNode(id=depth, first_name="Level", last_name=str(depth))
    for level in range(depth - 1, -1, -1):
        node = EmployeeNode(id=level, first_name="Level", last_name=str(level), subordinates=[node])

    table = flatten(node)

    assert len(table) == depth + 1
    assert table[depth].supervisors == tuple(range(depth))
    assert table.statistics()["max_depth"] == depth


def test_flatten_does_not_mutate_input():
    payload = make_tree()
    node = EmployeeNode.model_validate(payload)
    before = node.model_dump(by_alias=True)

    flatten(node)

    assert node.model_dump(by_alias=True) == before


def test_table_and_records_are_read_only():
    table = flatten(make_tree())

    with pytest.raises(TypeError):
        table[9] = table[1]  # type: ignore[index]
    with pytest.raises(ValueError):
        table[1].first_name = "Changed"  # type: ignore[misc]
    assert isinstance(table, EmployeeTable)


def test_table_statistics_and_resolution():
    table = flatten(make_wide_tree())

    assert table.statistics() == {
        "employee_count": 6,
        "max_depth": 2,
        "leaf_count": 3,
        "max_direct_reports": 2,
    }
    assert table.resolve("dev1") == "dev1"
    assert table.resolve(" cfo ") == "cfo"
    assert table.resolve("missing") is None
    assert table.resolve("") is None

    numeric = flatten(make_tree())
    assert numeric.resolve("3") == 3
    assert numeric.resolve(3) == 3
    assert numeric.resolve("7") is None


def make_deep_payload(depth: int) -> dict:
    payload = {"id": depth, "firstName": "Level", "lastName": str(depth)}
    for level in range(depth - 1, -1, -1):
        payload = {"id": level, "firstName": "Level", "lastName": str(level), "subordinates": [payload]}
    return payload


def test_deep_mapping_flattens_without_recursion_error():
    depth = 400

    table = flatten(make_deep_payload(depth))

    assert len(table) == depth + 1
    assert list(table) == list(range(depth + 1))
    assert table[depth].supervisors == tuple(range(depth))
