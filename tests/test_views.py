import pytest

from orgchart.hierarchy import (
    HierarchySession,
    UnknownEmployeeError,
    flatten,
    selection_options,
    supervisor_chain,
)


@pytest.fixture()
def table():
    return flatten(
        {
            "id": 1,
            "firstName": "John",
            "lastName": "Doe",
            "subordinates": [
                {
                    "id": 2,
                    "firstName": "Jane",
                    "lastName": "Smith",
                    "subordinates": [{"id": 3, "firstName": "Bob", "lastName": "Johnson"}],
                },
                {"id": 4, "firstName": "Eve", "lastName": "Adams"},
            ],
        }
    )


def test_selection_options_follow_table_order(table):
    options = selection_options(table, current=3)

    assert [(option.id, option.label) for option in options] == [
        (1, "John Doe"),
        (2, "Jane Smith"),
        (3, "Bob Johnson"),
        (4, "Eve Adams"),
    ]
    assert [option.active for option in options] == [False, False, True, False]


def test_selection_options_for_missing_table():
    assert selection_options(None) == []


def test_supervisor_chain_ends_with_current_employee(table):
    view = supervisor_chain(table, 3)

    assert view.names() == ["John Doe", "Jane Smith", "Bob Johnson"]
    assert [entry.current for entry in view.entries] == [False, False, True]
    assert view.current.id == 3
    assert [entry.id for entry in view.supervisors] == [1, 2]


def test_supervisor_chain_for_root_contains_only_root(table):
    view = supervisor_chain(table, 1)

    assert view.names() == ["John Doe"]
    assert view.supervisors == []


def test_supervisor_chain_without_selection_has_single_empty_entry(table):
    for current in (None, ""):
        view = supervisor_chain(table, current)
        assert len(view.entries) == 1
        assert view.current.name == ""
        assert view.current.id is None
        assert view.current.current


def test_session_select_resolves_string_ids(table):
    session = HierarchySession(table)

    assert session.select("2") == 2
    assert session.current == 2
    assert session.chain().names() == ["John Doe", "Jane Smith"]
    assert [option.active for option in session.options()] == [False, True, False, False]


def test_session_select_unknown_raises_and_keeps_selection(table):
    session = HierarchySession(table)
    session.select(4)

    with pytest.raises(UnknownEmployeeError):
        session.select("99")
    assert session.current == 4


def test_session_blank_selection_clears(table):
    session = HierarchySession(table)
    session.select(3)

    assert session.select("  ") is None
    assert session.current is None
    assert session.chain().names() == [""]
