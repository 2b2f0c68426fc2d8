from orgchart.hierarchy import flatten, name_of


def test_returns_empty_string_if_id_is_unset():
    table = {1: {"firstName": "John", "lastName": "Doe"}}

    assert name_of(None, table) == ""
    assert name_of("", table) == ""


def test_returns_empty_string_if_table_is_unset_or_empty():
    assert name_of(1, None) == ""
    assert name_of(1, {}) == ""


def test_returns_empty_string_if_employee_not_found():
    assert name_of(2, {1: {"firstName": "John", "lastName": "Doe"}}) == ""


def test_returns_full_name_from_plain_mapping():
    assert name_of(1, {1: {"firstName": "John", "lastName": "Doe"}}) == "John Doe"


def test_returns_full_name_from_flattened_table():
    table = flatten(
        {
            "id": "a",
            "firstName": "Grace",
            "lastName": "Hopper",
            "subordinates": [{"id": "b", "firstName": "Alan", "lastName": "Turing"}],
        }
    )

    assert name_of("a", table) == "Grace Hopper"
    assert name_of("b", table) == table["b"].full_name


def test_record_missing_a_name_part_degrades_to_empty_string():
    assert name_of(1, {1: {"firstName": "John"}}) == ""
    assert name_of(1, {1: object()}) == ""


def test_zero_is_a_valid_identifier():
    assert name_of(0, {0: {"first_name": "Zero", "last_name": "Based"}}) == "Zero Based"
