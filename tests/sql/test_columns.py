from __future__ import annotations

import pytest

from sqlfrag.errors import EmptyInputError, SqlFragError
from sqlfrag.sql.columns import ColumnMapper, sql_for_partial_update
from sqlfrag.sql.entities import COMPANY_COLUMNS, USER_COLUMNS
from sqlfrag.sql.params import placeholder_ordinals


def test_works_without_translation() -> None:
    fragment = sql_for_partial_update({"name": "Bob", "age": 40}, {})
    assert fragment.clause == '"name"=$1, "age"=$2'
    assert fragment.values == ["Bob", 40]


def test_works_with_translation() -> None:
    fragment = sql_for_partial_update(
        {"firstName": "Bob", "age": 40},
        {"firstName": "first_name"},
    )
    assert fragment.clause == '"first_name"=$1, "age"=$2'
    assert fragment.values == ["Bob", 40]


def test_translation_table_is_optional() -> None:
    fragment = sql_for_partial_update({"salary": 20000})
    assert fragment.clause == '"salary"=$1'
    assert fragment.values == [20000]


def test_empty_data_raises_empty_input() -> None:
    with pytest.raises(EmptyInputError):
        sql_for_partial_update({}, {"firstName": "first_name"})


def test_empty_input_is_distinguishable_from_other_errors() -> None:
    with pytest.raises(SqlFragError) as excinfo:
        ColumnMapper().map([])
    assert isinstance(excinfo.value, EmptyInputError)


def test_pair_sequence_sets_parameter_order() -> None:
    fragment = ColumnMapper(USER_COLUMNS).map(
        [("isAdmin", True), ("lastName", "Smith"), ("email", "a@b.com")]
    )
    assert fragment.clause == '"is_admin"=$1, "last_name"=$2, "email"=$3'
    assert fragment.values == [True, "Smith", "a@b.com"]


def test_duplicate_field_in_pairs_raises() -> None:
    with pytest.raises(ValueError):
        ColumnMapper().map([("age", 1), ("age", 2)])


def test_values_are_passed_through_unmodified() -> None:
    payload = {"tags": ["a", "b"]}
    data = {"logoUrl": None, "numEmployees": "12", "meta": payload}
    fragment = ColumnMapper(COMPANY_COLUMNS).map(data)
    assert fragment.clause == '"logo_url"=$1, "num_employees"=$2, "meta"=$3'
    assert fragment.values[0] is None
    assert fragment.values[1] == "12"
    assert fragment.values[2] is payload


@pytest.mark.parametrize("size", [1, 2, 5, 12])
def test_value_count_matches_highest_placeholder(size: int) -> None:
    data = {f"field_{i}": i for i in range(size)}
    fragment = sql_for_partial_update(data)
    assert len(fragment.values) == size
    assert max(placeholder_ordinals(fragment.clause)) == size


def test_repeated_calls_are_identical() -> None:
    mapper = ColumnMapper({"firstName": "first_name"})
    data = {"firstName": "Bob", "age": 40}
    assert mapper.map(data) == mapper.map(data)


def test_mapper_translation_table_is_read_only() -> None:
    names = {"firstName": "first_name"}
    mapper = ColumnMapper(names)
    names["firstName"] = "changed"
    assert mapper.column_for("firstName") == "first_name"
    with pytest.raises(TypeError):
        mapper.column_names["age"] = "years"
