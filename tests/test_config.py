from __future__ import annotations

import pytest

from sqlfrag.config import DbConfig


def test_defaults_id_column() -> None:
    config = DbConfig(table_name="jobs")
    assert config.id_column == "id"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"table_name": "jobs; DROP TABLE users"},
        {"table_name": ""},
        {"table_name": "jobs", "id_column": "id OR 1=1"},
    ],
)
def test_rejects_unsafe_identifiers(kwargs) -> None:
    with pytest.raises(ValueError):
        DbConfig(**kwargs)
