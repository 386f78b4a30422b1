from dataclasses import dataclass

from .sql.params import validate_identifier


@dataclass
class DbConfig:
    table_name: str
    id_column: str = "id"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        validate_identifier(self.table_name, "table_name")
        validate_identifier(self.id_column, "id_column")
