"""マイレージ表書き出しのテスト"""

from pathlib import Path

import pytest

from mileage.features.batch.writers.table_writer import write_mileage_table
from mileage.shared.exceptions.errors import ConfigError

TABLE = {"HOME|LS": 3.5, "LS|HOME": 3.5}


def test_write_js_module(tmp_path: Path) -> None:
    path = write_mileage_table(TABLE, tmp_path / "mileageTable.js")

    assert path.read_text(encoding="utf-8") == (
        "// Auto-generated mileage table\n\n"
        "const MILEAGE_TABLE = {\n"
        '  "HOME|LS": 3.5,\n'
        '  "LS|HOME": 3.5\n'
        "};\n\n"
        "export default MILEAGE_TABLE;\n"
    )


def test_write_python_module(tmp_path: Path) -> None:
    path = write_mileage_table(TABLE, tmp_path / "out" / "mileage_table.py")

    namespace: dict = {}
    exec(path.read_text(encoding="utf-8"), namespace)

    assert namespace["MILEAGE_TABLE"] == TABLE


def test_unsupported_suffix(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        write_mileage_table(TABLE, tmp_path / "mileage.csv")
    assert not (tmp_path / "mileage.csv").exists()
