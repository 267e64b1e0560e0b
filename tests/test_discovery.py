from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import enumgen


@pytest.fixture
def sample_table(
    make_enum: Callable[..., enumgen.EnumDescriptor],
    make_enum_field: Callable[..., enumgen.FieldDescriptor],
    make_struct: Callable[..., enumgen.StructDescriptor],
) -> enumgen.EnumTable:
    return enumgen.build_enum_table(
        [
            make_enum(1, "ECollisionChannel", [("A", 0), ("A", 1)]),
            make_enum(2, "ENetRole", [("ROLE_None", 0), ("ROLE_Max", 0x1000)]),
            make_struct(3, [make_enum_field(enum_index=1, enum_size=4)]),
        ]
    )


def test_t_01_gather_enum_summaries(sample_table: enumgen.EnumTable) -> None:
    summaries = enumgen.gather_enum_summaries(sample_table)

    assert summaries == [
        enumgen.EnumSummary(1, "ECollisionChannel", 4, 2, "usage"),
        enumgen.EnumSummary(2, "ENetRole", 2, 2, "inferred"),
    ]


def test_t_02_filter_enums_by_text_is_case_insensitive(
    sample_table: enumgen.EnumTable,
) -> None:
    summaries = enumgen.gather_enum_summaries(sample_table)

    filtered = enumgen.filter_enums_by_text(summaries, "netrole")

    assert [s.name for s in filtered] == ["ENetRole"]


def test_t_03_format_enums_table(sample_table: enumgen.EnumTable) -> None:
    output = enumgen.format_enums_table(
        enumgen.gather_enum_summaries(sample_table), "5.3.2"
    )

    lines = output.splitlines()
    assert lines[0] == "2 enums in registry 5.3.2:"
    assert lines[2].split() == ["ECollisionChannel", "uint32", "2", "members", "usage"]
    assert lines[3].split() == ["ENetRole", "uint16", "2", "members", "inferred"]
    assert output.endswith("\n")


def test_t_04_format_enums_table_empty() -> None:
    output = enumgen.format_enums_table([], "5.3.2")

    assert output.startswith("0 enums in registry 5.3.2:")


def test_t_05_format_enum_detail_flags_renamed_members(
    sample_table: enumgen.EnumTable,
) -> None:
    output = enumgen.format_enum_detail(sample_table.get(1))

    assert output.startswith("ECollisionChannel (index 1)")
    assert "  Underlying: uint32 (usage)" in output
    assert "  Members (2):" in output
    assert "A_0  1  (renamed from A)" in output


def test_t_06_run_discovery_list(
    registry_xml: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = enumgen.DiscoveryConfig(
        command="list-enums", filter_text="collision", info_enum=None, registry=registry_xml
    )

    enumgen.run_discovery(config)

    out = capsys.readouterr().out
    assert "1 enums in registry 5.3.2:" in out
    assert "ECollisionChannel" in out
    assert "ENetRole" not in out


def test_t_07_run_discovery_info_unknown_exits(
    registry_xml: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = enumgen.DiscoveryConfig(
        command="info", filter_text=None, info_enum="EMissing", registry=registry_xml
    )

    with pytest.raises(SystemExit) as exc_info:
        enumgen.run_discovery(config)

    assert exc_info.value.code == 1
    assert "EMissing" in capsys.readouterr().err
