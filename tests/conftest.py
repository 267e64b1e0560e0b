import argparse
import sys
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import enumgen  # noqa: E402


@pytest.fixture
def registry_xml(tmp_path: Path) -> Path:
    path = tmp_path / "registry.xml"
    path.write_text(
        '<registry version="5.3.2">\n'
        '  <enum index="1" name="ECollisionChannel">\n'
        '    <value name="ECollisionChannel::ECC_WorldStatic" value="0"/>\n'
        '    <value name="ECollisionChannel::ECC_Pawn" value="1"/>\n'
        '    <value name="ECollisionChannel::ECC_MAX" value="2"/>\n'
        "  </enum>\n"
        '  <enum index="2" name="ENetRole">\n'
        '    <value name="ROLE_None" value="0"/>\n'
        '    <value name="ROLE_Authority" value="0x1000"/>\n'
        "  </enum>\n"
        '  <struct index="3" name="FHitResult">\n'
        '    <property name="Channel" kind="enum" enum="1" size="4"/>\n'
        '    <property name="Time" kind="float" size="4"/>\n'
        "  </struct>\n"
        '  <function index="4" name="ReceiveTick"/>\n'
        "</registry>\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def missing_path(tmp_path: Path) -> Path:
    return tmp_path / "missing"


@pytest.fixture
def make_args(registry_xml: Path) -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "registry": registry_xml,
            "output": None,
            "list_enums": False,
            "info": None,
            "filter": None,
            "verbose": False,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def make_registry_root() -> Callable[[str], ET.Element]:
    def _make_registry_root(inner_xml: str) -> ET.Element:
        return ET.fromstring(f"<registry>{inner_xml}</registry>")

    return _make_registry_root


@pytest.fixture
def make_enum() -> Callable[..., enumgen.EnumDescriptor]:
    def _make_enum(
        index: int, name: str, pairs: list[tuple[str, int]]
    ) -> enumgen.EnumDescriptor:
        return enumgen.EnumDescriptor(index=index, name=name, pairs=tuple(pairs))

    return _make_enum


@pytest.fixture
def make_enum_field() -> Callable[..., enumgen.FieldDescriptor]:
    def _make_enum_field(
        *,
        enum_index: int | None,
        enum_size: int | None = None,
        underlying_size: int | None = None,
        name: str = "Value",
    ) -> enumgen.FieldDescriptor:
        return enumgen.FieldDescriptor(
            name=name,
            kind=enumgen.FIELD_KIND_ENUM,
            enum_index=enum_index,
            enum_size=enum_size,
            underlying_size=underlying_size,
        )

    return _make_enum_field


@pytest.fixture
def make_struct() -> Callable[..., enumgen.StructDescriptor]:
    def _make_struct(
        index: int, fields: list[enumgen.FieldDescriptor], name: str = "FHolder"
    ) -> enumgen.StructDescriptor:
        return enumgen.StructDescriptor(index=index, name=name, fields=tuple(fields))

    return _make_struct
