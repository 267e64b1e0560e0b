"""Enum symbol table builder and header generator.

Walks a registry snapshot of runtime type descriptors, builds a
deduplicated symbol table of every enumerated type (collision-resolved
member names, inferred or observed underlying width) and emits the
result as C++ `enum class` declarations.

Usage:
    python enumgen.py --registry dumps/registry.xml --output SDK/Enums.hpp
    python enumgen.py --registry dumps/registry.xml --list-enums --filter Collision
"""

import argparse
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = Path("registry.xml")
DEFAULT_OUTPUT = Path("Enums.hpp")


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class GenerateConfig:
    registry: Path
    output: Path
    verbose: bool = False


@dataclass(frozen=True)
class DiscoveryConfig:
    command: str
    filter_text: str | None
    info_enum: str | None
    registry: Path
    verbose: bool = False


VALID_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "CONFLICT_GENERATE_DISCOVERY",
    "FILTER_WITHOUT_LIST",
    "INVALID_OUTPUT_PATH",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


class RegistryFormatError(ValueError):
    """Raised when a registry snapshot is structurally unusable."""


def validate_path_exists(
    path: Path | None, flag: str, suggestion: str | None = None
) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            suggestion or f"Pass the path explicitly: {flag} /path/to/resource",
        )
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing path for this flag.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate collision-free enum declarations from a type registry"
    )

    parser.add_argument("--registry", type=Path, default=DEFAULT_REGISTRY)
    parser.add_argument("--output", type=Path, default=None)

    discovery_group = parser.add_mutually_exclusive_group()
    discovery_group.add_argument("--list-enums", action="store_true", default=False)
    discovery_group.add_argument("--info", type=str, default=None)

    parser.add_argument("--filter", type=str, default=None)
    parser.add_argument("--verbose", "-v", action="store_true", default=False)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig | DiscoveryConfig:
    has_discovery_command = bool(args.list_enums or args.info)

    if args.filter and not args.list_enums:
        raise ConfigError(
            "FILTER_WITHOUT_LIST",
            "--filter requires --list-enums.",
            "Add --list-enums or remove --filter.",
        )

    if has_discovery_command and args.output is not None:
        raise ConfigError(
            "CONFLICT_GENERATE_DISCOVERY",
            "--output cannot be combined with discovery flags.",
            "Choose either generate mode or one discovery command.",
        )

    registry = validate_path_exists(
        args.registry,
        "--registry",
        "Dump the type registry first, or pass a custom path: "
        "--registry /your/path/to/registry.xml",
    )

    if has_discovery_command:
        command = "list-enums" if args.list_enums else "info"
        return DiscoveryConfig(
            command=command,
            filter_text=args.filter,
            info_enum=args.info,
            registry=registry,
            verbose=bool(args.verbose),
        )

    output = args.output if args.output is not None else DEFAULT_OUTPUT
    if output.is_dir():
        raise ConfigError(
            "INVALID_OUTPUT_PATH",
            f"--output points at a directory: {output}",
            f"Pass a file path instead, e.g. --output {output / DEFAULT_OUTPUT}",
        )

    return GenerateConfig(
        registry=registry,
        output=output,
        verbose=bool(args.verbose),
    )


def build_config(argv: list[str] | None = None) -> GenerateConfig | DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- Constants ---=== #

RESERVED_MEMBER_NAMES = ("TRUE", "FALSE", "PF_MAX", "TRANSPARENT")
"""Member names that collide with common preprocessor macros.

Seeded into the member-name table before the scan so the first use inside
any enum always receives a disambiguating suffix."""

BOUND_MARKER_SUFFIX = "_MAX"
SCOPE_SEPARATOR = ":"

FIELD_KIND_ENUM = "enum"

SIZE_TO_CPP_TYPE = {
    1: "uint8",
    2: "uint16",
    4: "uint32",
    8: "uint64",
}

_U64_MASK = (1 << 64) - 1
_NUMBER_WORDS = (
    "Zero",
    "One",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
)
_INVALID_IDENT_CHAR_RE = re.compile(r"[^0-9A-Za-z_]")


# ===--- Registry descriptors ---=== #


@dataclass(frozen=True)
class FieldDescriptor:
    """One typed field of a struct descriptor.

    Attributes:
        name: Field name as reported by the registry.
        kind: Field kind, e.g. "enum", "int", "object".
        enum_index: Registry index of the enumerated type this field stores,
            when the field references one.
        enum_size: Size reported by the direct enum reference.
        underlying_size: Size of the underlying storage property.
    """

    name: str
    kind: str
    enum_index: int | None = None
    enum_size: int | None = None
    underlying_size: int | None = None

    @property
    def references_enum(self) -> bool:
        return self.kind == FIELD_KIND_ENUM


@dataclass(frozen=True)
class EnumDescriptor:
    index: int
    name: str
    pairs: tuple[tuple[str, int], ...]

    @property
    def display_name(self) -> str:
        return make_name_valid(enum_prefixed_name(self.name))

    def as_enum(self) -> "EnumDescriptor | None":
        return self

    def as_struct(self) -> "StructDescriptor | None":
        return None


@dataclass(frozen=True)
class StructDescriptor:
    index: int
    name: str
    fields: tuple[FieldDescriptor, ...]
    is_class: bool = False

    def as_enum(self) -> EnumDescriptor | None:
        return None

    def as_struct(self) -> "StructDescriptor | None":
        return self


@dataclass(frozen=True)
class OtherDescriptor:
    index: int
    name: str
    kind: str

    def as_enum(self) -> EnumDescriptor | None:
        return None

    def as_struct(self) -> StructDescriptor | None:
        return None


Descriptor = EnumDescriptor | StructDescriptor | OtherDescriptor


# ===--- Registry snapshot parsing ---=== #


def _parse_c_int(s: str) -> int:
    s = s.strip()
    if s.startswith("0x") or s.startswith("0X"):
        return int(s, 16)
    if s.startswith("-"):
        return -int(s[1:], 16 if s[1:].startswith(("0x", "0X")) else 10)
    return int(s)


def _int_attr(el: ET.Element, attr: str, required: bool = True) -> int | None:
    raw = el.get(attr)
    if raw is None:
        if required:
            raise RegistryFormatError(
                f"<{el.tag} name={el.get('name', '?')!r}> is missing '{attr}'"
            )
        return None
    try:
        return _parse_c_int(raw)
    except ValueError as err:
        raise RegistryFormatError(
            f"<{el.tag} name={el.get('name', '?')!r}> has non-integer {attr}={raw!r}"
        ) from err


def parse_field(prop: ET.Element) -> FieldDescriptor:
    field = FieldDescriptor(
        name=prop.get("name", ""),
        kind=prop.get("kind", ""),
        enum_index=_int_attr(prop, "enum", required=False),
        enum_size=_int_attr(prop, "size", required=False),
        underlying_size=_int_attr(prop, "underlying-size", required=False),
    )
    if field.references_enum:
        for size in (field.enum_size, field.underlying_size):
            if size is not None and size not in SIZE_TO_CPP_TYPE:
                raise RegistryFormatError(
                    f"enum property {field.name!r} has unsupported size {size}"
                )
    return field


def parse_descriptor(el: ET.Element) -> Descriptor:
    index = _int_attr(el, "index")
    if index < 0:
        raise RegistryFormatError(f"<{el.tag}> has negative index {index}")
    name = el.get("name", "")

    if el.tag == "enum":
        pairs = []
        for val in el.findall("value"):
            raw_name = val.get("name")
            if not raw_name:
                raise RegistryFormatError(f"enum {name!r} has a value without a name")
            pairs.append((raw_name, _int_attr(val, "value")))
        return EnumDescriptor(index=index, name=name, pairs=tuple(pairs))

    if el.tag in ("struct", "class"):
        fields = tuple(parse_field(p) for p in el.findall("property"))
        return StructDescriptor(
            index=index, name=name, fields=fields, is_class=el.tag == "class"
        )

    return OtherDescriptor(index=index, name=name, kind=el.tag)


def parse_registry(root: ET.Element) -> list[Descriptor]:
    """Return every descriptor of a registry snapshot in document order."""
    return [parse_descriptor(el) for el in root]


def load_registry(path: Path) -> tuple[list[Descriptor], str]:
    root = ET.parse(path).getroot()
    return parse_registry(root), extract_registry_version(root)


def extract_registry_version(root: ET.Element) -> str:
    return root.get("version") or "unknown"


# ===--- Name sanitizing ---=== #


def strip_scope(raw_name: str) -> str:
    """Drop everything up to and including the last scope separator."""
    return raw_name[raw_name.rfind(SCOPE_SEPARATOR) + 1 :]


def make_name_valid(name: str) -> str:
    if not name:
        return "_"
    if "0" <= name[0] <= "9":
        name = _NUMBER_WORDS[int(name[0])] + name[1:]
    return _INVALID_IDENT_CHAR_RE.sub("_", name)


def enum_prefixed_name(name: str) -> str:
    if len(name) > 1 and name[0] == "E" and name[1].isupper():
        return name
    return "E" + name


def unique_member_name(base_name: str, collision_count: int) -> str:
    if collision_count > 0:
        return f"{base_name}_{collision_count - 1}"
    return base_name


# ===--- String interning ---=== #


class StringTable:
    """Append-only text interning table with stable integer ids."""

    def __init__(self):
        self._ids: dict[str, int] = {}
        self._texts: list[str] = []

    def find_or_insert(self, text: str) -> tuple[int, bool]:
        existing = self._ids.get(text)
        if existing is not None:
            return existing, False
        new_id = len(self._texts)
        self._ids[text] = new_id
        self._texts.append(text)
        return new_id, True

    def find(self, text: str) -> int | None:
        return self._ids.get(text)

    def __getitem__(self, string_id: int) -> str:
        return self._texts[string_id]

    def __contains__(self, text: object) -> bool:
        return text in self._ids

    def __len__(self) -> int:
        return len(self._texts)


# ===--- Size inference ---=== #


def max_of_size(size: int) -> int:
    return (1 << (size * 8)) - 1


def infer_underlying_size(current: int, max_value: int) -> int:
    """Return the smallest width in bytes able to hold max_value.

    Never narrows current unless an 8-byte width is required, in which case
    the result is always 8.
    """
    if max_value > max_of_size(4):
        return 8
    if max_value > max_of_size(2):
        return max(current, 4)
    if max_value > max_of_size(1):
        return max(current, 2)
    return max(current, 1)


# ===--- Symbol table records ---=== #


class EnumMember:
    def __init__(self, name_id: int, value: int, collision_count: int = 0):
        self.name_id = name_id
        self.value = value
        self.collision_count = collision_count


class EnumInfo:
    def __init__(self):
        self.name_id: int | None = None
        self.underlying_size = 1
        self.was_usage_found = False
        self.was_size_initialized = False
        self.members: list[EnumMember] = []


# ===--- Read access ---=== #


@dataclass(frozen=True)
class EnumMemberView:
    base_name: str
    value: int
    collision_count: int

    @property
    def name(self) -> str:
        return unique_member_name(self.base_name, self.collision_count)


class MemberSequence:
    """Restartable, declaration-ordered view over one enum's members."""

    def __init__(self, table: "EnumTable", members: list[EnumMember]):
        self._table = table
        self._members = members

    def __iter__(self) -> Iterator[EnumMemberView]:
        for member in self._members:
            yield EnumMemberView(
                base_name=self._table.member_name(member.name_id),
                value=member.value,
                collision_count=member.collision_count,
            )

    def __len__(self) -> int:
        return len(self._members)


class EnumInfoHandle:
    def __init__(self, table: "EnumTable", index: int, info: EnumInfo):
        self._table = table
        self._info = info
        self.index = index

    @property
    def underlying_size(self) -> int:
        return self._info.underlying_size

    @property
    def name(self) -> str:
        # Records known only through field usage never received a name.
        if self._info.name_id is None:
            return ""
        return self._table.type_name(self._info.name_id)

    @property
    def was_usage_found(self) -> bool:
        return self._info.was_usage_found

    @property
    def members(self) -> MemberSequence:
        return MemberSequence(self._table, self._info.members)


# ===--- Symbol table construction ---=== #


class EnumTable:
    """Collision-resolved symbol table of every enum in a registry snapshot.

    Built once by init(); read-only afterwards. Member names are interned in
    a single table shared by every enum, so a name reused by two unrelated
    enums keeps the same base text in both. Only repeats inside one enum are
    suffixed.
    """

    def __init__(self):
        self._type_names = StringTable()
        self._member_names = StringTable()
        self._infos: dict[int, EnumInfo] = {}
        self._name_owners: dict[int, int] = {}
        self._reserved_ids: set[int] = set()
        self._is_initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def member_name_count(self) -> int:
        return len(self._member_names)

    def type_name(self, name_id: int) -> str:
        return self._type_names[name_id]

    def member_name(self, name_id: int) -> str:
        return self._member_names[name_id]

    def init(self, registry: Iterable[Descriptor]) -> None:
        if self._is_initialized:
            return

        self._is_initialized = True

        self._init_reserved_names()  # must run before the scan
        self._scan(registry)
        logger.debug(
            "enum table built: %d enums, %d distinct member names",
            len(self._infos),
            len(self._member_names),
        )

    def _init_reserved_names(self) -> None:
        for name in RESERVED_MEMBER_NAMES:
            name_id, _ = self._member_names.find_or_insert(name)
            self._reserved_ids.add(name_id)

    def _info_for(self, index: int) -> EnumInfo:
        info = self._infos.get(index)
        if info is None:
            info = EnumInfo()
            self._infos[index] = info
        return info

    def _scan(self, registry: Iterable[Descriptor]) -> None:
        for descriptor in registry:
            struct = descriptor.as_struct()
            if struct is not None:
                for field in struct.fields:
                    if field.references_enum:
                        self._resolve_property_usage(struct, field)
                continue

            enum = descriptor.as_enum()
            if enum is not None:
                self._resolve_enum_declaration(enum)

    def _resolve_property_usage(
        self, owner: StructDescriptor, field: FieldDescriptor
    ) -> None:
        if field.enum_size is None and field.underlying_size is None:
            return
        if field.enum_index is None:
            logger.debug(
                "skipping %s.%s: enum property without an enum reference",
                owner.name,
                field.name,
            )
            return

        info = self._info_for(field.enum_index)
        size = field.enum_size if field.enum_size is not None else field.underlying_size

        if info.was_size_initialized and info.underlying_size != size:
            logger.debug(
                "%s.%s overrides inferred size %d of enum #%d with %d",
                owner.name,
                field.name,
                info.underlying_size,
                field.enum_index,
                size,
            )

        info.was_usage_found = True
        info.underlying_size = size

    def _resolve_enum_declaration(self, enum: EnumDescriptor) -> None:
        info = self._info_for(enum.index)
        info.name_id, _ = self._type_names.find_or_insert(enum.display_name)
        owner = self._name_owners.setdefault(info.name_id, enum.index)
        if owner != enum.index:
            logger.warning(
                "enum #%d reuses display name %s of enum #%d",
                enum.index,
                enum.display_name,
                owner,
            )

        max_value = 0
        emitted: set[str] = {
            unique_member_name(self._member_names[m.name_id], m.collision_count)
            for m in info.members
        }

        for raw_name, value in enum.pairs:
            if value < 0:
                logger.warning(
                    "%s::%s has negative value %d; stored as unsigned 64-bit",
                    enum.name,
                    raw_name,
                    value,
                )
            value &= _U64_MASK

            if not raw_name.endswith(BOUND_MARKER_SUFFIX):
                max_value = max(max_value, value)

            base_name = make_name_valid(strip_scope(raw_name))
            name_id, was_inserted = self._member_names.find_or_insert(base_name)
            member = EnumMember(name_id, value)

            if not was_inserted:
                # Known globally; only a repeat inside this enum needs a suffix.
                for previous in reversed(info.members):
                    if previous.name_id == name_id:
                        member.collision_count = previous.collision_count + 1
                        break
                else:
                    if name_id in self._reserved_ids:
                        member.collision_count = 1

            # A raw name may already look like a suffixed one ("A_0").
            while unique_member_name(base_name, member.collision_count) in emitted:
                member.collision_count += 1

            emitted.add(unique_member_name(base_name, member.collision_count))
            info.members.append(member)

        if not info.was_size_initialized and not info.was_usage_found:
            info.underlying_size = infer_underlying_size(
                info.underlying_size, max_value
            )
            info.was_size_initialized = True

    def _require_initialized(self) -> None:
        if not self._is_initialized:
            raise RuntimeError("enum table accessed before init()")

    def get(self, index: int) -> EnumInfoHandle | None:
        self._require_initialized()
        info = self._infos.get(index)
        if info is None:
            return None
        return EnumInfoHandle(self, index, info)

    def find_by_name(self, name: str) -> EnumInfoHandle | None:
        self._require_initialized()
        name_id = self._type_names.find(name)
        if name_id is None:
            name_id = self._type_names.find(make_name_valid(enum_prefixed_name(name)))
        if name_id is None:
            return None
        for index, info in sorted(self._infos.items()):
            if info.name_id == name_id:
                return EnumInfoHandle(self, index, info)
        return None

    def __iter__(self) -> Iterator[EnumInfoHandle]:
        self._require_initialized()
        for index in sorted(self._infos):
            yield EnumInfoHandle(self, index, self._infos[index])

    def __contains__(self, index: object) -> bool:
        return index in self._infos

    def __len__(self) -> int:
        return len(self._infos)


def build_enum_table(registry: Iterable[Descriptor]) -> EnumTable:
    table = EnumTable()
    table.init(registry)
    return table


# ===--- Emission ---=== #


def generate_enum_lines(handle: EnumInfoHandle) -> list[str]:
    cpp_type = SIZE_TO_CPP_TYPE.get(handle.underlying_size)
    if cpp_type is None:
        raise ValueError(
            f"enum {handle.name!r} has unsupported underlying size "
            f"{handle.underlying_size}"
        )
    lines = []
    lines.append(f"// NumValues: 0x{len(handle.members):04X}")
    lines.append(f"enum class {handle.name} : {cpp_type}")
    lines.append("{")
    for member in handle.members:
        lines.append(f"    {member.name} = {member.value},")
    lines.append("};")
    lines.append("")
    return lines


def generate_enums(table: EnumTable) -> list[str]:
    lines = []
    for handle in table:
        # Enums seen only through field usage have no declaration to emit.
        if not handle.name:
            continue
        lines.extend(generate_enum_lines(handle))
    return lines


@dataclass(frozen=True)
class WriteConfig:
    """Metadata embedded in the generated header preamble.

    Attributes:
        registry_name: File name of the registry snapshot, e.g. "registry.xml".
        registry_version: Version string of the snapshot, e.g. "5.3.2".
    """

    registry_name: str
    registry_version: str


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing a generated file.

    Attributes:
        filename: Filename written, e.g. "Enums.hpp".
        path: Absolute path of the written file.
        line_count: Number of newline characters in the written content.
        byte_count: Number of bytes written (UTF-8 encoded).
    """

    filename: str
    path: Path
    line_count: int
    byte_count: int


_HEADER_BORDER: str = "// x-------------------------------------------x //"


def format_file_header(config: WriteConfig) -> list[str]:
    """Return comment-block lines for the generated header.

    Output format:
        // x-------------------------------------------x //
        // | Enum declarations
        // | Generated by enumgen
        // | Source: registry.xml 5.3.2
        // x-------------------------------------------x //

    Raises:
        ValueError: If config.registry_version is empty.
    """
    if not config.registry_version:
        raise ValueError("registry_version must not be empty")

    return [
        _HEADER_BORDER,
        "// | Enum declarations",
        "// | Generated by enumgen",
        f"// | Source: {config.registry_name} {config.registry_version}",
        _HEADER_BORDER,
    ]


def assemble_header_source(config: WriteConfig, content_lines: list[str]) -> str:
    parts: list[str] = list(format_file_header(config))
    parts.append("")
    parts.append("#pragma once")
    parts.append("")
    parts.append("#include <cstdint>")
    parts.append("")
    parts.append("using uint8 = std::uint8_t;")
    parts.append("using uint16 = std::uint16_t;")
    parts.append("using uint32 = std::uint32_t;")
    parts.append("using uint64 = std::uint64_t;")
    if content_lines:
        parts.append("")
        parts.extend(content_lines)
    return "\n".join(parts).rstrip("\n") + "\n"


def write_header(
    output: Path, config: WriteConfig, content_lines: list[str]
) -> FileWriteResult:
    """Write the generated header to disk, creating parent directories.

    Raises:
        OSError: Propagated directly if the filesystem write fails.
    """
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    content = assemble_header_source(config, content_lines)
    output.write_text(content, encoding="utf-8")
    resolved = output.resolve()
    return FileWriteResult(
        filename=output.name,
        path=resolved,
        line_count=content.count("\n"),
        byte_count=len(resolved.read_bytes()),
    )


# ===--- Discovery ---=== #


@dataclass(frozen=True)
class EnumSummary:
    index: int
    name: str
    underlying_size: int
    member_count: int
    size_source: str


def _size_source(handle: EnumInfoHandle) -> str:
    return "usage" if handle.was_usage_found else "inferred"


def gather_enum_summaries(table: EnumTable) -> list[EnumSummary]:
    return [
        EnumSummary(
            index=handle.index,
            name=handle.name,
            underlying_size=handle.underlying_size,
            member_count=len(handle.members),
            size_source=_size_source(handle),
        )
        for handle in table
        if handle.name
    ]


def filter_enums_by_text(
    summaries: list[EnumSummary], filter_text: str
) -> list[EnumSummary]:
    needle = filter_text.lower()
    return [s for s in summaries if needle in s.name.lower()]


def format_enums_table(summaries: list[EnumSummary], registry_version: str) -> str:
    """Return the complete --list-enums output as a string.

    Output format:

        {N} enums in registry {registry_version}:

          ECollisionChannel    uint8    33 members   inferred
          ...
    """
    lines = [f"{len(summaries)} enums in registry {registry_version}:", ""]

    if not summaries:
        lines.append("")
        return "\n".join(lines)

    name_width = max(len(s.name) for s in summaries)
    for s in summaries:
        type_col = SIZE_TO_CPP_TYPE.get(s.underlying_size, f"{s.underlying_size}B")
        count_col = f"{s.member_count} members"
        lines.append(
            f"  {s.name.ljust(name_width)}  {type_col:<7}  {count_col:<12} {s.size_source}"
        )

    lines.append("")
    return "\n".join(lines)


def format_enum_detail(handle: EnumInfoHandle) -> str:
    """Return the complete --info output for one enum as a string.

    Renamed members (collision suffix applied) are flagged with the base
    name they were derived from.
    """
    cpp_type = SIZE_TO_CPP_TYPE.get(handle.underlying_size, f"{handle.underlying_size}B")
    lines = [f"{handle.name} (index {handle.index})"]
    lines.append(f"  Underlying: {cpp_type} ({_size_source(handle)})")
    lines.append("")

    members = list(handle.members)
    lines.append(f"  Members ({len(members)}):")
    name_width = max((len(m.name) for m in members), default=0)
    for member in members:
        row = f"    {member.name.ljust(name_width)}  {member.value}"
        if member.collision_count > 0:
            row += f"  (renamed from {member.base_name})"
        lines.append(row)

    lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    """Execute the discovery command specified in config.

    Raises:
        SystemExit(1): When config.command == "info" and the enum is unknown.
    """
    import sys

    registry, registry_version = load_registry(config.registry)
    table = build_enum_table(registry)

    if config.command == "list-enums":
        summaries = gather_enum_summaries(table)
        if config.filter_text is not None:
            summaries = filter_enums_by_text(summaries, config.filter_text)
        print(format_enums_table(summaries, registry_version), end="")

    elif config.command == "info":
        assert config.info_enum is not None
        handle = table.find_by_name(config.info_enum)
        if handle is None:
            print(
                f"Error: enum '{config.info_enum}' not found in registry {registry_version}",
                file=sys.stderr,
            )
            raise SystemExit(1)
        print(format_enum_detail(handle), end="")


# ===--- Generation summary ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Data for the post-generation console report.

    Attributes:
        source_label: Registry source string, e.g. "registry.xml 5.3.2".
        enum_count: Enums emitted.
        member_count: Members emitted across every enum.
        renamed_count: Members that received a collision suffix.
        usage_sized_count: Enums whose width came from field usage.
        inferred_count: Enums whose width was inferred from their values.
        file: Write result of the generated header.
    """

    source_label: str
    enum_count: int
    member_count: int
    renamed_count: int
    usage_sized_count: int
    inferred_count: int
    file: FileWriteResult


def build_generation_summary(
    write_config: WriteConfig, table: EnumTable, write_result: FileWriteResult
) -> GenerationSummary:
    enum_count = member_count = renamed_count = usage_sized = 0
    for handle in table:
        if not handle.name:
            continue
        enum_count += 1
        if handle.was_usage_found:
            usage_sized += 1
        for member in handle.members:
            member_count += 1
            if member.collision_count > 0:
                renamed_count += 1

    return GenerationSummary(
        source_label=f"{write_config.registry_name} {write_config.registry_version}",
        enum_count=enum_count,
        member_count=member_count,
        renamed_count=renamed_count,
        usage_sized_count=usage_sized,
        inferred_count=enum_count - usage_sized,
        file=write_result,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    lines: list[str] = []
    lines.append("Enum declarations generated:")
    lines.append("")
    lines.append(f"  Source:     {summary.source_label}")
    lines.append(f"  Output:     {summary.file.path}")
    lines.append("")
    lines.append(
        f"  Enums:      {summary.enum_count:>6}"
        f"  ({summary.usage_sized_count} sized by usage"
        f" + {summary.inferred_count} inferred)"
    )
    lines.append(
        f"  Members:    {summary.member_count:>6}"
        f"  ({summary.renamed_count} renamed)"
    )
    lines.append("")
    lines.append(
        f"  Written: {summary.file.line_count:,} lines, "
        f"{summary.file.byte_count:,} bytes"
    )
    lines.append("")
    return "\n".join(lines)


def run_generate(config: GenerateConfig) -> FileWriteResult:
    """Parse the registry, build the enum table and write the header.

    Raises:
        OSError: Registry not readable or filesystem write failure.
        ET.ParseError: Malformed registry XML.
        RegistryFormatError: Registry entries missing required attributes.
        ValueError: An enum ended up with an unsupported underlying size.
    """
    print(f"Parsing: {config.registry}")
    registry, registry_version = load_registry(config.registry)
    print(f"  Registry: {len(registry)} descriptors, version {registry_version}")

    table = build_enum_table(registry)
    print(f"  Enum table: {len(table)} enums, {table.member_name_count} member names")

    write_config = WriteConfig(
        registry_name=config.registry.name, registry_version=registry_version
    )
    result = write_header(config.output, write_config, generate_enums(table))

    summary = build_generation_summary(write_config, table, result)
    print(format_generation_summary(summary), end="")
    return result


# ===--- Main ---=== #


def main(argv: list[str] | None = None):
    try:
        config = build_config(argv)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if isinstance(config, DiscoveryConfig):
            run_discovery(config)
        else:
            run_generate(config)
    except (OSError, ET.ParseError, RegistryFormatError) as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err
    except (RuntimeError, ValueError) as err:
        print(f"Internal error: {err}")
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
