"""
settings_parser.py
Parses the pipe-delimited setting strings used to configure enum property generation:

    PropertyEnumMappings:  account.statuscode,CustomStatusEnum|contact.gendercode,Gender
    UnmappedProperties:    account:statuscode,industrycode|contact.gendercode
    OptionSetsToSkip:      account_statuscode|Gender

Entries are split on '|'. Blank entries are skipped and entries the grammar rejects are ignored.
All entity and property names are lower-cased. A mapped enum type name is kept as written, apart from
surrounding whitespace (e.g. global::Xrm.CustomStatus).
"""
from typing import Dict, List, Optional, Set

from lark import Lark, Transformer
from lark.exceptions import LarkError


grammar = r"""
    mapping_entry: property_key "," ENUM_NAME
    exclusion_entry: entity_properties | property_key
    name_entry: type_name

    entity_properties: NAME ":" NAME ("," NAME)* ","?
    property_key: NAME "." NAME
    type_name: NAME ("." NAME)*

    NAME: /[a-zA-Z_][a-zA-Z0-9_]*/
    ENUM_NAME: /[^,|\s][^,|]*/
    %import common.WS
    %ignore WS
"""

parser = Lark(
    grammar,
    start=['mapping_entry', 'exclusion_entry', 'name_entry']
)


class SettingsTransformer(Transformer):
    def property_key(self, items):
        return (str(items[0]).lower(), str(items[1]).lower())

    def type_name(self, items):
        return '.'.join(str(i) for i in items)

    def entity_properties(self, items):
        return (str(items[0]).lower(), {str(i).lower() for i in items[1:]})

    def mapping_entry(self, items):
        entity, prop = items[0]
        return (f"{entity}.{prop}", str(items[1]).strip())

    def exclusion_entry(self, items):
        entity, props = items[0]
        if isinstance(props, str):
            props = {props}
        return (entity, props)

    def name_entry(self, items):
        return items[0]


def _debug_print(message: str, verbose: bool) -> None:
    if verbose:
        print(f"[DEBUG] {message}")


def split_entries(text: Optional[str]) -> List[str]:
    if text is not None and not isinstance(text, str):
        raise ValueError(f"Expected a '|' separated string, got {type(text).__name__}")
    return [entry.strip() for entry in (text or '').split('|') if entry.strip()]


def parse_entry(entry: str, start: str):
    tree = parser.parse(entry, start=start)
    return SettingsTransformer().transform(tree)


def parse_property_enum_mappings(text: Optional[str], verbose: bool = False) -> Dict[str, str]:
    """
    Returns {"entity.property": "EnumName"}. A later entry for the same key replaces an earlier one.
    """
    mappings = {}
    for entry in split_entries(text):
        try:
            key, enum_name = parse_entry(entry, 'mapping_entry')
        except LarkError as e:
            _debug_print(f"Ignoring malformed PropertyEnumMappings entry '{entry}': {e}", verbose)
            continue
        mappings[key] = enum_name
    return mappings


def parse_unmapped_properties(text: Optional[str], verbose: bool = False) -> Dict[str, Set[str]]:
    """
    Returns {"entity": {"property", ...}}. Repeated entities are merged.
    """
    unmapped: Dict[str, Set[str]] = {}
    for entry in split_entries(text):
        try:
            entity, props = parse_entry(entry, 'exclusion_entry')
        except LarkError as e:
            _debug_print(f"Ignoring malformed UnmappedProperties entry '{entry}': {e}", verbose)
            continue
        unmapped.setdefault(entity, set()).update(props)
    return unmapped


def parse_name_list(text: Optional[str], verbose: bool = False) -> List[str]:
    names = []
    for entry in split_entries(text):
        try:
            names.append(parse_entry(entry, 'name_entry'))
        except LarkError as e:
            _debug_print(f"Ignoring malformed name '{entry}': {e}", verbose)
    return names


def parse_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
