"""
enum_property_config.py
Settings for enum property generation, loaded once per run and immutable afterwards.

Sources, lowest to highest precedence: defaults, a JSON settings file (flat or under "appSettings"),
command line overrides, then EPW_* environment variables.
"""
import json
import os
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from option_set_filter import OptionSetFilter
from settings_parser import parse_property_enum_mappings, parse_unmapped_properties, parse_name_list, parse_bool

DEFAULT_BASE_ENTITY_NAME = "EarlyBoundEntity"

# Setting name -> environment variable
SETTING_ENVIRONMENT_VARIABLES = {
    "PropertyEnumMappings": "EPW_PROPERTY_ENUM_MAPPINGS",
    "UnmappedProperties": "EPW_UNMAPPED_PROPERTIES",
    "CreateBaseClasses": "EPW_CREATE_BASE_CLASSES",
    "BaseEntityName": "EPW_BASE_ENTITY_NAME",
    "OptionSetsToGenerate": "EPW_OPTION_SETS_TO_GENERATE",
    "OptionSetsToSkip": "EPW_OPTION_SETS_TO_SKIP",
}


class EnumPropertySettings:
    def __init__(
        self,
        property_enum_mappings: Optional[Mapping[str, str]] = None,
        unmapped_properties: Optional[Mapping[str, Iterable[str]]] = None,
        create_base_classes: bool = False,
        base_entity_name: str = DEFAULT_BASE_ENTITY_NAME,
        option_sets_to_generate: Optional[Iterable[str]] = None,
        option_sets_to_skip: Optional[Iterable[str]] = None,
    ):
        self.property_enum_mappings = MappingProxyType(
            {key.lower(): enum_name for key, enum_name in (property_enum_mappings or {}).items()}
        )
        self.unmapped_properties = MappingProxyType(
            {entity.lower(): frozenset(p.lower() for p in props) for entity, props in (unmapped_properties or {}).items()}
        )
        self.create_base_classes = create_base_classes
        self.base_entity_name = base_entity_name
        self.option_sets_to_generate = list(option_sets_to_generate) if option_sets_to_generate else None
        self.option_sets_to_skip = list(option_sets_to_skip or [])

    @classmethod
    def from_app_settings(cls, app_settings: Mapping[str, object], verbose: bool = False) -> 'EnumPropertySettings':
        """
        Builds settings from raw setting strings keyed by setting name (see SETTING_ENVIRONMENT_VARIABLES).
        """
        return cls(
            property_enum_mappings=parse_property_enum_mappings(app_settings.get("PropertyEnumMappings"), verbose),
            unmapped_properties=parse_unmapped_properties(app_settings.get("UnmappedProperties"), verbose),
            create_base_classes=parse_bool(app_settings.get("CreateBaseClasses")),
            base_entity_name=str(app_settings.get("BaseEntityName") or DEFAULT_BASE_ENTITY_NAME),
            option_sets_to_generate=parse_name_list(app_settings.get("OptionSetsToGenerate"), verbose) or None,
            option_sets_to_skip=parse_name_list(app_settings.get("OptionSetsToSkip"), verbose),
        )

    def get_mapped_enum_name(self, entity_logical_name: str, property_name: str) -> Optional[str]:
        return self.property_enum_mappings.get(f"{entity_logical_name.lower()}.{property_name.lower()}")

    def is_unmapped(self, class_name: str, property_name: str) -> bool:
        props = self.unmapped_properties.get(class_name.lower())
        return props is not None and property_name.lower() in props

    def create_option_set_filter(self) -> OptionSetFilter:
        return OptionSetFilter(self.option_sets_to_generate, self.option_sets_to_skip)


def read_settings_file(path: str) -> Dict[str, object]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return dict(data.get("appSettings", data))


def load_settings(
    settings_file: Optional[str] = None,
    overrides: Optional[Mapping[str, object]] = None,
    environ: Optional[Mapping[str, str]] = None,
    verbose: bool = False,
) -> EnumPropertySettings:
    app_settings: Dict[str, object] = {}
    if settings_file:
        app_settings.update(read_settings_file(settings_file))
    for name, value in (overrides or {}).items():
        if value is not None:
            app_settings[name] = value
    if environ is None:
        environ = os.environ
    for name, variable in SETTING_ENVIRONMENT_VARIABLES.items():
        if variable in environ:
            app_settings[name] = environ[variable]
    if verbose:
        print(f"[DEBUG] Enum property settings: {sorted(app_settings)}")
    return EnumPropertySettings.from_app_settings(app_settings, verbose)
