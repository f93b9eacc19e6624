"""
enum_property_info.py
Resolves, for an option set property, the enum type its strongly typed twin uses.

Enum type name precedence:
  1. an explicit PropertyEnumMappings entry for entity.property
  2. the naming service name + "Enum" when that name is already taken by a generated entity type
  3. the naming service name
"""
from typing import Optional

from class_model import PropertyDeclaration
from enum_property_config import EnumPropertySettings
from naming_service import NamingService
from schema_metadata import MetadataStore, EnumAttributeMetadata

ENUM_SUFFIX = "Enum"


class EnumPropertyError(ValueError):
    """The generated model is inconsistent with its metadata; generation cannot continue."""
    pass


class EnumPropertyInfo:
    def __init__(self, enum_type_name: str, property_name: str, logical_name: str):
        self.enum_type_name = enum_type_name
        self.property_name = property_name
        self.logical_name = logical_name

    @property
    def nullable_enum_type_name(self) -> str:
        return self.enum_type_name + "?"

    def __repr__(self):
        return (f"EnumPropertyInfo(enum_type_name={self.enum_type_name!r}, property_name={self.property_name!r}, "
                f"logical_name={self.logical_name!r})")


class EnumPropertyInfoResolver:
    def __init__(self, metadata: MetadataStore, naming_service: NamingService, settings: EnumPropertySettings):
        self.metadata = metadata
        self.naming_service = naming_service
        self.settings = settings

    def resolve(self, prop: PropertyDeclaration, entity_logical_name: str) -> Optional[EnumPropertyInfo]:
        """
        Returns None when the property's attribute is not an enumerated attribute.
        Raises EnumPropertyError when the property has no attribute logical name or the entity has no metadata.
        """
        if prop.logical_name is None:
            raise EnumPropertyError(
                f"Unable to determine property Logical Name for property '{prop.name}' of entity '{entity_logical_name}'")
        data = self.metadata.get(entity_logical_name)
        if data is None:
            raise EnumPropertyError(f"No metadata found for entity '{entity_logical_name}'")

        picklist = data.find_attribute(prop.logical_name)
        if not isinstance(picklist, EnumAttributeMetadata):
            return None

        enum_name = self.naming_service.get_name_for_option_set(data, picklist.option_set)
        specified_enum = self.settings.get_mapped_enum_name(entity_logical_name, prop.name)
        if specified_enum is not None:
            enum_name = specified_enum
        elif self.metadata.is_generated_entity_name(enum_name):
            enum_name += ENUM_SUFFIX

        return EnumPropertyInfo(
            enum_type_name=enum_name,
            property_name=prop.name + ENUM_SUFFIX,
            logical_name=prop.logical_name,
        )
