"""
schema_metadata.py
In-memory entity/attribute metadata, keyed by entity logical name, as fetched from the remote schema.
Only the parts read by model transforms are represented: attribute logical/schema names and, for
enumerated attributes, their option set.
"""
import json
from typing import Dict, List, Optional, Iterator, Any

# Attribute types whose metadata carries an option set
ENUM_ATTRIBUTE_TYPES = {"Picklist", "State", "Status", "MultiSelectPicklist"}


class OptionMetadata:
    def __init__(self, value: int, label: Optional[str] = None):
        self.value = value
        self.label = label

    def __repr__(self):
        return f"OptionMetadata(value={self.value!r}, label={self.label!r})"


class OptionSetMetadata:
    def __init__(self, name: str, is_global: bool = False, options: Optional[List[OptionMetadata]] = None):
        self.name = name
        self.is_global = is_global
        self.options = options or []

    def __repr__(self):
        return f"OptionSetMetadata(name={self.name!r}, is_global={self.is_global!r})"


class AttributeMetadata:
    def __init__(self, logical_name: str, schema_name: Optional[str] = None, attribute_type: Optional[str] = None):
        self.logical_name = logical_name
        self.schema_name = schema_name or logical_name
        self.attribute_type = attribute_type

    def __repr__(self):
        return f"{type(self).__name__}(logical_name={self.logical_name!r})"


class EnumAttributeMetadata(AttributeMetadata):
    def __init__(self, logical_name: str, option_set: OptionSetMetadata, schema_name: Optional[str] = None,
                 attribute_type: str = "Picklist"):
        super().__init__(logical_name, schema_name, attribute_type)
        self.option_set = option_set


class EntityMetadata:
    def __init__(self, logical_name: str, schema_name: Optional[str] = None,
                 attributes: Optional[List[AttributeMetadata]] = None):
        self.logical_name = logical_name
        self.schema_name = schema_name or logical_name
        self.attributes = attributes or []

    def find_attribute(self, logical_name: str) -> Optional[AttributeMetadata]:
        for attribute in self.attributes:
            if attribute.logical_name == logical_name:
                return attribute
        return None

    def __repr__(self):
        return f"EntityMetadata(logical_name={self.logical_name!r}, attributes={len(self.attributes)})"


class MetadataStore:
    """
    Entity metadata keyed by entity logical name. Read-only once built.
    """
    def __init__(self, entities: Optional[List[EntityMetadata]] = None):
        self._entities: Dict[str, EntityMetadata] = {}
        for entity in entities or []:
            self._entities[entity.logical_name] = entity

    def __contains__(self, logical_name: str) -> bool:
        return logical_name in self._entities

    def __getitem__(self, logical_name: str) -> EntityMetadata:
        return self._entities[logical_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, logical_name: str) -> Optional[EntityMetadata]:
        return self._entities.get(logical_name)

    def is_generated_entity_name(self, name: str) -> bool:
        """
        True when name is both the logical name and the exact schema name of an entity, i.e. an entity
        type would be generated under that very name. Case differences and partial matches do not count.
        """
        entity = self._entities.get(name)
        return entity is not None and entity.schema_name == name


# --- JSON loading ---

def _option_set_from_dict(data: Dict[str, Any]) -> OptionSetMetadata:
    options = [OptionMetadata(o["value"], o.get("label")) for o in data.get("options", [])]
    return OptionSetMetadata(data["name"], data.get("is_global", False), options)


def _attribute_from_dict(data: Dict[str, Any]) -> AttributeMetadata:
    option_set = data.get("option_set")
    if option_set is not None:
        return EnumAttributeMetadata(
            data["logical_name"],
            _option_set_from_dict(option_set),
            schema_name=data.get("schema_name"),
            attribute_type=data.get("attribute_type", "Picklist"),
        )
    if data.get("attribute_type") in ENUM_ATTRIBUTE_TYPES:
        raise ValueError(f"Attribute '{data['logical_name']}' of type {data['attribute_type']} has no option_set")
    return AttributeMetadata(data["logical_name"], data.get("schema_name"), data.get("attribute_type"))


def metadata_store_from_dict(data: Dict[str, Any]) -> MetadataStore:
    entities = []
    for entity_data in data.get("entities", []):
        try:
            attributes = [_attribute_from_dict(a) for a in entity_data.get("attributes", [])]
            entities.append(EntityMetadata(entity_data["logical_name"], entity_data.get("schema_name"), attributes))
        except KeyError as e:
            raise ValueError(f"Metadata entry is missing required field {e}") from e
    return MetadataStore(entities)


def load_metadata_store(path: str) -> MetadataStore:
    with open(path, 'r', encoding='utf-8') as f:
        return metadata_store_from_dict(json.load(f))
