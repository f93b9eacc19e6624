"""
naming_service.py
Naming services turn an option set reference into the type name its enum is generated under.
Model transforms only depend on the NamingService protocol; DefaultNamingService is what the CLI uses.
"""
import re
from typing import Protocol

from schema_metadata import EntityMetadata, OptionSetMetadata


class NamingService(Protocol):
    def get_name_for_option_set(self, entity_metadata: EntityMetadata, option_set: OptionSetMetadata) -> str:
        ...


def to_identifier(name: str) -> str:
    # Replace anything that cannot appear in a type name; names may not start with a digit
    name = re.sub(r'[^0-9A-Za-z_]', '_', name)
    if name and name[0].isdigit():
        name = '_' + name
    return name


class DefaultNamingService:
    """Uses the option set's own name, e.g. 'account_statuscode'."""
    def get_name_for_option_set(self, entity_metadata: EntityMetadata, option_set: OptionSetMetadata) -> str:
        if not option_set.name:
            raise ValueError(f"Option set on entity '{entity_metadata.logical_name}' has no name")
        return to_identifier(option_set.name)
