"""
EnumPropertyTransform: For every option set property of every entity class, adds a strongly typed
<Property>Enum property backed by the option set's enum. Outside base-class mode the EntityOptionSetEnum
helper type those properties call is added to the model once.
Nothing already in the model is renamed or removed.
"""
from typing import List, Optional

from class_model import CodeModel, ClassDeclaration, ClassMember, PropertyDeclaration
from enum_property_config import EnumPropertySettings
from naming_service import NamingService
from option_set_filter import OptionSetFilter
from schema_metadata import MetadataStore
from model_transforms.enum_property_info import EnumPropertyInfo, EnumPropertyInfoResolver
from model_transforms.enum_property_members import build_enum_property, build_entity_option_set_enum_type


def is_option_set_property(prop: PropertyDeclaration) -> bool:
    # Nullable ints are only candidates; the metadata lookup decides whether they really are option sets
    return prop.type.is_option_set_value() or prop.type.is_nullable_int()


class EnumPropertyTransform:
    def __init__(
        self,
        metadata: MetadataStore,
        naming_service: NamingService,
        settings: Optional[EnumPropertySettings] = None,
        option_set_filter: Optional[OptionSetFilter] = None,
        verbose: bool = False,
    ):
        self.metadata = metadata
        self.settings = settings or EnumPropertySettings()
        self.option_set_filter = option_set_filter or self.settings.create_option_set_filter()
        self.resolver = EnumPropertyInfoResolver(metadata, naming_service, self.settings)
        self.verbose = verbose
        self.helper_type_added = False

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] EnumPropertyTransform: {message}")

    def transform(self, model: CodeModel) -> CodeModel:
        # The helper is emitted once per model, not once per transform object
        self.helper_type_added = False
        for type_decl in list(model.types):
            if not type_decl.is_class or type_decl.is_context_type or type_decl.is_base_entity_type:
                continue
            logical_name = type_decl.entity_logical_name
            if logical_name is None:
                self.debug_print(f"{type_decl.name} has no EntityLogicalName, skipping")
                continue
            self._add_enum_properties(type_decl, logical_name)

        if not self.settings.create_base_classes and not self.helper_type_added:
            # In base-class mode GetEnum lives on the base entity class instead
            model.types.append(build_entity_option_set_enum_type())
            self.helper_type_added = True
        return model

    def _add_enum_properties(self, type_decl: ClassDeclaration, entity_logical_name: str) -> None:
        properties_to_add: List[PropertyDeclaration] = []
        for member in type_decl.members:
            info = self.get_eligible_enum_property_info(member, type_decl, entity_logical_name)
            if info is None:
                continue
            properties_to_add.append(build_enum_property(
                info, member, self.settings.create_base_classes, self.settings.base_entity_name))
            self.debug_print(f"{type_decl.name}.{info.property_name} -> {info.nullable_enum_type_name}")
        type_decl.members.extend(properties_to_add)

    def is_eligible(self, member: ClassMember, type_decl: ClassDeclaration, entity_logical_name: str) -> bool:
        return self.get_eligible_enum_property_info(member, type_decl, entity_logical_name) is not None

    def get_eligible_enum_property_info(self, member: ClassMember, type_decl: ClassDeclaration,
                                        entity_logical_name: str) -> Optional[EnumPropertyInfo]:
        """
        Returns the resolved info for a property that should get an enum twin, None otherwise.
        Metadata is only consulted once the cheap checks pass.
        """
        if self._skip_property(member, type_decl):
            return None
        info = self.resolver.resolve(member, entity_logical_name)
        if info is None:
            return None
        if not self.option_set_filter.is_option_set_generated(info.enum_type_name):
            self.debug_print(f"{type_decl.name}.{member.name}: enum {info.enum_type_name} is not generated")
            return None
        return info

    def _skip_property(self, member: ClassMember, type_decl: ClassDeclaration) -> bool:
        return (not isinstance(member, PropertyDeclaration) or
                not is_option_set_property(member) or
                self.settings.is_unmapped(type_decl.name, member.name) or
                member.is_obsolete)
