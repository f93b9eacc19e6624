import pytest

from enum_property_config import EnumPropertySettings, load_settings, read_settings_file, DEFAULT_BASE_ENTITY_NAME
from option_set_filter import OptionSetFilter
from tests.test_utils import write_json


def test_defaults():
    settings = EnumPropertySettings()
    assert not settings.create_base_classes
    assert settings.base_entity_name == DEFAULT_BASE_ENTITY_NAME
    assert dict(settings.property_enum_mappings) == {}
    assert dict(settings.unmapped_properties) == {}


def test_tables_are_lowercased_and_immutable():
    settings = EnumPropertySettings(property_enum_mappings={"Account.StatusCode": "StatusEnum"},
                                    unmapped_properties={"Account": ["StatusCode"]})
    assert settings.property_enum_mappings == {"account.statuscode": "StatusEnum"}
    assert settings.unmapped_properties["account"] == frozenset({"statuscode"})
    with pytest.raises(TypeError):
        settings.property_enum_mappings["contact.gendercode"] = "Gender"
    with pytest.raises(TypeError):
        settings.unmapped_properties["contact"] = frozenset()


def test_lookups_are_case_insensitive():
    settings = EnumPropertySettings(property_enum_mappings={"account.statuscode": "StatusEnum"},
                                    unmapped_properties={"account": ["industrycode"]})
    assert settings.get_mapped_enum_name("ACCOUNT", "StatusCode") == "StatusEnum"
    assert settings.get_mapped_enum_name("account", "IndustryCode") is None
    assert settings.is_unmapped("Account", "IndustryCODE")
    assert not settings.is_unmapped("Contact", "IndustryCode")


def test_from_app_settings():
    settings = EnumPropertySettings.from_app_settings({
        "PropertyEnumMappings": "account.statuscode,CustomStatusEnum",
        "UnmappedProperties": "account:industrycode",
        "CreateBaseClasses": "true",
        "BaseEntityName": "MyBase",
        "OptionSetsToSkip": "account_customertypecode",
    })
    assert settings.get_mapped_enum_name("account", "statuscode") == "CustomStatusEnum"
    assert settings.is_unmapped("account", "industrycode")
    assert settings.create_base_classes
    assert settings.base_entity_name == "MyBase"
    option_set_filter = settings.create_option_set_filter()
    assert isinstance(option_set_filter, OptionSetFilter)
    assert not option_set_filter.is_option_set_generated("account_customertypecode")
    assert option_set_filter.is_option_set_generated("account_statuscode")


def test_read_settings_file_accepts_app_settings_section(temp_dir):
    path = write_json(f"{temp_dir}/settings.json", {"appSettings": {"CreateBaseClasses": True}})
    assert read_settings_file(path) == {"CreateBaseClasses": True}


def test_read_settings_file_rejects_non_object(temp_dir):
    path = write_json(f"{temp_dir}/settings.json", ["CreateBaseClasses"])
    with pytest.raises(ValueError):
        read_settings_file(path)


def test_load_settings_precedence(temp_dir):
    path = write_json(f"{temp_dir}/settings.json", {
        "PropertyEnumMappings": "account.statuscode,FromFile",
        "UnmappedProperties": "account:industrycode",
        "BaseEntityName": "FileBase",
    })
    overrides = {"PropertyEnumMappings": "account.statuscode,FromArgs", "BaseEntityName": None}
    environ = {"EPW_UNMAPPED_PROPERTIES": "contact:gendercode"}
    settings = load_settings(path, overrides, environ)
    assert settings.get_mapped_enum_name("account", "statuscode") == "FromArgs"
    assert settings.base_entity_name == "FileBase"
    assert not settings.is_unmapped("account", "industrycode")
    assert settings.is_unmapped("contact", "gendercode")


def test_load_settings_reads_process_environment(monkeypatch):
    monkeypatch.setenv("EPW_CREATE_BASE_CLASSES", "1")
    assert load_settings().create_base_classes


def test_option_set_filter():
    everything = OptionSetFilter()
    assert everything.is_option_set_generated("anything")
    whitelist = OptionSetFilter(["Account_StatusCode"], ["account_industrycode"])
    assert whitelist.is_option_set_generated("account_statuscode")
    assert not whitelist.is_option_set_generated("account_industrycode")
    assert not whitelist.is_option_set_generated("contact_gendercode")
