from enum import IntEnum
from types import SimpleNamespace

from class_model import (
    CodeModel, TypeReference, MemberAttributes, nullable_int_type, ENTITY_TYPE, STRING_TYPE,
    MethodReturnStatement, CastExpression, ThisReferenceExpression, PrimitiveExpression,
)
from tests.model_eval import ModelEvaluator, Entity, OptionSetValue
from model_transforms.enum_property_info import EnumPropertyInfo
from model_transforms.enum_property_members import (
    build_enum_property, build_entity_option_set_enum_type, create_get_enum_method,
    OPTION_SET_HELPER_NAME, GET_ENUM_METHOD_NAME,
)
from tests.test_utils import entity_class, option_set_property, nullable_int_property


class AccountStatusCode(IntEnum):
    Active = 1
    Inactive = 2


STATUS_INFO = EnumPropertyInfo("account_statuscode", "StatusCodeEnum", "statuscode")


def make_evaluated_account(prop):
    """Account class holding prop and its enum twin, plus the helper type, ready for evaluation."""
    account = entity_class("Account", "account", [prop])
    account.members.append(build_enum_property(STATUS_INFO, prop))
    model = CodeModel("Xrm", [account, build_entity_option_set_enum_type()])
    evaluator = ModelEvaluator(model, enum_types={"account_statuscode": AccountStatusCode})
    return account, evaluator


def test_getter_casts_helper_result_to_nullable_enum():
    prop = build_enum_property(STATUS_INFO, option_set_property("StatusCode", "statuscode"))
    assert prop.name == "StatusCodeEnum"
    assert prop.access == MemberAttributes.PUBLIC
    assert prop.logical_name == "statuscode"
    ret = prop.get_statements[0]
    assert isinstance(ret, MethodReturnStatement)
    assert isinstance(ret.expression, CastExpression)
    assert ret.expression.target_type == TypeReference("account_statuscode?")
    call = ret.expression.expression
    assert call.method.target.type_name == OPTION_SET_HELPER_NAME
    assert call.parameters == [ThisReferenceExpression(), PrimitiveExpression("statuscode")]


def test_getter_in_base_class_mode_calls_base_entity():
    prop = build_enum_property(STATUS_INFO, option_set_property("StatusCode", "statuscode"), create_base_classes=True)
    assert prop.get_statements[0].expression.expression.method.target.type_name == "EarlyBoundEntity"


def test_original_property_is_not_modified():
    original = option_set_property("StatusCode", "statuscode")
    before = dict(original.__dict__)
    build_enum_property(STATUS_INFO, original)
    assert original.__dict__ == before


def test_get_enum_method_signature():
    method = create_get_enum_method()
    assert method.name == GET_ENUM_METHOD_NAME
    assert method.is_static
    assert method.return_type == nullable_int_type()
    assert [(p.type.base_type, p.name) for p in method.parameters] == [
        (ENTITY_TYPE, "entity"), (STRING_TYPE, "attributeLogicalName")]


def test_helper_type_is_sealed_and_internal():
    helper = build_entity_option_set_enum_type()
    assert helper.name == OPTION_SET_HELPER_NAME
    assert helper.is_sealed and not helper.is_public
    assert [m.name for m in helper.members] == [GET_ENUM_METHOD_NAME]


def test_get_enum_two_level_null_semantics():
    evaluator = ModelEvaluator(CodeModel("Xrm", [build_entity_option_set_enum_type()]))
    assert evaluator.invoke_static(OPTION_SET_HELPER_NAME, GET_ENUM_METHOD_NAME, Entity("account", {}), "fieldx") is None
    assert evaluator.invoke_static(OPTION_SET_HELPER_NAME, GET_ENUM_METHOD_NAME, Entity("account", {"fieldx": None}), "fieldx") is None
    assert evaluator.invoke_static(OPTION_SET_HELPER_NAME, GET_ENUM_METHOD_NAME, Entity("account", {"fieldx": OptionSetValue(7)}), "fieldx") == 7


def test_enum_getter_reads_entity_attribute():
    account, evaluator = make_evaluated_account(option_set_property("StatusCode", "statuscode"))
    entity = Entity("account", {"statuscode": OptionSetValue(2)})
    assert evaluator.get_property_value(account, "StatusCodeEnum", entity) is AccountStatusCode.Inactive
    assert evaluator.get_property_value(account, "StatusCodeEnum", Entity("account")) is None


def test_option_set_value_setter_forwards_wrapped_value():
    account, evaluator = make_evaluated_account(option_set_property("StatusCode", "statuscode"))
    record = SimpleNamespace(StatusCode=None)
    evaluator.set_property_value(account, "StatusCodeEnum", record, AccountStatusCode.Active)
    assert record.StatusCode == OptionSetValue(1)
    evaluator.set_property_value(account, "StatusCodeEnum", record, None)
    assert record.StatusCode is None


def test_nullable_int_setter_forwards_int():
    account, evaluator = make_evaluated_account(nullable_int_property("StatusCode", "statuscode"))
    record = SimpleNamespace(StatusCode=None)
    evaluator.set_property_value(account, "StatusCodeEnum", record, AccountStatusCode.Inactive)
    assert record.StatusCode == 2 and type(record.StatusCode) is int
    evaluator.set_property_value(account, "StatusCodeEnum", record, None)
    assert record.StatusCode is None
