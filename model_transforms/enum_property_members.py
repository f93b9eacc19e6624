"""
enum_property_members.py
Builds the members added by EnumPropertyTransform: the strongly typed <Property>Enum properties and the
EntityOptionSetEnum helper type whose static GetEnum method they call.
"""
from class_model import (
    ClassDeclaration, PropertyDeclaration, MethodDeclaration, ParameterDeclaration, MemberAttributes,
    TypeReference, nullable_int_type, OPTION_SET_VALUE_TYPE, ENTITY_TYPE, STRING_TYPE, INT32_TYPE,
    CastExpression, MethodInvokeExpression, MethodReferenceExpression, TypeReferenceExpression,
    ThisReferenceExpression, PrimitiveExpression, PropertyReferenceExpression, ArgumentReferenceExpression,
    VariableReferenceExpression, PropertySetValueReferenceExpression, ObjectCreateExpression,
    ConditionalExpression, BinaryOperatorExpression, BinaryOperatorType,
    MethodReturnStatement, AssignStatement, VariableDeclarationStatement, ConditionStatement,
)
from enum_property_config import DEFAULT_BASE_ENTITY_NAME
from model_transforms.enum_property_info import EnumPropertyInfo

OPTION_SET_HELPER_NAME = "EntityOptionSetEnum"
GET_ENUM_METHOD_NAME = "GetEnum"


def build_enum_property(info: EnumPropertyInfo, prop: PropertyDeclaration, create_base_classes: bool = False,
                        base_entity_name: str = DEFAULT_BASE_ENTITY_NAME) -> PropertyDeclaration:
    """
    Builds the <Property>Enum twin of an option set property. The original property is only read.

        [AttributeLogicalName("statuscode")]
        public account_statuscode? StatusCodeEnum
        {
            get { return (account_statuscode?)EntityOptionSetEnum.GetEnum(this, "statuscode"); }
            set { StatusCode = value.HasValue ? new OptionSetValue((int)value) : null; }
        }
    """
    helper = base_entity_name if create_base_classes else OPTION_SET_HELPER_NAME
    enum_property = PropertyDeclaration(
        name=info.property_name,
        type=TypeReference(info.nullable_enum_type_name),
        logical_name=info.logical_name,
        access=MemberAttributes.PUBLIC,
    )
    enum_property.get_statements.append(
        MethodReturnStatement(
            CastExpression(
                TypeReference(info.nullable_enum_type_name),
                MethodInvokeExpression(
                    MethodReferenceExpression(TypeReferenceExpression(helper), GET_ENUM_METHOD_NAME),
                    [ThisReferenceExpression(), PrimitiveExpression(info.logical_name)]))))

    if prop.has_set:
        enum_property.has_set = True
        enum_property.set_statements.append(
            AssignStatement(
                PropertyReferenceExpression(ThisReferenceExpression(), prop.name),
                _get_set_value_expression(prop)))
    return enum_property


def _get_set_value_expression(prop: PropertyDeclaration):
    value = PropertySetValueReferenceExpression()
    if prop.type.is_nullable_int():
        # (int?)value
        return CastExpression(nullable_int_type(), value)
    # value.HasValue ? new OptionSetValue((int)value) : null
    return ConditionalExpression(
        PropertyReferenceExpression(value, "HasValue"),
        ObjectCreateExpression(TypeReference(OPTION_SET_VALUE_TYPE), [CastExpression(TypeReference(INT32_TYPE), value)]),
        PrimitiveExpression(None))


def build_entity_option_set_enum_type() -> ClassDeclaration:
    enum_class = ClassDeclaration(OPTION_SET_HELPER_NAME, is_sealed=True, is_public=False)
    enum_class.members.append(create_get_enum_method())
    return enum_class


def create_get_enum_method() -> MethodDeclaration:
    """
    public static int? GetEnum(Microsoft.Xrm.Sdk.Entity entity, string attributeLogicalName)
    {
        if (entity.Attributes.ContainsKey(attributeLogicalName))
        {
            Microsoft.Xrm.Sdk.OptionSetValue value = entity.GetAttributeValue<Microsoft.Xrm.Sdk.OptionSetValue>(attributeLogicalName);
            if (value != null)
            {
                return value.Value;
            }
        }
        return null;
    }

    A missing key and a key holding null both give null.
    """
    get = MethodDeclaration(
        name=GET_ENUM_METHOD_NAME,
        return_type=nullable_int_type(),
        parameters=[
            ParameterDeclaration(TypeReference(ENTITY_TYPE), "entity"),
            ParameterDeclaration(TypeReference(STRING_TYPE), "attributeLogicalName"),
        ],
        access=MemberAttributes.PUBLIC,
        is_static=True,
    )
    entity = ArgumentReferenceExpression("entity")
    attribute_logical_name = ArgumentReferenceExpression("attributeLogicalName")

    invoke_contains_key = MethodInvokeExpression(
        MethodReferenceExpression(PropertyReferenceExpression(entity, "Attributes"), "ContainsKey"),
        [attribute_logical_name])

    declare_and_set_value = VariableDeclarationStatement(
        TypeReference(OPTION_SET_VALUE_TYPE),
        "value",
        MethodInvokeExpression(
            MethodReferenceExpression(entity, "GetAttributeValue", [TypeReference(OPTION_SET_VALUE_TYPE)]),
            [attribute_logical_name]))

    value = VariableReferenceExpression("value")
    value_ne_null = BinaryOperatorExpression(value, BinaryOperatorType.IDENTITY_INEQUALITY, PrimitiveExpression(None))

    get.statements.append(
        ConditionStatement(invoke_contains_key, [
            declare_and_set_value,
            ConditionStatement(value_ne_null, [MethodReturnStatement(PropertyReferenceExpression(value, "Value"))]),
        ]))
    get.statements.append(MethodReturnStatement(PrimitiveExpression(None)))
    return get
