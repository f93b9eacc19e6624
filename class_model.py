"""
class_model.py
Owned, mutable representation of a generated data-access compile unit: one namespace holding class declarations,
each class owning its ordered members. Getter, setter and method bodies are small statement/expression trees.
"""
from enum import Enum
from typing import List, Optional, Any

OPTION_SET_VALUE_TYPE = "Microsoft.Xrm.Sdk.OptionSetValue"
ENTITY_TYPE = "Microsoft.Xrm.Sdk.Entity"
NULLABLE_TYPE = "System.Nullable`1"
INT32_TYPE = "System.Int32"
STRING_TYPE = "System.String"
ENTITY_LOGICAL_NAME_FIELD = "EntityLogicalName"


class TypeReference:
    def __init__(self, base_type: str, type_arguments: Optional[List['TypeReference']] = None):
        self.base_type = base_type
        self.type_arguments = type_arguments or []

    def is_option_set_value(self) -> bool:
        return self.base_type == OPTION_SET_VALUE_TYPE

    def is_nullable_int(self) -> bool:
        """
        True for System.Nullable`1[System.Int32], the shape option sets take when the target SDK profile
        replaces OptionSetValue with plain nullable ints.
        """
        return (self.base_type == NULLABLE_TYPE and
                len(self.type_arguments) == 1 and
                self.type_arguments[0].base_type == INT32_TYPE)

    def __eq__(self, other):
        return (isinstance(other, TypeReference) and
                self.base_type == other.base_type and
                self.type_arguments == other.type_arguments)

    def __repr__(self):
        if self.type_arguments:
            return f"TypeReference({self.base_type!r}, {self.type_arguments!r})"
        return f"TypeReference({self.base_type!r})"


def nullable_int_type() -> TypeReference:
    return TypeReference(NULLABLE_TYPE, [TypeReference(INT32_TYPE)])


class MemberAttributes(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    ASSEMBLY = "assembly"


class BinaryOperatorType(Enum):
    IDENTITY_EQUALITY = "=="
    IDENTITY_INEQUALITY = "!="


# --- Expressions ---

class CodeObject:
    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __repr__(self):
        args = ', '.join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{type(self).__name__}({args})"


class Expression(CodeObject):
    pass


class PrimitiveExpression(Expression):
    def __init__(self, value: Any):
        self.value = value


class ThisReferenceExpression(Expression):
    pass


class PropertySetValueReferenceExpression(Expression):
    """The implicit 'value' inside a property setter."""
    pass


class TypeReferenceExpression(Expression):
    def __init__(self, type_name: str):
        self.type_name = type_name


class ArgumentReferenceExpression(Expression):
    def __init__(self, name: str):
        self.name = name


class VariableReferenceExpression(Expression):
    def __init__(self, name: str):
        self.name = name


class PropertyReferenceExpression(Expression):
    def __init__(self, target: Expression, property_name: str):
        self.target = target
        self.property_name = property_name


class MethodReferenceExpression(Expression):
    def __init__(self, target: Expression, method_name: str, type_arguments: Optional[List[TypeReference]] = None):
        self.target = target
        self.method_name = method_name
        self.type_arguments = type_arguments or []


class MethodInvokeExpression(Expression):
    def __init__(self, method: MethodReferenceExpression, parameters: Optional[List[Expression]] = None):
        self.method = method
        self.parameters = parameters or []


class CastExpression(Expression):
    def __init__(self, target_type: TypeReference, expression: Expression):
        self.target_type = target_type
        self.expression = expression


class ObjectCreateExpression(Expression):
    def __init__(self, create_type: TypeReference, parameters: Optional[List[Expression]] = None):
        self.create_type = create_type
        self.parameters = parameters or []


class ConditionalExpression(Expression):
    """condition ? true_expression : false_expression"""
    def __init__(self, condition: Expression, true_expression: Expression, false_expression: Expression):
        self.condition = condition
        self.true_expression = true_expression
        self.false_expression = false_expression


class BinaryOperatorExpression(Expression):
    def __init__(self, left: Expression, operator: BinaryOperatorType, right: Expression):
        self.left = left
        self.operator = operator
        self.right = right


# --- Statements ---

class Statement(CodeObject):
    pass


class MethodReturnStatement(Statement):
    def __init__(self, expression: Optional[Expression] = None):
        self.expression = expression


class AssignStatement(Statement):
    def __init__(self, left: Expression, right: Expression):
        self.left = left
        self.right = right


class VariableDeclarationStatement(Statement):
    def __init__(self, var_type: TypeReference, name: str, init_expression: Optional[Expression] = None):
        self.var_type = var_type
        self.name = name
        self.init_expression = init_expression


class ConditionStatement(Statement):
    def __init__(self, condition: Expression, true_statements: List[Statement], false_statements: Optional[List[Statement]] = None):
        self.condition = condition
        self.true_statements = true_statements
        self.false_statements = false_statements or []


# --- Members ---

class ClassMember:
    def __init__(self, name: str, access: MemberAttributes = MemberAttributes.PUBLIC, is_static: bool = False):
        self.name = name
        self.access = access
        self.is_static = is_static


class PropertyDeclaration(ClassMember):
    """
    A generated property. The two markers read by model transforms are explicit fields:
    logical_name (the schema attribute the property maps to) and is_obsolete.
    """
    def __init__(
        self,
        name: str,
        type: TypeReference,
        has_get: bool = True,
        has_set: bool = False,
        get_statements: Optional[List[Statement]] = None,
        set_statements: Optional[List[Statement]] = None,
        logical_name: Optional[str] = None,
        is_obsolete: bool = False,
        access: MemberAttributes = MemberAttributes.PUBLIC,
        doc: Optional[str] = None,
    ):
        super().__init__(name, access)
        self.type = type
        self.has_get = has_get
        self.has_set = has_set
        self.get_statements = get_statements or []
        self.set_statements = set_statements or []
        self.logical_name = logical_name
        self.is_obsolete = is_obsolete
        self.doc = doc


class FieldDeclaration(ClassMember):
    def __init__(self, name: str, type: TypeReference, init_expression: Optional[Expression] = None,
                 is_const: bool = False, access: MemberAttributes = MemberAttributes.PUBLIC):
        super().__init__(name, access, is_static=is_const)
        self.type = type
        self.init_expression = init_expression
        self.is_const = is_const


class ParameterDeclaration:
    def __init__(self, type: TypeReference, name: str):
        self.type = type
        self.name = name

    def __eq__(self, other):
        return isinstance(other, ParameterDeclaration) and self.type == other.type and self.name == other.name

    def __repr__(self):
        return f"ParameterDeclaration({self.type!r}, {self.name!r})"


class MethodDeclaration(ClassMember):
    def __init__(self, name: str, return_type: Optional[TypeReference] = None,
                 parameters: Optional[List[ParameterDeclaration]] = None,
                 statements: Optional[List[Statement]] = None,
                 access: MemberAttributes = MemberAttributes.PUBLIC, is_static: bool = False):
        super().__init__(name, access, is_static)
        self.return_type = return_type
        self.parameters = parameters or []
        self.statements = statements or []


# --- Types ---

class ClassDeclaration:
    def __init__(
        self,
        name: str,
        members: Optional[List[ClassMember]] = None,
        is_class: bool = True,
        is_context_type: bool = False,
        is_base_entity_type: bool = False,
        is_sealed: bool = False,
        is_public: bool = True,
        base_types: Optional[List[str]] = None,
    ):
        self.name = name
        self.members = members if members is not None else []
        self.is_class = is_class
        self.is_context_type = is_context_type
        self.is_base_entity_type = is_base_entity_type
        self.is_sealed = is_sealed
        self.is_public = is_public
        self.base_types = base_types or []

    def find_member(self, name: str) -> Optional[ClassMember]:
        for member in self.members:
            if member.name == name:
                return member
        return None

    def get_field_initialized_value(self, field_name: str) -> Optional[Any]:
        """
        Returns the primitive value a field (usually a constant) is initialized with, or None when the
        field is missing or not initialized with a primitive.
        """
        member = self.find_member(field_name)
        if isinstance(member, FieldDeclaration) and isinstance(member.init_expression, PrimitiveExpression):
            return member.init_expression.value
        return None

    @property
    def entity_logical_name(self) -> Optional[str]:
        return self.get_field_initialized_value(ENTITY_LOGICAL_NAME_FIELD)

    def properties(self) -> List[PropertyDeclaration]:
        return [m for m in self.members if isinstance(m, PropertyDeclaration)]

    def __repr__(self):
        return f"ClassDeclaration(name={self.name!r}, members={len(self.members)})"


class CodeModel:
    """Root of the tree: the single generated namespace and its types, in output order."""
    def __init__(self, namespace: str, types: Optional[List[ClassDeclaration]] = None):
        self.namespace = namespace
        self.types = types if types is not None else []

    def find_type(self, name: str) -> Optional[ClassDeclaration]:
        for type_decl in self.types:
            if type_decl.name == name:
                return type_decl
        return None
