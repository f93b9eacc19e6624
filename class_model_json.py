"""
class_model_json.py
Reads and writes a CodeModel as JSON. Every node is an object whose "kind" is the node's class name;
the remaining keys are the constructor arguments, so optional ones may be left out by the producer.

    {"namespace": "Xrm", "types": [
        {"kind": "ClassDeclaration", "name": "Account", "members": [
            {"kind": "FieldDeclaration", "name": "EntityLogicalName", "is_const": true,
             "type": {"kind": "TypeReference", "base_type": "System.String"},
             "init_expression": {"kind": "PrimitiveExpression", "value": "account"}},
            {"kind": "PropertyDeclaration", "name": "StatusCode", "has_set": true, "logical_name": "statuscode",
             "type": {"kind": "TypeReference", "base_type": "Microsoft.Xrm.Sdk.OptionSetValue"}}]}]}
"""
import inspect
import json
import os
from enum import Enum
from typing import Any, Dict

import class_model
from class_model import CodeModel

NODE_TYPES = {
    cls.__name__: cls for cls in (
        class_model.TypeReference,
        class_model.PrimitiveExpression,
        class_model.ThisReferenceExpression,
        class_model.PropertySetValueReferenceExpression,
        class_model.TypeReferenceExpression,
        class_model.ArgumentReferenceExpression,
        class_model.VariableReferenceExpression,
        class_model.PropertyReferenceExpression,
        class_model.MethodReferenceExpression,
        class_model.MethodInvokeExpression,
        class_model.CastExpression,
        class_model.ObjectCreateExpression,
        class_model.ConditionalExpression,
        class_model.BinaryOperatorExpression,
        class_model.MethodReturnStatement,
        class_model.AssignStatement,
        class_model.VariableDeclarationStatement,
        class_model.ConditionStatement,
        class_model.PropertyDeclaration,
        class_model.FieldDeclaration,
        class_model.MethodDeclaration,
        class_model.ParameterDeclaration,
        class_model.ClassDeclaration,
    )
}

ENUM_TYPES = {cls.__name__: cls for cls in (class_model.MemberAttributes, class_model.BinaryOperatorType)}


def _constructor_arguments(cls):
    if cls.__init__ is object.__init__:
        return set()
    return set(inspect.signature(cls.__init__).parameters) - {'self'}


def to_json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return {"kind": type(value).__name__, "value": value.value}
    if isinstance(value, list):
        return [to_json_value(v) for v in value]
    kind = type(value).__name__
    if NODE_TYPES.get(kind) is type(value):
        allowed = _constructor_arguments(type(value))
        data = {"kind": kind}
        for key, field_value in value.__dict__.items():
            if key in allowed:
                data[key] = to_json_value(field_value)
        return data
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise TypeError(f"Cannot convert {value!r} to JSON")


def from_json_value(value: Any) -> Any:
    if isinstance(value, list):
        return [from_json_value(v) for v in value]
    if not isinstance(value, dict):
        return value
    kind = value.get("kind")
    if kind in ENUM_TYPES:
        if "value" not in value:
            raise ValueError(f"{kind} is missing its value")
        return ENUM_TYPES[kind](value["value"])
    if kind not in NODE_TYPES:
        raise ValueError(f"Unknown node kind '{kind}'")
    cls = NODE_TYPES[kind]
    allowed = _constructor_arguments(cls)
    arguments = {}
    for key, field_value in value.items():
        if key == "kind":
            continue
        if key not in allowed:
            raise ValueError(f"Unknown field '{key}' for {kind}")
        arguments[key] = from_json_value(field_value)
    try:
        return cls(**arguments)
    except TypeError as e:
        # Missing required fields surface as a constructor TypeError
        raise ValueError(f"Invalid {kind}: {e}") from e


def code_model_to_dict(model: CodeModel) -> Dict[str, Any]:
    return {"namespace": model.namespace, "types": [to_json_value(t) for t in model.types]}


def code_model_from_dict(data: Dict[str, Any]) -> CodeModel:
    types = [from_json_value(t) for t in data.get("types", [])]
    for type_decl in types:
        if not isinstance(type_decl, class_model.ClassDeclaration):
            raise ValueError(f"Top-level type must be a ClassDeclaration, got {type(type_decl).__name__}")
    return CodeModel(data.get("namespace", ""), types)


def load_code_model(path: str) -> CodeModel:
    with open(path, 'r', encoding='utf-8') as f:
        return code_model_from_dict(json.load(f))


def save_code_model(model: CodeModel, path: str) -> None:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(code_model_to_dict(model), f, indent=2)
