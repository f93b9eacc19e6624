"""
class_model_debug.py
Debug dump of a CodeModel: one line per type and member, indented.
"""
from typing import List

from class_model import CodeModel, ClassDeclaration, PropertyDeclaration, FieldDeclaration, MethodDeclaration, TypeReference, PrimitiveExpression


def format_type(type_ref: TypeReference) -> str:
    if type_ref is None:
        return "void"
    if type_ref.type_arguments:
        return f"{type_ref.base_type}[{', '.join(format_type(t) for t in type_ref.type_arguments)}]"
    return type_ref.base_type


def _print_member(member, indent_level, add_line_func):
    ind = '  ' * indent_level
    if isinstance(member, PropertyDeclaration):
        details = [f"type='{format_type(member.type)}'"]
        accessors = [a for a, present in (("get", member.has_get), ("set", member.has_set)) if present]
        details.append(f"accessors={'/'.join(accessors) or 'none'}")
        if member.logical_name: details.append(f"logical_name='{member.logical_name}'")
        if member.is_obsolete: details.append("obsolete=True")
        add_line_func(f"{ind}Property: {member.name} ({', '.join(details)})")
    elif isinstance(member, FieldDeclaration):
        value = member.init_expression.value if isinstance(member.init_expression, PrimitiveExpression) else None
        const = "const " if member.is_const else ""
        add_line_func(f"{ind}Field: {const}{member.name} (type='{format_type(member.type)}', value={value!r})")
    elif isinstance(member, MethodDeclaration):
        params = ', '.join(f"{format_type(p.type)} {p.name}" for p in member.parameters)
        static = "static " if member.is_static else ""
        add_line_func(f"{ind}Method: {static}{member.name}({params}) -> {format_type(member.return_type)} ({len(member.statements)} statements)")
    else:
        add_line_func(f"{ind}Member: {getattr(member, 'name', '?')} ({type(member).__name__})")


def _print_class(type_decl: ClassDeclaration, indent_level, add_line_func):
    ind = '  ' * indent_level
    flags = []
    if not type_decl.is_class: flags.append("not_class")
    if type_decl.is_context_type: flags.append("context")
    if type_decl.is_base_entity_type: flags.append("base_entity")
    if type_decl.is_sealed: flags.append("sealed")
    if not type_decl.is_public: flags.append("internal")
    logical_name = type_decl.entity_logical_name
    if logical_name: flags.append(f"logical_name='{logical_name}'")
    add_line_func(f"{ind}Class: {type_decl.name}{' (' + ', '.join(flags) + ')' if flags else ''}")
    for member in type_decl.members:
        _print_member(member, indent_level + 1, add_line_func)


def debug_print_model(model: CodeModel, print_output: bool = True) -> str:
    lines: List[str] = []
    lines.append(f"Namespace: {model.namespace} ({len(model.types)} types)")
    for type_decl in model.types:
        _print_class(type_decl, 1, lines.append)
    output = '\n'.join(lines)
    if print_output:
        print(output)
    return output
