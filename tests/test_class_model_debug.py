from class_model_debug import debug_print_model, format_type
from class_model import nullable_int_type
from naming_service import DefaultNamingService
from model_transforms.enum_property_transform import EnumPropertyTransform
from tests.test_utils import make_account_model, make_account_metadata


def test_format_type():
    assert format_type(nullable_int_type()) == "System.Nullable`1[System.Int32]"
    assert format_type(None) == "void"


def test_debug_print_model(capsys):
    model = EnumPropertyTransform(make_account_metadata(), DefaultNamingService()).transform(make_account_model())
    output = debug_print_model(model)
    assert capsys.readouterr().out.strip() == output
    lines = output.splitlines()
    assert lines[0] == "Namespace: Xrm (4 types)"
    assert "  Class: CrmServiceContext (context)" in lines
    assert "  Class: Account (logical_name='account')" in lines
    assert "    Property: StatusCodeEnum (type='account_statuscode?', accessors=get/set, logical_name='statuscode')" in lines
    assert "    Property: IndustryCodeEnum (type='account_industrycode?', accessors=get, logical_name='industrycode')" in lines
    assert "  Class: EntityOptionSetEnum (sealed, internal)" in lines
    assert any(line.startswith("    Method: static GetEnum(Microsoft.Xrm.Sdk.Entity entity, System.String attributeLogicalName)")
               for line in lines)


def test_debug_print_model_quiet(capsys):
    debug_print_model(make_account_model(), print_output=False)
    assert capsys.readouterr().out == ""
