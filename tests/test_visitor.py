import threading

import pytest
from graphql import parse

from visitor_common.config_resolver import resolve_config
from visitor_common.exceptions import ConfigError, UnknownScalarError
from visitor_common.model import DeclarationKind, Name, NameCategory, NameKind
from visitor_common.scalars import ScalarRegistry
from visitor_common.visitor import NamingVisitor

DOCUMENT = parse(
    """
    query GetUser { user { ...UserFields } }
    query GetUserQuery { user { id } }
    mutation AddPost { addPost { id } }
    subscription OnPost { post { id } }
    fragment UserFields on User { id }
    fragment UserFragment on User { id }
    """
)
GET_USER, GET_USER_QUERY, ADD_POST, ON_POST, USER_FIELDS, USER_FRAGMENT = DOCUMENT.definitions

ENUM_VALUE = parse("enum Status { IN_REVIEW }").definitions[0].values[0]


def visitor(**raw):
    return NamingVisitor.from_raw(raw)


def test_end_to_end_types_prefix():
    v = visitor(typesPrefix="I", namingConvention="pascalCase")
    assert v.convert_name("post") == "IPost"


def test_types_suffix_and_opt_outs():
    v = visitor(typesPrefix="I", typesSuffix="Type")
    assert v.convert_name("post") == "IPostType"
    assert v.convert_name("post", use_types_prefix=False) == "PostType"
    assert v.convert_name("post", use_types_suffix=False) == "IPost"
    assert v.convert_name("post", use_types_prefix=False, use_types_suffix=False) == "Post"


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"typesPrefix": "I", "typesSuffix": "T"},
        {"namingConvention": "camelCase", "typesPrefix": "Z"},
        {"namingConvention": "keep", "typesSuffix": "_x"},
    ],
)
def test_opt_out_equals_bare_conversion(raw):
    v = NamingVisitor.from_raw(raw)
    bare = v.converter.convert(NameCategory.TYPE_NAMES, "get_user")
    assert v.convert_name("get_user", use_types_prefix=False, use_types_suffix=False) == bare


def test_convert_name_is_deterministic():
    v = visitor(typesPrefix="I", namingConvention={"typeNames": "camelCase"})
    assert v.convert_name(GET_USER) == v.convert_name(GET_USER) == "IgetUser"


def test_keep_convention():
    v = visitor(namingConvention="keep", typesPrefix="I")
    assert v.convert_name("user_id", use_types_prefix=False) == "user_id"
    assert v.convert_name("user_id") == "Iuser_id"


def test_inner_prefix_and_suffix_are_converted():
    v = visitor(typesPrefix="I")
    assert v.convert_name("User", prefix="my", suffix="_fields") == "IMyUser_Fields"
    assert v.convert_name("User", suffix="_fields", transform_underscore=True) == "IUserFields"


def test_operation_suffix_dedupe():
    assert visitor(dedupeOperationSuffix=True).operation_suffix_for("GetUserQuery", "Query") == ""
    assert visitor().operation_suffix_for("GetUserQuery", "Query") == "Query"
    assert visitor(dedupeOperationSuffix=True).operation_suffix_for(GET_USER_QUERY, "query") == ""


def test_operation_suffix_full_suffix_compare():
    v = visitor(dedupeOperationSuffix=True)
    assert v.operation_suffix_for("GetQuery", "Queries") == "Queries"
    assert v.operation_suffix_for("GetUser", "Query") == "Query"


def test_operation_suffix_omitted():
    v = visitor(omitOperationSuffix=True, dedupeOperationSuffix=True)
    assert v.operation_suffix_for("GetUser", "Query") == ""
    assert v.fragment_suffix_for(USER_FIELDS) == ""


def test_operation_suffix_for_anonymous_operation():
    anonymous = parse("{ user { id } }").definitions[0]
    assert visitor(dedupeOperationSuffix=True).operation_suffix_for(anonymous, "Query") == "Query"
    assert visitor().operation_name_for(anonymous) == "Query"


def test_fragment_name_excludes_types_prefix():
    v = visitor(typesPrefix="I")
    assert v.fragment_name_for(USER_FIELDS) == "UserFieldsFragment"
    assert v.fragment_name_for("userFields") == "UserFieldsFragment"


def test_fragment_name_dedupe():
    assert visitor(dedupeOperationSuffix=True).fragment_name_for(USER_FRAGMENT) == "UserFragment"
    assert visitor().fragment_name_for(USER_FRAGMENT) == "UserFragmentFragment"


def test_fragment_variable_suffix_collapse():
    assert visitor(dedupeOperationSuffix=True).fragment_variable_name_for(USER_FRAGMENT) == "UserFragmentDoc"
    assert visitor().fragment_variable_name_for(USER_FRAGMENT) == "UserFragmentFragmentDoc"


def test_fragment_variable_suffix_not_collapsed_without_leading_fragment():
    v = visitor(dedupeOperationSuffix=True, fragmentVariableSuffix="Document")
    assert v.fragment_variable_name_for(USER_FRAGMENT) == "UserFragmentDocument"
    v = visitor(dedupeOperationSuffix=True)
    assert v.fragment_variable_name_for(USER_FIELDS) == "UserFieldsFragmentDoc"


def test_fragment_variable_prefix_and_omission():
    v = visitor(typesPrefix="I", fragmentVariablePrefix="the")
    assert v.fragment_variable_name_for(USER_FIELDS) == "TheUserFieldsFragmentDoc"
    assert visitor(omitOperationSuffix=True).fragment_variable_name_for(USER_FIELDS) == "UserFields"


def test_operation_names():
    v = visitor(typesPrefix="I", dedupeOperationSuffix=True)
    assert v.operation_name_for(GET_USER) == "IGetUserQuery"
    assert v.operation_name_for(GET_USER_QUERY) == "IGetUserQuery"
    assert v.operation_name_for(ADD_POST) == "IAddPostMutation"
    assert v.operation_name_for(ON_POST) == "IOnPostSubscription"


def test_name_for_each_kind():
    v = visitor(typesPrefix="I", namingConvention={"enumValues": "constantCase"})
    assert v.name_for("post", NameKind.TYPE) == Name("IPost", NameKind.TYPE)
    assert v.name_for(ENUM_VALUE, NameKind.ENUM_VALUE) == Name("IN_REVIEW", NameKind.ENUM_VALUE)
    assert v.name_for(USER_FIELDS, NameKind.FRAGMENT).value == "UserFieldsFragment"
    assert v.name_for(USER_FIELDS, NameKind.FRAGMENT_VARIABLE).value == "UserFieldsFragmentDoc"
    assert str(v.name_for(ADD_POST, NameKind.OPERATION)) == "IAddPostMutation"


def test_enum_values_use_enum_category():
    assert visitor().convert_name(ENUM_VALUE) == "In_Review"
    v = visitor(namingConvention={"typeNames": "keep", "enumValues": "camelCase", "transformUnderscore": True})
    assert v.convert_name(ENUM_VALUE) == "inReview"
    assert v.convert_name("IN_REVIEW") == "IN_REVIEW"
    assert v.convert_name("IN_REVIEW", category=NameCategory.ENUM_VALUES) == "inReview"


def test_name_for_operation_requires_operation_node():
    with pytest.raises(ConfigError, match="operation definitions"):
        visitor().name_for(USER_FIELDS, NameKind.OPERATION)


def test_scalars_exposed():
    v = visitor(scalars={"DateTime": "Date"}, strictScalars=True)
    assert v.scalars["DateTime"] == "Date"
    assert v.scalar_type_for("DateTime") == "Date"
    with pytest.raises(UnknownScalarError):
        v.scalar_type_for("JSON")


def test_visitors_share_configuration_and_registry():
    cfg = resolve_config({"typesPrefix": "I", "scalars": {"DateTime": "Date"}})
    registry = ScalarRegistry.from_config(cfg)
    types_plugin = NamingVisitor(cfg, registry)
    operations_plugin = NamingVisitor(cfg, registry)

    assert types_plugin.config is operations_plugin.config
    assert types_plugin.scalar_registry is operations_plugin.scalar_registry
    assert types_plugin.convert_name(GET_USER) == operations_plugin.convert_name(GET_USER)


def test_concurrent_use_is_consistent():
    v = visitor(typesPrefix="I", dedupeOperationSuffix=True)
    results = []

    def work():
        results.append(tuple(v.fragment_variable_name_for(USER_FRAGMENT) for _ in range(200)))

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert {r for res in results for r in res} == {"UserFragmentDoc"}


def test_visitor_kind_context_from_ancestors():
    v = visitor()
    assert v.visitor_kind_context_from_ancestors(None) == []
    assert v.visitor_kind_context_from_ancestors([DOCUMENT, DOCUMENT.definitions, GET_USER]) == [
        "document",
        "operation_definition",
    ]


def test_punctuation_default():
    assert visitor().punctuation(DeclarationKind.TYPE) == ""
