import pytest

from db_analyzer.codegen.emitter import (
    AttributeStyle,
    GeneratedField,
    _quote,
    doc_comment,
    emit_field,
    emit_struct,
    header_attributes,
)
from db_analyzer.codegen.mapping import TypeMapping, default_type_mapping
from db_analyzer.shared.descriptors import ColumnDescriptor, TableDescriptor


@pytest.fixture
def mapping():
    return default_type_mapping()


class TestQuote:
    def test_quote_basic_string(self):
        assert _quote("users") == '"users"'

    def test_quote_string_with_quotes(self):
        assert _quote('say "hi"') == '"say \\"hi\\""'

    def test_quote_keeps_non_ascii(self):
        assert _quote("café") == '"café"'


class TestAttributeStyle:
    def test_serde_imports(self):
        assert AttributeStyle.SERDE.imports == (
            "use serde::{Deserialize, Serialize};",
            "use chrono;",
            "use uuid;",
            "use serde_json;",
        )

    def test_sqlx_imports(self):
        assert AttributeStyle.SQLX.imports[0] == "use sqlx;"
        assert AttributeStyle.SQLX.imports[1:] == AttributeStyle.SERDE.imports


class TestHeaderAttributes:
    def test_serde(self):
        assert header_attributes("user_profiles", AttributeStyle.SERDE) == (
            "#[derive(Debug, Serialize, Deserialize)]",
            '#[serde(rename_all = "camelCase")]',
            '#[serde(rename = "user_profiles")]',
        )

    def test_sqlx(self):
        assert header_attributes("user_profiles", AttributeStyle.SQLX) == (
            "#[derive(Debug, Serialize, Deserialize, sqlx::FromRow)]",
            '#[sqlx(rename_all = "camelCase")]',
            '#[sqlx(table = "user_profiles")]',
        )


class TestDocComment:
    def test_not_null_without_default(self):
        column = ColumnDescriptor("username", "varchar", False)
        assert doc_comment(column) == "/// username - varchar"

    def test_nullable(self):
        column = ColumnDescriptor("bio", "text", True)
        assert doc_comment(column) == "/// bio - text, nullable"

    def test_default(self):
        column = ColumnDescriptor("id", "uuid", False, "uuid_generate_v4()")
        assert doc_comment(column) == "/// id - uuid, default: uuid_generate_v4()"

    def test_nullable_with_default(self):
        column = ColumnDescriptor("score", "int4", True, "0")
        assert doc_comment(column) == "/// score - int4, nullable, default: 0"

    def test_empty_default_omitted(self):
        column = ColumnDescriptor("note", "text", False, "")
        assert doc_comment(column) == "/// note - text"

    def test_multiline_default_kept_on_one_line(self):
        column = ColumnDescriptor("motd", "text", False, "E'a\nb'::text")
        assert doc_comment(column) == "/// motd - text, default: E'a b'::text"

    def test_line_breaks_in_name_replaced(self):
        column = ColumnDescriptor("odd\r\nname", "text", True, "x\ry")
        comment = doc_comment(column)
        assert "\n" not in comment
        assert "\r" not in comment
        assert comment == "/// odd name - text, nullable, default: x y"


class TestEmitField:
    def test_plain_column(self, mapping):
        field = emit_field(ColumnDescriptor("username", "varchar", False), mapping)
        assert field == GeneratedField(
            original_name="username",
            normalized_name="username",
            identifier="username",
            target_type="String",
            doc_comment="/// username - varchar",
            rename_attribute=None,
        )

    def test_camel_case_column_gets_rename(self, mapping):
        field = emit_field(ColumnDescriptor("createdAt", "timestamptz", True), mapping)
        assert field.normalized_name == "created_at"
        assert field.target_type == "Option<chrono::DateTime<chrono::Utc>>"
        assert field.rename_attribute == '#[serde(rename = "createdAt")]'

    def test_sqlx_rename(self, mapping):
        field = emit_field(
            ColumnDescriptor("createdAt", "timestamp", False), mapping, AttributeStyle.SQLX
        )
        assert field.rename_attribute == '#[sqlx(rename = "createdAt")]'

    def test_uppercase_column_without_rename(self, mapping):
        # "USERID" lowercases to the normalized name
        field = emit_field(ColumnDescriptor("USERID", "int4", False), mapping)
        assert field.normalized_name == "userid"
        assert field.rename_attribute is None

    def test_punctuation_column_gets_rename(self, mapping):
        field = emit_field(ColumnDescriptor("user.id", "int4", False), mapping)
        assert field.normalized_name == "user_id"
        assert field.rename_attribute == '#[serde(rename = "user.id")]'

    def test_keyword_column_uses_raw_identifier(self, mapping):
        field = emit_field(ColumnDescriptor("type", "varchar", False), mapping)
        assert field.normalized_name == "type"
        assert field.identifier == "r#type"
        assert field.rename_attribute is None

    @pytest.mark.parametrize(
        "name",
        ["id", "userId", "User_Id", "USERID", "user-id", "user123Id", "ABCWord", "e-mail"],
    )
    def test_rename_iff_normalized_differs_from_lowercase(self, mapping, name):
        field = emit_field(ColumnDescriptor(name, "text", False), mapping)
        assert (field.rename_attribute is not None) == (
            field.normalized_name != name.lower()
        )


class TestEmitStruct:
    def test_users_serde(self, mapping):
        table = TableDescriptor(
            "users",
            (
                ColumnDescriptor("id", "uuid", False),
                ColumnDescriptor("username", "varchar", False),
            ),
        )

        struct = emit_struct(table, mapping)

        assert struct.struct_name == "Users"
        assert struct.table_name == "users"
        assert [(f.identifier, f.target_type) for f in struct.fields] == [
            ("id", "uuid::Uuid"),
            ("username", "String"),
        ]
        assert all(f.rename_attribute is None for f in struct.fields)
        assert struct.header_attributes[0] == "#[derive(Debug, Serialize, Deserialize)]"

    def test_posts_sqlx_binds_original_table_name(self, mapping):
        table = TableDescriptor("posts", (ColumnDescriptor("user_id", "uuid", False),))

        struct = emit_struct(table, mapping, AttributeStyle.SQLX)

        assert '#[sqlx(table = "posts")]' in struct.header_attributes
        assert struct.fields[0].identifier == "user_id"
        assert struct.fields[0].rename_attribute is None

    def test_binding_uses_original_not_struct_name(self, mapping):
        table = TableDescriptor("user_profiles", ())
        struct = emit_struct(table, mapping)
        assert struct.struct_name == "UserProfiles"
        assert struct.header_attributes[2] == '#[serde(rename = "user_profiles")]'

    def test_special_case_struct_name(self):
        mapping = TypeMapping(type_map={}, special_cases={"people": "Person"})
        struct = emit_struct(TableDescriptor("People", ()), mapping)
        assert struct.struct_name == "Person"

    def test_empty_table(self, mapping):
        struct = emit_struct(TableDescriptor("empty_table", ()), mapping)
        assert struct.struct_name == "EmptyTable"
        assert struct.fields == ()

    def test_field_order_preserved(self, mapping):
        names = ["zeta", "alpha", "midPoint", "beta", "Alpha2"]
        table = TableDescriptor(
            "ordered", tuple(ColumnDescriptor(n, "text", False) for n in names)
        )

        struct = emit_struct(table, mapping)
        assert [f.original_name for f in struct.fields] == names
