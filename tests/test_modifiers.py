"""
Unit tests for the column modifier compiler.
"""
import pytest

from dataforge_db2.database.errors import SchemaCompileError
from dataforge_db2.database.models import Expression
from dataforge_db2.database.schema import Blueprint, DB2Grammar
from dataforge_db2.database.schema.modifiers import MODIFIERS, default_value


@pytest.fixture
def blueprint():
    return Blueprint("app.users")


def compiled(blueprint, column):
    return DB2Grammar().get_column(blueprint, column)


class TestNullable:

    def test_not_nullable_by_default(self, blueprint):
        assert compiled(blueprint, blueprint.string("name", 50)) == "name varchar(50) not null"

    def test_nullable(self, blueprint):
        assert compiled(blueprint, blueprint.string("name", 50, nullable=True)) == "name varchar(50)"

    def test_identity_is_implicitly_not_null(self, blueprint):
        """Identity columns never get an explicit not null."""
        sql = compiled(blueprint, blueprint.increments("id"))
        assert "not null" not in sql


class TestDefault:

    def test_string_default(self, blueprint):
        col = blueprint.string("role", 20, default="guest")
        assert compiled(blueprint, col) == "role varchar(20) not null default 'guest'"

    def test_boolean_default(self, blueprint):
        col = blueprint.boolean("active", default=True)
        assert compiled(blueprint, col) == (
            "active smallint constraint boolean_users_active check(active in(0, 1)) not null default '1'"
        )

    def test_expression_default_is_raw(self, blueprint):
        col = blueprint.timestamp("seen_at", nullable=True, default=Expression("current_timestamp"))
        assert compiled(blueprint, col) == "seen_at timestamp default current_timestamp"

    @pytest.mark.parametrize("value,expected", [
        (False, "'0'"),
        (True, "'1'"),
        (5, "'5'"),
        ("O'Brien", "'O''Brien'"),
        (Expression("0"), "0"),
    ])
    def test_default_value_rendering(self, value, expected):
        assert default_value(value) == expected


class TestIdentity:

    def test_increment_declares_primary_key(self, blueprint):
        """The identity constraint is named after the table without its schema."""
        assert compiled(blueprint, blueprint.increments("id")) == (
            "id int generated by default as identity constraint users-id_primary primary key"
        )

    @pytest.mark.parametrize("method,type_sql", [
        ("small_integer", "smallint"),
        ("integer", "int"),
        ("big_integer", "bigint"),
    ])
    def test_all_integer_kinds(self, blueprint, method, type_sql):
        col = getattr(blueprint, method)("id", auto_increment=True)
        assert compiled(blueprint, col).startswith(f"id {type_sql} generated by default as identity")

    def test_start_with_follows_identity(self, blueprint):
        col = blueprint.increments("id", start_with=100)
        assert compiled(blueprint, col) == (
            "id int generated by default as identity constraint users-id_primary primary key"
            " (start with 100)"
        )

    def test_auto_increment_on_non_integer_fails(self, blueprint):
        """Auto-increment on a string column is rejected with table and column names."""
        col = blueprint.string("code", 10, auto_increment=True)
        with pytest.raises(SchemaCompileError) as exc_info:
            compiled(blueprint, col)

        message = str(exc_info.value)
        assert "code" in message
        assert "app.users" in message


class TestPositionAndVisibility:

    def test_for_column_follows_name(self, blueprint):
        """The system column name sits between the column name and its type."""
        col = blueprint.string("customer_name", 50, for_column="CUSNAM")
        assert compiled(blueprint, col) == "customer_name for column CUSNAM varchar(50) not null"

    def test_before(self, blueprint):
        col = blueprint.string("nickname", 20, nullable=True, before="name")
        assert compiled(blueprint, col) == "nickname varchar(20) before name"

    def test_generated_always(self, blueprint):
        col = blueprint.timestamp("changed_at", nullable=True, generated=True)
        assert compiled(blueprint, col) == "changed_at timestamp generated always"

    def test_modifier_order(self, blueprint):
        """generated comes before implicitly hidden."""
        col = blueprint.timestamp(
            "changed_at",
            nullable=True,
            generated="always for each row on update as row change timestamp",
            implicitly_hidden=True,
        )
        assert compiled(blueprint, col) == (
            "changed_at timestamp generated always for each row on update as row change timestamp"
            " implicitly hidden"
        )

    def test_modifier_table_order(self):
        names = [compiler.__name__ for _, compiler in MODIFIERS]
        assert names == [
            "modify_nullable",
            "modify_default",
            "modify_generated",
            "modify_increment",
            "modify_start_with",
            "modify_before",
            "modify_implicitly_hidden",
        ]
