"""
Unit tests for the DB2 schema grammar.
"""
import pytest

from dataforge_db2.database.errors import SchemaCompileError
from dataforge_db2.database.models import Command, CommandName
from dataforge_db2.database.schema import Blueprint, CompileContext, DB2ExpressCGrammar, DB2Grammar


def to_sql(blueprint, connection=None):
    return blueprint.to_sql(connection, DB2Grammar())


class TestTables:

    def test_create_table(self):
        """Identity and not-null columns on a schema-qualified table."""
        blueprint = Blueprint("app.users")
        blueprint.create()
        blueprint.increments("id")
        blueprint.string("name", 50)

        assert to_sql(blueprint) == [
            'create table "app"."users" ('
            "id int generated by default as identity constraint users-id_primary primary key, "
            "name varchar(50) not null)"
        ]

    def test_create_table_with_system_name(self):
        blueprint = Blueprint("app.customers", system_name="CUSTMR")
        blueprint.create()
        blueprint.string("name", 30)

        assert to_sql(blueprint) == [
            'create table "app"."customers" for system name CUSTMR (name varchar(30) not null)'
        ]

    def test_for_system_name(self):
        blueprint = Blueprint("customers")
        blueprint.for_system_name("CUSTMR")
        blueprint.create()
        blueprint.char("code", 3)

        assert to_sql(blueprint) == ['create table "customers" for system name CUSTMR (code char(3) not null)']

    def test_drop(self):
        blueprint = Blueprint("users")
        blueprint.drop()
        assert to_sql(blueprint) == ['drop table "users"']

    def test_drop_if_exists(self):
        blueprint = Blueprint("app.users")
        blueprint.drop_if_exists()
        assert to_sql(blueprint) == ['drop table if exists "app"."users"']

    def test_rename(self):
        blueprint = Blueprint("app.users")
        blueprint.rename("app.members")
        assert to_sql(blueprint) == ['rename table "app"."users" to "app"."members"']

    def test_label(self):
        blueprint = Blueprint("users")
        blueprint.label("User's table")
        assert to_sql(blueprint) == ["label on table \"users\" is 'User''s table'"]

    def test_quotes_in_table_names_are_doubled(self):
        blueprint = Blueprint('odd"name')
        blueprint.drop()
        assert to_sql(blueprint) == ['drop table "odd""name"']


class TestColumns:

    def test_add_columns_one_statement_each(self):
        """Adding columns without create emits one alter table per column."""
        blueprint = Blueprint("users")
        blueprint.string("email", 100, nullable=True)
        blueprint.integer("age")

        assert to_sql(blueprint) == [
            'alter table "users" add email varchar(100)',
            'alter table "users" add age int not null',
        ]


class TestKeysAndIndexes:

    def test_primary_strips_schema(self):
        blueprint = Blueprint("app.users")
        blueprint.primary("id")
        assert to_sql(blueprint) == ['alter table "app"."users" add constraint users_id_primary primary key (id)']

    def test_primary_on_unqualified_table(self):
        blueprint = Blueprint("users")
        blueprint.primary(["id", "rev"])
        assert to_sql(blueprint) == ['alter table "users" add constraint users_id_rev_primary primary key (id, rev)']

    def test_unique_strips_schema(self):
        blueprint = Blueprint("app.users")
        blueprint.unique("email")
        assert to_sql(blueprint) == ['alter table "app"."users" add constraint users_email_unique unique(email)']

    def test_foreign_with_actions(self):
        blueprint = Blueprint("app.posts")
        blueprint.foreign("user_id", "id", "app.users", on_delete="cascade", on_update="restrict")

        assert to_sql(blueprint) == [
            'alter table "app"."posts" add constraint posts_user_id_foreign '
            'foreign key (user_id) references "app"."users" (id) on delete cascade on update restrict'
        ]

    def test_foreign_without_actions(self):
        blueprint = Blueprint("posts")
        blueprint.foreign("user_id", "id", "users")

        assert to_sql(blueprint) == [
            'alter table "posts" add constraint posts_user_id_foreign '
            'foreign key (user_id) references "users" (id)'
        ]

    def test_index_keeps_schema_prefix(self):
        """Plain index names are not stripped, unlike constraint names."""
        blueprint = Blueprint("app.users")
        blueprint.index("email")
        assert to_sql(blueprint) == ['create index app_users_email_index on "app"."users"(email)']

    def test_index_with_system_name(self):
        blueprint = Blueprint("app.users")
        blueprint.index(["last_name", "first_name"], system_name="USRNAM")
        assert to_sql(blueprint) == [
            'create index app_users_last_name_first_name_index for system name USRNAM '
            'on "app"."users"(last_name, first_name)'
        ]

    def test_drop_primary(self):
        blueprint = Blueprint("app.users")
        blueprint.drop_primary()
        assert to_sql(blueprint) == ['alter table "app"."users" drop primary key']

    def test_drop_unique_and_drop_index_share_syntax(self):
        blueprint = Blueprint("app.users")
        blueprint.drop_unique(["email"])
        blueprint.drop_index("app_users_name_index")

        assert to_sql(blueprint) == [
            'alter table "app"."users" drop index users_email_unique',
            'alter table "app"."users" drop index users_name_index',
        ]

    def test_drop_foreign(self):
        blueprint = Blueprint("app.posts")
        blueprint.drop_foreign("app_posts_user_id_foreign")
        assert to_sql(blueprint) == ['alter table "app"."posts" drop foreign key posts_user_id_foreign']


class TestSchemaPrefixStripping:

    @pytest.fixture
    def qualified(self):
        return Blueprint("app.users")

    def test_strips_underscore_prefix(self, grammar, qualified):
        assert grammar.strip_schema_prefix(qualified, "app_users_email_unique") == "users_email_unique"

    def test_strips_dotted_prefix(self, grammar, qualified):
        assert grammar.strip_schema_prefix(qualified, "app.users_email_unique") == "users_email_unique"

    def test_strips_only_once(self, grammar, qualified):
        assert grammar.strip_schema_prefix(qualified, "app_app_users_unique") == "app_users_unique"

    def test_other_names_unchanged(self, grammar, qualified):
        assert grammar.strip_schema_prefix(qualified, "users_email_unique") == "users_email_unique"

    def test_unqualified_table_leaves_name(self, grammar):
        assert grammar.strip_schema_prefix(Blueprint("users"), "app_users_email_unique") == "app_users_email_unique"

    def test_match_ignores_case(self, grammar, qualified):
        assert grammar.strip_schema_prefix(qualified, "APP_users_email_unique") == "users_email_unique"

    def test_upper_case_schema(self):
        """Generated names are lower case, upper-case schemas are still stripped."""
        blueprint = Blueprint("APP.USERS")
        blueprint.unique("email")
        blueprint.primary("id")
        blueprint.drop_foreign(["team_id"])

        assert to_sql(blueprint) == [
            'alter table "APP"."USERS" add constraint users_email_unique unique(email)',
            'alter table "APP"."USERS" add constraint users_id_primary primary key (id)',
            'alter table "APP"."USERS" drop foreign key users_team_id_foreign',
        ]

    def test_table_prefix_is_kept(self):
        blueprint = Blueprint("app.users", prefix="tmp_")
        blueprint.unique("email")

        assert to_sql(blueprint) == [
            'alter table "app"."users" add constraint tmp_users_email_unique unique(email)'
        ]


class TestSystemCommands:

    def test_execute_command(self):
        blueprint = Blueprint("users")
        blueprint.execute_command("CHGPF FILE(APP/USERS) SIZE(*NOMAX)")
        assert to_sql(blueprint) == ["CALL QSYS2.QCMDEXC('CHGPF FILE(APP/USERS) SIZE(*NOMAX)')"]

    def test_drop_column_is_bracketed_by_reply_list(self, connection, dbapi):
        """dropColumn runs between reply-list add/change job and remove."""
        dbapi.add_result("qsys2.reply_list_info", ["SEQUENCE_NUMBER"], [(3,)])
        blueprint = Blueprint("users")
        blueprint.drop_column("email")

        assert to_sql(blueprint, connection) == [
            "CALL QSYS2.QCMDEXC('ADDRPYLE SEQNBR(3) MSGID(CPA32B2) RPY(''I'')')",
            "CALL QSYS2.QCMDEXC('CHGJOB INQMSGRPY(*SYSRPYL)')",
            'alter table "users" drop email',
            "CALL QSYS2.QCMDEXC('RMVRPYLE SEQNBR(3)')",
        ]

    def test_drop_several_columns(self, connection, dbapi):
        dbapi.add_result("qsys2.reply_list_info", ["SEQUENCE_NUMBER"], [(1,)])
        blueprint = Blueprint("users")
        blueprint.drop_column("email", "phone")

        assert 'alter table "users" drop email, drop phone' in to_sql(blueprint, connection)

    def test_rename_column(self, connection, dbapi):
        dbapi.add_result("qsys2.reply_list_info", ["SEQUENCE_NUMBER"], [(12,)])
        blueprint = Blueprint("users")
        blueprint.rename_column("email", "mail")

        statements = to_sql(blueprint, connection)
        assert statements[2] == 'alter table "users" rename column email to mail'
        assert statements[-1] == "CALL QSYS2.QCMDEXC('RMVRPYLE SEQNBR(12)')"

    def test_sequence_number_query(self, connection, dbapi):
        """The lowest free number in 1..9999 is queried once."""
        dbapi.add_result("qsys2.reply_list_info", ["SEQUENCE_NUMBER"], [(7,)])
        blueprint = Blueprint("users")
        blueprint.drop_column("email")
        to_sql(blueprint, connection)

        queries = [q for q in dbapi.queries if "reply_list_info" in q]
        assert len(queries) == 1
        assert "between 2 and 9999" in queries[0]
        assert "min(sequence_number)" in queries[0]

    def test_no_free_sequence_number(self, connection, dbapi):
        dbapi.add_result("qsys2.reply_list_info", ["SEQUENCE_NUMBER"], [(None,)])
        blueprint = Blueprint("users")
        blueprint.drop_column("email")

        with pytest.raises(SchemaCompileError, match="No free reply list sequence number"):
            to_sql(blueprint, connection)

    def test_remove_before_add_fails(self, grammar):
        blueprint = Blueprint("users")
        command = Command(CommandName.REMOVE_REPLY_LIST_ENTRY)

        with pytest.raises(SchemaCompileError) as exc_info:
            grammar.compile(blueprint, command, None, CompileContext())

        assert "removeReplyListEntry" in str(exc_info.value)
        assert "users" in str(exc_info.value)

    def test_unknown_command(self, grammar):
        with pytest.raises(SchemaCompileError, match="Unsupported schema command"):
            grammar.compile(Blueprint("users"), Command("truncate"), None, CompileContext())


class TestCatalogQueries:

    def test_default_catalog(self, grammar):
        assert "information_schema.tables" in grammar.compile_table_exists()
        assert "information_schema.columns" in grammar.compile_column_exists()

    def test_express_c_catalog(self):
        grammar = DB2ExpressCGrammar()
        assert "syspublic.all_tables" in grammar.compile_table_exists()
        assert "syspublic.all_ind_columns" in grammar.compile_column_exists()

    def test_enum_capability(self, grammar):
        assert grammar.supports_enum is False
