"""Tests for specmodel.naming."""

from __future__ import annotations

import pytest

from specmodel.naming import (
    RESERVED_WORDS,
    escape_reserved_word,
    friendly_path,
    normalize_parameter_name,
    path_type_name,
    snake_case,
    type_name,
)


# ---------------------------------------------------------------------------
# snake_case
# ---------------------------------------------------------------------------


class TestSnakeCase:
    """Test camelCase / PascalCase conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("camelCase", "camel_case"),
            ("PascalCase", "pascal_case"),
            ("XMLParser", "xml_parser"),
            ("userID", "user_id"),
            ("ID", "id"),
            ("v2Beta", "v2_beta"),
            ("already_snake", "already_snake"),
            ("", ""),
        ],
    )
    def test_conversion(self, value: str, expected: str) -> None:
        assert snake_case(value) == expected

    def test_leaves_dashes(self) -> None:
        assert snake_case("Mixed-Case") == "mixed-_case"

    def test_word_start_after_underscore_gets_underscore(self) -> None:
        assert snake_case("foo_Bar") == "foo__bar"

    def test_capitals_after_underscore_without_word_start(self) -> None:
        assert snake_case("foo_BAR") == "foo_bar"


# ---------------------------------------------------------------------------
# normalize_parameter_name
# ---------------------------------------------------------------------------


class TestNormalizeParameterName:
    """Test the wire name -> internal name pipeline."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("user-id", "userid"),
            ("api-version", "apiversion"),
            ("kebab-case", "kebabcase"),
            ("@id", "at_id"),
            ("@odata.id", "at_odata_id"),
            ("$top", "dollar_top"),
            ("camelCase", "camel_case"),
            ("PascalCase", "pascal_case"),
            ("XMLParser", "xml_parser"),
            ("Mixed-Case_and.dots[brackets]", "mixed_case_and_dots_brackets"),
            ("filters[id][]", "filters_id_"),
            ("filters[trade_id][]", "filters_trade_id_"),
            ("page[size]", "page_size"),
            ("simple", "simple"),
        ],
    )
    def test_normalization(self, name: str, expected: str) -> None:
        assert normalize_parameter_name(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("do", "do_"),
            ("end", "end_"),
            ("fn", "fn_"),
            ("nil", "nil_"),
            ("class", "class_"),
            ("from", "from_"),
            ("__struct__", "__struct___"),
        ],
    )
    def test_reserved_words(self, name: str, expected: str) -> None:
        assert normalize_parameter_name(name) == expected

    def test_reserved_check_runs_after_normalization(self) -> None:
        # "__CALLER__" is reserved, but snake_case lowercases it first
        assert normalize_parameter_name("__CALLER__") == "__caller__"

    def test_extra_reserved(self) -> None:
        assert normalize_parameter_name("client", ["client"]) == "client_"
        assert normalize_parameter_name("client") == "client"


class TestEscapeReservedWord:
    """Test reserved-word escaping."""

    def test_reserved(self) -> None:
        assert escape_reserved_word("when") == "when_"

    def test_not_reserved(self) -> None:
        assert escape_reserved_word("id") == "id"

    def test_python_keywords_included(self) -> None:
        assert {"def", "lambda", "import"} <= RESERVED_WORDS


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------


class TestTypeName:
    """Test PascalCase type names."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("listUsers", "ListUsers"),
            ("list_users", "ListUsers"),
            ("get-user.byId", "GetUserById"),
            ("ListUsers", "ListUsers"),
            ("", ""),
        ],
    )
    def test_conversion(self, value: str, expected: str) -> None:
        assert type_name(value) == expected

    @pytest.mark.parametrize(
        ("method", "path", "expected"),
        [
            ("get", "/users/{id}/posts", "GetUsersIdPosts"),
            ("post", "/bim-files/{file_id}", "PostBimFilesFileId"),
            ("delete", "/", "Delete"),
        ],
    )
    def test_path_type_name(self, method: str, path: str, expected: str) -> None:
        assert path_type_name(method, path) == expected


# ---------------------------------------------------------------------------
# friendly_path
# ---------------------------------------------------------------------------


class TestFriendlyPath:
    """Test path templates turned into function-name fragments."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/users/{id}", "users_id"),
            ("/rest/v1.0/bim_files/{id}", "rest_v1_0_bim_files_id"),
            (
                "/rest/v2.0/companies/{company_id}/projects/{project_id}",
                "rest_v2_0_companies_company_id_projects_project_id",
            ),
            (
                "/users(userPrincipalName='{user_principal_name}')",
                "usersuser_principal_nameuser_principal_name",
            ),
            ("/test(key='value')/endpoint", "testkeyvalue_endpoint"),
            ("/odata/$metadata", "odata_metadata"),
            ("/user-groups/{groupId}", "user_groups_group_id"),
            ("/", ""),
        ],
    )
    def test_conversion(self, path: str, expected: str) -> None:
        assert friendly_path(path) == expected
