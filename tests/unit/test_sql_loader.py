"""SQLLoader utility unit tests."""

from pathlib import Path

import pytest

from admin_auth.shared.utils.sql_loader import SQLLoader, create_sql_loader


def _make_domain(tmp_path: Path) -> Path:
    queries = tmp_path / "test_domain" / "sql" / "queries"
    queries.mkdir(parents=True)
    return queries


class TestSQLLoader:
    """SQLLoader 단위 테스트"""

    def test_load_query(self, tmp_path: Path):
        """queries/ 하위 SQL 파일 로드"""
        queries = _make_domain(tmp_path)
        (queries / "get_one.sql").write_text("SELECT 1\n")

        loader = SQLLoader("test_domain", base_path=tmp_path)

        assert loader.load_query("get_one") == "SELECT 1"

    def test_load_file_not_found(self, tmp_path: Path):
        """SQL 파일 없음 - FileNotFoundError 발생"""
        _make_domain(tmp_path)
        loader = SQLLoader("test_domain", base_path=tmp_path)

        with pytest.raises(FileNotFoundError) as exc_info:
            loader.load_query("nonexistent")

        assert "SQL file not found" in str(exc_info.value)

    def test_force_reload(self, tmp_path: Path):
        """force_reload는 캐시를 무시한다"""
        queries = _make_domain(tmp_path)
        sql_file = queries / "q.sql"
        sql_file.write_text("SELECT 1")
        loader = SQLLoader("test_domain", base_path=tmp_path)
        loader.load_query("q")

        sql_file.write_text("SELECT 2")

        assert loader.load_query("q", force_reload=True) == "SELECT 2"

    def test_clear_cache(self, tmp_path: Path):
        queries = _make_domain(tmp_path)
        (queries / "q.sql").write_text("SELECT 1")
        loader = SQLLoader("test_domain", base_path=tmp_path)
        loader.load_query("q")

        loader.clear_cache()

        assert loader._cache == {}


class TestDomainQueries:
    """패키지에 포함된 도메인 SQL 파일"""

    def test_loader_is_cached_per_domain(self):
        assert create_sql_loader("users") is create_sql_loader("users")

    @pytest.mark.parametrize(
        ("domain", "name"),
        [
            ("users", "get_user_by_username"),
            ("users", "get_user_auth_row"),
            ("users", "get_user_role_scopes"),
            ("depts", "get_dept_and_sub_ids"),
        ],
    )
    def test_domain_query_exists(self, domain, name):
        query = create_sql_loader(domain).load_query(name)

        assert "$1" in query
