"""QueryBuilder 단위 테스트."""

import pytest

from admin_auth.shared.database.query import Eq, In, Never, Or, QueryBuilder


class TestConditions:
    def test_eq_sql(self):
        params: list = []

        assert Eq("u.id", 5).to_sql(params) == "u.id = $1"
        assert params == [5]

    def test_in_sql_numbers_placeholders_after_existing(self):
        params: list = ["existing"]

        assert In("u.dept_id", (1, 2)).to_sql(params) == "u.dept_id IN ($2, $3)"
        assert params == ["existing", 1, 2]

    def test_empty_in_matches_nothing(self):
        params: list = []

        assert In("u.dept_id", ()).to_sql(params) == "1 = 0"
        assert params == []
        assert In("u.dept_id", ()).matches({"dept_id": 1}) is False

    def test_or_sql(self):
        params: list = []
        condition = Or((Eq("u.id", 5), Eq("u.dept_id", 7)))

        assert condition.to_sql(params) == "(u.id = $1 OR u.dept_id = $2)"
        assert params == [5, 7]

    def test_empty_or_matches_nothing(self):
        assert Or(()).to_sql([]) == "1 = 0"
        assert Or(()).matches({"id": 1}) is False

    def test_never(self):
        assert Never().to_sql([]) == "1 = 0"
        assert Never().matches({}) is False

    def test_matches_falls_back_to_unqualified_column(self):
        assert Eq("u.dept_id", 7).matches({"dept_id": 7}) is True
        assert Eq("u.dept_id", 7).matches({"u.dept_id": 7}) is True
        assert Eq("u.dept_id", 7).matches({"dept_id": 3}) is False

    @pytest.mark.parametrize("column", ["id; DROP TABLE x", "u.id--", "1col", "a.b.c"])
    def test_invalid_column_rejected(self, column):
        with pytest.raises(ValueError):
            Eq(column, 1)


class TestQueryBuilder:
    def test_build_without_conditions(self):
        sql, params = QueryBuilder("sys_user u", "u.id").build()

        assert sql == "SELECT u.id FROM sys_user u"
        assert params == []

    def test_where_is_immutable(self):
        base = QueryBuilder("sys_user u")
        filtered = base.where(Eq("u.id", 1))

        assert base.conditions == ()
        assert len(filtered.conditions) == 1

    def test_build_with_order_and_pagination(self):
        query = (
            QueryBuilder("sys_user u", "u.id")
            .where(Eq("u.is_deleted", 0))
            .where(In("u.dept_id", (2, 3)))
            .order_by("u.id")
            .paginate(10, 20)
        )

        sql, params = query.build()

        assert sql == (
            "SELECT u.id FROM sys_user u WHERE u.is_deleted = $1 AND u.dept_id IN ($2, $3) "
            "ORDER BY u.id LIMIT $4 OFFSET $5"
        )
        assert params == [0, 2, 3, 10, 20]

    def test_zero_offset_omitted(self):
        sql, params = QueryBuilder("t").paginate(5).build()

        assert sql == "SELECT * FROM t LIMIT $1"
        assert params == [5]

    def test_build_count_ignores_paging(self):
        query = QueryBuilder("sys_user u").where(Eq("u.id", 1)).order_by("u.id").paginate(10)

        sql, params = query.build_count()

        assert sql == "SELECT COUNT(*) AS count FROM sys_user u WHERE u.id = $1"
        assert params == [1]

    def test_filter_rows(self):
        rows = [{"id": 1, "dept_id": 7}, {"id": 2, "dept_id": 3}]
        query = QueryBuilder("t").where(Eq("dept_id", 7))

        assert query.filter_rows(rows) == [{"id": 1, "dept_id": 7}]
