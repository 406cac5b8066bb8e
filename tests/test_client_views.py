"""Client-side list filtering, derived values and display formatting."""

from __future__ import annotations

from datetime import date

import pytest

from ems.client.filters import filter_records, unique_values
from ems.client.formatting import format_currency, format_date
from ems.client.views import (
    benefit_summary,
    department_distribution,
    department_headcounts,
    leave_balances,
    leave_duration,
    leave_stats,
    project_progress,
    project_status_counts,
    supervisor_choices,
    time_summary,
    total_premium,
)

EMPLOYEES = [
    {"id": 1, "first_name": "John", "last_name": "Doe", "email": "john.doe@company.com",
     "department_id": 1, "department_name": "Engineering"},
    {"id": 2, "first_name": "Jane", "last_name": "Smith", "email": "jane.smith@company.com",
     "department_id": 2, "department_name": "Human Resources"},
    {"id": 3, "first_name": "Alex", "last_name": None, "email": "alex@company.com",
     "department_id": 1, "department_name": "Engineering"},
    {"id": 4, "first_name": "Sam", "last_name": "Stone", "email": None,
     "department_id": None, "department_name": None},
]

LEAVES = [
    {"employee_id": 1, "leave_type": "Vacation", "status": "Approved",
     "start_date": "2024-01-01", "end_date": "2024-01-05"},
    {"employee_id": 1, "leave_type": "Sick Leave", "status": "Pending",
     "start_date": "2024-02-10", "end_date": "2024-02-10"},
    {"employee_id": 2, "leave_type": "Vacation", "status": "Approved",
     "start_date": "2024-03-01", "end_date": "2024-03-02"},
    {"employee_id": 2, "leave_type": "Personal Leave", "status": "Rejected",
     "start_date": "2024-04-01", "end_date": "2024-04-03"},
]


# ═════════════════════════════════════════════════════════════════════
# FILTERS
# ═════════════════════════════════════════════════════════════════════


class TestFilterRecords:

    def test_no_constraints_returns_everything_in_order(self):
        assert filter_records(EMPLOYEES, {}) == EMPLOYEES
        assert filter_records(EMPLOYEES, {"department_id": None, "email": ""}) == EMPLOYEES

    def test_equality_compares_as_strings(self):
        result = filter_records(EMPLOYEES, {"department_id": "1"})
        assert [e["id"] for e in result] == [1, 3]

    def test_search_any_field_case_insensitive(self):
        result = filter_records(
            EMPLOYEES, search="SMITH", search_fields=("first_name", "last_name", "email"),
        )
        assert [e["id"] for e in result] == [2]

    def test_search_skips_null_fields(self):
        result = filter_records(EMPLOYEES, search="stone", search_fields=("email", "last_name"))
        assert [e["id"] for e in result] == [4]

    def test_constraints_are_anded(self):
        result = filter_records(
            EMPLOYEES, {"department_id": 1}, search="john", search_fields=("first_name",),
        )
        assert [e["id"] for e in result] == [1]

    def test_ilike_and_in(self):
        assert [e["id"] for e in filter_records(EMPLOYEES, {"email__ilike": "COMPANY"})] == [1, 2, 3]
        assert [e["id"] for e in filter_records(EMPLOYEES, {"id__in": ["2", 4]})] == [2, 4]

    def test_date_overlap(self):
        # Leaves touching March 2024
        result = filter_records(LEAVES, {
            "end_date__from": "2024-03-01",
            "start_date__to": "2024-03-31",
        })
        assert [leave["employee_id"] for leave in result] == [2]
        assert result[0]["leave_type"] == "Vacation"

    def test_date_bounds_accept_date_objects(self):
        result = filter_records(LEAVES, {"start_date__from": date(2024, 2, 10)})
        assert len(result) == 3

    def test_numeric_bounds(self):
        rows = [{"hours": 2}, {"hours": 10}, {"hours": 8.5}]
        assert filter_records(rows, {"hours__from": "8", "hours__to": 9}) == [{"hours": 8.5}]

    def test_unique_values(self):
        assert unique_values(EMPLOYEES, "department_name") == ["Engineering", "Human Resources"]
        assert unique_values(LEAVES, "leave_type") == ["Vacation", "Sick Leave", "Personal Leave"]


# ═════════════════════════════════════════════════════════════════════
# LEAVE
# ═════════════════════════════════════════════════════════════════════


class TestLeave:

    def test_duration_counts_both_ends(self):
        assert leave_duration("2024-01-01", "2024-01-05") == 5
        assert leave_duration(date(2024, 2, 10), date(2024, 2, 10)) == 1
        assert leave_duration("2024-02-28", "2024-03-01") == 3

    def test_duration_missing_dates(self):
        assert leave_duration(None, "2024-01-05") == 0

    def test_stats(self):
        assert leave_stats(LEAVES) == {
            "approved": 2,
            "pending": 1,
            "rejected": 1,
            "total": 4,
            "total_days": 5 + 1 + 2 + 3,
        }

    def test_stats_empty(self):
        assert leave_stats([]) == {
            "approved": 0, "pending": 0, "rejected": 0, "total": 0, "total_days": 0,
        }

    def test_balances_count_only_approved(self):
        balances = leave_balances(LEAVES)
        assert balances["Vacation"] == {"allowance": 20, "used": 7, "remaining": 13}
        assert balances["Sick Leave"] == {"allowance": 10, "used": 0, "remaining": 10}
        assert balances["Personal Leave"] == {"allowance": 5, "used": 0, "remaining": 5}


# ═════════════════════════════════════════════════════════════════════
# PROJECTS
# ═════════════════════════════════════════════════════════════════════


class TestProjectProgress:

    TODAY = date(2024, 7, 1)

    def test_completed_is_100(self):
        project = {"status": "Completed", "start_date": "2030-01-01", "end_date": "2030-12-31"}
        assert project_progress(project, self.TODAY) == 100

    def test_future_start_is_0(self):
        project = {"status": "Planning", "start_date": "2025-01-01", "end_date": "2025-06-30"}
        assert project_progress(project, self.TODAY) == 0

    def test_overdue_is_90(self):
        project = {"status": "In Progress", "start_date": "2024-01-01", "end_date": "2024-03-31"}
        assert project_progress(project, self.TODAY) == 90

    def test_elapsed_fraction(self):
        project = {"status": "In Progress", "start_date": "2024-06-01", "end_date": "2024-07-31"}
        # 30 of 60 days
        assert project_progress(project, self.TODAY) == 50

    def test_rounds_half_up(self):
        project = {"status": "In Progress", "start_date": "2024-06-30", "end_date": "2024-07-08"}
        # 1 of 8 days = 12.5
        assert project_progress(project, self.TODAY) == 13
        project = {"status": "In Progress", "start_date": "2024-05-02", "end_date": "2024-09-01"}
        # 60 of 122 days = 49.18
        assert project_progress(project, self.TODAY) == 49

    def test_same_day_project(self):
        project = {"status": "In Progress", "start_date": "2024-07-01", "end_date": "2024-07-01"}
        assert project_progress(project, self.TODAY) == 100

    def test_missing_dates_is_0(self):
        assert project_progress({"status": "In Progress"}, self.TODAY) == 0

    def test_status_counts_seeded(self):
        assert project_status_counts([]) == {"Completed": 0, "In Progress": 0, "Planning": 0}
        counts = project_status_counts([
            {"status": "Planning"}, {"status": "Planning"}, {"status": "Completed"},
        ])
        assert counts == {"Completed": 1, "In Progress": 0, "Planning": 2}


# ═════════════════════════════════════════════════════════════════════
# BENEFITS / TIME / EMPLOYEES
# ═════════════════════════════════════════════════════════════════════


class TestAggregates:

    BENEFITS = [
        {"benefit_type": "Health Insurance", "premium": 450.0},
        {"benefit_type": "Dental", "premium": "35.50"},
        {"benefit_type": "Health Insurance", "premium": 220},
        {"benefit_type": "Dental", "premium": None},
    ]

    def test_benefit_summary(self):
        summary = benefit_summary(self.BENEFITS)
        assert list(summary) == ["Health Insurance", "Dental"]
        assert summary["Health Insurance"] == {"count": 2, "total_premium": 670.0}
        assert summary["Dental"] == {"count": 2, "total_premium": 35.5}

    def test_total_premium(self):
        assert total_premium(self.BENEFITS) == pytest.approx(705.5)
        assert total_premium([]) == 0

    def test_time_summary(self):
        entries = [
            {"project_id": 1, "project_name": "Portal", "hours_worked": 6.5},
            {"project_id": 2, "project_name": "Archive", "hours_worked": 2},
            {"project_id": 1, "project_name": "Portal", "hours_worked": "1.5"},
        ]
        summary = time_summary(entries)
        assert summary["total_hours"] == 10.0
        assert summary["entry_count"] == 3
        assert summary["average_hours"] == 3.3
        assert summary["by_project"] == {
            1: {"project_name": "Portal", "hours": 8.0},
            2: {"project_name": "Archive", "hours": 2.0},
        }

    def test_time_summary_empty(self):
        summary = time_summary([])
        assert summary["average_hours"] == 0
        assert summary["by_project"] == {}

    def test_department_distribution(self):
        assert department_distribution(EMPLOYEES) == {"Engineering": 2, "Human Resources": 1}

    def test_department_headcounts(self):
        assert department_headcounts(EMPLOYEES) == {1: 2, 2: 1}

    def test_supervisor_choices_exclude_self(self):
        assert [e["id"] for e in supervisor_choices(EMPLOYEES, 3)] == [1, 2, 4]
        assert [e["id"] for e in supervisor_choices(EMPLOYEES)] == [1, 2, 3, 4]


# ═════════════════════════════════════════════════════════════════════
# FORMATTING
# ═════════════════════════════════════════════════════════════════════


class TestFormatting:

    @pytest.mark.parametrize("amount,expected", [
        (1234.5, "$1,234.50"),
        (0, "$0.00"),
        (1000000, "$1,000,000.00"),
        ("72000", "$72,000.00"),
        (-5, "-$5.00"),
        (None, "N/A"),
        ("", "N/A"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_currency_code(self):
        assert format_currency(2500, "USD") == "$2,500.00"
        assert format_currency(-2500, "EUR") == "-EUR 2,500.00"

    def test_format_date_long(self):
        assert format_date("2024-01-05") == "January 5, 2024"
        assert format_date(date(2023, 12, 25)) == "December 25, 2023"

    def test_format_date_medium(self):
        assert format_date("2024-01-05T00:00:00.000Z", "medium") == "Jan 5, 2024"

    @pytest.mark.parametrize("value", [None, "", "not a date"])
    def test_format_date_missing(self, value):
        assert format_date(value) == "N/A"
