"""001 – Initial schema: departments, employees, projects and employee records.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00
"""

from alembic import op

# Revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    # ── 1. department ─────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE department (
            id          SERIAL PRIMARY KEY,
            name        VARCHAR(100),
            location    VARCHAR(100),
            budget      NUMERIC(15, 2),
            description TEXT
        )
    """)

    # ── 2. employee ───────────────────────────────────────────────────────
    # No ON DELETE actions anywhere: the database default (restrict) applies.
    op.execute("""
        CREATE TABLE employee (
            id            SERIAL PRIMARY KEY,
            first_name    VARCHAR(50),
            last_name     VARCHAR(50),
            email         VARCHAR(100),
            phone_no      VARCHAR(20),
            address       TEXT,
            gender        VARCHAR(10),
            date_of_birth DATE,
            hire_date     DATE,
            salary        NUMERIC(12, 2),
            department_id INTEGER REFERENCES department(id),
            supervisor_id INTEGER REFERENCES employee(id)
        )
    """)

    # ── 3. project ────────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE project (
            id          SERIAL PRIMARY KEY,
            name        VARCHAR(100),
            status      VARCHAR(20) NOT NULL DEFAULT 'Planning',
            start_date  DATE,
            end_date    DATE,
            budget      NUMERIC(15, 2),
            description TEXT,
            CONSTRAINT ck_project_status
                CHECK (status IN ('Planning', 'In Progress', 'Completed'))
        )
    """)

    # ── 4. works_on ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE works_on (
            employee_id    INTEGER NOT NULL REFERENCES employee(id),
            project_id     INTEGER NOT NULL REFERENCES project(id),
            role           VARCHAR(50),
            hours_per_week NUMERIC(5, 2),
            PRIMARY KEY (employee_id, project_id)
        )
    """)

    # ── 5. leave_records ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE leave_records (
            id          SERIAL PRIMARY KEY,
            employee_id INTEGER NOT NULL REFERENCES employee(id),
            leave_type  VARCHAR(50),
            start_date  DATE,
            end_date    DATE,
            status      VARCHAR(20) NOT NULL DEFAULT 'Pending',
            reason      TEXT,
            CONSTRAINT ck_leave_records_status
                CHECK (status IN ('Pending', 'Approved', 'Rejected'))
        )
    """)
    op.execute("CREATE INDEX ix_leave_records_employee_id ON leave_records(employee_id)")

    # ── 6. benefits ───────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE benefits (
            id           SERIAL PRIMARY KEY,
            employee_id  INTEGER NOT NULL REFERENCES employee(id),
            benefit_type VARCHAR(50),
            start_date   DATE,
            coverage     VARCHAR(100),
            premium      NUMERIC(10, 2)
        )
    """)
    op.execute("CREATE INDEX ix_benefits_employee_id ON benefits(employee_id)")

    # ── 7. dependent ──────────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE dependent (
            id            SERIAL PRIMARY KEY,
            employee_id   INTEGER NOT NULL REFERENCES employee(id),
            first_name    VARCHAR(50),
            last_name     VARCHAR(50),
            relationship  VARCHAR(30),
            date_of_birth DATE
        )
    """)
    op.execute("CREATE INDEX ix_dependent_employee_id ON dependent(employee_id)")

    # ── 8. time_tracking ──────────────────────────────────────────────────
    op.execute("""
        CREATE TABLE time_tracking (
            id           SERIAL PRIMARY KEY,
            employee_id  INTEGER NOT NULL REFERENCES employee(id),
            project_id   INTEGER REFERENCES project(id),
            date         DATE,
            hours_worked NUMERIC(5, 2)
        )
    """)
    op.execute("CREATE INDEX ix_time_tracking_employee_id ON time_tracking(employee_id)")


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    # Drop tables in reverse dependency order
    tables = [
        "time_tracking",
        "dependent",
        "benefits",
        "leave_records",
        "works_on",
        "project",
        "employee",
        "department",
    ]
    for t in tables:
        op.execute(f"DROP TABLE IF EXISTS {t}")
