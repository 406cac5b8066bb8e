#!/usr/bin/env python3
"""Create the Employee Management schema and optionally load demo data.

Tables are created from the ORM metadata on the database named by
DATABASE_URL (see ems.config). For a migrated production database use
the Alembic revision in alembic/versions instead.

Usage:
    python scripts/setup_db.py                 # create missing tables
    python scripts/setup_db.py --seed          # ... and insert demo rows
    python scripts/setup_db.py --drop --seed   # rebuild from scratch
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

# ── Path setup ────────────────────────────────────────────────────────
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.exc import SQLAlchemyError

from ems.core_hr.models import Department, Employee
from ems.database import Base, async_session_factory, engine
from ems.projects.models import Project, WorksOn
from ems.records.models import Benefit, Dependent, LeaveRecord, TimeEntry

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("setup_db")


# ═════════════════════════════════════════════════════════════════════
# Schema
# ═════════════════════════════════════════════════════════════════════

async def create_schema(drop: bool = False) -> None:
    async with engine.begin() as conn:
        if drop:
            logger.info("Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)


# ═════════════════════════════════════════════════════════════════════
# Demo data
# ═════════════════════════════════════════════════════════════════════

async def seed() -> None:
    """Insert a small, self-consistent demo organisation."""
    async with async_session_factory() as db:
        engineering = Department(name="Engineering", location="Building A", budget=500000)
        hr = Department(name="Human Resources", location="Building B", budget=150000)
        sales = Department(name="Sales", location="Building C", budget=250000)
        db.add_all([engineering, hr, sales])
        await db.flush()

        john = Employee(
            first_name="John", last_name="Doe", email="john.doe@company.com",
            phone_no="555-0101", gender="Male", date_of_birth=date(1985, 3, 12),
            hire_date=date(2015, 6, 1), salary=95000, department_id=engineering.id,
        )
        jane = Employee(
            first_name="Jane", last_name="Smith", email="jane.smith@company.com",
            phone_no="555-0102", gender="Female", date_of_birth=date(1990, 7, 24),
            hire_date=date(2018, 2, 15), salary=72000, department_id=hr.id,
        )
        db.add_all([john, jane])
        await db.flush()

        alex = Employee(
            first_name="Alex", last_name="Brown", email="alex.brown@company.com",
            phone_no="555-0103", gender="Other", date_of_birth=date(1994, 11, 2),
            hire_date=date(2021, 9, 20), salary=68000, department_id=engineering.id,
            supervisor_id=john.id,
        )
        maria = Employee(
            first_name="Maria", last_name="Garcia", email="maria.garcia@company.com",
            phone_no="555-0104", gender="Female", date_of_birth=date(1988, 1, 30),
            hire_date=date(2019, 4, 8), salary=81000, department_id=sales.id,
            supervisor_id=john.id,
        )
        db.add_all([alex, maria])

        portal = Project(
            name="Customer Portal", status="In Progress",
            start_date=date(2024, 1, 15), end_date=date(2026, 12, 31), budget=120000,
        )
        payroll = Project(
            name="Payroll Migration", status="Completed",
            start_date=date(2023, 3, 1), end_date=date(2023, 11, 30), budget=80000,
        )
        analytics = Project(
            name="Sales Analytics", status="Planning",
            start_date=date(2027, 2, 1), end_date=date(2027, 8, 31), budget=60000,
        )
        db.add_all([portal, payroll, analytics])
        await db.flush()

        db.add_all([
            WorksOn(employee_id=john.id, project_id=portal.id, role="Lead", hours_per_week=20),
            WorksOn(employee_id=alex.id, project_id=portal.id, role="Developer", hours_per_week=35),
            WorksOn(employee_id=jane.id, project_id=payroll.id, role="Coordinator", hours_per_week=10),
            WorksOn(employee_id=maria.id, project_id=analytics.id, role="Analyst", hours_per_week=15),

            LeaveRecord(employee_id=john.id, leave_type="Vacation", status="Approved",
                        start_date=date(2024, 7, 1), end_date=date(2024, 7, 5)),
            LeaveRecord(employee_id=john.id, leave_type="Sick Leave", status="Pending",
                        start_date=date(2024, 9, 10), end_date=date(2024, 9, 10)),
            LeaveRecord(employee_id=jane.id, leave_type="Personal Leave", status="Rejected",
                        start_date=date(2024, 3, 4), end_date=date(2024, 3, 5)),

            Benefit(employee_id=john.id, benefit_type="Health Insurance",
                    start_date=date(2015, 6, 1), coverage="Family", premium=450),
            Benefit(employee_id=jane.id, benefit_type="Health Insurance",
                    start_date=date(2018, 2, 15), coverage="Individual", premium=220),
            Benefit(employee_id=jane.id, benefit_type="Dental",
                    start_date=date(2018, 2, 15), coverage="Individual", premium=35.5),

            Dependent(employee_id=john.id, first_name="Emily", last_name="Doe",
                      relationship="Daughter", date_of_birth=date(2012, 5, 9)),

            TimeEntry(employee_id=john.id, project_id=portal.id,
                      date=date(2024, 10, 7), hours_worked=6),
            TimeEntry(employee_id=alex.id, project_id=portal.id,
                      date=date(2024, 10, 7), hours_worked=8),
            TimeEntry(employee_id=alex.id, project_id=portal.id,
                      date=date(2024, 10, 8), hours_worked=7.5),
        ])
        await db.commit()
    logger.info("Demo data inserted")


# ═════════════════════════════════════════════════════════════════════
# Entry point
# ═════════════════════════════════════════════════════════════════════

async def run(drop: bool, with_seed: bool) -> None:
    try:
        await create_schema(drop=drop)
        if with_seed:
            await seed()
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(
        description="Create the Employee Management database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--drop", action="store_true", help="Drop all tables first")
    parser.add_argument("--seed", action="store_true", help="Insert demo data")
    args = parser.parse_args()

    try:
        asyncio.run(run(drop=args.drop, with_seed=args.seed))
    except SQLAlchemyError as exc:
        logger.error("Database setup failed: %s", exc)
        sys.exit(1)
    logger.info("Database setup completed successfully")


if __name__ == "__main__":
    main()
