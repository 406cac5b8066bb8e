"""Employee Management command-line client.

Usage:
    ems login admin@company.com admin123
    ems whoami
    ems dashboard
    ems employees --search smith --department 2
    ems employee 7                 # detail with projects, leave, benefits
    ems employee 7 --delete        # admin only
    ems employee add --first-name Ann --last-name Lee --department 2 --salary 52000
    ems employee edit 7 --supervisor 3 --phone ""
    ems departments --search eng
    ems department 2               # detail with its employees
    ems projects --status "In Progress"
    ems leaves --status Approved --from 2024-01-01 --to 2024-03-31
    ems benefits --type Health
    ems timetracking --employee 7 --project 3
    ems logout

Exit codes:
    0 = success
    1 = not logged in, not allowed, bad credentials or API error
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import timedelta
from typing import Any, Optional, Sequence, TextIO

from pydantic import ValidationError

from ems.client.api import (
    ApiClient,
    ApiError,
    employee_name,
    fetch_all_benefits,
    fetch_all_leaves,
    fetch_all_time_entries,
)
from ems.client.auth import (
    LOGIN_PATH,
    AuthContext,
    DemoCredentialVerifier,
    FileSessionStore,
    InvalidCredentials,
    guard,
)
from ems.client.config import get_client_settings
from ems.client.filters import filter_records
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
from ems.common.coercion import coerce_float, coerce_int
from ems.common.constants import GenderType

logger = logging.getLogger(__name__)

# Commands that need an admin session, keyed by (command, flag).
_ADMIN_ONLY = {("employee", "delete")}

# Employee form fields for `employee add|edit`: (flag, payload key, argparse options).
_EMPLOYEE_FIELDS: tuple[tuple[str, str, dict[str, Any]], ...] = (
    ("--first-name", "first_name", {}),
    ("--last-name", "last_name", {}),
    ("--email", "email", {}),
    ("--phone", "phone_no", {}),
    ("--gender", "gender", {"choices": [g.value for g in GenderType]}),
    ("--date-of-birth", "date_of_birth", {"metavar": "YYYY-MM-DD"}),
    ("--hire-date", "hire_date", {"metavar": "YYYY-MM-DD"}),
    ("--department", "department_id", {"metavar": "ID"}),
    ("--supervisor", "supervisor_id", {"metavar": "ID"}),
    ("--salary", "salary", {}),
    ("--address", "address", {}),
)


# ══════════════════════════════════════════════════════════════════════
# Argument parsing
# ══════════════════════════════════════════════════════════════════════

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ems",
        description="Employee Management System client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in with a demo account")
    login.add_argument("email")
    login.add_argument("password")

    sub.add_parser("logout", help="Forget the stored session")
    sub.add_parser("whoami", help="Show the logged-in user")
    sub.add_parser("dashboard", help="Headline counts")

    employees = sub.add_parser("employees", help="List employees")
    employees.add_argument("--search", help="Match first name, last name or email")
    employees.add_argument("--department", type=int, help="Department id")

    employee = sub.add_parser("employee", help="Show, add, edit or delete one employee")
    employee.add_argument("target", metavar="ID|add|edit", help="Employee id, or add / edit")
    employee.add_argument("edit_id", nargs="?", type=int, metavar="ID", help="Employee id to edit")
    employee.add_argument("--delete", action="store_true", help="Delete (admin only)")
    form = employee.add_argument_group("add / edit fields (\"\" clears a field)")
    for flag, dest, extra in _EMPLOYEE_FIELDS:
        form.add_argument(flag, dest=dest, **extra)

    departments = sub.add_parser("departments", help="List departments")
    departments.add_argument("--search", help="Match department name")

    department = sub.add_parser("department", help="Show one department and its employees")
    department.add_argument("id", type=int)

    projects = sub.add_parser("projects", help="List projects with progress")
    projects.add_argument("--search", help="Match project name")
    projects.add_argument("--status", help="Planning, In Progress or Completed")

    leaves = sub.add_parser("leaves", help="Leave records across employees")
    leaves.add_argument("--employee", type=int, help="Employee id")
    leaves.add_argument("--status", help="Pending, Approved or Rejected")
    leaves.add_argument("--type", dest="leave_type", help="Leave type")
    leaves.add_argument("--from", dest="date_from", help="YYYY-MM-DD")
    leaves.add_argument("--to", dest="date_to", help="YYYY-MM-DD")

    benefits = sub.add_parser("benefits", help="Benefits across employees")
    benefits.add_argument("--employee", type=int, help="Employee id")
    benefits.add_argument("--type", dest="benefit_type", help="Benefit type")

    timetracking = sub.add_parser("timetracking", help="Time entries across employees")
    timetracking.add_argument("--employee", type=int, help="Employee id")
    timetracking.add_argument("--project", type=int, help="Project id")
    timetracking.add_argument("--from", dest="date_from", help="YYYY-MM-DD")
    timetracking.add_argument("--to", dest="date_to", help="YYYY-MM-DD")

    return parser


# ══════════════════════════════════════════════════════════════════════
# Output helpers
# ══════════════════════════════════════════════════════════════════════

def _table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[tuple[str, str]],
    out: TextIO,
    empty: str = "No records found.",
) -> None:
    """Print *rows* as an aligned text table; *columns* is (key, header)."""
    if not rows:
        print(empty, file=out)
        return

    cells = [[_cell(row.get(key)) for key, _ in columns] for row in rows]
    headers = [header for _, header in columns]
    widths = [
        max(len(headers[i]), *(len(line[i]) for line in cells))
        for i in range(len(columns))
    ]
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip(), file=out)
    print("  ".join("-" * w for w in widths), file=out)
    for line in cells:
        print("  ".join(c.ljust(w) for c, w in zip(line, widths)).rstrip(), file=out)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


# ══════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════

async def _dashboard(args, api: ApiClient, out: TextIO) -> int:
    data = await api.get_dashboard_data()
    print(f"Employees:        {data['employee_count']}", file=out)
    print(f"Departments:      {data['department_count']}", file=out)
    print(f"Projects:         {data['project_count']}", file=out)
    print(f"Active projects:  {data['active_project_count']}", file=out)
    return 0


async def _employees(args, api: ApiClient, out: TextIO) -> int:
    employees = filter_records(
        await api.get_all_employees(),
        {"department_id": args.department},
        search=args.search,
        search_fields=("first_name", "last_name", "email"),
    )
    rows = [{**e, "name": employee_name(e)} for e in employees]
    _table(rows, [
        ("id", "ID"), ("name", "Name"), ("email", "Email"),
        ("department_name", "Department"), ("supervisor_name", "Supervisor"),
    ], out, empty="No employees found.")

    distribution = department_distribution(employees)
    if distribution:
        print("", file=out)
        for name, count in distribution.items():
            print(f"{name}: {count}", file=out)
    return 0


async def _employee(args, api: ApiClient, out: TextIO) -> int:
    if args.target in ("add", "edit"):
        return await _save_employee(args, api, out)
    try:
        employee_id = int(args.target)
    except ValueError:
        print(f"Expected an employee id, `add` or `edit`, got {args.target!r}.", file=out)
        return 1

    if args.delete:
        result = await api.delete_employee(employee_id)
        print(result.get("message", "Employee deleted"), file=out)
        return 0

    emp = await api.get_employee_by_id(employee_id)
    print(f"{employee_name(emp)} (#{emp['id']})", file=out)
    print(f"  Email:       {_cell(emp.get('email'))}", file=out)
    print(f"  Phone:       {_cell(emp.get('phone_no'))}", file=out)
    print(f"  Gender:      {_cell(emp.get('gender'))}", file=out)
    print(f"  Born:        {format_date(emp.get('date_of_birth'))}", file=out)
    print(f"  Hired:       {format_date(emp.get('hire_date'))}", file=out)
    print(f"  Salary:      {format_currency(emp.get('salary'))}", file=out)
    print(f"  Department:  {emp.get('department_name') or 'N/A'}", file=out)
    print(f"  Supervisor:  {emp.get('supervisor_name') or 'N/A'}", file=out)

    print("\nProjects", file=out)
    _table(await api.get_employee_projects(employee_id), [
        ("name", "Project"), ("status", "Status"),
        ("role", "Role"), ("hours_per_week", "Hours/week"),
    ], out, empty="No projects assigned.")

    leaves = await api.get_employee_leaves(employee_id)
    print("\nLeave balance", file=out)
    for leave_type, balance in leave_balances(leaves).items():
        print(
            f"  {leave_type}: {balance['used']} used, "
            f"{balance['remaining']} of {balance['allowance']} days remaining",
            file=out,
        )

    benefits = await api.get_employee_benefits(employee_id)
    print("\nBenefits", file=out)
    _table(
        [{**b, "premium": format_currency(b.get("premium"))} for b in benefits],
        [("benefit_type", "Type"), ("coverage", "Coverage"), ("premium", "Premium")],
        out, empty="No benefits.",
    )

    print("\nDependents", file=out)
    _table(await api.get_employee_dependents(employee_id), [
        ("first_name", "First name"), ("last_name", "Last name"),
        ("relationship", "Relationship"), ("date_of_birth", "Born"),
    ], out, empty="No dependents.")
    return 0


def _employee_payload(form: dict[str, Any]) -> dict[str, Any]:
    """Form values → request body: blanks become null, ids and salary numeric."""
    payload = {key: (None if value == "" else value) for key, value in form.items()}
    payload["department_id"] = coerce_int(payload.get("department_id"))
    payload["supervisor_id"] = coerce_int(payload.get("supervisor_id"))
    payload["salary"] = coerce_float(payload.get("salary"))
    return payload


async def _save_employee(args, api: ApiClient, out: TextIO) -> int:
    employee_id: Optional[int] = None
    form: dict[str, Any] = {dest: "" for _, dest, _ in _EMPLOYEE_FIELDS}
    form["gender"] = GenderType.male.value

    if args.target == "edit":
        if args.edit_id is None:
            print("Usage: ems employee edit ID [fields]", file=out)
            return 1
        employee_id = args.edit_id
        current = await api.get_employee_by_id(employee_id)
        form.update({key: current.get(key) for key in form})

    # Options left out keep the current (or blank) value.
    for _, dest, _ in _EMPLOYEE_FIELDS:
        value = getattr(args, dest)
        if value is not None:
            form[dest] = value

    payload = _employee_payload(form)
    supervisor_id = payload["supervisor_id"]
    if supervisor_id is not None:
        choices = supervisor_choices(await api.get_all_employees(), employee_id)
        if supervisor_id not in {e["id"] for e in choices}:
            if supervisor_id == employee_id:
                print("An employee cannot be their own supervisor.", file=out)
            else:
                print(f"No employee #{supervisor_id} to pick as supervisor.", file=out)
            return 1

    if employee_id is None:
        saved = await api.create_employee(payload)
        print(f"Created {employee_name(saved)} (#{saved['id']})", file=out)
    else:
        saved = await api.update_employee(employee_id, payload)
        print(f"Updated {employee_name(saved)} (#{saved['id']})", file=out)
    return 0


async def _departments(args, api: ApiClient, out: TextIO) -> int:
    departments = filter_records(
        await api.get_all_departments(),
        {},
        search=args.search,
        search_fields=("name",),
    )
    headcounts = department_headcounts(await api.get_all_employees())
    rows = [
        {
            **d,
            "budget": format_currency(d.get("budget")),
            "employees": headcounts.get(d["id"], 0),
        }
        for d in departments
    ]
    _table(rows, [
        ("id", "ID"), ("name", "Department"), ("location", "Location"),
        ("budget", "Budget"), ("employees", "Employees"),
    ], out, empty="No departments found matching your search.")
    return 0


async def _department(args, api: ApiClient, out: TextIO) -> int:
    dept = await api.get_department_by_id(args.id)
    members = filter_records(await api.get_all_employees(), {"department_id": dept["id"]})

    print(f"{dept.get('name') or 'N/A'} (#{dept['id']})", file=out)
    print(f"  Location:    {dept.get('location') or 'Not specified'}", file=out)
    print(f"  Budget:      {format_currency(dept.get('budget'))}", file=out)
    print(f"  Employees:   {len(members)}", file=out)
    if dept.get("description"):
        print(f"  About:       {dept['description']}", file=out)

    print("\nEmployees", file=out)
    rows = [{**e, "name": employee_name(e)} for e in members]
    _table(rows, [("id", "ID"), ("name", "Name"), ("email", "Email")],
           out, empty="No employees in this department.")
    return 0


async def _projects(args, api: ApiClient, out: TextIO) -> int:
    projects = filter_records(
        await api.get_all_projects(),
        {"status": args.status},
        search=args.search,
        search_fields=("name",),
    )
    rows = [
        {
            **p,
            "progress": f"{project_progress(p)}%",
            "budget": format_currency(p.get("budget")),
            "start_date": format_date(p.get("start_date"), "medium"),
            "end_date": format_date(p.get("end_date"), "medium"),
        }
        for p in projects
    ]
    _table(rows, [
        ("id", "ID"), ("name", "Project"), ("status", "Status"),
        ("start_date", "Start"), ("end_date", "End"),
        ("budget", "Budget"), ("progress", "Progress"),
    ], out, empty="No projects found.")

    counts = project_status_counts(projects)
    print("\n" + ", ".join(f"{status}: {n}" for status, n in counts.items()), file=out)
    return 0


async def _leaves(args, api: ApiClient, out: TextIO) -> int:
    leaves = filter_records(await fetch_all_leaves(api), {
        "employee_id": args.employee,
        "status": args.status,
        "leave_type": args.leave_type,
        "end_date__from": args.date_from,
        "start_date__to": args.date_to,
    })
    rows = [
        {
            **leave,
            "days": leave_duration(leave.get("start_date"), leave.get("end_date")),
            "start_date": format_date(leave.get("start_date"), "medium"),
            "end_date": format_date(leave.get("end_date"), "medium"),
        }
        for leave in leaves
    ]
    _table(rows, [
        ("employee_name", "Employee"), ("leave_type", "Type"),
        ("start_date", "From"), ("end_date", "To"),
        ("days", "Days"), ("status", "Status"),
    ], out, empty="No leave records found for the selected filters.")

    stats = leave_stats(leaves)
    print(
        f"\nTotal: {stats['total']} ({stats['total_days']} days): "
        f"Approved {stats['approved']}, Pending {stats['pending']}, "
        f"Rejected {stats['rejected']}",
        file=out,
    )
    return 0


async def _benefits(args, api: ApiClient, out: TextIO) -> int:
    benefits = filter_records(await fetch_all_benefits(api), {
        "employee_id": args.employee,
        "benefit_type": args.benefit_type,
    })
    rows = [{**b, "premium": format_currency(b.get("premium"))} for b in benefits]
    _table(rows, [
        ("employee_name", "Employee"), ("benefit_type", "Type"),
        ("coverage", "Coverage"), ("premium", "Premium"),
    ], out, empty="No benefits found.")

    for benefit_type, summary in benefit_summary(benefits).items():
        print(
            f"{benefit_type}: {summary['count']} enrolled, "
            f"{format_currency(summary['total_premium'])}",
            file=out,
        )
    print(f"Total premium: {format_currency(total_premium(benefits))}", file=out)
    return 0


async def _timetracking(args, api: ApiClient, out: TextIO) -> int:
    entries = filter_records(await fetch_all_time_entries(api), {
        "employee_id": args.employee,
        "project_id": args.project,
        "date__from": args.date_from,
        "date__to": args.date_to,
    })
    rows = [{**e, "date": format_date(e.get("date"), "medium")} for e in entries]
    _table(rows, [
        ("date", "Date"), ("employee_name", "Employee"),
        ("project_name", "Project"), ("hours_worked", "Hours"),
    ], out, empty="No time entries found.")

    summary = time_summary(entries)
    print(
        f"\nTotal hours: {summary['total_hours']:g} over {summary['entry_count']} "
        f"entries (avg {summary['average_hours']})",
        file=out,
    )
    for bucket in summary["by_project"].values():
        print(f"  {bucket['project_name'] or 'Unassigned'}: {bucket['hours']:g}h", file=out)
    return 0


_HANDLERS = {
    "dashboard": _dashboard,
    "employees": _employees,
    "employee": _employee,
    "departments": _departments,
    "department": _department,
    "projects": _projects,
    "leaves": _leaves,
    "benefits": _benefits,
    "timetracking": _timetracking,
}


# ══════════════════════════════════════════════════════════════════════
# Dispatch
# ══════════════════════════════════════════════════════════════════════

def _requires_admin(args) -> bool:
    return any(
        args.command == command and getattr(args, flag, False)
        for command, flag in _ADMIN_ONLY
    )


async def run_command(
    args: argparse.Namespace,
    *,
    api: ApiClient,
    auth: AuthContext,
    out: TextIO = sys.stdout,
) -> int:
    """Execute one parsed command and return the process exit code."""
    if args.command == "login":
        try:
            session = auth.login(args.email, args.password)
        except InvalidCredentials as exc:
            print(exc.message, file=out)
            return 1
        print(f"Logged in as {session.name} ({session.role.value})", file=out)
        return 0

    if args.command == "logout":
        auth.logout()
        print("Logged out.", file=out)
        return 0

    session = auth.current()
    redirect = guard(session, require_admin=_requires_admin(args))
    if redirect == LOGIN_PATH:
        print("Not logged in. Run `ems login EMAIL PASSWORD` first.", file=out)
        return 1
    if redirect is not None:
        print("Admin access required.", file=out)
        return 1

    if args.command == "whoami":
        print(f"{session.name} <{session.email}> ({session.role.value})", file=out)
        return 0

    try:
        return await _HANDLERS[args.command](args, api, out)
    except ApiError as exc:
        logger.debug("API call failed", exc_info=exc)
        print(f"Error: {exc}", file=out)
        return 1


async def _run(args: argparse.Namespace) -> int:
    cfg = get_client_settings()
    auth = AuthContext(
        DemoCredentialVerifier(),
        FileSessionStore(cfg.SESSION_FILE, cfg.SESSION_SECRET),
        ttl=timedelta(hours=cfg.SESSION_TTL_HOURS),
    )
    async with ApiClient(cfg.API_URL, timeout=cfg.REQUEST_TIMEOUT) as api:
        return await run_command(args, api=api, auth=auth)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )
    try:
        code = asyncio.run(_run(args))
    except ValidationError as exc:
        print(f"Invalid client configuration (is EMS_SESSION_SECRET set?): {exc}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
