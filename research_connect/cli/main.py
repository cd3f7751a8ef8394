#!/usr/bin/env python3
"""
ResearchConnect command-line client.

Talks to the ResearchConnect backend on behalf of a student or professor:
1. Sign in / out and inspect the current session
2. Browse, create and delete research projects
3. Apply to projects, retract, and review applications
4. View profiles and discover other users
5. Generate research and placement roadmaps

The session token is kept in the credentials file from the configuration and
refreshed transparently when it expires.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from research_connect.api.errors import ResearchConnectError
from research_connect.auth.storage import CredentialStore
from research_connect.cli.check_deps import main as check_deps_main
from research_connect.client import ResearchConnect
from research_connect.schemas import (
    ApplicationIn,
    ApplicationStatus,
    InterviewSchedule,
    Project,
    ProjectCreate,
    ProjectPage,
    RegisterUserIn,
    RoadmapStructure,
    UserType,
)
from research_connect.utils.config import get_default_config, load_config
from research_connect.utils.logging_setup import setup_logging

console = Console()
logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CliState:
    """Shared between commands through ``click.Context.obj``."""

    config: dict[str, Any] = field(default_factory=get_default_config)
    debug: bool = False
    store: CredentialStore | None = None
    transport: httpx.AsyncBaseTransport | None = None


def _session_expired(login_path: str) -> None:
    console.print(
        f"[bold yellow]Session expired.[/bold yellow] Sign in again "
        f"([cyan]research-connect login[/cyan], web: {login_path})."
    )


def _run(
    state: CliState,
    action: Callable[[ResearchConnect], Awaitable[Any]],
    parse: Callable[[Any], T] | None = None,
) -> T:
    """
    Run ``action`` against a fresh client on a new event loop.

    ``parse`` turns the response body into view models before the loop
    closes, so malformed responses are reported like any other failure.
    """

    async def _main() -> T:
        async with ResearchConnect.from_config(
            state.config,
            store=state.store,
            on_session_expired=_session_expired,
            transport=state.transport,
        ) as rc:
            body = await action(rc)
            return parse(body) if parse is not None else body

    try:
        return asyncio.run(_main())
    except (ResearchConnectError, ValidationError) as e:
        console.print(f"\n[bold red]Request failed:[/bold red] {e}")
        logger.debug("Command failed", exc_info=True)
        if state.debug:
            raise
        raise SystemExit(1) from e


def _print_projects(projects: list[Project], title: str) -> None:
    table = Table(title=title)
    table.add_column("PID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Owner")
    table.add_column("Field")
    table.add_column("Active")
    table.add_column("Tags")
    for p in projects:
        table.add_row(
            p.pid,
            p.name,
            p.user.name if p.user and p.user.name else (p.uid or ""),
            p.field_of_study or "",
            "[green]yes[/green]" if p.is_active else "[red]no[/red]",
            ", ".join(p.tags),
        )
    console.print(table)


def _projects_from(body: Any) -> list[Project]:
    raw = body.get("projects") if isinstance(body, dict) else body
    return [Project.model_validate(item) for item in raw or []]


def _roadmap_from(body: Any) -> RoadmapStructure:
    raw = body.get("roadmap") if isinstance(body, dict) else None
    return RoadmapStructure.model_validate(raw or {})


def _print_mapping(title: str, data: dict[str, Any]) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(str(key), "" if value is None else str(value))
    console.print(table)


# ── Root group ──────────────────────────────────────────────────────────────


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--base-url",
    default=None,
    help="Backend API root, e.g. http://localhost:8080/v1.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode with additional logging.",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, base_url: str | None, verbose: bool, debug: bool):
    """
    ResearchConnect client: projects, applications, profiles and roadmaps
    from the terminal.
    """
    state = ctx.ensure_object(CliState)
    cfg = load_config(config)
    if base_url:
        cfg["api"]["base_url"] = base_url
    state.config = cfg
    state.debug = debug

    # Setup logging
    log_level = (
        logging.DEBUG if debug else (logging.INFO if verbose else cfg["logging"].get("level"))
    )
    setup_logging(log_level or logging.WARNING)


# ── Session ─────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--email", prompt=True, help="Account e-mail.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
@click.pass_obj
def login(state: CliState, email: str, password: str):
    """Sign in and store the session token."""

    async def action(rc: ResearchConnect):
        await rc.auth.login(email, password)
        return rc.auth.current_user()

    claims = _run(state, action)
    who = claims.name or claims.email if claims else email
    console.print(f"[bold green]Signed in[/bold green] as {who}")


@cli.command()
@click.option("--name", prompt=True, help="Full name.")
@click.option("--email", prompt=True, help="Account e-mail.")
@click.option(
    "--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password."
)
@click.option(
    "--type",
    "user_type",
    type=click.Choice([t.value for t in UserType]),
    default=UserType.STUDENT.value,
    show_default=True,
    help="'stu' for students, 'fac' for faculty.",
)
@click.pass_obj
def signup(state: CliState, name: str, email: str, password: str, user_type: str):
    """Create an account; a verification code is e-mailed."""
    data = RegisterUserIn(name=name, email=email, password=password, type=user_type)
    body = _run(state, lambda rc: rc.auth.register(data))
    message = body.get("message") if isinstance(body, dict) else None
    console.print(f"[bold green]{message or 'Account created'}[/bold green]")


@cli.command()
@click.pass_obj
def logout(state: CliState):
    """Forget the stored session token."""

    async def action(rc: ResearchConnect):
        rc.auth.logout()

    _run(state, action)
    console.print("Signed out.")


@cli.command()
@click.pass_obj
def whoami(state: CliState):
    """Show the signed-in user as the backend sees it."""
    body = _run(state, lambda rc: rc.auth.me())
    _print_mapping("Current user", body if isinstance(body, dict) else {"user": body})


# ── Projects ────────────────────────────────────────────────────────────────


@cli.group()
def projects():
    """Browse and manage research projects."""


@projects.command("list")
@click.option("--student", is_flag=True, help="Student view: active + applied, paginated.")
@click.option("--mine", is_flag=True, help="Only projects I own.")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=20, show_default=True)
@click.pass_obj
def projects_list(state: CliState, student: bool, mine: bool, page: int, page_size: int):
    """List projects."""
    if student:
        result = _run(
            state,
            lambda rc: rc.projects.list_for_student(page, page_size),
            lambda body: ProjectPage.model_validate(body or {}),
        )
        _print_projects(
            result.projects,
            f"Projects (page {result.page}/{max(result.total_pages, 1)}, {result.total} total)",
        )
        return

    if mine:
        projects = _run(state, lambda rc: rc.projects.list_mine(), _projects_from)
        _print_projects(projects, "My projects")
    else:
        projects = _run(state, lambda rc: rc.projects.list_active(), _projects_from)
        _print_projects(projects, "Projects")


@projects.command("show")
@click.argument("pid")
@click.pass_obj
def projects_show(state: CliState, pid: str):
    """Show one project."""
    project = _run(state, lambda rc: rc.projects.get(pid), Project.model_validate)
    _print_mapping(
        project.name or project.pid,
        {
            "pid": project.pid,
            "owner": project.user.name if project.user else project.uid,
            "active": project.is_active,
            "field": project.field_of_study,
            "specialization": project.specialization,
            "duration": project.duration,
            "deadline": project.deadline,
            "tags": project.tags,
            "summary": project.sdesc,
            "description": project.ldesc,
        },
    )


@projects.command("create")
@click.option("--name", required=True)
@click.option("--short", "sdesc", required=True, help="One-line summary.")
@click.option("--long", "ldesc", required=True, help="Full description.")
@click.option("--tag", "tags", multiple=True, help="Can be specified multiple times.")
@click.option("--field", "field_of_study", default=None, help="Field of study.")
@click.option("--specialization", default=None)
@click.option("--duration", default=None)
@click.option("--position", "position_type", multiple=True, help="Position type(s).")
@click.option("--deadline", default=None, help="Application deadline (YYYY-MM-DD).")
@click.option("--inactive", is_flag=True, help="Create the project closed for applications.")
@click.pass_obj
def projects_create(
    state: CliState,
    name: str,
    sdesc: str,
    ldesc: str,
    tags: tuple,
    field_of_study: str | None,
    specialization: str | None,
    duration: str | None,
    position_type: tuple,
    deadline: str | None,
    inactive: bool,
):
    """Create a project (faculty only)."""
    data = ProjectCreate(
        name=name,
        sdesc=sdesc,
        ldesc=ldesc,
        is_active=not inactive,
        tags=list(tags) or None,
        field_of_study=field_of_study,
        specialization=specialization,
        duration=duration,
        position_type=list(position_type) or None,
        deadline=deadline,
    )
    body = _run(state, lambda rc: rc.projects.create(data))
    pid = body.get("pid") if isinstance(body, dict) else None
    console.print(f"[bold green]Project created[/bold green] {pid or ''}")


@projects.command("delete")
@click.argument("pid")
@click.confirmation_option(prompt="Delete this project?")
@click.pass_obj
def projects_delete(state: CliState, pid: str):
    """Delete a project."""
    _run(state, lambda rc: rc.projects.delete(pid))
    console.print(f"Deleted {pid}.")


# ── Applications ────────────────────────────────────────────────────────────


@cli.command()
@click.argument("pid")
@click.option("--availability", prompt=True)
@click.option("--motivation", prompt=True)
@click.option("--prior-projects", default="")
@click.option("--cv-link", default="")
@click.option("--publications-link", default="")
@click.pass_obj
def apply(
    state: CliState,
    pid: str,
    availability: str,
    motivation: str,
    prior_projects: str,
    cv_link: str,
    publications_link: str,
):
    """Apply to project PID."""
    data = ApplicationIn(
        availability=availability,
        motivation=motivation,
        prior_projects=prior_projects,
        cv_link=cv_link,
        publications_link=publications_link,
    )
    _run(state, lambda rc: rc.applications.apply(pid, data))
    console.print(f"[bold green]Application submitted[/bold green] to {pid}")


@cli.command()
@click.argument("pid")
@click.pass_obj
def retract(state: CliState, pid: str):
    """Retract my application to project PID."""
    _run(state, lambda rc: rc.applications.retract(pid))
    console.print(f"Application to {pid} retracted.")


@cli.group()
def applications():
    """My applications, or applications to my projects."""


@applications.command("list")
@click.option("--all", "all_projects", is_flag=True, help="Faculty: every project I own.")
@click.pass_obj
def applications_list(state: CliState, all_projects: bool):
    """List applications."""
    if all_projects:
        body = _run(state, lambda rc: rc.applications.list_all())
    else:
        body = _run(state, lambda rc: rc.applications.list_mine())

    rows = (body or {}).get("applications") or []
    table = Table(title="Applications")
    table.add_column("ID", style="cyan")
    table.add_column("Project")
    table.add_column("Status", style="bold")
    table.add_column("Submitted")
    for app in rows:
        project = app.get("Project") or {}
        table.add_row(
            str(app.get("ID", "")),
            project.get("project_name") or app.get("PID", ""),
            app.get("status", ""),
            app.get("timeCreated", ""),
        )
    console.print(table)


@applications.command("status")
@click.argument("pid")
@click.argument("application_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in ApplicationStatus]))
@click.pass_obj
def applications_status(state: CliState, pid: str, application_id: int, status: str):
    """Set the status of application APPLICATION_ID on project PID."""
    _run(state, lambda rc: rc.applications.update_status(pid, application_id, status))
    console.print(f"Application {application_id} is now [bold]{status}[/bold].")


@applications.command("feedback")
@click.argument("pid")
@click.argument("application_id", type=int)
@click.argument("message")
@click.pass_obj
def applications_feedback(state: CliState, pid: str, application_id: int, message: str):
    """E-mail feedback to the applicant."""
    _run(state, lambda rc: rc.applications.send_feedback(pid, application_id, message))
    console.print("Feedback sent.")


@applications.command("interview")
@click.argument("pid")
@click.argument("application_id", type=int)
@click.option("--date", "interview_date", required=True)
@click.option("--time", "interview_time", required=True)
@click.option("--details", "interview_details", default=None)
@click.pass_obj
def applications_interview(
    state: CliState,
    pid: str,
    application_id: int,
    interview_date: str,
    interview_time: str,
    interview_details: str | None,
):
    """Schedule an interview with the applicant."""
    data = InterviewSchedule(
        interview_date=interview_date,
        interview_time=interview_time,
        interview_details=interview_details,
    )
    _run(state, lambda rc: rc.applications.schedule_interview(pid, application_id, data))
    console.print("Interview scheduled.")


# ── Profiles ────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("uid", required=False)
@click.pass_obj
def profile(state: CliState, uid: str | None):
    """Show my student profile, or the public profile of UID."""
    if uid:
        body = _run(state, lambda rc: rc.profile.get_user(uid))
    else:
        body = _run(state, lambda rc: rc.profile.get_student())
    _print_mapping("Profile", body if isinstance(body, dict) else {"profile": body})


@cli.command()
@click.option("--type", "user_type", type=click.Choice([t.value for t in UserType]), default=None)
@click.option("--search", default=None)
@click.pass_obj
def explore(state: CliState, user_type: str | None, search: str | None):
    """Discover students and faculty."""
    body = _run(state, lambda rc: rc.profile.explore(type=user_type, search=search))
    users = body.get("users") if isinstance(body, dict) else body
    table = Table(title="Users")
    table.add_column("UID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Institution")
    table.add_column("Research interest")
    for user in users or []:
        table.add_row(
            user.get("uid", ""),
            user.get("name", ""),
            user.get("type", ""),
            user.get("institution") or "",
            user.get("researchInterest") or "",
        )
    console.print(table)


@cli.command()
@click.pass_obj
def recommend(state: CliState):
    """Projects recommended for my profile."""
    projects = _run(state, lambda rc: rc.profile.recommendations(), _projects_from)
    _print_projects(projects, "Recommended projects")


# ── Roadmaps ────────────────────────────────────────────────────────────────


@cli.group()
def roadmap():
    """AI-assisted research and placement roadmaps."""


@roadmap.command("generate")
@click.option("--placement", is_flag=True, help="Placement preparation instead of research.")
@click.pass_obj
def roadmap_generate(state: CliState, placement: bool):
    """Generate a roadmap from my saved preferences."""
    if placement:
        structure = _run(state, lambda rc: rc.roadmap.generate_placement(), _roadmap_from)
    else:
        structure = _run(state, lambda rc: rc.roadmap.generate(), _roadmap_from)
    console.print(f"\n[bold cyan]{structure.title}[/bold cyan]  ({structure.total_time})")
    if structure.description:
        console.print(structure.description)
    table = Table()
    table.add_column("Step", style="cyan")
    table.add_column("Category")
    table.add_column("Duration")
    table.add_column("Skills")
    for node in structure.nodes:
        table.add_row(node.title, node.category, node.duration, ", ".join(node.skills))
    console.print(table)


@roadmap.command("history")
@click.pass_obj
def roadmap_history(state: CliState):
    """Previously generated roadmaps."""
    body = _run(state, lambda rc: rc.roadmap.history())
    table = Table(title="Roadmaps")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Title", style="bold")
    table.add_column("Created")
    for item in body or []:
        table.add_row(
            str(item.get("id", "")),
            item.get("roadmap_type", ""),
            item.get("title", ""),
            item.get("created_at", ""),
        )
    console.print(table)


# ── Maintenance ─────────────────────────────────────────────────────────────


@cli.command()
def doctor():
    """Check that every runtime dependency can be imported."""
    raise SystemExit(check_deps_main())


main = cli


if __name__ == "__main__":
    cli()
