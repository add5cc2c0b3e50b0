"""Main entry point for AutoApply."""

import argparse
import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from autoapply import __version__
from autoapply.config.settings import Settings
from autoapply.tracker.models import ApplicationStatus
from autoapply.tracker.store import ApplicationStore, create_store
from autoapply.utils.logging import configure_logging

_STATUS_CHOICES = [status.value for status in ApplicationStatus]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def _run_with_store(
    settings: Settings,
    command: Callable[[ApplicationStore], Awaitable[int]],
) -> int:
    """Open the configured store, run ``command`` against it, then close it."""

    async def _run() -> int:
        store = create_store(settings)
        await store.initialize()
        try:
            return await command(store)
        finally:
            await store.close()

    return asyncio.run(_run())


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="autoapply",
        description="AutoApply: job search, resume tailoring, and application tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m autoapply profile import profile.yaml
  python -m autoapply search --board Indeed --keywords "python backend" --track
  python -m autoapply apps list --status Applied
  python -m autoapply tailor --jd job.txt --application <id> --pdf resume.pdf
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="commands",
        description="Available commands",
    )

    # Profile
    profile_parser = subparsers.add_parser("profile", help="Show or update the user profile")
    profile_sub = profile_parser.add_subparsers(dest="profile_cmd", required=True)

    profile_sub.add_parser("show", help="Print the stored profile as JSON")

    profile_set = profile_sub.add_parser("set", help="Update individual profile fields")
    profile_set.add_argument("--name", default=None)
    profile_set.add_argument("--email", default=None)
    profile_set.add_argument("--phone", default=None)
    profile_set.add_argument("--linkedin-url", default=None)
    profile_set.add_argument("--github-url", default=None)
    profile_set.add_argument("--portfolio-url", default=None)
    profile_set.add_argument("--location", default=None, help="Preferred job location")
    profile_set.add_argument(
        "--job-titles", default=None, help="Comma-separated preferred job titles"
    )
    profile_set.add_argument(
        "--resume",
        type=Path,
        default=None,
        help="Plain text resume file to store as resume content",
    )
    profile_set.add_argument(
        "--cover-letter-template",
        type=Path,
        default=None,
        help="Plain text cover letter template file",
    )

    profile_import = profile_sub.add_parser(
        "import", help="Merge profile fields from a YAML or JSON file"
    )
    profile_import.add_argument("path", type=Path, help="Profile file (YAML or JSON)")

    # Applications
    apps_parser = subparsers.add_parser("apps", help="Manage tracked applications")
    apps_sub = apps_parser.add_subparsers(dest="apps_cmd", required=True)

    apps_list = apps_sub.add_parser("list", help="List tracked applications")
    apps_list.add_argument("--status", choices=_STATUS_CHOICES, default=None)
    apps_list.add_argument(
        "--search", default=None, help="Match job title or company (case-insensitive)"
    )
    apps_list.add_argument("--json", action="store_true", help="Print JSON")

    apps_add = apps_sub.add_parser("add", help="Start tracking a job")
    apps_add.add_argument("--title", required=True)
    apps_add.add_argument("--company", required=True)
    apps_add.add_argument("--url", required=True)
    apps_add.add_argument("--location", default="")
    apps_add.add_argument("--description", default="")
    apps_add.add_argument(
        "--status",
        choices=_STATUS_CHOICES,
        default=ApplicationStatus.BOOKMARKED.value,
    )

    apps_update = apps_sub.add_parser("update", help="Update a tracked application")
    apps_update.add_argument("id", help="Application id")
    apps_update.add_argument("--status", choices=_STATUS_CHOICES, default=None)
    apps_update.add_argument("--notes", default=None)
    apps_update.add_argument(
        "--applied-date", default=None, help="ISO-8601 date or timestamp"
    )

    apps_remove = apps_sub.add_parser("remove", help="Stop tracking an application")
    apps_remove.add_argument("id", help="Application id")

    apps_sub.add_parser("stats", help="Show dashboard counts")

    # Search
    search_parser = subparsers.add_parser(
        "search", help="Find relevant jobs for the stored profile"
    )
    search_parser.add_argument(
        "--board", choices=["Indeed", "LinkedIn"], default="LinkedIn", help="Job board"
    )
    search_parser.add_argument("--keywords", default=None)
    search_parser.add_argument(
        "--track",
        action="store_true",
        help="Bookmark every result in the application tracker",
    )

    # Tailor
    tailor_parser = subparsers.add_parser(
        "tailor", help="Tailor a resume (and cover letter) to a job description"
    )
    tailor_parser.add_argument(
        "--jd",
        type=Path,
        default=None,
        help="Job description text file (defaults to the application's job description)",
    )
    tailor_parser.add_argument(
        "--resume",
        type=Path,
        default=None,
        help="Resume text file (defaults to the stored profile resume)",
    )
    tailor_parser.add_argument("--cover-letter", type=Path, default=None)
    tailor_parser.add_argument("--job-title", default=None)
    tailor_parser.add_argument(
        "--application",
        default=None,
        help="Tracked application id to attach the tailored documents to",
    )
    tailor_parser.add_argument(
        "--out", type=Path, default=None, help="Write the tailored resume text here"
    )
    tailor_parser.add_argument(
        "--pdf", type=Path, default=None, help="Also export the tailored resume as PDF"
    )

    # PDF
    pdf_parser = subparsers.add_parser("pdf", help="Export resume text to a one-page PDF")
    pdf_source = pdf_parser.add_mutually_exclusive_group(required=True)
    pdf_source.add_argument("--input", type=Path, default=None, help="Resume text file")
    pdf_source.add_argument(
        "--application", default=None, help="Use this application's tailored resume"
    )
    pdf_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output PDF path (defaults to tailored-resume.pdf under OUTPUT_DIR)",
    )

    return parser


async def _profile_command(parsed: argparse.Namespace, store: ApplicationStore) -> int:
    from autoapply.tracker.models import JobPreferences, UserProfilePatch
    from autoapply.tracker.profile import load_profile_patch, profile_warnings

    if parsed.profile_cmd == "import":
        patch = load_profile_patch(parsed.path)
        profile = await store.update_user_profile(patch)
        print(f"Imported {len(patch.changes())} field(s) from {parsed.path}")

    elif parsed.profile_cmd == "set":
        changes: dict[str, object] = {}
        for field_name in (
            "name",
            "email",
            "phone",
            "linkedin_url",
            "github_url",
            "portfolio_url",
        ):
            value = getattr(parsed, field_name)
            if value is not None:
                changes[field_name] = value
        if parsed.resume is not None:
            changes["resume_content"] = _read_text(parsed.resume)
            changes["resume_file_name"] = parsed.resume.name
        if parsed.cover_letter_template is not None:
            changes["cover_letter_template"] = _read_text(parsed.cover_letter_template)
        if parsed.location is not None or parsed.job_titles is not None:
            current = store.user_profile.preferences
            changes["preferences"] = JobPreferences(
                location=current.location if parsed.location is None else parsed.location,
                job_titles=current.job_titles if parsed.job_titles is None else parsed.job_titles,
            )

        if not changes:
            print("Nothing to update", file=sys.stderr)
            return 1
        profile = await store.update_user_profile(UserProfilePatch(**changes))
        print(f"Updated: {', '.join(sorted(changes))}")

    else:
        profile = store.user_profile
        _print_json(profile.model_dump(mode="json", by_alias=True))

    for warning in profile_warnings(profile):
        print(f"Warning: {warning}", file=sys.stderr)
    return 0


async def _apps_command(parsed: argparse.Namespace, store: ApplicationStore) -> int:
    from autoapply.tracker.models import ApplicationPatch, JobPosting
    from autoapply.tracker.views import application_counts, select_applications, status_breakdown

    if parsed.apps_cmd == "list":
        applications = select_applications(
            store.tracked_applications, status=parsed.status, search=parsed.search
        )
        if parsed.json:
            _print_json([app.model_dump(mode="json", by_alias=True) for app in applications])
            return 0
        for app in applications:
            applied = app.applied_date.date().isoformat() if app.applied_date else "-"
            print(f"{applied} {app.status.value} {app.id} {app.job.company} {app.job.title}")
        return 0

    if parsed.apps_cmd == "add":
        job = JobPosting(
            title=parsed.title,
            company=parsed.company,
            url=parsed.url,
            location=parsed.location,
            description=parsed.description,
        )
        application = await store.add_tracked_application(job, ApplicationStatus(parsed.status))
        print(application.id)
        return 0

    if parsed.apps_cmd == "update":
        changes: dict[str, object] = {}
        if parsed.status is not None:
            changes["status"] = parsed.status
        if parsed.notes is not None:
            changes["notes"] = parsed.notes
        if parsed.applied_date is not None:
            changes["applied_date"] = parsed.applied_date
        if not changes:
            print("Nothing to update", file=sys.stderr)
            return 1

        updated = await store.update_tracked_application(
            parsed.id, ApplicationPatch.model_validate(changes)
        )
        if updated is None:
            print("Not found", file=sys.stderr)
            return 1
        print("ok")
        return 0

    if parsed.apps_cmd == "remove":
        await store.remove_tracked_application(parsed.id)
        print("ok")
        return 0

    if parsed.apps_cmd == "stats":
        applications = store.tracked_applications
        counts = application_counts(applications)
        print(
            f"Total: {counts.total}  Applied: {counts.applied}  "
            f"Interviewing: {counts.interviewing}"
        )
        for status, count in status_breakdown(applications).items():
            print(f"{status.value}: {count}")
        return 0

    print("Unknown apps command", file=sys.stderr)
    return 1


async def _search_command(parsed: argparse.Namespace, store: ApplicationStore) -> int:
    from autoapply.search.service import JobSearchError, JobSearchService

    try:
        postings = await JobSearchService().search_for_profile(
            store.user_profile, parsed.board, parsed.keywords
        )
    except JobSearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for posting in postings:
        print(f"{posting.relevance_score:.2f} {posting.company} | {posting.title} | {posting.url}")

    if parsed.track:
        # Prepending in reverse keeps the best match first.
        for posting in reversed(postings):
            await store.add_tracked_application(posting)

    print(f"Found {len(postings)} job(s)")
    if parsed.track and postings:
        print(f"Bookmarked {len(postings)} job(s)")
    return 0


async def _tailor_command(
    parsed: argparse.Namespace, store: ApplicationStore, settings: Settings
) -> int:
    from autoapply.tailoring.models import TailorRequest
    from autoapply.tailoring.service import ResumeTailorService, TailoringError

    application = None
    if parsed.application:
        application = store.get_tracked_application(parsed.application)
        if application is None:
            print("Application not found", file=sys.stderr)
            return 1

    resume = _read_text(parsed.resume) if parsed.resume else store.user_profile.resume_content
    if not resume:
        print("Error: no resume given and none stored in the profile", file=sys.stderr)
        return 1

    if parsed.jd:
        job_description = _read_text(parsed.jd)
    elif application is not None:
        job_description = application.job.description
    else:
        job_description = ""
    if not job_description.strip():
        print("Error: a job description is required (--jd or --application)", file=sys.stderr)
        return 1

    job_title = parsed.job_title or (application.job.title if application else None)
    request = TailorRequest(
        resume=resume,
        job_description=job_description,
        cover_letter=_read_text(parsed.cover_letter) if parsed.cover_letter else None,
        job_title=job_title,
    )

    try:
        result = await ResumeTailorService().tailor(request)
    except TailoringError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if application is not None:
        await store.update_tracked_application(
            application.id,
            {
                "tailored_resume": result.tailored_resume,
                "tailored_cover_letter": result.tailored_cover_letter,
            },
        )
        print(f"Saved tailored documents to application {application.id}")

    if parsed.out:
        parsed.out.parent.mkdir(parents=True, exist_ok=True)
        parsed.out.write_text(result.tailored_resume, encoding="utf-8")
        print(f"Wrote: {parsed.out}")
    elif application is None:
        print(result.tailored_resume)
        if result.tailored_cover_letter:
            print("\n--- Cover letter ---\n")
            print(result.tailored_cover_letter)

    if parsed.pdf:
        return await asyncio.to_thread(
            _export_pdf, result.tailored_resume, parsed.pdf, settings
        )
    return 0


async def _pdf_command(
    parsed: argparse.Namespace, store: ApplicationStore, settings: Settings
) -> int:
    application = store.get_tracked_application(parsed.application)
    if application is None:
        print("Application not found", file=sys.stderr)
        return 1
    if not application.tailored_resume:
        print("Application has no tailored resume", file=sys.stderr)
        return 1
    return await asyncio.to_thread(
        _export_pdf, application.tailored_resume, parsed.out, settings
    )


def _export_pdf(text: str, out: Path | None, settings: Settings) -> int:
    from autoapply.export.pdf import PDFExporter

    render = PDFExporter(output_dir=settings.output_dir).export_to_file(text, out)
    if not render.success:
        print(f"Error: {render.error}", file=sys.stderr)
        return 1
    print(f"Wrote: {render.file_path}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.debug(f"AutoApply v{__version__} running {parsed.mode}")

    if parsed.mode == "pdf" and parsed.input is not None:
        return _export_pdf(_read_text(parsed.input), parsed.out, settings)

    commands: dict[str, Callable[[ApplicationStore], Awaitable[int]]] = {
        "profile": lambda store: _profile_command(parsed, store),
        "apps": lambda store: _apps_command(parsed, store),
        "search": lambda store: _search_command(parsed, store),
        "tailor": lambda store: _tailor_command(parsed, store, settings),
        "pdf": lambda store: _pdf_command(parsed, store, settings),
    }

    try:
        return _run_with_store(settings, commands[parsed.mode])
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
