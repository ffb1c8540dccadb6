"""CLI entry point: browse candidate and job listings from the terminal."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from src.core.config import Settings
from src.core.filters import CandidateFilters, JobFilters
from src.core.schemas import Candidate, JobPost
from src.listing.candidates import build_candidate_controller
from src.listing.controller import ListController
from src.listing.jobs import build_job_controller
from src.services.http import ApiClient, HttpSearchService
from src.services.notifier import RecordingNotifier


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job board listings - search candidates and job posts",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("candidates", "Search candidate profiles"),
        ("jobs", "Search job posts"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--config",
            default=None,
            help="Path to settings YAML file (default: built-in settings)",
        )
        sub.add_argument("--query", "-q", default=None, help="Free-text query")
        sub.add_argument("--location", default=None, help="Location filter")
        sub.add_argument("--skill", action="append", default=[], help="Skill id (repeatable)")
        sub.add_argument("--page", type=int, default=1, help="Page to open (default: 1)")
        sub.add_argument("--sort-by", default=None, help="Sort field")
        sub.add_argument("--sort-order", choices=["asc", "desc"], default=None)
        sub.add_argument(
            "--more",
            type=int,
            default=0,
            help="Load N more pages after the first (infinite-scroll style)",
        )
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the request parameters without calling the API",
        )
        sub.add_argument("--json", action="store_true", help="Print items as JSON")
        sub.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose (DEBUG) logging",
        )

    jobs_parser = subparsers.choices["jobs"]
    jobs_parser.add_argument("--category", default=None, help="Category id")
    jobs_parser.add_argument("--company", default=None, help="Company id")

    candidates_parser = subparsers.choices["candidates"]
    candidates_parser.add_argument("--title", default=None, help="Experience title")
    candidates_parser.add_argument("--employer", default=None, help="Experience company")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def initial_filters(args: argparse.Namespace) -> dict[str, Any]:
    """Map CLI flags onto filter fields, leaving unset flags out."""
    values: dict[str, Any] = {
        "query": args.query,
        "location": args.location,
        "skill_ids": args.skill or None,
        "page": args.page if args.page != 1 else None,
        "sort_by": args.sort_by,
        "sort_order": args.sort_order,
    }
    if args.command == "jobs":
        values["category_id"] = args.category
        values["company_id"] = args.company
    else:
        values["experience_title"] = args.title
        values["experience_company"] = args.employer
    return {k: v for k, v in values.items() if v is not None}


def dry_run(settings: Settings, args: argparse.Namespace) -> None:
    """Print what would be requested without touching the network."""
    listing = settings.listings.jobs if args.command == "jobs" else settings.listings.candidates
    data = {
        "limit": listing.page_size,
        "sort_by": listing.sort_by,
        "sort_order": listing.sort_order,
        **initial_filters(args),
    }
    filters: CandidateFilters | JobFilters
    if args.command == "jobs":
        filters = JobFilters.model_validate(data)
    else:
        filters = CandidateFilters.model_validate(data)

    print(f"[DRY RUN] GET {settings.api.base_url}{listing.path}")
    for key, value in filters.to_params():
        print(f"  {key}={value}")
    print(f"[DRY RUN] Active filters: {filters.has_active_filters}")


async def run(settings: Settings, args: argparse.Namespace) -> int:
    """Open the listing, load extra pages on request and print the result."""
    notifier = RecordingNotifier()

    async with ApiClient(settings.api) as client:
        controller: ListController[Any, Any]
        if args.command == "jobs":
            job_service: HttpSearchService[JobPost, JobFilters] = HttpSearchService(
                client, settings.listings.jobs.path, JobPost, "jobs",
            )
            controller = build_job_controller(
                job_service, notifier, settings.listings.jobs, initial_filters(args),
            )
        else:
            candidate_service: HttpSearchService[Candidate, CandidateFilters] = (
                HttpSearchService(
                    client, settings.listings.candidates.path, Candidate, "candidates",
                )
            )
            controller = build_candidate_controller(
                candidate_service,
                notifier,
                settings.listings.candidates,
                initial_filters(args),
            )

        # The CLI always wants the first page, even if auto_load is off.
        await controller.start()
        if controller.pagination is None and controller.error is None:
            await controller.refetch()
        for _ in range(args.more):
            if not controller.has_next_page:
                break
            await controller.load_more()
            if controller.error is not None:
                break

    print_summary(controller, as_json=args.json)
    for message in notifier.messages:
        print(f"Error: {message}", file=sys.stderr)
    return 1 if controller.error is not None else 0


def print_summary(controller: ListController[Any, Any], *, as_json: bool) -> None:
    items = controller.items
    if as_json:
        print(json.dumps([i.model_dump(mode="json") for i in items], indent=2))
        return

    pagination = controller.pagination
    if pagination is None:
        print("No results loaded.")
        return
    print(
        f"\nPage {pagination.current_page}/{pagination.total_pages} "
        f"- {len(items)} shown of {pagination.total_items}",
    )
    for item in items:
        label = getattr(item, "title", None) or getattr(item, "name", "")
        location = getattr(item, "location", None) or "-"
        print(f"  [{item.id}] {label} ({location})")
    if controller.has_next_page:
        print("More results available: use --more N or --page.")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config) if args.config else Settings()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.dry_run:
            dry_run(settings, args)
            return
        sys.exit(asyncio.run(run(settings, args)))
    except ValueError as e:
        print(f"Invalid filters: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
