#------------------------------------------------------------
#                           cli.py
#      Command-line front end: parses options into a build
#               request and reports the outcome.

import argparse
import logging
import sys
from typing import List, Optional
from .config import FEATURED_LIMIT
from .controller import run_build
from .errors import GitfolioError
from .models import SortKey, TemplateKind

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
SIZE_MESSAGE_TEMPLATE = "Estimated size: {size}"
ERROR_MESSAGE_TEMPLATE = "ERROR: {error}"

# Option dest -> Settings attribute, for plain text overrides.
TEXT_OVERRIDES = {
    "bio": "bio",
    "linkedin": "linkedin",
    "twitter": "twitter",
    "email": "email",
    "primary_color": "primary_color",
    "accent_color": "accent_color",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitfolio",
        description="Build a single-file portfolio page from a GitHub account.",
    )
    parser.add_argument("username", help="GitHub username")
    parser.add_argument(
        "--template",
        choices=[kind.value for kind in TemplateKind],
        default=TemplateKind.MINIMAL.value,
    )
    parser.add_argument("--sort", choices=[key.value for key in SortKey], help="repository order")
    parser.add_argument(
        "--include-forks",
        dest="filter_no_forks",
        action="store_const",
        const=False,
        default=None,
        help="keep forked repositories",
    )
    parser.add_argument(
        "--featured",
        nargs="+",
        metavar="NAME",
        help=f"repositories to feature, in order (at most {FEATURED_LIMIT})",
    )
    parser.add_argument("--bio")
    parser.add_argument("--linkedin", help="LinkedIn profile URL")
    parser.add_argument("--twitter", help="Twitter handle")
    parser.add_argument("--email")
    parser.add_argument("--primary-color")
    parser.add_argument("--accent-color")
    parser.add_argument("--output", "-o", help="output file (default: USERNAME-portfolio.html)")
    parser.add_argument("--sitemap", action="store_true", help="also write sitemap.xml")
    parser.add_argument("--robots", action="store_true", help="also write robots.txt")
    parser.add_argument("--no-cache", action="store_true", help="do not read or write the on-disk cache")
    parser.add_argument("--clear-cache", action="store_true", help="drop the cached snapshot first")
    parser.add_argument("--size-only", action="store_true", help="print the estimated size without writing")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


# This function does collect the settings the user asked to change.
# Options left unset keep whatever was saved previously.
def settings_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    for dest, attr in TEXT_OVERRIDES.items():
        value = getattr(args, dest)
        if value is not None:
            overrides[attr] = value
    if args.sort is not None:
        overrides["sort_by"] = SortKey(args.sort)
    if args.filter_no_forks is not None:
        overrides["filter_no_forks"] = args.filter_no_forks
    if args.featured is not None:
        overrides["featured_repos"] = list(args.featured[:FEATURED_LIMIT])
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    try:
        pipeline = run_build(
            args.username,
            template=TemplateKind(args.template),
            overrides=settings_overrides(args),
            output=args.output,
            write_sitemap=args.sitemap,
            write_robots=args.robots,
            use_cache=not args.no_cache,
            clear_cache=args.clear_cache,
            size_only=args.size_only,
        )
    except GitfolioError as exc:
        print(ERROR_MESSAGE_TEMPLATE.format(error=exc), file=sys.stderr)
        return 1

    print(SIZE_MESSAGE_TEMPLATE.format(size=pipeline.estimate_size()))
    return 0
