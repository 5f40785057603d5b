#!/usr/bin/env python3
"""
assetdag CLI

Render the assets declared in a manifest:
  assetdag render - Print the HTML tags for a container
  assetdag order - Print the resolved load order

Usage:
  assetdag render <manifest> [--container <name>] [--group styles|scripts|show]
  assetdag order <manifest> [--container <name>] [--group styles|scripts]
"""

import argparse
import logging
import sys

from .manifest import Manifest, ManifestError
from .resolver import DependencyError

logger = logging.getLogger(__name__)

GROUPS = ("styles", "scripts", "show")


def load_environment(args):
    """Load the manifest and apply command-line overrides."""
    manifest = Manifest.from_file(args.manifest)
    if args.path is not None:
        manifest.path = args.path
    if args.versioning is not None:
        manifest.versioning = args.versioning
    if args.strict:
        manifest.strict = True
    return manifest.build()


def cmd_render(args):
    """Print rendered tags."""
    env = load_environment(args)
    container = env.container(args.container)
    logger.info(f"Rendering {args.group} for container '{container.name}'")
    print(getattr(container, args.group)())


def cmd_order(args):
    """Print resolved asset names, one per line."""
    env = load_environment(args)
    container = env.container(args.container)
    asset_type = "style" if args.group == "styles" else "script"
    for name in container.order(asset_type):
        print(name)


def add_common_arguments(parser):
    parser.add_argument("manifest", help="Manifest YAML file")
    parser.add_argument("-c", "--container", default="default",
                        help="Container name (default: default)")
    parser.add_argument("--path", help="Public directory for modification-time lookups")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on unknown dependencies and cycles")
    versioning = parser.add_mutually_exclusive_group()
    versioning.add_argument("--versioning", dest="versioning", action="store_true", default=None,
                            help="Append modification times to local assets")
    versioning.add_argument("--no-versioning", dest="versioning", action="store_false", default=None,
                            help="Never append modification times")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="assetdag",
        description="Dependency-ordered rendering of style and script assets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # render
    render_parser = subparsers.add_parser("render", help="Print HTML tags for a container")
    add_common_arguments(render_parser)
    render_parser.add_argument("-g", "--group", choices=GROUPS, default="show",
                               help="What to render (default: show = scripts then styles)")

    # order
    order_parser = subparsers.add_parser("order", help="Print the resolved load order")
    add_common_arguments(order_parser)
    order_parser.add_argument("-g", "--group", choices=GROUPS[:2], default="scripts",
                              help="Asset group (default: scripts)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "render":
            cmd_render(args)
        elif args.command == "order":
            cmd_order(args)
        else:
            parser.print_help()
            return 1
    except (ManifestError, DependencyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
