"""
Event tree entry point.
Builds the event tree from a root config file and logs an outline of it.

Usage:
    python scripts/plan.py trip.yaml                 # workspace = file's directory
    python scripts/plan.py --workspace ./events      # root = <workspace>/main.*
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from xchedule.core.config_discovery import ConfigDiscovery
from xchedule.core.config_manager import Config
from xchedule.core.config_source import ConfigSource
from xchedule.core.event_builder import EventBuilder
from xchedule.exceptions import XcheduleError
from xchedule.models import Event
from xchedule.utils.logger import setup_logger

logger = setup_logger(__name__)


def format_outline(event: Event, depth: int = 0) -> List[str]:
    """Render an event tree as indented text lines."""
    when = event.time.start.strftime("%Y-%m-%d %H:%M %Z").strip()
    if event.time.period:
        when += f" ~ {event.time.end.strftime('%Y-%m-%d %H:%M %Z').strip()}"

    line = f"{'  ' * depth}- {event.title} [{when}]"
    if event.members:
        line += f" with {', '.join(m.name for m in event.members)}"

    lines = [line]
    for child in event.schedule:
        lines.extend(format_outline(child, depth + 1))
    return lines


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build and show an event tree")
    parser.add_argument("root", nargs="?", help="Root event config file")
    parser.add_argument(
        "--workspace",
        help="Directory searched for referenced event files "
             "(default: the root file's directory, else XCHEDULE_WORKSPACE)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)
    start_time = time.time()

    try:
        if args.root:
            root_path = Path(args.root)
            workspace = Path(args.workspace) if args.workspace else root_path.parent
            source = ConfigSource.from_file(root_path)
        else:
            workspace = Path(args.workspace) if args.workspace else Config.WORKSPACE_DIR
            if not args.workspace and not Config.validate():
                logger.error("Set XCHEDULE_WORKSPACE or pass --workspace")
                return 1
            source = ConfigDiscovery().find(Config.ROOT_EVENT, workspace)

        event = EventBuilder(workspace=workspace).build_event(source, is_root=True)

    except XcheduleError as e:
        logger.error(f"Invalid event configuration: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    for line in format_outline(event):
        logger.info(line)

    elapsed = time.time() - start_time
    logger.info(f"Built {sum(1 for _ in event.walk())} events in {elapsed:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
