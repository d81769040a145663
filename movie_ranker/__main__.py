"""
CLI entry point for movie ranker.

Parses arguments, validates config, and wires components.
"""

import argparse
import sys
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path
from typing import TypedDict

from prettytable import PrettyTable

from .catalogs.json_catalog import JSONCatalog
from .choosers.prompt_chooser import PromptChooser
from .choosers.simulated_chooser import SimulatedChooser
from .engine import RankingEngine
from .exceptions import ConfigurationError, PersistenceError
from .logging_config import get_logger, setup_logging
from .models import ItemKind, LeaderboardRow, Mover, SessionSummary
from .pair_selectors.closest_score_selector import ClosestScoreSelector
from .session import SessionConfig
from .storage.jsonl_storage import JSONLScoreStore, JSONLSnapshotStore
from .trends import TrendConfig

SCORES_FILENAME = "scores.json"
SNAPSHOTS_FILENAME = "snapshots.jsonl"


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    command: str
    catalog: str
    output_dir: str
    owner: str
    k_factor: float
    rounds: int
    seed_item: str | None
    noise: float
    sessions: int
    random_seed: int | None
    kind: str | None
    limit: int
    window_days: float
    top: int
    debug: bool
    log_level: str


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Movie Ranker - Pairwise Preference Ranking"
    )

    # Common arguments
    _ = parser.add_argument(
        "--catalog",
        required=True,
        help="Path to catalog JSON file"
    )
    _ = parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory for scores.json and snapshots.jsonl"
    )
    _ = parser.add_argument(
        "--owner",
        default="guest",
        help="Owner whose scores are ranked (default: guest)"
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Run an interactive comparison session")
    simulate = subparsers.add_parser("simulate", help="Run sessions with a simulated user")
    for sub in (compare, simulate):
        _ = sub.add_argument(
            "--k-factor",
            type=float,
            default=SessionConfig.k_factor,
            help=f"Elo K-factor (default: {SessionConfig.k_factor})"
        )
        _ = sub.add_argument(
            "--rounds",
            type=int,
            default=SessionConfig.max_rounds,
            help=f"Comparisons per session (default: {SessionConfig.max_rounds})"
        )
    _ = compare.add_argument(
        "--seed-item",
        help="Item id to include in the pool even if not marked watched"
    )
    _ = simulate.add_argument(
        "--noise",
        type=float,
        default=0.1,
        help="Noise level for simulated user (0-1, default: 0.1)"
    )
    _ = simulate.add_argument(
        "--sessions",
        type=int,
        default=1,
        help="Number of sessions to run (default: 1)"
    )
    _ = simulate.add_argument(
        "--random-seed",
        type=int,
        help="Random seed for pair selection and simulated choices"
    )

    leaderboard = subparsers.add_parser("leaderboard", help="Show ranked scores")
    movers = subparsers.add_parser("movers", help="Show top movers over a trailing window")
    for sub in (leaderboard, movers):
        _ = sub.add_argument(
            "--kind",
            choices=[kind.value for kind in ItemKind],
            help="Only movies or only shows"
        )
    _ = leaderboard.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum rows (default: 100)"
    )
    _ = movers.add_argument(
        "--window-days",
        type=float,
        default=TrendConfig.window_days,
        help=f"Trailing window in days (default: {TrendConfig.window_days})"
    )
    _ = movers.add_argument(
        "--top",
        type=int,
        default=TrendConfig.top_n,
        help=f"Number of movers (default: {TrendConfig.top_n})"
    )

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        command=ns.command,
        catalog=ns.catalog,
        output_dir=ns.output_dir,
        owner=ns.owner,
        k_factor=getattr(ns, "k_factor", SessionConfig.k_factor),
        rounds=getattr(ns, "rounds", SessionConfig.max_rounds),
        seed_item=getattr(ns, "seed_item", None),
        noise=getattr(ns, "noise", 0.1),
        sessions=getattr(ns, "sessions", 1),
        random_seed=getattr(ns, "random_seed", None),
        kind=getattr(ns, "kind", None),
        limit=getattr(ns, "limit", 100),
        window_days=getattr(ns, "window_days", TrendConfig.window_days),
        top=getattr(ns, "top", TrendConfig.top_n),
        debug=ns.debug,
        log_level=ns.log_level,
    )


def validate_config(args: CLIArgs) -> None:
    """Validate configuration parameters."""
    logger = get_logger("validate_config")

    catalog = Path(args["catalog"])
    if not catalog.is_file():
        logger.error(f"Catalog file does not exist: {catalog}")
        raise ConfigurationError(f"catalog file does not exist: {catalog}")

    if args["sessions"] <= 0:
        raise ConfigurationError(f"sessions must be positive, got {args['sessions']}")

    output_dir = Path(args["output_dir"])
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Output directory: {output_dir}")


def wire_components(args: CLIArgs) -> tuple[JSONCatalog, RankingEngine]:
    """Wire dependency injection components."""
    logger = get_logger("wire_components")

    logger.info("Creating catalog")
    catalog = JSONCatalog(Path(args["catalog"]))

    logger.info("Creating stores")
    output_dir = Path(args["output_dir"])
    score_store = JSONLScoreStore(output_dir / SCORES_FILENAME)
    snapshot_store = JSONLSnapshotStore(output_dir / SNAPSHOTS_FILENAME)

    try:
        config = SessionConfig(k_factor=args["k_factor"], max_rounds=args["rounds"])
        trend_config = TrendConfig(window_days=args["window_days"], top_n=args["top"])
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    engine = RankingEngine(
        catalog=catalog,
        score_store=score_store,
        snapshot_store=snapshot_store,
        selector=ClosestScoreSelector(seed=args["random_seed"]),
        config=config,
        trend_config=trend_config,
    )
    logger.info(f"Configuration: k_factor={config.k_factor}, max_rounds={config.max_rounds}")
    return catalog, engine


def format_summary(summary: SessionSummary) -> str:
    """Render a session summary as a table."""
    if summary.is_empty:
        return "No changes"

    table = PrettyTable()
    table.field_names = ["", "Title", "Change"]
    table.align["Title"] = "l"
    table.align["Change"] = "r"
    for entry in summary.risers:
        table.add_row(["up", entry.item.label, f"+{entry.delta}"])
    for entry in summary.droppers:
        table.add_row(["down", entry.item.label, f"{entry.delta}"])
    return table.get_string()


def format_leaderboard(rows: Sequence[LeaderboardRow]) -> str:
    """Render leaderboard rows as a table."""
    table = PrettyTable()
    table.field_names = ["Rank", "Title", "Kind", "Score"]
    table.align["Rank"] = "r"
    table.align["Title"] = "l"
    table.align["Score"] = "r"
    for row in rows:
        table.add_row([row.rank, row.title or row.item_id, row.kind.value, row.display])
    return table.get_string()


def format_movers(movers: Sequence[Mover], catalog: JSONCatalog) -> str:
    """Render movers as a table, resolving titles from the catalog."""
    table = PrettyTable()
    table.field_names = ["Title", "Kind", "From", "To", "Change"]
    table.align["Title"] = "l"
    table.align["Change"] = "r"
    for mover in movers:
        try:
            title = catalog.get_item(mover.item_id).label
        except KeyError:
            title = mover.item_id
        table.add_row([title, mover.kind.value, f"{mover.early:.0f}", f"{mover.late:.0f}", f"{mover.delta:+.0f}"])
    return table.get_string()


def run_command(args: CLIArgs, catalog: JSONCatalog, engine: RankingEngine) -> None:
    """Run the selected subcommand."""
    owner = args["owner"]
    kind = ItemKind(args["kind"]) if args["kind"] else None

    if args["command"] == "compare":
        seed_item = catalog.get_item(args["seed_item"]) if args["seed_item"] else None
        session = engine.start_session(owner, seed_item=seed_item)
        if session.current_pair is None:
            print("Not enough watched items. Mark more items as watched to start ranking.")
            return
        chooser = PromptChooser(score_of=session.score_of)
        summary = engine.run_session(session, chooser)
        print("\nSession Summary:")
        print(format_summary(summary))

    elif args["command"] == "simulate":
        # Earlier catalog entries are preferred
        items = catalog.list_items()
        ground_truth = {item.item_id: float(len(items) - i) for i, item in enumerate(items)}
        chooser = SimulatedChooser(ground_truth, noise=args["noise"], seed=args["random_seed"])
        for number in range(1, args["sessions"] + 1):
            session = engine.start_session(owner)
            summary = engine.run_session(session, chooser)
            print(f"\nSession {number}:")
            print(format_summary(summary))

    elif args["command"] == "leaderboard":
        rows = engine.leaderboard(owner, kind=kind, limit=args["limit"])
        if not rows:
            print("No rankings yet")
            return
        print(format_leaderboard(rows))

    elif args["command"] == "movers":
        movers = engine.movers(owner, kind=kind)
        if not movers:
            print(f"No movers in the last {args['window_days']:g} days")
            return
        print(format_movers(movers, catalog))

    else:
        raise ConfigurationError(f"Unknown command: {args['command']}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main CLI entry point."""
    try:
        raw_args = parse_args(argv)
        args = args_to_typed(raw_args)

        setup_logging(level=args["log_level"], debug=args["debug"])
        logger = get_logger("main")

        logger.info(f"Starting movie ranker command: {args['command']}")
        validate_config(args)

        catalog, engine = wire_components(args)
        run_command(args, catalog, engine)

    except (ConfigurationError, KeyError) as e:
        logger = get_logger("main")
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}")
        sys.exit(1)
    except PersistenceError as e:
        logger = get_logger("main")
        logger.error(f"Storage error: {e}")
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger = get_logger("main")
        logger.warning("Interrupted by user")
        print("\nInterrupted by user; completed rounds are kept")
        sys.exit(1)


if __name__ == "__main__":
    main()
