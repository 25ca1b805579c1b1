"""Command-line entry point: screen the universe and print recommendations."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from swingscreener.batch.scanner import build_screener
from swingscreener.batch.types import BatchResult
from swingscreener.core.config import Settings, load_settings
from swingscreener.core.exceptions import ConfigError
from swingscreener.core.logger import logging_from

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = Path("config/default.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swingscreener",
        description="Screen NIFTY 50 stocks for swing-trading setups.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--preset", help="Named criteria/scoring preset")
    parser.add_argument(
        "--symbols",
        help="Comma-separated symbols to screen instead of the configured universe",
    )
    parser.add_argument("--top", type=int, help="Number of recommendations to keep")
    parser.add_argument(
        "--provider",
        choices=["synthetic", "yfinance"],
        help="Market data provider",
    )
    parser.add_argument("--json", action="store_true", help="Print the batch result as JSON")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Load settings from file (flag, env or default path) and apply CLI overrides.

    Raises:
        ConfigError: If the file or an override is invalid.
    """
    config_path = args.config
    if config_path is None and os.environ.get("SWINGSCREENER_CONFIG"):
        config_path = Path(os.environ["SWINGSCREENER_CONFIG"])
    if config_path is None and _DEFAULT_CONFIG.exists():
        config_path = _DEFAULT_CONFIG

    settings = load_settings(config_path) if config_path else Settings()

    if args.preset:
        settings = settings.with_preset(args.preset)

    updates: dict = {}
    if args.provider:
        updates["data"] = settings.data.model_copy(update={"provider": args.provider})
    if args.top is not None:
        if args.top <= 0:
            raise ConfigError("--top must be positive")
        updates["batch"] = settings.batch.model_copy(update={"top_n": args.top})
    if args.symbols:
        updates["symbols"] = [s.strip().upper() for s in args.symbols.split(",") if s.strip()]
    if updates:
        settings = settings.model_copy(update=updates)
    return settings


def format_result(result: BatchResult) -> str:
    lines = [
        f"Screened {result.symbols_screened}/{result.symbols_attempted} symbols, "
        f"{result.symbols_passed} passed, {len(result.errors)} errors"
        + (" (timed out)" if result.timed_out else ""),
    ]
    if not result.recommendations:
        lines.append("No recommendations.")
    else:
        lines.append("")
        lines.extend(_recommendation_lines(result))

    if result.sectors:
        lines.append("")
        lines.append("Sectors:")
        for name, summary in sorted(result.sectors.items()):
            lines.append(
                f"  {name:<20}{summary.count:>3} screened  avg {summary.average_score:>5.1f}  "
                f"top {summary.top_symbol:<12}{summary.sentiment}"
            )
    return "\n".join(lines)


def _recommendation_lines(result: BatchResult) -> list[str]:
    lines = [
        f"{'#':>2}  {'Symbol':<12}{'Score':>6}  {'Price':>10}  {'Target':>10}  {'Stop':>10}  {'R/R':>5}"
    ]
    for rank, rec in enumerate(result.recommendations, start=1):
        lines.append(
            f"{rank:>2}  {rec.symbol:<12}{rec.confidence_score:>6.0f}  "
            f"{rec.current_price:>10.2f}  {rec.target:>10.2f}  {rec.stop_loss:>10.2f}  "
            f"{rec.risk_reward_ratio:>5.2f}"
        )
        lines.append(f"    {rec.reasoning}")
        if rec.patterns:
            lines.append(f"    Patterns: {', '.join(rec.patterns)}")
    return lines


async def run(settings: Settings) -> BatchResult:
    screener = build_screener(settings)
    wait = False
    try:
        result = await screener.screen_universe()
        wait = not result.timed_out
        return result
    finally:
        screener.close(wait=wait)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except (ConfigError, FileNotFoundError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    logging_from(settings.system)
    logger.debug(
        "Provider=%s top_n=%d pass_threshold=%.0f",
        settings.data.provider, settings.batch.top_n, settings.scoring.pass_threshold,
    )
    result = asyncio.run(run(settings))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
