"""Main CLI entry point."""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

from skillmatch.cli.runner import (
    display_comparison,
    display_models,
    display_outcome,
    display_quote,
    display_validation,
    load_settings,
    run_compare,
    run_evaluate,
    run_validate,
)
from skillmatch.evaluation.pricing import quote_challenge_cost
from skillmatch.exceptions import SkillMatchError
from skillmatch.models.catalog import AIModel, PricingTier

MODEL_CHOICES = [model.value for model in AIModel]
TIER_CHOICES = [tier.value for tier in PricingTier]


def setup_logging(verbose: bool) -> None:
    """Setup loguru with Rich handler.

    Args:
        verbose: Enable debug logging if True
    """
    logger.remove()

    log_level = "DEBUG" if verbose else "INFO"
    logger.add(
        RichHandler(console=Console(stderr=True), rich_tracebacks=True),
        format="{message}",
        level=log_level,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="skillmatch",
        description="Evaluate challenge submissions with multi-provider AI scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="Path to settings YAML (default: environment / .env)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("models", help="List AI models and pricing tiers")

    estimate_parser = subparsers.add_parser(
        "estimate",
        help="Estimate evaluation cost for a challenge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skillmatch estimate --tier premium --submissions 40
  skillmatch estimate --model gpt-4o --submissions 10
        """,
    )
    estimate_parser.add_argument("--tier", default=PricingTier.FREE.value, choices=TIER_CHOICES)
    estimate_parser.add_argument("--model", choices=MODEL_CHOICES, help="Model for the custom tier")
    estimate_parser.add_argument(
        "--submissions",
        type=int,
        default=1,
        help="Expected number of submissions (default: 1)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a submission YAML")
    validate_parser.add_argument("submission", help="Path to submission YAML file")

    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Validate and score a submission YAML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skillmatch evaluate submission.yaml
  skillmatch evaluate submission.yaml --model llama-3.1-70b --audit-dir audit/
        """,
    )
    evaluate_parser.add_argument("submission", help="Path to submission YAML file")
    evaluate_parser.add_argument("--tier", choices=TIER_CHOICES, help="Pricing tier override")
    evaluate_parser.add_argument("--model", choices=MODEL_CHOICES, help="Custom model override")
    evaluate_parser.add_argument("--audit-dir", help="Write a JSONL audit log to this directory")

    compare_parser = subparsers.add_parser("compare", help="Score a submission with several models")
    compare_parser.add_argument("submission", help="Path to submission YAML file")
    compare_parser.add_argument(
        "--models",
        nargs="+",
        required=True,
        choices=MODEL_CHOICES,
        help="Models to compare",
    )

    return parser


async def async_main(argv: Optional[Sequence[str]] = None) -> int:
    """Async main function.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    load_dotenv()

    console = Console()

    try:
        if args.command == "models":
            display_models(console)
            return 0

        if args.command == "estimate":
            quote = quote_challenge_cost(args.tier, args.model, args.submissions)
            display_quote(quote, console)
            return 0

        settings = load_settings(args.config)

        if args.command == "validate":
            result = await run_validate(args.submission, settings)
            display_validation(result, console)

        elif args.command == "evaluate":
            logger.info(f"Evaluating submission from: {args.submission}")
            outcome = await run_evaluate(
                args.submission,
                settings,
                tier=args.tier,
                model=args.model,
                audit_dir=args.audit_dir,
            )
            display_outcome(outcome, console)

        elif args.command == "compare":
            comparison = await run_compare(args.submission, args.models, settings)
            display_comparison(comparison, console)

        return 0

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        return 1

    except KeyError as e:
        console.print(f"[red]Error:[/red] Missing section in submission file: {e}", style="bold red")
        return 1

    except SkillMatchError as e:
        console.print(f"[red]Evaluation Error:[/red] {e}", style="bold red")
        return 1

    except Exception as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        logger.exception("Command failed")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    try:
        exit_code = asyncio.run(async_main(argv))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console = Console()
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
