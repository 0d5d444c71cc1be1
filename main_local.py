"""Deterministic entry point: free text in, ETA summary out.

No LLM involved - the query parser plus the ETA pipeline.

Usage:
    python main_local.py                                # Interactive mode
    python main_local.py "ETA 5051 to Dallas TX"        # Single query mode
    python main_local.py --json "Chicago IL to Dallas TX"
    python main_local.py --gpx trip.gpx "5051 Tulsa OK"
"""

import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from fleet_eta.config import configure_logging, settings
from fleet_eta.models import EtaRequest
from fleet_eta.pipeline import EtaPipeline, EtaResult
from fleet_eta.utils import create_itinerary_gpx, save_gpx_file


console = Console()


async def compute_eta(user_input: str) -> EtaResult:
    """Run the pipeline for one free-text request."""
    pipeline = EtaPipeline.from_settings(settings, show_progress=True)
    return await pipeline.execute(EtaRequest(query=user_input))


def show_result(result: EtaResult, as_json: bool = False, gpx_path: str | None = None) -> None:
    console.print()
    if as_json:
        console.print_json(json.dumps(result.to_payload()))
    else:
        console.print(Markdown(result.format_summary()))

    if gpx_path and result.itinerary is not None:
        save_gpx_file(create_itinerary_gpx(result.itinerary), gpx_path)
        console.print(f"[green]✓[/green] GPX saved to {gpx_path}")


async def interactive_mode(as_json: bool = False):
    """Run interactive mode."""

    console.print("\n[bold blue]🚚 Fleet ETA[/bold blue]\n")

    console.print(Panel(
        "Ask when a truck (or a trip) gets where it's going.\n\n"
        "[bold]How to use:[/bold]\n"
        "  • 'ETA 5051 to Dallas TX'\n"
        "  • '5051 oklahoma city ok'\n"
        "  • 'Chicago IL to Dallas TX'\n\n"
        "[dim]Type 'quit' to exit.[/dim]",
        title="Welcome",
        border_style="blue",
    ))

    while True:
        try:
            console.print()
            user_input = Prompt.ask("[bold green]You[/bold green]")

            if user_input.lower() in ["quit", "exit", "q"]:
                console.print("\n[dim]Goodbye! Drive safe! 🚚[/dim]\n")
                break

            if not user_input.strip():
                continue

            result = await compute_eta(user_input)
            show_result(result, as_json=as_json)

        except KeyboardInterrupt:
            console.print("\n\n[dim]Session interrupted. Goodbye![/dim]\n")
            break


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Truck and city-to-city ETA calculator")
    parser.add_argument("query", nargs="*", help="Free-text request; omit for interactive mode")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    parser.add_argument("--gpx", metavar="PATH", help="Also save the itinerary as a GPX file")
    args = parser.parse_args()

    configure_logging()

    missing = settings.validate_required()
    if missing:
        console.print(
            f"[yellow]Missing configuration: {', '.join(missing)} - "
            f"truck lookups will fail.[/yellow]"
        )

    if args.query:
        result = asyncio.run(compute_eta(" ".join(args.query)))
        show_result(result, as_json=args.json, gpx_path=args.gpx)
        sys.exit(0 if result.success else 1)
    else:
        asyncio.run(interactive_mode(as_json=args.json))


if __name__ == "__main__":
    main()
