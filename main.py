"""Main entry point for the ETA chat assistant."""

import asyncio
import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from fleet_eta.agents.eta_assistant import create_eta_assistant
from fleet_eta.config import configure_logging, settings


console = Console()


async def chat_loop():
    """Run an interactive chat session with the ETA assistant."""

    missing = settings.validate_required()
    if missing:
        console.print(Panel(
            f"[yellow]Missing configuration:[/yellow]\n" +
            "\n".join(f"  • {m}" for m in missing) +
            "\n\nTruck lookups will fail; city-to-city requests still work."
            "\n[dim]Copy .env.example to .env and fill in your API keys.[/dim]",
            title="Configuration Warning",
            border_style="yellow",
        ))

    console.print("\n[bold blue]🚚 Fleet ETA Assistant[/bold blue]\n")
    console.print("[dim]Initializing agent...[/dim]")

    try:
        agent = create_eta_assistant()
    except ValueError as e:
        console.print(f"[red]Failed to create agent: {e}[/red]")
        sys.exit(1)

    console.print("[green]✓ Agent ready![/green]\n")

    console.print(Panel(
        "I'm your dispatch assistant! Ask me things like:\n\n"
        "• When does truck 5051 get to Dallas TX?\n"
        "• Chicago IL to Dallas TX\n"
        "• 5051 to Tulsa OK, then Wichita KS\n\n"
        "[dim]Type 'quit' or 'exit' to end the session.[/dim]",
        title="Welcome",
        border_style="blue",
    ))

    # Create a thread for conversation continuity
    thread = agent.get_new_thread()

    while True:
        try:
            console.print()
            user_input = Prompt.ask("[bold green]You[/bold green]")

            if user_input.lower() in ["quit", "exit", "q"]:
                console.print("\n[dim]Goodbye! Drive safe! 🚚[/dim]\n")
                break

            if not user_input.strip():
                continue

            console.print("\n[bold blue]Agent[/bold blue]:", end=" ")

            async for chunk in agent.run_stream(user_input, thread=thread):
                if chunk.text:
                    console.print(chunk.text, end="")

            console.print()

        except KeyboardInterrupt:
            console.print("\n\n[dim]Session interrupted. Goodbye![/dim]\n")
            break
        except Exception as e:
            console.print(f"\n[red]Error: {e}[/red]")
            console.print("[dim]Please try again.[/dim]")


async def single_query(query: str):
    """Run a single query and print the response."""

    agent = create_eta_assistant()

    console.print(f"\n[bold green]Query:[/bold green] {query}\n")

    response = await agent.run(query)
    console.print(Markdown(response.text))


def main():
    """Main entry point."""
    configure_logging()

    if len(sys.argv) > 1:
        query = " ".join(sys.argv[1:])
        asyncio.run(single_query(query))
    else:
        asyncio.run(chat_loop())


if __name__ == "__main__":
    main()
