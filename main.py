"""Command line driver for the heads-up hold'em engine."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config.settings import Config, load_config, save_config
from holdem.cards import format_cards, parse_cards
from holdem.errors import PokerError
from holdem.game import GameEngine
from holdem.hand_evaluator import HandEvaluator
from holdem.player import ActionType

app = typer.Typer(
    name="holdem",
    help="Heads-up Texas Hold'em rules engine.",
)
console = Console()


def _configure_logging(level: str, log_file: str | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _load(config_path: Optional[Path]) -> Config:
    if config_path is None:
        return Config()
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log hand progress"),
) -> None:
    """Heads-up Texas Hold'em rules engine."""
    if verbose:
        _configure_logging("INFO")


@app.command()
def evaluate(
    cards: list[str] = typer.Argument(..., help="Hole cards then community cards, e.g. A♠ K♠ Q♠ J♠ 10♠"),
) -> None:
    """Evaluate the best hand from two hole cards and up to five community cards."""
    try:
        parsed = parse_cards(cards)
    except PokerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if len(parsed) < 2 or len(parsed) > 7 or len(set(parsed)) != len(parsed):
        console.print("[red]Give 2 hole cards and 0-5 distinct community cards[/red]")
        raise typer.Exit(1)

    hand = HandEvaluator.evaluate(parsed[:2], parsed[2:])

    table = Table(title=f"{format_cards(parsed[:2])} | {format_cards(parsed[2:])}")
    table.add_column("Hand", style="cyan")
    table.add_column("Rank", style="white")
    table.add_column("Primary", style="green")
    table.add_column("Kickers", style="yellow")
    table.add_row(
        hand.describe(),
        f"{hand.rank.name} ({int(hand.rank)})",
        " ".join(str(v) for v in hand.primary_values) or "-",
        " ".join(str(v) for v in hand.kickers) or "-",
    )
    console.print(table)


@app.command()
def run(
    actions: list[str] = typer.Argument(
        ..., help="Actions in order: fold, check, call, bet, raise, allin, bet=<size>, deal"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Play scripted actions through the engine, starting with a fresh hand.

    ``deal`` starts another hand and ``bet=<size>`` sets the bet/raise size.
    """
    config = _load(config_path)
    if seed is not None:
        config.game.seed = seed
    if config_path is not None:
        _configure_logging(config.logging.level, config.logging.log_file)

    engine = GameEngine(config.game)
    try:
        engine.start_new_hand()
        console.print(f"[bold blue]Hand #{engine.hand_number}[/bold blue]")
        for token in actions:
            if token == "deal":
                engine.start_new_hand()
                console.print(f"[bold blue]Hand #{engine.hand_number}[/bold blue]")
            elif token.startswith("bet="):
                size = engine.set_bet_amount(int(token.split("=", 1)[1]))
                console.print(f"[dim]bet size set to {size}[/dim]")
            else:
                console.print(engine.perform_action(ActionType.from_name(token)))
    except (PokerError, ValueError) as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        _print_table(engine)
        raise typer.Exit(1)

    _print_table(engine)


def _print_table(engine: GameEngine) -> None:
    state = engine.snapshot()
    console.print(
        f"Stage: [yellow]{state.stage}[/yellow]  Pot: [yellow]{state.pot}[/yellow]  "
        f"Board: {format_cards(list(state.community_cards)) or '-'}"
    )
    table = Table(title="Stacks")
    table.add_column("Seat", style="dim")
    table.add_column("Player", style="cyan")
    table.add_column("Chips", style="white")
    table.add_column("Bet", style="green")
    table.add_column("Status", style="yellow")
    for p in state.players:
        status = "folded" if p.folded else "all-in" if p.all_in else ""
        name = f"{p.name} (D)" if p.is_dealer else p.name
        table.add_row(str(p.seat), name, str(p.chips), str(p.current_bet), status)
    console.print(table)


@app.command(name="init-config")
def init_config(
    path: Path = typer.Argument(Path("holdem.yaml"), help="Where to write the config"),
) -> None:
    """Write the default configuration as YAML."""
    save_config(Config(), path)
    console.print(f"[green]Wrote {path}[/green]")


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
