from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple

import typer

from peakwindow.config import AppConfig, load_config
from peakwindow.core.floats import FloatPeakDetector
from peakwindow.core.ordering import ByKey, by_length
from peakwindow.core.peak import PeakDetector
from peakwindow.core.stream import brute_force_max, running_max
from peakwindow.utils.logging import setup_logging


logger = logging.getLogger("peakwindow.cli")

app = typer.Typer(add_completion=False)

VALUE_KINDS = ("float", "int", "str-length")


def _parse_value(kind: str, raw: str) -> Any:
    try:
        if kind == "float":
            return float(raw)
        if kind == "int":
            return int(raw)
    except ValueError:
        raise typer.BadParameter(f"{raw!r} is not a valid {kind}")
    return by_length(raw)


def _render(value: Any) -> str:
    if isinstance(value, ByKey):
        return str(value.value)
    return str(value)


def _detector_factory(kind: str) -> Callable[[int], PeakDetector]:
    return FloatPeakDetector if kind == "float" else PeakDetector


def _resolve(
    window: Optional[int], kind: Optional[str], config: Optional[Path]
) -> Tuple[AppConfig, int, str]:
    try:
        cfg = load_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")
    setup_logging(cfg.env.LOG_LEVEL)

    window = cfg.runtime.window_size if window is None else window
    kind = cfg.runtime.value_kind if kind is None else kind
    if kind not in VALUE_KINDS:
        raise typer.BadParameter(f"must be one of {', '.join(VALUE_KINDS)}", param_hint="--kind")
    if window < 1:
        raise typer.BadParameter("must be >= 1", param_hint="--window")
    return cfg, window, kind


def _emit(kind: str, window: int, values: Iterable[Any]) -> int:
    count = 0
    for peak in running_max(values, window, _detector_factory(kind)):
        typer.echo(_render(peak))
        count += 1
    logger.info("stream done", extra={"values": count, "window": window, "kind": kind})
    return count


@app.command()
def run(
    values: List[str] = typer.Argument(..., help="Values in arrival order"),
    window: Optional[int] = typer.Option(None, "--window", "-w", help="Number of most recent values in the window"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Value kind: float, int or str-length"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml"),
) -> None:
    """Print the window max after each of VALUES."""
    _, window, kind = _resolve(window, kind, config)
    # parse everything first so a bad value fails before any output
    parsed = [_parse_value(kind, raw) for raw in values]
    _emit(kind, window, parsed)


@app.command()
def stream(
    input_file: typer.FileText = typer.Option("-", "--input", "-i", help="File with one value per line, '-' for stdin"),
    window: Optional[int] = typer.Option(None, "--window", "-w", help="Number of most recent values in the window"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Value kind: float, int or str-length"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml"),
) -> None:
    """Read values line by line and print the running window max."""
    _, window, kind = _resolve(window, kind, config)
    lines = (line.strip() for line in input_file)
    _emit(kind, window, (_parse_value(kind, line) for line in lines if line))


@app.command()
def verify(
    window: Optional[int] = typer.Option(None, "--window", "-w", help="Number of most recent values in the window"),
    count: int = typer.Option(1000, "--count", "-n", min=0, help="Number of random values"),
    seed: int = typer.Option(0, "--seed", help="Random seed"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml"),
) -> None:
    """Check the tracker against a brute force rescan on random values."""
    _, window, _ = _resolve(window, "float", config)
    rng = random.Random(seed)
    # Coarse values so ties and repeated maxima occur
    values = [round(rng.uniform(0.0, 10.0), 1) for _ in range(count)]
    fast = running_max(values, window, FloatPeakDetector)
    slow = brute_force_max(values, window)
    for step, (got, want) in enumerate(zip(fast, slow)):
        if got != want:
            logger.error("mismatch", extra={"step": step, "got": got, "want": want})
            typer.echo(f"mismatch at step {step}: got {got}, want {want}", err=True)
            raise typer.Exit(code=1)
    typer.echo(f"ok: {count} values, window {window}")


if __name__ == "__main__":
    app()
