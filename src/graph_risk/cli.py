"""CLI entry point for graph-risk."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click
import yaml
from pydantic import BaseModel, ValidationError

from graph_risk import __version__
from graph_risk.analysis import (
    RiskPolicy,
    classify_nodes,
    compute_graph_metrics,
    detect_cycles,
    extract_critical_path,
    layer_graph,
)
from graph_risk.analysis.layering import Direction
from graph_risk.config import load_policy
from graph_risk.errors import InvalidArgument
from graph_risk.ir.graph import CodeGraph
from graph_risk.schemas.document import GraphDocument

log = logging.getLogger(__name__)

_graph_arg = click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
_output_opt = click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON here instead of stdout.",
)
_edge_kind_opt = click.option(
    "--edge-kind", "edge_kinds", multiple=True,
    help="Only follow edges of this kind (repeatable).",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(verbose: bool) -> None:
    """Layer, score and trace code-relationship graphs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


@main.command()
@_graph_arg
@click.option("-r", "--root", "roots", multiple=True, required=True, help="Root node id (repeatable).")
@click.option(
    "-d", "--direction",
    type=click.Choice([d.value for d in Direction]),
    default=Direction.FORWARD.value,
    show_default=True,
)
@click.option("--max-depth", type=int, default=None, help="Drop nodes deeper than this.")
@_edge_kind_opt
@_output_opt
def layout(
    graph_file: Path,
    roots: tuple[str, ...],
    direction: str,
    max_depth: int | None,
    edge_kinds: tuple[str, ...],
    output: Path | None,
) -> None:
    """Assign depth and in-level order to nodes reachable from the roots."""
    graph = _load_graph(graph_file)
    with _engine_errors():
        result = layer_graph(
            graph, roots, direction,
            max_depth=max_depth, edge_kinds=set(edge_kinds) or None,
        )
    _emit(result, output)


@main.command()
@_graph_arg
@click.option(
    "--policy", "policy_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML/JSON risk policy file.",
)
@click.option("--cap", "caps", multiple=True, help="Metric cap as NAME=VALUE (repeatable).")
@_output_opt
def risk(
    graph_file: Path,
    policy_file: Path | None,
    caps: tuple[str, ...],
    output: Path | None,
) -> None:
    """Score every node from its metric attributes."""
    graph = _load_graph(graph_file)
    if policy_file is not None and caps:
        raise click.UsageError("give either --policy or --cap, not both")
    with _engine_errors():
        if policy_file is not None:
            policy = load_policy(policy_file)
        elif caps:
            policy = RiskPolicy.from_caps({
                name: _parse_float(value, "--cap") for name, value in _pairs(caps, "--cap")
            })
        else:
            raise click.UsageError("give --policy or at least one --cap")
        report = classify_nodes(graph, policy)
    log.info("Scored %d nodes", len(report.assessments))
    _emit(report, output)


@main.command("critical-path")
@_graph_arg
@click.option(
    "--flag", "flags", multiple=True, required=True,
    help="Flag nodes whose attribute KEY equals VALUE (repeatable, any match).",
)
@_edge_kind_opt
@_output_opt
def critical_path(
    graph_file: Path,
    flags: tuple[str, ...],
    edge_kinds: tuple[str, ...],
    output: Path | None,
) -> None:
    """Collect blockers and dependents of flagged nodes."""
    graph = _load_graph(graph_file)
    wanted = _pairs(flags, "--flag")

    def is_flagged(node) -> bool:
        return any(k in node.attributes and str(node.attributes[k]) == v for k, v in wanted)

    result = extract_critical_path(graph, is_flagged, edge_kinds=set(edge_kinds) or None)
    _emit(result, output)


@main.command()
@_graph_arg
@click.option("--start", default=None, help="Only search from this node.")
@_edge_kind_opt
@_output_opt
def cycles(
    graph_file: Path,
    start: str | None,
    edge_kinds: tuple[str, ...],
    output: Path | None,
) -> None:
    """List call/dependency cycles."""
    graph = _load_graph(graph_file)
    found = detect_cycles(graph, start=start, edge_kinds=set(edge_kinds) or None)
    _emit({"cycles": found}, output)


@main.command()
@_graph_arg
@_edge_kind_opt
@_output_opt
def metrics(graph_file: Path, edge_kinds: tuple[str, ...], output: Path | None) -> None:
    """Fan-in, fan-out and coupling for the whole graph."""
    graph = _load_graph(graph_file)
    _emit(compute_graph_metrics(graph, edge_kinds=set(edge_kinds) or None), output)


# ── Helpers ───────────────────────────────────────────────────────────────


@contextmanager
def _engine_errors() -> Iterator[None]:
    """Turn bad arguments and bad policy files into a clean CLI failure."""
    try:
        yield
    except (InvalidArgument, ValidationError, yaml.YAMLError) as exc:
        raise click.ClickException(str(exc)) from exc


def _load_graph(path: Path) -> CodeGraph:
    try:
        doc = GraphDocument.model_validate_json(path.read_text())
    except ValidationError as exc:
        raise click.ClickException(f"{path}: not a valid graph document\n{exc}") from exc
    graph = doc.to_graph()
    log.info("Loaded %s: %d nodes, %d edges", path, len(graph), len(graph.all_edges()))
    return graph


def _pairs(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=option)
        pairs.append((key, value))
    return pairs


def _parse_float(value: str, option: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise click.BadParameter(f"not a number: {value!r}", param_hint=option) from None


def _emit(result: BaseModel | dict, output: Path | None) -> None:
    data = result.model_dump(mode="json") if isinstance(result, BaseModel) else result
    text = json.dumps(data, indent=2)
    if output:
        output.write_text(text)
        click.echo(f"JSON written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
