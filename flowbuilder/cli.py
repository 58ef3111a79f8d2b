"""Command-line interface for flowbuilder."""

import sys
from pathlib import Path

import click

from .config import configure_logging, get_settings
from .editor import FlowEditor
from .errors import DocumentLoadError, FlowNotFoundError, FlowValidationError
from .graph.store import GraphStore
from .output.formatter import format_graph, format_validation_result
from .schema.codec import save_document
from .validators.runner import validate_document_file


def _echo_document_error(e: Exception) -> None:
    if isinstance(e, DocumentLoadError):
        click.echo(f"Error loading file: {e}", err=True)
        return
    click.echo(f"Document error: {e}", err=True)
    for err in getattr(e, "errors", []):
        click.echo(f"  - {err['loc']}: {err['msg']}", err=True)


def _open(flow_file: str) -> FlowEditor:
    """Load a flow file into an editor, exiting with 2 on failure."""
    editor = FlowEditor(store=GraphStore(), settings=get_settings())
    try:
        editor.import_file(flow_file)
    except (DocumentLoadError, FlowValidationError) as e:
        _echo_document_error(e)
        sys.exit(2)
    return editor


def _save(editor: FlowEditor, flow_file: str) -> None:
    try:
        save_document(editor.snapshot(), flow_file, indent=editor.settings.indent)
    except DocumentLoadError as e:
        _echo_document_error(e)
        sys.exit(2)


def _number(value: float) -> int | float:
    return int(value) if value.is_integer() else value


@click.group()
@click.version_option(package_name="flowbuilder")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output")
def main(verbose: bool):
    """flowbuilder: build node-and-edge flow diagrams."""
    configure_logging(get_settings(), verbose)


@main.command()
@click.argument("flow_file", type=click.Path())
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file")
def new(flow_file: str, force: bool):
    """Create FLOW_FILE holding the single Start node."""
    if Path(flow_file).exists() and not force:
        click.echo(f"Error: {flow_file} already exists (use --force)", err=True)
        sys.exit(2)

    editor = FlowEditor(store=GraphStore(), settings=get_settings())
    _save(editor, flow_file)
    click.echo(f"Created: {flow_file}")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def show(flow_file: str, output_format: str):
    """List the nodes and edges of FLOW_FILE."""
    editor = _open(flow_file)
    click.echo(format_graph(editor.snapshot(), output_format))  # type: ignore


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.option("--label", default="", help="Node label (required)")
@click.option("--description", default="", help="Node description")
def add(flow_file: str, label: str, description: str):
    """Add a node below the existing ones.

    Exit codes:
      0 - Node added
      1 - Label missing
      2 - File or document error
    """
    editor = _open(flow_file)
    editor.add()
    editor.session.update_buffer(label=label, description=description)

    try:
        node_id = editor.session.save()
    except FlowValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _save(editor, flow_file)
    click.echo(node_id)


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.argument("node_id")
@click.option("--label", default=None, help="New label")
@click.option("--description", default=None, help="New description")
def edit(flow_file: str, node_id: str, label: str | None, description: str | None):
    """Change the label or description of NODE_ID."""
    editor = _open(flow_file)

    try:
        editor.node_activated(node_id)
        editor.session.update_buffer(label=label, description=description)
        editor.session.save()
    except FlowNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except FlowValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _save(editor, flow_file)
    click.echo(f"Updated: {node_id}")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.argument("node_id")
def delete(flow_file: str, node_id: str):
    """Delete NODE_ID together with its edges."""
    editor = _open(flow_file)
    edge_count = len(editor.store.edges_for_node(node_id))

    try:
        editor.node_activated(node_id)
        editor.session.delete()
    except FlowNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _save(editor, flow_file)
    click.echo(f"Deleted: {node_id} ({edge_count} edge(s) removed)")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.argument("source")
@click.argument("target")
@click.option("--source-handle", default=None, help="Handle on the source node")
@click.option("--target-handle", default=None, help="Handle on the target node")
def connect(
    flow_file: str,
    source: str,
    target: str,
    source_handle: str | None,
    target_handle: str | None,
):
    """Connect SOURCE to TARGET with an edge."""
    editor = _open(flow_file)

    for node_id in (source, target):
        if not editor.store.has_node(node_id):
            click.echo(f"Error: Node not found: {node_id}", err=True)
            sys.exit(1)

    edge_id = editor.apply_changes([
        {
            "type": "connect",
            "source": source,
            "target": target,
            "sourceHandle": source_handle,
            "targetHandle": target_handle,
        }
    ])[0]

    _save(editor, flow_file)
    click.echo(edge_id)


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.argument("edge_id")
def disconnect(flow_file: str, edge_id: str):
    """Remove the edge EDGE_ID."""
    editor = _open(flow_file)

    try:
        editor.store.disconnect_edge(edge_id)
    except FlowNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _save(editor, flow_file)
    click.echo(f"Disconnected: {edge_id}")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.argument("node_id")
@click.argument("x", type=float)
@click.argument("y", type=float)
def move(flow_file: str, node_id: str, x: float, y: float):
    """Move NODE_ID to canvas position X, Y."""
    editor = _open(flow_file)

    try:
        editor.apply_changes([
            {"type": "position", "id": node_id, "x": _number(x), "y": _number(y)}
        ])
    except FlowNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _save(editor, flow_file)
    click.echo(f"Moved: {node_id}")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
def arrange(flow_file: str):
    """Stack all nodes of FLOW_FILE top-down."""
    editor = _open(flow_file)
    editor.auto_arrange()
    _save(editor, flow_file)
    click.echo(f"Arranged {len(editor.store)} node(s)")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default=None,
    help="Document format (defaults to the export_format setting)",
)
@click.option(
    "--output-dir",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory to write the exported flow file to",
)
def export(flow_file: str, output_format: str | None, output_dir: str):
    """Export FLOW_FILE as flow.json (or flow.yaml)."""
    editor = _open(flow_file)
    filename, text = editor.export(output_format)  # type: ignore

    file_path = Path(output_dir) / filename
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(text, encoding="utf-8")
    except OSError as e:
        _echo_document_error(
            DocumentLoadError(f"Cannot write file: {e}", str(file_path))
        )
        sys.exit(2)
    click.echo(f"Exported: {file_path}")


@main.command()
@click.argument("flow_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def validate(flow_file: str, output_format: str):
    """Check FLOW_FILE for duplicate ids, dangling edges and empty labels.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or document error
    """
    try:
        result = validate_document_file(flow_file)
    except (DocumentLoadError, FlowValidationError) as e:
        _echo_document_error(e)
        sys.exit(2)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
