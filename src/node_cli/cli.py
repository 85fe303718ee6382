"""
Node command-line interface.

Each subcommand parses its flags into a concrete command payload, wraps
it in a ``Subcommand`` selector and hands it to the ``Runner``, which
resolves the node configuration through the shared contract. What happens
next is decided by the run handler registered for that subcommand.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from node_cli import __version__
from node_cli.commands import (
    BuildSpecCmd,
    CheckBlockCmd,
    ExportBlocksCmd,
    ImportBlocksCmd,
    PurgeChainCmd,
    RevertCmd,
)
from node_cli.config_types import TracingReceiver, WasmExecutionMethod
from node_cli.descriptor import NodeCLI
from node_cli.exceptions import NodeCLIError
from node_cli.params import (
    DEFAULT_STATE_CACHE_SIZE,
    DatabaseParams,
    ExecutionStrategiesParams,
    ImportParams,
    NodeKeyParams,
    PruningParams,
    SharedParams,
)
from node_cli.services.runner import NodeConfiguration, Runner
from node_cli.subcommand import Subcommand, SubcommandKind
from node_cli.utils.config import NodeDefaults, load_defaults

# Ensure .env vars are loaded before settings are read
load_dotenv()

logger = logging.getLogger(__name__)

RunHandler = Callable[[Subcommand, NodeConfiguration], Any]

app = typer.Typer(help="Blockchain node command-line interface")
console = Console()

node_descriptor = NodeCLI(impl_name="Node", impl_version=__version__, executable_name="node")

_run_handlers: Dict[SubcommandKind, RunHandler] = {}


def register_run_handler(kind: SubcommandKind) -> Callable[[RunHandler], RunHandler]:
    """Register the function that runs ``kind`` once its configuration is resolved."""

    def decorator(handler: RunHandler) -> RunHandler:
        _run_handlers[kind] = handler
        return handler

    return decorator


def show_configuration(subcommand: Subcommand, config: NodeConfiguration) -> None:
    """Default run handler: print the resolved configuration."""
    table = Table(title=f"{subcommand.kind.value}: resolved configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    strategies = config.execution_strategies
    rows = [
        ("Chain", f"{config.chain_spec.name} ({config.chain_spec.id})"),
        ("Development mode", str(config.is_dev)),
        ("Roles", str(config.roles.name)),
        ("Base path", str(config.base_path)),
        ("Database", str(config.database.path)),
        ("Database cache (MiB)", str(config.database.cache_size or "default")),
        ("Pruning", str(config.pruning)),
        ("State cache (bytes)", str(config.state_cache_size)),
        ("Wasm method", config.wasm_method.value),
        (
            "Execution",
            f"syncing={strategies.syncing.value} "
            f"importing={strategies.importing.value} "
            f"block_construction={strategies.block_construction.value} "
            f"offchain_worker={strategies.offchain_worker.value} "
            f"other={strategies.other.value}",
        ),
        ("Tracing", f"{config.tracing_receiver.value} {config.tracing_targets or ''}".strip()),
        ("Node key", repr(config.node_key)),
    ]
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)


@register_run_handler(SubcommandKind.BUILD_SPEC)
def _output_spec(subcommand: Subcommand, config: NodeConfiguration) -> None:
    cmd = subcommand.command
    spec = config.chain_spec
    if cmd.disable_default_bootnode:
        spec = type(spec)(
            name=spec.name,
            id=spec.id,
            chain_type=spec.chain_type,
            boot_nodes=[],
            genesis=spec.genesis,
        )
    logger.info("Building chain spec")
    typer.echo(spec.to_json(raw=cmd.raw))


@register_run_handler(SubcommandKind.PURGE_CHAIN)
def _purge_chain(subcommand: Subcommand, config: NodeConfiguration) -> None:
    db_path = Path(config.database.path)

    if not subcommand.command.yes:
        confirm = typer.confirm(f"Are you sure to remove {db_path}?")
        if not confirm:
            console.print("[yellow]Aborted.[/yellow]")
            raise typer.Exit(0)

    if not db_path.exists():
        console.print(f"[yellow]⚠️  {db_path} did not exist.[/yellow]")
        return

    shutil.rmtree(db_path)
    console.print(f"[green]✅ {db_path} removed.[/green]")


def _execute(ctx: typer.Context, build: Callable[[NodeDefaults], Any]) -> None:
    """Build the command, resolve configuration and dispatch to its run handler."""
    options = ctx.obj or {}
    try:
        defaults = load_defaults(options.get("config"), options.get("environment"))
        subcommand = Subcommand(build(defaults))
        handler = _run_handlers.get(subcommand.kind, show_configuration)
        Runner(node_descriptor, subcommand).run(handler)
    except NodeCLIError as e:
        console.print(f"[red]❌ {ctx.info_name} failed: {e}[/red]")
        raise typer.Exit(1)


def _pick(value, default):
    return value if value is not None else default


def _shared(defaults: NodeDefaults, chain, dev, base_path, log) -> SharedParams:
    return SharedParams(
        chain=_pick(chain, defaults.chain),
        dev=dev or defaults.dev,
        base_path=_pick(base_path, defaults.base_path),
        log=_pick(log, defaults.log),
    )


def _pruning(defaults: NodeDefaults, pruning, unsafe_pruning) -> PruningParams:
    return PruningParams(
        pruning=_pick(pruning, defaults.pruning),
        unsafe_pruning=unsafe_pruning or defaults.unsafe_pruning,
    )


def _import(
    defaults: NodeDefaults,
    pruning,
    unsafe_pruning,
    database_cache_size,
    state_cache_size,
    wasm_method,
    execution,
    tracing_targets,
    tracing_receiver,
    execution_contexts: Optional[Dict[str, Optional[str]]] = None,
) -> ImportParams:
    execution = _pick(execution, defaults.execution)
    # Contexts left unset keep their built-in default
    per_context = {
        name: value for name, value in (execution_contexts or {}).items() if value is not None
    }
    return ImportParams(
        pruning_params=_pruning(defaults, pruning, unsafe_pruning),
        database_params=DatabaseParams(
            database_cache_size=_pick(database_cache_size, defaults.database_cache_size)
        ),
        wasm_method=(
            _pick(wasm_method, defaults.wasm_method)
            or WasmExecutionMethod.INTERPRETED.value
        ),
        execution_strategies=ExecutionStrategiesParams(execution=execution, **per_context),
        state_cache_size=_pick(
            state_cache_size, _pick(defaults.state_cache_size, DEFAULT_STATE_CACHE_SIZE)
        ),
        tracing_targets=_pick(tracing_targets, defaults.tracing_targets),
        tracing_receiver=(
            _pick(tracing_receiver, defaults.tracing_receiver)
            or TracingReceiver.LOG.value
        ),
    )


# Options shared by every subcommand
CHAIN_OPTION = typer.Option(None, "--chain", help="Chain spec: dev, local or a path")
DEV_OPTION = typer.Option(False, "--dev", help="Run in development mode")
BASE_PATH_OPTION = typer.Option(None, "--base-path", "-d", help="Custom base path")
LOG_OPTION = typer.Option(
    None, "--log", "-l", help="Log filter, e.g. 'info,sync=debug'"
)
PRUNING_OPTION = typer.Option(
    None, "--pruning", help="Blocks of state to keep, or 'archive'"
)
UNSAFE_PRUNING_OPTION = typer.Option(
    False, "--unsafe-pruning", help="Allow state pruning on an authority node"
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML file with default flag values"
    ),
    environment: Optional[str] = typer.Option(
        None, "--env", "-e", help="Environment block of the config file to apply"
    ),
):
    """Blockchain node command-line interface"""
    ctx.obj = {"config": config, "environment": environment}


@app.command("build-spec")
def build_spec(
    ctx: typer.Context,
    raw: bool = typer.Option(False, "--raw", help="Force raw genesis storage output"),
    disable_default_bootnode: bool = typer.Option(
        False,
        "--disable-default-bootnode",
        help="Do not add this node as a boot node of the spec",
    ),
    node_key: Optional[str] = typer.Option(
        None, "--node-key", help="Hex-encoded secret key of the network identity"
    ),
    node_key_type: str = typer.Option("ed25519", "--node-key-type", help="Key type"),
    node_key_file: Optional[Path] = typer.Option(
        None, "--node-key-file", help="File holding the network identity secret"
    ),
    chain: Optional[str] = CHAIN_OPTION,
    dev: bool = DEV_OPTION,
    base_path: Optional[Path] = BASE_PATH_OPTION,
    log: Optional[str] = LOG_OPTION,
):
    """Build a spec.json file, outputs to stdout"""
    _execute(
        ctx,
        lambda d: BuildSpecCmd(
            raw=raw,
            disable_default_bootnode=disable_default_bootnode,
            shared_opts=_shared(d, chain, dev, base_path, log),
            node_key_opts=NodeKeyParams(
                node_key=node_key,
                node_key_type=node_key_type,
                node_key_file=_pick(node_key_file, d.node_key_file),
            ),
        ),
    )


@app.command("export-blocks")
def export_blocks(
    ctx: typer.Context,
    output: Optional[Path] = typer.Argument(None, help="Output file (stdout if omitted)"),
    from_block: int = typer.Option(1, "--from", help="First block to export"),
    to_block: Optional[int] = typer.Option(None, "--to", help="Last block to export"),
    binary: bool = typer.Option(False, "--binary", help="Use binary output"),
    pruning: Optional[str] = PRUNING_OPTION,
    unsafe_pruning: bool = UNSAFE_PRUNING_OPTION,
    chain: Optional[str] = CHAIN_OPTION,
    dev: bool = DEV_OPTION,
    base_path: Optional[Path] = BASE_PATH_OPTION,
    log: Optional[str] = LOG_OPTION,
):
    """Export blocks to a file"""
    _execute(
        ctx,
        lambda d: ExportBlocksCmd(
            output=output,
            from_block=from_block,
            to_block=to_block,
            binary=binary,
            shared_opts=_shared(d, chain, dev, base_path, log),
            pruning_opts=_pruning(d, pruning, unsafe_pruning),
        ),
    )


def _import_options_command(name: str, doc: str, factory):
    """Register a subcommand that takes the full set of import flags."""

    @app.command(name, help=doc)
    def command(
        ctx: typer.Context,
        input: Optional[str] = typer.Argument(None, help="Input file or block id"),
        default_heap_pages: Optional[int] = typer.Option(
            None, "--default-heap-pages", help="Default number of 64KB heap pages"
        ),
        binary: bool = typer.Option(False, "--binary", help="Binary input"),
        pruning: Optional[str] = PRUNING_OPTION,
        unsafe_pruning: bool = UNSAFE_PRUNING_OPTION,
        database_cache_size: Optional[int] = typer.Option(
            None, "--db-cache", help="Database cache size in MiB"
        ),
        state_cache_size: Optional[int] = typer.Option(
            None, "--state-cache-size", help="State cache size in bytes"
        ),
        wasm_method: Optional[str] = typer.Option(
            None, "--wasm-execution", help="interpreted or compiled"
        ),
        execution: Optional[str] = typer.Option(
            None,
            "--execution",
            help="Strategy for all contexts: native, wasm, both, native-else-wasm",
        ),
        execution_syncing: Optional[str] = typer.Option(
            None, "--execution-syncing", help="Strategy when syncing the chain"
        ),
        execution_import_block: Optional[str] = typer.Option(
            None, "--execution-import-block", help="Strategy when importing blocks"
        ),
        execution_block_construction: Optional[str] = typer.Option(
            None,
            "--execution-block-construction",
            help="Strategy when constructing blocks",
        ),
        execution_offchain_worker: Optional[str] = typer.Option(
            None, "--execution-offchain-worker", help="Strategy for offchain workers"
        ),
        execution_other: Optional[str] = typer.Option(
            None, "--execution-other", help="Strategy for all other calls"
        ),
        tracing_targets: Optional[str] = typer.Option(
            None, "--tracing-targets", help="Comma-separated tracing targets"
        ),
        tracing_receiver: Optional[str] = typer.Option(
            None, "--tracing-receiver", help="log or telemetry"
        ),
        chain: Optional[str] = CHAIN_OPTION,
        dev: bool = DEV_OPTION,
        base_path: Optional[Path] = BASE_PATH_OPTION,
        log: Optional[str] = LOG_OPTION,
    ):
        _execute(
            ctx,
            lambda d: factory(
                input,
                default_heap_pages,
                binary,
                _shared(d, chain, dev, base_path, log),
                _import(
                    d,
                    pruning,
                    unsafe_pruning,
                    database_cache_size,
                    state_cache_size,
                    wasm_method,
                    execution,
                    tracing_targets,
                    tracing_receiver,
                    execution_contexts={
                        "execution_syncing": execution_syncing,
                        "execution_import_block": execution_import_block,
                        "execution_block_construction": execution_block_construction,
                        "execution_offchain_worker": execution_offchain_worker,
                        "execution_other": execution_other,
                    },
                ),
            ),
        )

    return command


import_blocks = _import_options_command(
    "import-blocks",
    "Import blocks from file",
    lambda input, heap_pages, binary, shared, imports: ImportBlocksCmd(
        input=Path(input) if input else None,
        default_heap_pages=heap_pages,
        binary=binary,
        shared_opts=shared,
        import_opts=imports,
    ),
)

check_block = _import_options_command(
    "check-block",
    "Validate a single block",
    lambda input, heap_pages, binary, shared, imports: CheckBlockCmd(
        input=input or "",
        default_heap_pages=heap_pages,
        shared_opts=shared,
        import_opts=imports,
    ),
)


@app.command("revert")
def revert(
    ctx: typer.Context,
    num: int = typer.Argument(256, help="Number of blocks to revert"),
    pruning: Optional[str] = PRUNING_OPTION,
    unsafe_pruning: bool = UNSAFE_PRUNING_OPTION,
    chain: Optional[str] = CHAIN_OPTION,
    dev: bool = DEV_OPTION,
    base_path: Optional[Path] = BASE_PATH_OPTION,
    log: Optional[str] = LOG_OPTION,
):
    """Revert chain to the previous state"""
    _execute(
        ctx,
        lambda d: RevertCmd(
            num=num,
            shared_opts=_shared(d, chain, dev, base_path, log),
            pruning_opts=_pruning(d, pruning, unsafe_pruning),
        ),
    )


@app.command("purge-chain")
def purge_chain(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip interactive prompt"),
    database_cache_size: Optional[int] = typer.Option(
        None, "--db-cache", help="Database cache size in MiB"
    ),
    chain: Optional[str] = CHAIN_OPTION,
    dev: bool = DEV_OPTION,
    base_path: Optional[Path] = BASE_PATH_OPTION,
    log: Optional[str] = LOG_OPTION,
):
    """Remove the whole chain data"""
    _execute(
        ctx,
        lambda d: PurgeChainCmd(
            yes=yes,
            shared_opts=_shared(d, chain, dev, base_path, log),
            database_opts=DatabaseParams(
                database_cache_size=_pick(database_cache_size, d.database_cache_size)
            ),
        ),
    )


if __name__ == "__main__":
    app()
