# invokerpc command line
import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .binder import bind_parameters
from .config import RPCConfig
from .encoding import to_bare
from .errors import InvokeRPCError
from .keys import KeyPair, derive
from .rpc import RPCServer
from .types import make_schema

console = Console()


def _setup_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.group()
@click.version_option(version=__version__, prog_name="invokerpc")
def cli():
    """Contract invocation RPC server and tools"""
    pass


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True), help='JSON config file')
@click.option('--host', default=None, help='Bind address')
@click.option('--port', type=int, default=None, help='Bind port')
def serve(config_path, host, port):
    """Run the JSON-RPC server"""
    config = RPCConfig.load(config_path) if config_path else RPCConfig()
    if host:
        config.host = host
    if port:
        config.port = port
    _setup_logging(config.log_level)

    async def _run():
        server = RPCServer(config)
        await server.start()
        console.print(f"🚀 [bold green]Serving[/bold green] on http://{config.host}:{config.port} "
                      f"({len(server.contracts)} contract(s))")
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            await server.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")


@cli.command()
@click.argument('private_key')
@click.option('--address-version', 'address_version', type=int, default=None, help='Address version byte')
def address(private_key, address_version):
    """Derive address and keys from a hex private key"""
    try:
        kp = KeyPair.from_hex(private_key)
        if address_version is None:
            result = derive(kp.private_key)
        else:
            result = derive(kp.private_key, address_version)
    except InvokeRPCError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)

    table = Table(title="Key Pair")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field in ("wif", "address", "privkey", "pubkey"):
        table.add_row(field, result[field])
    console.print(table)


@cli.command()
@click.option('--types', 'types', required=True, help='Comma separated parameter types, e.g. String,Integer')
@click.argument('args_json', default='[]')
def decode(types, args_json):
    """Bind a JSON argument array to parameter types"""
    try:
        schema = make_schema(t.strip() for t in types.split(',') if t.strip())
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Invalid JSON:[/bold red] {e}")
        sys.exit(1)

    try:
        params = bind_parameters(schema, args)
    except InvokeRPCError as e:
        console.print(f"[bold red]Error {int(e.code)}:[/bold red] {e.message}")
        sys.exit(1)

    table = Table(title="Parameters")
    table.add_column("#", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Value")
    for i, p in enumerate(params):
        table.add_row(str(i), p.type.name, json.dumps(to_bare(p)))
    console.print(table)


if __name__ == '__main__':
    cli()
