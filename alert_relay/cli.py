from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from alert_relay.config import AppConfig
from alert_relay.modules.market.classifier import classify
from alert_relay.modules.message.service import MessagePipeline
from alert_relay.modules.name_lookup.service import NameLookupService
from alert_relay.services.config_store import ConfigStore
from alert_relay.services.route_table import RouteTable
from alert_relay.settings import AppSettings

app = typer.Typer(help="Alert Relay CLI")
console = Console()


def _store() -> ConfigStore:
    settings = AppSettings()
    return ConfigStore(config_path=settings.config_file)


def _load_config() -> AppConfig:
    return _store().load()


@app.command("init-config")
def init_config() -> None:
    store = _store()
    store.save(store.load())
    console.print(f"[green]Config initialized:[/green] {store.config_path.resolve()}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host, default from settings."),
    port: Optional[int] = typer.Option(None, help="Bind port, default from settings."),
    reload: bool = typer.Option(False, help="Enable autoreload mode."),
) -> None:
    settings = AppSettings()
    uvicorn.run(
        "alert_relay.api:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level,
    )


@app.command("process")
def process(
    text: Optional[str] = typer.Argument(None, help="Alert text; omit to use --file."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read the raw alert body from a file."),
    content_type: Optional[str] = typer.Option(None, help="Content type used to interpret --file."),
    beautify: Optional[bool] = typer.Option(None, "--beautify/--no-beautify", help="Override beautifier setting."),
    lookup: bool = typer.Option(True, "--lookup/--no-lookup", help="Query name providers."),
) -> None:
    if text is None and file is None:
        raise typer.BadParameter("Provide alert TEXT or --file.")
    config = _load_config()
    pipeline = MessagePipeline(config=config)

    async def _run():
        if file is not None:
            return await pipeline.process_payload(
                file.read_bytes(), content_type, beautify=beautify, lookup=lookup
            )
        return await pipeline.process_text(text or "", beautify=beautify, lookup=lookup)

    result = asyncio.run(_run())
    for code, name in result.names.items():
        label = name or "[yellow]not resolved[/yellow]"
        console.print(f"[cyan]{code}[/cyan] → {label}")
    console.print(result.content, markup=False, highlight=False)


@app.command("lookup")
def lookup(codes: List[str] = typer.Argument(..., help="Security codes to resolve.")) -> None:
    config = _load_config()
    service = NameLookupService(config)
    resolved = asyncio.run(service.resolve_names(codes))

    table = Table(title="Security Names")
    table.add_column("Code")
    table.add_column("Market")
    table.add_column("Name")
    table.add_column("Source")
    for code in dict.fromkeys(codes):
        row = resolved[code]
        table.add_row(code, row.market.value, row.name or "-", row.source or "-")
    console.print(table)


@app.command("classify")
def classify_codes(codes: List[str] = typer.Argument(..., help="Security codes to classify.")) -> None:
    config = _load_config()
    table = Table(title="Markets")
    table.add_column("Code")
    table.add_column("Market")
    for code in codes:
        market = classify(code, permissive_sh=config.lookup.permissive_sh)
        table.add_row(code, market.value)
    console.print(table)


@app.command("routes")
def routes() -> None:
    settings = AppSettings()
    config = ConfigStore(config_path=settings.config_file).load()
    table_data = RouteTable.from_sources(
        file_routes=config.routes,
        env_value=settings.webhook_config,
    )
    table = Table(title="Routes")
    table.add_column("Key")
    table.add_column("Type")
    table.add_column("Configured")
    for row in table_data.describe():
        table.add_row(str(row["key"]), str(row["type"]), str(row["configured"]))
    console.print(table)


if __name__ == "__main__":
    app()
