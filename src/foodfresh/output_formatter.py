"""Output formatting for CLI and programmatic use."""

import json
from datetime import date, datetime
from typing import Any

from rich.console import Console
from rich.table import Table

_STATUS_STYLES = {
    "expired": "red",
    "use-soon": "yellow",
    "fresh": "green",
}


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        payload = data.get("data", {})
        if "items" in payload:
            self._render_items(data)
        elif "item" in payload:
            self._render_item(data)
        elif "waste" in payload:
            self._render_waste(data)
        elif "summary" in payload:
            self._render_summary(data)

    def _render_items(self, data: dict) -> None:
        """Render the inventory with freshness status."""
        items = data["data"]["items"]

        if not items:
            self.console.print("[dim]No items in inventory[/dim]")
            return

        table = Table(title="Inventory", show_header=True, header_style="bold cyan")
        table.add_column("Item", style="cyan")
        table.add_column("Expires")
        table.add_column("Status")
        table.add_column("Location", style="green")
        table.add_column("Price", justify="right")
        table.add_column("Opened", justify="center")
        table.add_column("ID", style="dim")

        for item in items:
            style = _STATUS_STYLES.get(item.get("status", ""), "white")
            table.add_row(
                item["name"],
                str(item["expirationDate"]),
                f"[{style}]{item.get('statusText', item.get('status', ''))}[/{style}]",
                item.get("storageLocation", "fridge"),
                f"${item.get('price', 0):.2f}",
                "✓" if item.get("opened") else "",
                item["id"],
            )

        self.console.print(table)

    def _render_item(self, data: dict) -> None:
        """Render a single item."""
        item = data["data"]["item"]
        opened = ", opened" if item.get("opened") else ""
        self.console.print(
            f"  {item['name']} — expires {item['expirationDate']}, "
            f"{item.get('storageLocation', 'fridge')}, ${item.get('price', 0):.2f}{opened}"
        )

    def _render_waste(self, data: dict) -> None:
        """Render the waste ledger and its total."""
        waste = data["data"]["waste"]
        records = waste["records"]

        if not records:
            self.console.print("[dim]No waste records[/dim]")
            return

        table = Table(title="Waste Ledger", show_header=True, header_style="bold")
        table.add_column("Item")
        table.add_column("Cost", justify="right", style="red")

        for record in records:
            table.add_row(record["name"], f"${record['price']:.2f}")

        self.console.print(table)
        self.console.print(f"Total wasted: [bold red]${waste['total_waste_cost']:.2f}[/bold red]")

    def _render_summary(self, data: dict) -> None:
        """Render freshness counts."""
        summary = data["data"]["summary"]

        self.console.print("\n[bold]Freshness Summary[/bold]")
        for status_name, count in summary["counts"].items():
            style = _STATUS_STYLES.get(status_name, "white")
            self.console.print(f"  [{style}]{status_name}[/{style}]: {count}")
        self.console.print(f"Total items: {summary['total_items']}")
        self.console.print(f"Total wasted: ${summary['total_waste_cost']:.2f}")

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

    def success(self, message: str, data: dict | None = None) -> None:
        """Output success message.

        Args:
            message: Success message
            data: Optional data to include
        """
        if self.json_mode:
            output: dict[str, Any] = {"success": True, "message": message}
            if data:
                output["data"] = data
            print(json.dumps(output, cls=JSONEncoder))
        else:
            self.console.print(f"[green]✓[/green] {message}")
