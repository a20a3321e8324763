"""CLI entry point for FoodFresh."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from . import freshness
from .config import ConfigManager
from .food_store import FoodStore, create_food_store
from .kv_store import BackendType
from .models import FoodItem, FoodItemInput, FreshnessStatus, StorageLocation
from .output_formatter import OutputFormatter

app = typer.Typer(
    name="foodfresh",
    help="Track perishable food, its freshness and what gets wasted",
    no_args_is_help=True,
)

# Global state for formatter, config and store (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
food_store: FoodStore | None = None


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_food_store() -> FoodStore:
    """Get or create FoodStore instance using config values."""
    global food_store
    if food_store is None:
        cfg = get_config()
        food_store = create_food_store(
            backend=BackendType(cfg.data.backend), data_dir=cfg.data.storage_dir
        )
    return food_store


def _validation_message(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}" for err in e.errors()
    )


def _item_payload(item: FoodItem, today: date | None = None) -> dict:
    """Item document plus its derived freshness fields."""
    today = today or date.today()
    use_soon_days = get_config().freshness.use_soon_days
    payload = item.to_document()
    payload["status"] = freshness.status(item, today, use_soon_days).value
    payload["statusText"] = freshness.status_text(item, today)
    payload["daysLeft"] = freshness.days_left(item, today)
    return payload


def _waste_payload(store: FoodStore) -> dict:
    return {
        "records": [r.to_document() for r in store.waste_records],
        "total_waste_cost": store.total_waste_cost,
        "count": len(store.waste_records),
    }


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """FoodFresh CLI - Know what to eat first and what you threw away."""
    global formatter, config, food_store

    formatter = OutputFormatter(json_mode=json_output)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = ConfigManager()

    try:
        backend = BackendType(config.data.backend)
    except ValueError:
        choices = ", ".join(b.value for b in BackendType)
        formatter.error(
            f"Unknown storage backend '{config.data.backend}' in {config.config_path} "
            f"(expected one of: {choices})",
            error_code="INVALID_CONFIG",
        )
        raise typer.Exit(code=1)

    # CLI --data-dir overrides config, which overrides default
    if data_dir is not None or food_store is None:
        effective_data_dir = data_dir if data_dir else config.data.storage_dir
        food_store = create_food_store(backend=backend, data_dir=effective_data_dir)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Item name")],
    expires: Annotated[str, typer.Option("--expires", "-e", help="Expiration date (YYYY-MM-DD)")],
    location: Annotated[
        StorageLocation | None, typer.Option("--location", "-l", help="Storage location")
    ] = None,
    price: Annotated[float, typer.Option("--price", "-p", help="Price paid")] = 0.0,
) -> None:
    """Add an item to the inventory."""
    try:
        cfg = get_config()
        item_input = FoodItemInput(
            name=name,
            expiration_date=expires,
            storage_location=location or StorageLocation(cfg.defaults.storage_location),
            price=price,
        )
        item = get_food_store().add(item_input)
        output_data = {
            "success": True,
            "message": f"Added {item.name} ({item.storage_location.value})",
            "data": {"item": _item_payload(item)},
        }
        formatter.output(output_data, output_data["message"])
    except ValidationError as e:
        formatter.error(_validation_message(e), error_code="INVALID_INPUT")
        raise typer.Exit(code=1)
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="list")
def list_items(
    status: Annotated[
        FreshnessStatus | None, typer.Option("--status", "-s", help="Filter by freshness")
    ] = None,
    location: Annotated[
        StorageLocation | None, typer.Option("--location", "-l", help="Filter by location")
    ] = None,
) -> None:
    """View the inventory, soonest to expire first."""
    try:
        items = get_food_store().items
        today = date.today()

        if status:
            items = freshness.filter_by_status(
                items, status, today, get_config().freshness.use_soon_days
            )
        if location:
            items = [i for i in items if i.storage_location == location]

        output_data = {
            "success": True,
            "data": {
                "items": [_item_payload(i, today) for i in items],
                "count": len(items),
            },
        }
        formatter.output(output_data, f"{len(items)} items in inventory")
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def edit(
    item_id: Annotated[str, typer.Argument(help="Item ID to edit")],
    name: Annotated[str, typer.Option("--name", "-n", help="Item name")],
    expires: Annotated[str, typer.Option("--expires", "-e", help="Expiration date (YYYY-MM-DD)")],
    price: Annotated[float, typer.Option("--price", "-p", help="Price paid")],
    location: Annotated[
        StorageLocation | None, typer.Option("--location", "-l", help="Storage location")
    ] = None,
) -> None:
    """Replace an item's name, expiration date, price and location."""
    try:
        item_input = FoodItemInput(
            name=name, expiration_date=expires, storage_location=location, price=price
        )
        item = get_food_store().edit(item_id, item_input)
        if item is None:
            formatter.error(f"Item with ID '{item_id}' not found", error_code="ITEM_NOT_FOUND")
            raise typer.Exit(code=1)

        output_data = {
            "success": True,
            "message": f"Updated {item.name}",
            "data": {"item": _item_payload(item)},
        }
        formatter.output(output_data, output_data["message"])
    except typer.Exit:
        raise
    except ValidationError as e:
        formatter.error(_validation_message(e), error_code="INVALID_INPUT")
        raise typer.Exit(code=1)
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="toggle-opened")
def toggle_opened(
    item_id: Annotated[str, typer.Argument(help="Item ID")],
) -> None:
    """Mark an item opened, or unopened again."""
    try:
        item = get_food_store().toggle_opened(item_id)
        if item is None:
            formatter.error(f"Item with ID '{item_id}' not found", error_code="ITEM_NOT_FOUND")
            raise typer.Exit(code=1)

        state = "opened" if item.opened else "unopened"
        output_data = {
            "success": True,
            "message": f"Marked {item.name} as {state}",
            "data": {"item": _item_payload(item)},
        }
        formatter.output(output_data, output_data["message"])
    except typer.Exit:
        raise
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def remove(
    item_id: Annotated[str, typer.Argument(help="Item ID to remove")],
) -> None:
    """Remove an item without recording it as waste."""
    try:
        item = get_food_store().remove(item_id)
        if item is None:
            formatter.error(f"Item with ID '{item_id}' not found", error_code="ITEM_NOT_FOUND")
            raise typer.Exit(code=1)

        output_data = {
            "success": True,
            "message": f"Removed {item.name}",
            "data": {"item": _item_payload(item)},
        }
        formatter.output(output_data, output_data["message"])
    except typer.Exit:
        raise
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Remove every item from the inventory."""
    if not yes and not typer.confirm("Remove every item from the inventory?"):
        raise typer.Abort()
    try:
        get_food_store().clear()
        formatter.success("Inventory cleared")
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def waste(
    item_id: Annotated[str, typer.Argument(help="Item ID that was thrown away")],
) -> None:
    """Move an item to the waste ledger."""
    try:
        store = get_food_store()
        record = store.waste(item_id)
        if record is None:
            formatter.error(f"Item with ID '{item_id}' not found", error_code="ITEM_NOT_FOUND")
            raise typer.Exit(code=1)

        output_data = {
            "success": True,
            "message": f"Wasted {record.name} (${record.price:.2f})",
            "data": {"record": record.to_document(), "waste": _waste_payload(store)},
        }
        formatter.output(output_data, output_data["message"])
    except typer.Exit:
        raise
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="waste-list")
def waste_list() -> None:
    """View the waste ledger and its total cost."""
    try:
        payload = _waste_payload(get_food_store())
        output_data = {"success": True, "data": {"waste": payload}}
        formatter.output(output_data, f"{payload['count']} waste records")
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command(name="waste-clear")
def waste_clear() -> None:
    """Empty the waste ledger."""
    try:
        get_food_store().clear_waste()
        formatter.success("Waste ledger cleared")
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def summary() -> None:
    """Count items per freshness status."""
    try:
        store = get_food_store()
        groups = freshness.group_by_status(
            store.items, use_soon_days=get_config().freshness.use_soon_days
        )
        output_data = {
            "success": True,
            "data": {
                "summary": {
                    "counts": {s.value: len(items) for s, items in groups.items()},
                    "total_items": len(store.items),
                    "total_waste_cost": store.total_waste_cost,
                }
            },
        }
        formatter.output(output_data)
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
