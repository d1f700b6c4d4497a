"""
CLI-specific formatting functions.

Progress events are rendered as JSON, YAML or a Rich table of the
resource models they carry.
"""
import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table

FORMATS = ('json', 'yaml', 'table')

MODEL_COLUMNS = [
    ("NatGatewayId", "cyan"),
    ("SubnetId", "green"),
    ("VpcId", "green"),
    ("ConnectivityType", "blue"),
    ("AllocationId", "yellow"),
    ("PrivateIpAddress", "yellow"),
    ("Tags", "magenta"),
]


def format_output(data: Dict[str, Any], format_type: str) -> str:
    """Format a serialized progress event according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    return json.dumps(data, indent=2, default=str)


def format_table_output(data: Dict[str, Any]) -> str:
    """Format the event's models as a table, followed by status lines."""
    models: List[Dict[str, Any]] = data.get("resourceModels")
    if models is None:
        models = [data["resourceModel"]] if data.get("resourceModel") else []

    lines = [f"Status: {data.get('status')}"]
    for key in ("errorCode", "message", "nextToken"):
        if data.get(key):
            lines.append(f"{key}: {data[key]}")

    if not models:
        return "\n".join(lines)

    table = Table(show_header=True, header_style="bold magenta")
    for name, style in MODEL_COLUMNS:
        table.add_column(name, style=style)
    for model in models:
        table.add_row(*[_cell(model.get(name)) for name, _ in MODEL_COLUMNS])

    console = Console(record=True, width=160)
    with console.capture() as capture:
        console.print(table)
    return capture.get().rstrip("\n") + "\n" + "\n".join(lines)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(f"{t['Key']}={t['Value']}" for t in value)
    return str(value)
