"""Utilities for loading and saving service descriptions from/to JSON files."""

from pathlib import Path
from pydantic import TypeAdapter, ValidationError
from zodgen.ir.service import Service


def load_service_from_json(service_path: Path) -> Service:
    """
    Load a Service from a JSON file.

    Args:
        service_path: Path to the JSON file

    Returns:
        Loaded Service instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or is not a valid service description
    """
    service_path = Path(service_path)
    if not service_path.exists():
        raise FileNotFoundError(f"Service file not found: {service_path}")

    file_content = service_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"Service file is empty: {service_path}")

    try:
        return TypeAdapter(Service).validate_json(file_content)
    except ValidationError as e:
        raise ValueError(f"Failed to load service from {service_path}: {e}") from e


def save_service_to_json(service: Service, service_path: Path) -> None:
    """
    Save a Service to a JSON file.

    Creates parent directories if they don't exist.
    """
    service_path = Path(service_path)
    service_path.parent.mkdir(parents=True, exist_ok=True)
    service_path.write_text(service.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
