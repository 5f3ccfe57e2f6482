"""JSON file sink for exporting registry state and events."""

import json
from pathlib import Path
from typing import Any

from asset_registry.sinks.serialization import to_dict


class JsonFileSink:
    """Output records to JSON files.

    Batches go to ``<entity_type>.json``; single events are appended to a
    JSON Lines file per topic.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output (batches only).
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Append a record to the topic's JSON Lines file."""
        # Use topic name as filename (replace dots with underscores)
        file_path = self.output_dir / (topic.replace(".", "_") + ".jsonl")
        data = to_dict(record)
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False, default=str) + "\n")
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to a JSON file."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            else:
                json.dump(data, f, ensure_ascii=False, default=str)

        self._counts[entity_type] = len(records)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
