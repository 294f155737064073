"""CSV export of the pokemon cache (id, name, height, pipe-joined types)."""
import csv
import logging
import os

from pycatalog.exceptions import CacheIOError

log = logging.getLogger(__name__)

CSV_HEADER = ["id", "name", "height", "types"]


def write_pokemon_csv(records, path):
    """Write (id, record) pairs to path, creating the directory on demand."""
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            for item_id, record in records:
                writer.writerow([item_id, record.get("name"), record.get("height"),
                                 "|".join(record.get("types") or [])])
    except OSError as exc:
        raise CacheIOError(f"unable to write {path}: {exc}") from exc
    log.debug(f"Data saved to CSV file {path}")


def pokemon_csv_exporter(path, section="pokemon"):
    """Build a DiskCache exporter that mirrors one section to a CSV file."""
    def exporter(cache):
        write_pokemon_csv(cache.items(section), path)
    return exporter
