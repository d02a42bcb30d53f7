"""
Export and Import functionality for trips and vocabularies.
"""
import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from packing.domain.Item import Item
from packing.domain.Trip import Trip
from packing.domain.VocabularyEntry import VocabularyEntry
from packing.domain.errors import PersistenceError, ValidationError, require_name
from packing.infra.Vocabulary_Repository import VocabularyRegistry
from packing.utilities.constants import VOCABULARY_KINDS

logger = logging.getLogger(__name__)

EXPORT_VERSION = '1.0'
CSV_FIELDS = ['trip', 'name', 'category', 'location', 'group', 'container', 'packed', 'optional']


class DataExporter:
    """Export packing data as JSON documents or CSV."""

    def __init__(self, store):
        self.store = store

    def export_all(self) -> Dict[str, Any]:
        """Every trip and every vocabulary, with metadata."""
        return {
            'export_date': datetime.now().isoformat(),
            'version': EXPORT_VERSION,
            'trips': [trip.to_dict() for trip in self.store.load_trips()],
            'vocabulary': {
                kind: [entry.to_dict() for entry in self.store.load_vocabulary(kind)]
                for kind in VOCABULARY_KINDS
            },
        }

    def export_to_file(self, output_path: Optional[Path] = None) -> Path:
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"packing_export_{timestamp}.json")
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(self.export_all(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            raise PersistenceError(f"Export failed: {e}") from e
        logger.info(f"Exported all data to {output_path}")
        return Path(output_path)

    @staticmethod
    def trip_to_csv(trip: Trip) -> str:
        """One row per item, in stored order, for spreadsheet use."""
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for item in trip.items:
            writer.writerow({
                'trip': trip.name,
                'name': item.name,
                'category': item.category,
                'location': item.location,
                'group': item.group,
                'container': item.container,
                'packed': 'yes' if item.is_packed else 'no',
                'optional': 'yes' if item.is_optional else 'no',
            })
        return buf.getvalue()


class DataImporter:
    """Import trips and vocabularies from an export document.

    Trips and items get fresh identities so an import never collides with
    existing data. Vocabulary entries are merged by case-insensitive name.
    The whole import is committed in a single store transaction.
    """

    def __init__(self, store):
        self.store = store

    def import_document(self, data: Dict[str, Any]) -> Dict[str, int]:
        if not isinstance(data, dict):
            raise ValidationError("Import document must be a JSON object")
        summary = {'trips': 0, 'items': 0, 'vocabulary': 0, 'skipped': 0}
        with self.store.transaction("import"):
            vocabulary = data.get('vocabulary')
            if not isinstance(vocabulary, dict):
                vocabulary = {}
            for kind in VOCABULARY_KINDS:
                registry = VocabularyRegistry(self.store, kind)
                records = self._records(vocabulary.get(kind), summary)
                entries = [VocabularyEntry.from_dict(r, kind=kind) for r in records]
                # sort_order is coerced to int by from_dict
                for entry in sorted(entries, key=lambda e: e.sort_order):
                    name = str(entry.name).strip()
                    if not name:
                        summary['skipped'] += 1
                        continue
                    if registry.find_by_name(name) is None:
                        registry.add(name)
                        summary['vocabulary'] += 1
            for record in self._records(data.get('trips'), summary):
                trip = self._build_trip(record, summary)
                if trip is None:
                    continue
                self.store.save(trip)
                summary['trips'] += 1
                summary['items'] += trip.total_count
        logger.info(f"Imported {summary['trips']} trips, {summary['items']} items "
                    f"({summary['skipped']} records skipped)")
        return summary

    @staticmethod
    def _records(values: Any, summary: Dict[str, int]) -> List[Dict[str, Any]]:
        '''Keeps the JSON objects of a record list; anything else is counted as skipped.'''
        if not isinstance(values, list):
            if values:
                logger.warning(f"Skipping malformed record list: {values!r}")
                summary['skipped'] += 1
            return []
        records = []
        for value in values:
            if isinstance(value, dict):
                records.append(value)
            else:
                logger.warning(f"Skipping malformed record: {value!r}")
                summary['skipped'] += 1
        return records

    def _build_trip(self, record: Dict[str, Any], summary: Dict[str, int]) -> Optional[Trip]:
        try:
            name = require_name(record.get('name'), "Trip name")
        except ValidationError:
            logger.warning(f"Skipping trip without a name: {record!r}")
            summary['skipped'] += 1
            return None
        source = Trip.from_dict(record)
        trip = Trip(name=name, created_at=source.created_at)
        for item in source.items:
            for field in ("name", "category", "location", "group", "container"):
                setattr(item, field, str(getattr(item, field)).strip())
            if not (item.name and item.category and item.location):
                logger.warning(f"Skipping incomplete item in trip '{name}': {item!r}")
                summary['skipped'] += 1
                continue
            trip.add_item(Item(
                name=item.name, category=item.category, location=item.location,
                group=item.group, container=item.container,
                is_packed=item.is_packed, is_optional=item.is_optional,
            ))
        return trip

    def import_from_file(self, input_path: Path) -> Dict[str, int]:
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Import failed: {e}")
            raise PersistenceError(f"Cannot read {input_path}: {e}") from e
        return self.import_document(data)


# CLI interface
if __name__ == "__main__":
    import argparse
    from packing.infra.paths import STORE_FILE
    from packing.infra.Store import JsonStore

    parser = argparse.ArgumentParser(description='Export/Import packing data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--file', help='Input/output file path')
    args = parser.parse_args()

    store = JsonStore(STORE_FILE)
    if args.action == 'export':
        result = DataExporter(store).export_to_file(Path(args.file) if args.file else None)
        print(f"Exported to: {result}")
    else:
        if not args.file:
            parser.error("--file is required for import")
        summary = DataImporter(store).import_from_file(Path(args.file))
        print(f"Imported from {args.file}: {summary}")
