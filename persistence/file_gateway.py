"""
Flat-file gateway: one JSON document per collection under a data directory.

Writes go to a temporary file in the same directory which is then swapped in
with os.replace(), so a reader never sees a half-written collection.
"""
import json
import logging
import os
import tempfile

from persistence.gateway import PersistenceGateway, StorageError

logger = logging.getLogger(__name__)


class JsonFileGateway(PersistenceGateway):
    """Stores ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir):
        self.data_dir = data_dir

    def path_for(self, collection):
        return os.path.join(self.data_dir, f'{collection}.json')

    def load(self, collection):
        self._check_collection(collection)
        path = self.path_for(collection)

        if not os.path.exists(path):
            logger.info(f'Data file not found: {path}. Starting fresh.')
            return []

        try:
            with open(path, 'r', encoding='utf-8') as fh:
                records = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StorageError(collection, f'could not read {path}: {exc}') from exc

        if not isinstance(records, list):
            raise StorageError(collection, f'{path} does not contain a list of records')

        logger.info(f'Loaded {len(records)} records from {path}')
        return records

    def save(self, collection, records):
        self._check_collection(collection)
        path = self.path_for(collection)
        tmp_path = None

        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f'.{collection}.', suffix='.tmp', dir=self.data_dir
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(list(records), fh, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(collection, f'could not write {path}: {exc}') from exc
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
