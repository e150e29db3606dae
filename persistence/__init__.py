"""
Storage backends for the rental ledger.

Every backend implements the same whole-collection snapshot contract
(see ``persistence.gateway.PersistenceGateway``); pick one per deployment
with ``RENTAL_STORAGE_BACKEND``.
"""
from persistence.gateway import (
    COLLECTIONS,
    MemoryGateway,
    PersistenceGateway,
    StorageError,
)


def create_gateway(app):
    """Build the gateway configured for *app*."""
    backend = app.config.get('RENTAL_STORAGE_BACKEND', 'sql')

    if backend == 'memory':
        return MemoryGateway()
    if backend == 'file':
        from persistence.file_gateway import JsonFileGateway
        return JsonFileGateway(app.config['RENTAL_DATA_DIR'])
    if backend == 'sql':
        from extensions import db
        from persistence.sql_gateway import SqlGateway
        return SqlGateway(db)

    raise ValueError(f"Unknown RENTAL_STORAGE_BACKEND {backend!r}; expected 'sql', 'file' or 'memory'")


__all__ = [
    'COLLECTIONS',
    'MemoryGateway',
    'PersistenceGateway',
    'StorageError',
    'create_gateway',
]
