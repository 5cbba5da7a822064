import threading
from typing import Callable, List, Mapping, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session

from config.DataClass import NetworkConfig
from config.networks import DEFAULT_NETWORK, NETWORK_OPTIONS, normalize_network_name, resolve_network_name
from database import models
from migrations import m002_deploy_contracts, m003_test_transactions
from migrations.DataClass import MigrationResult, OperationRecord
from migrations.common import MigrationContext, MigrationLog


class Migration:
    def __init__(self, number: int, name: str, prepare: Callable):
        self.number = number
        self.name = name
        self.prepare = prepare


MIGRATIONS = (
    Migration(2, 'deploy_contracts', m002_deploy_contracts.prepare),
    Migration(3, 'test_transactions', m003_test_transactions.prepare),
)

_network_locks = {}
_locks_guard = threading.Lock()


def execute(migration: Migration, network: Optional[str], client_factory: Callable, db: Session,
            options: Mapping[str, NetworkConfig] = NETWORK_OPTIONS, strict: bool = False,
            build_directory: Optional[str] = None) -> MigrationResult:
    """
    Submits the migration's operations in order. The first error ends the run; transactions
    already sent stay on chain and later ones are never built. Operations with a History row
    for this network and migration are skipped, so a re-run resumes where the last one stopped.

    :param migration: Migration to run.
    :param network: Requested network name, "-fork" suffix allowed.
    :param client_factory: Callable building a chain client from a NetworkConfig.
    :param db: Database session for deployments and history.
    :return: MigrationResult, success False with error detail on failure.
    """
    log = MigrationLog(normalize_network_name(network) or DEFAULT_NETWORK)
    records: List[OperationRecord] = []
    resolved = None

    try:
        context = MigrationContext.create(network, client_factory, db, options, log, strict=strict,
                                          build_directory=build_directory)
        resolved = context.network

        operations = migration.prepare(context)
        submitted = submitted_operations(db, resolved, migration.number)
        context.begin()

        for operation in operations:
            if operation.title:
                log.log(spacer=True)
                log.log(operation.title)
            log.log(operation.description, indent=1)

            if operation.description in submitted:
                log.log('Already submitted, skipping', indent=2)
                continue

            tx_options = context.tx_options(operation.value)
            receipt = operation.submit(tx_options)
            summary = log.log_tx_result(receipt)

            records.append(OperationRecord(description=operation.description, nonce=tx_options.nonce,
                                           receipt=summary))
            db.add(models.History(network=resolved, migration=migration.number,
                                  description=operation.description, nonce=tx_options.nonce,
                                  tx_hash=summary.tx_hash, status=summary.status))
            db.commit()

    except Exception as e:
        db.rollback()
        log.error(e)
        return MigrationResult(migration=migration.number, name=migration.name, network=resolved, success=False,
                               operations=tuple(records), error=f'{type(e).__name__}: {e}', log=tuple(log.lines))

    return MigrationResult(migration=migration.number, name=migration.name, network=resolved, success=True,
                           operations=tuple(records), log=tuple(log.lines))


def submitted_operations(db: Session, network: str, migration: int) -> Set[str]:
    rows = db.query(models.History.description) \
        .filter(models.History.network == network, models.History.migration == migration) \
        .all()
    return {row.description for row in rows}


def network_lock(network: str) -> threading.Lock:
    with _locks_guard:
        return _network_locks.setdefault(network, threading.Lock())


def last_completed_migration(db: Session, network: str) -> int:
    last = db.query(func.max(models.MigrationRecord.migration)) \
        .filter(models.MigrationRecord.network == network) \
        .scalar()
    return last or 0


def pending_migrations(db: Session, network: str, migrations=MIGRATIONS) -> List[Migration]:
    last = last_completed_migration(db, network)
    return [migration for migration in migrations if migration.number > last]


def run_migrations(network: Optional[str], client_factory: Callable, db: Session,
                   options: Mapping[str, NetworkConfig] = NETWORK_OPTIONS, strict: bool = False,
                   build_directory: Optional[str] = None, migrations=MIGRATIONS) -> List[MigrationResult]:
    """
    Runs the pending migrations for one network, one run per network at a time. A migration
    that failed part way resumes after its last submitted operation on the next run.
    """
    resolved = resolve_network_name(network, options, strict)

    results = []
    with network_lock(resolved):
        for migration in pending_migrations(db, resolved, migrations):
            result = execute(migration, network, client_factory, db, options=options, strict=strict,
                             build_directory=build_directory)
            results.append(result)

            if not result.success:
                break

            db.add(models.MigrationRecord(network=resolved, migration=migration.number, name=migration.name))
            db.commit()

    return results
