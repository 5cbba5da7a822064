from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from MigrationExceptions import UnknownNetworkException
from config import settings
from config.networks import NETWORK_OPTIONS, resolve_network_name
from database import DB, models
from migrations.DataClass import MigrationRequest
from migrations.runner import last_completed_migration, run_migrations
from node.client import get_client_factory
from node.url import unknown_network_exception

migration_router = APIRouter()


def migration_failed_exception(error: str, results: list) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={'error': error, 'migrations': results}
    )


@migration_router.post("/run")
def run(body: MigrationRequest, db: Session = Depends(DB.get_db),
              client_factory: Callable = Depends(get_client_factory)) -> JSONResponse:
    """
    :param body: Target network and whether unknown networks should be rejected.
    :return: JSONResponse with one entry per migration that ran.
    """
    strict = body.strict_network or settings.STRICT_NETWORK

    try:
        results = run_migrations(body.network, client_factory, db, strict=strict)
    except UnknownNetworkException:
        return unknown_network_exception()

    content = [result.model_dump(mode='json') for result in results]

    failed = [result for result in results if not result.success]
    if failed:
        return migration_failed_exception(failed[0].error, content)

    return JSONResponse(
        status_code=200,
        content={'result': 'success', 'migrations': content}
    )


@migration_router.get("/status/{network}")
def status(network: str, db: Session = Depends(DB.get_db)) -> JSONResponse:
    try:
        name = resolve_network_name(network, NETWORK_OPTIONS, strict=settings.STRICT_NETWORK)
    except UnknownNetworkException:
        return unknown_network_exception()

    deployments = db.query(models.Deployment).filter(models.Deployment.network == name).all()

    return JSONResponse(
        status_code=200,
        content={
            'network': name,
            'last_completed_migration': last_completed_migration(db, name),
            'deployments': [deployment.jsonify() for deployment in deployments]
        }
    )
