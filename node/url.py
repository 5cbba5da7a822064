from typing import Callable, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from MigrationExceptions import NodeNotConnectedException, NetworkMismatchException, UnknownNetworkException
from config import settings
from config.networks import NETWORK_OPTIONS, resolve_network_name
from node.client import get_client_factory

node_router = APIRouter()


def not_connected_exception() -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={'error': 'Node is not connected! Please check the address.'}
    )


def network_mismatch_exception(e: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={'error': f'Node is on the wrong network. {e}'}
    )


def unknown_network_exception() -> JSONResponse:
    return JSONResponse(
        status_code=406,
        content={'error': 'Network parameter is not valid!'}
    )


@node_router.get("/")
def ping_node(network: Optional[str] = None,
                    client_factory: Callable = Depends(get_client_factory)) -> JSONResponse:
    try:
        name = resolve_network_name(network, NETWORK_OPTIONS, strict=settings.STRICT_NETWORK)
    except UnknownNetworkException:
        return unknown_network_exception()

    config = NETWORK_OPTIONS[name]
    client = client_factory(config)

    try:
        client.ensure_connected(config)
    except NodeNotConnectedException:
        return not_connected_exception()
    except NetworkMismatchException as e:
        return network_mismatch_exception(e)

    accounts = client.accounts
    owner = accounts[0] if accounts else None

    try:
        tx_count = client.get_transaction_count(owner) if owner else None
    except Exception as e:
        print(f'Error: {e}')
        return not_connected_exception()

    return JSONResponse(
        status_code=200,
        content={'status': 'Node is connected.', 'network': name, 'owner': owner, 'tx_count': tx_count}
    )
