from typing import Callable, Mapping, Optional, TypeVar

from web3 import Web3

from MigrationExceptions import UnknownNetworkException
from config.DataClass import NetworkConfig

DEFAULT_NETWORK = 'local'
FORK_SUFFIX = '-fork'

NETWORK_OPTIONS = {
    'local': NetworkConfig(name='local', gas_price=Web3.to_wei(20, 'gwei'), gas=6721975),
    'ropsten': NetworkConfig(name='ropsten', gas_price=Web3.to_wei(10, 'gwei'), chain_id=3,
                             rpc_env='ROPSTEN_RPC_URL'),
    'rinkeby': NetworkConfig(name='rinkeby', gas_price=Web3.to_wei(2, 'gwei'), chain_id=4,
                             rpc_env='RINKEBY_RPC_URL'),
    'kovan': NetworkConfig(name='kovan', gas_price=Web3.to_wei(2, 'gwei'), chain_id=42,
                           rpc_env='KOVAN_RPC_URL'),
    'mainnet': NetworkConfig(name='mainnet', gas_price=Web3.to_wei(8, 'gwei'), chain_id=1,
                             rpc_env='MAINNET_RPC_URL'),
}

T = TypeVar('T')


def normalize_network_name(requested: Optional[str]) -> str:
    name = requested or ''
    while name.endswith(FORK_SUFFIX):
        name = name[:-len(FORK_SUFFIX)]
    return name


def resolve_network_name(requested: Optional[str], options: Mapping[str, T], strict: bool = False,
                         notify: Optional[Callable[[str], None]] = None) -> str:
    """
    Unknown names fall back to the "local" entry unless strict is set.

    :param requested: Network name as given by the caller, "-fork" suffix allowed.
    :param options: Known network names mapped to their configuration.
    :param strict: Raise UnknownNetworkException instead of falling back.
    :param notify: Called with a notice line when the fallback is used.
    :return: Name of the entry in options to use for this run.
    """
    name = normalize_network_name(requested)
    if name in options:
        return name

    if strict:
        raise UnknownNetworkException(f'Unknown network: {requested!r}')

    if DEFAULT_NETWORK not in options:
        raise UnknownNetworkException(f'No "{DEFAULT_NETWORK}" network configured to fall back to.')

    if notify is not None:
        notify(f'Network {requested!r} not configured, using "{DEFAULT_NETWORK}"')
    return DEFAULT_NETWORK


def resolve_network(requested: Optional[str], options: Mapping[str, T], strict: bool = False) -> T:
    return options[resolve_network_name(requested, options, strict)]
