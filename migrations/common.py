from typing import Callable, List, Mapping, Optional

from sqlalchemy.orm import Session

from config.DataClass import NetworkConfig
from config.networks import resolve_network_name
from migrations.deployer import Deployer
from node.DataClass import TransactionOptions, TxReceiptSummary

INDENT = '  '


class NonceSequencer:
    """Hands out consecutive nonces for one sender, starting at its on-chain transaction count."""

    def __init__(self, start: Optional[int] = None):
        self._nonce = start or 0
        self.issued = 0

    @property
    def current(self) -> int:
        return self._nonce

    def next(self) -> int:
        nonce = self._nonce
        self._nonce += 1
        self.issued += 1
        return nonce


class MigrationLog:
    def __init__(self, network: str):
        self.network = network
        self.lines: List[str] = []

    def _print(self, line: str) -> None:
        self.lines.append(line)
        print(line)

    def log(self, msg: Optional[str] = None, indent: int = 0, spacer: bool = False) -> None:
        if spacer:
            self._print('')
        if msg is not None:
            self._print(f'[{self.network}] {INDENT * indent}{msg}')

    def log_tx_result(self, receipt) -> TxReceiptSummary:
        summary = TxReceiptSummary.from_receipt(receipt)
        self.log(f'TX Hash: {summary.tx_hash}', indent=1)
        if summary.contract_address:
            self.log(f'Contract: {summary.contract_address}', indent=1)
        self.log(f'Block: {summary.block_number}, Gas Used: {summary.gas_used}, Status: {summary.status}', indent=1)
        return summary

    def error(self, err: Exception) -> None:
        self._print(f'[{self.network}] Error: {type(err).__name__}: {err}')


class MigrationContext:
    def __init__(self, network: str, options: NetworkConfig, owner: str, client, deployer: Deployer,
                 log: MigrationLog):
        self.network = network
        self.options = options
        self.owner = owner
        self.client = client
        self.deployer = deployer
        self.log = log
        self.sequencer: Optional[NonceSequencer] = None

    @classmethod
    def create(cls, requested_network: Optional[str], client_factory: Callable, db: Session,
               options: Mapping[str, NetworkConfig], log: MigrationLog, strict: bool = False,
               build_directory: Optional[str] = None) -> 'MigrationContext':
        network = resolve_network_name(requested_network, options, strict, notify=log.log)
        log.network = network
        config = options[network]

        client = client_factory(config)
        client.ensure_connected(config)

        accounts = client.accounts
        if not accounts:
            raise ValueError(f'Node for network "{network}" has no accounts.')

        deployer = Deployer(db, client, network, build_directory)
        return cls(network, config, accounts[0], client, deployer, log)

    def begin(self) -> NonceSequencer:
        self.sequencer = NonceSequencer(self.client.get_transaction_count(self.owner))
        return self.sequencer

    def tx_options(self, value: int = 0) -> TransactionOptions:
        return TransactionOptions(
            sender=self.owner,
            nonce=self.sequencer.next(),
            gas_price=self.options.gas_price,
            gas=self.options.gas,
            value=value if value > 0 else None,
        )


class Operation:
    """A single transaction submitted by a migration, with options built only when it is reached."""

    def __init__(self, description: str, submit: Callable, value: int = 0, title: Optional[str] = None):
        self.description = description
        self.submit = submit
        self.value = value
        self.title = title
