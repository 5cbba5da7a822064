from web3 import Web3

from migrations.common import MigrationContext, Operation
from migrations.m002_deploy_contracts import PAYROLL_CONTRACT
from node.DataClass import Payee

TEST_PAYEES = (
    Payee(address='0x20D403B0ed3755CdB2F4eA856644B3BE2718F754', shares=50),
    Payee(address='0x7002FF8d83625DC59A2C23bCAb9e8939A201B0d6', shares=25),
    Payee(address='0x4DE7C0BEEdD7286074fE2b9CeA08774ba55C991b', shares=25),
)

DEPOSIT_AMOUNT = Web3.to_wei(10, 'ether')


def prepare(context: MigrationContext, payees=TEST_PAYEES):
    payroll = context.deployer.deployed(PAYROLL_CONTRACT)

    def deposit(tx_options):
        return context.client.send_transaction(payroll.address, tx_options)

    def add_payee(payee: Payee):
        def submit(tx_options):
            return context.client.transact(payroll, 'addNewPayee', payee.address, payee.shares,
                                           tx_options=tx_options)
        return submit

    operations = [
        Operation('Deposit via fallback function', deposit, value=DEPOSIT_AMOUNT,
                  title='-- Add Deposit via fallback function --'),
    ]
    for i, payee in enumerate(payees):
        operations.append(
            Operation(f'Account {i}: {payee.address}, Shares: {payee.shares}', add_payee(payee),
                      title='-- Add Payee Accounts --' if i == 0 else None)
        )

    return operations
