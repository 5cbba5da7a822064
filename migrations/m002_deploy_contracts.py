from migrations.common import MigrationContext, Operation

PAYROLL_CONTRACT = 'CryptoCardsPayroll'


def prepare(context: MigrationContext):
    def deploy_payroll(tx_options):
        context.deployer.deploy(PAYROLL_CONTRACT, tx_options)
        return context.deployer.last_receipt

    return [
        Operation(f'Deploy {PAYROLL_CONTRACT}', deploy_payroll, title=f'-- Deploy {PAYROLL_CONTRACT} --'),
    ]
