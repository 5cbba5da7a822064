class NodeNotConnectedException(Exception):
    pass


class UnknownNetworkException(Exception):
    pass


class NetworkMismatchException(Exception):
    pass


class ArtifactNotFoundException(Exception):
    pass


class ContractNotDeployedException(Exception):
    pass


class TransactionFailedException(Exception):
    pass
