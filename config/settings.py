import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SERVER_ADDRESS = 'http://127.0.0.1:8545'

SERVER_ADDRESS = os.environ.get('SERVER_ADDRESS', DEFAULT_SERVER_ADDRESS)
DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///./migrations.db')
BUILD_DIRECTORY = os.environ.get('BUILD_DIRECTORY', os.path.join('build', 'contracts'))


def is_flag_set(value) -> bool:
    return str(value or '').strip().lower() in ('1', 'true', 'yes', 'on')


STRICT_NETWORK = is_flag_set(os.environ.get('STRICT_NETWORK'))


def rpc_url_for(rpc_env: str) -> str:
    """
    :param rpc_env: Name of the environment variable holding the node URL.
    :return: Node URL, falling back to SERVER_ADDRESS.
    """
    return os.environ.get(rpc_env) or SERVER_ADDRESS
