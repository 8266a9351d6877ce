"""AWS Lambda entrypoint: the File Vault app behind Mangum.

The app is built on the first invocation, so settings come from the
function's environment and cold imports do not open a store.
"""
from typing import Optional

from mangum import Mangum

from file_vault.main import create_app

_handler: Optional[Mangum] = None


def lambda_handler(event, context):
    global _handler
    if _handler is None:
        _handler = Mangum(create_app(), lifespan="off")
    return _handler(event, context)
