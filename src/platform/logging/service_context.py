"""
Service context extraction for log lines.

Every log line carries `<service>@<environment>:<pid>` so that output from several
ledger host processes (HTTP node, scripts, test workers) can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-sale')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # pytest-xdist workers share a pid namespace with the controller, keep them apart
    worker_id = os.getenv('PYTEST_XDIST_WORKER')
    process_id = f'{worker_id}-{os.getpid()}' if worker_id else str(os.getpid())

    return f'{service_name}@{deploy_env}:{process_id}'
