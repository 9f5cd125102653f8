"""
Service context for log lines.

Identifies which front-end (cli / web) and which process wrote a record,
since the CLI and the web app may share one snapshot file and one log dir.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    return f'{service_name}@{deploy_env}:{os.getpid()}'
