"""
Service context for log lines.

Identifies which scanner gateway instance wrote a log line, both when
deployed in a container and when running locally.
"""

from functools import lru_cache
import os


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-scanner')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are the short container id; fall back to PID locally
    instance_id = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
