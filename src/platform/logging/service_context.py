"""
Service context for log lines.

Every replica keeps its own in-process cache mirror, so log lines carry
`service@env:instance` to tell replicas apart.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'livestream-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    instance_id = os.getenv('INSTANCE_ID', '')
    if not instance_id:
        # Container hostname in deployments, PID for local development
        instance_id = (
            socket.gethostname()[:12] if deploy_env != 'local_dev' else str(os.getpid())
        )

    return f'{service_name}@{deploy_env}:{instance_id}'
