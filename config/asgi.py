"""
ASGI config for the Flock project.

Served by uvicorn (see `manage.py serve`) or by any other ASGI server.
Also usable as an AWS Lambda handler through Mangum.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# =============================================================================
# Cold Start Optimization
# =============================================================================
# Import Django and initialize BEFORE the handler is called.
# This moves initialization to container startup, not request time.

from django.core.asgi import get_asgi_application

application = get_asgi_application()


# =============================================================================
# Lambda Handler (via Mangum)
# =============================================================================

_lambda_handler = None


def get_lambda_handler():
    """Returns a Mangum-wrapped handler for AWS Lambda."""
    from mangum import Mangum
    return Mangum(application, lifespan="off")


def lambda_handler(event, context):
    """
    AWS Lambda entry point for HTTP requests coming through API Gateway.

    The Mangum adapter is created once per container and reused.
    """
    global _lambda_handler
    if _lambda_handler is None:
        _lambda_handler = get_lambda_handler()
    return _lambda_handler(event, context)
