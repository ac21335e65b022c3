"""ASGI entry point: ``uvicorn farmhouse.api.app:app``.

Settings and store come from the environment at import time.
"""

from farmhouse.api.factory import create_app

app = create_app()
