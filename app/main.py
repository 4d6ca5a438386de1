"""QM Bot entrypoint.

Run with ``uvicorn main:server_app``; the Slack socket mode connection and
the QM command registration happen in the server lifespan.
"""

from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402  pylint: disable=wrong-import-position

server_app = server.handler
