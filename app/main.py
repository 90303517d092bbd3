"""ASGI entry point: uvicorn main:server_app"""

from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402

server_app = server.handler
