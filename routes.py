# routes.py
from fastapi import FastAPI
from controller.node_controller import node_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(node_router)
