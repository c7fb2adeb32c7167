# lifeos_travel/routes/__init__.py
from lifeos_travel.routes.websocket.base import NAMESPACE

__all__ = ["NAMESPACE"]
