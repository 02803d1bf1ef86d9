"""
WebSocket Package

Real-time keyboard input and reveal events.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
