"""
Games module - Game-specific data.

Each game has its own subpackage with:
- Card definitions
- Game setup
"""
