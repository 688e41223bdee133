"""Realtime sync over Socket.IO.

BroadcastHub keeps the set of connected clients and fans events out to them.
SyncHandlers turns client events into service calls and broadcasts the result.
"""
